"""
Shared fixtures for the wavegrid tests.
"""

import numpy as np
import pytest

from wavegrid import SimulationParameters


@pytest.fixture
def small_parameters():
    """20x20 grid with a five-point stencil and the periodic source off."""
    return SimulationParameters(
        dimx=20,
        dimy=20,
        wave_velocity=1.0,
        time_step_width=0.1,
        spatial_step_width=1.0,
        boundary_size=1,
        use_absorbing_boundary=True,
        applied_force_amplitude=1.0,
        force_enabled=False,
    )
# end def small_parameters


@pytest.fixture
def mur_reference():
    """Cell-by-cell first-order Mur update, used to check the vectorised one."""

    def apply(current, previous, boundary_size, kappa):
        out = np.array(current, dtype=np.float64)
        prev = np.asarray(previous, dtype=np.float64)
        dimx, dimy = out.shape
        r = (kappa - 1.0) / (kappa + 1.0)
        for i in range(boundary_size - 1, -1, -1):
            for y in range(boundary_size, dimy - boundary_size):
                out[i, y] = prev[i + 1, y] + r * (out[i + 1, y] - prev[i, y])
                j = dimx - 1 - i
                out[j, y] = prev[j - 1, y] + r * (out[j - 1, y] - prev[j, y])
            # end for
        # end for
        for i in range(boundary_size - 1, -1, -1):
            for x in range(dimx):
                out[x, i] = prev[x, i + 1] + r * (out[x, i + 1] - prev[x, i])
                j = dimy - 1 - i
                out[x, j] = prev[x, j - 1] + r * (out[x, j - 1] - prev[x, j])
            # end for
        # end for
        return out
    # end def apply

    return apply
# end def mur_reference
