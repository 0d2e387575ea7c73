"""
Boundary treatment applied after each stencil update.

Two modes are available. The absorbing mode runs a first-order Mur condition
on the boundary ring so outgoing waves leave the grid with little reflection.
The attenuating mode is a crude fallback that damps the whole field by a
constant factor every step.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from .grid import GridState, Layer

# Global decay applied per step when the absorbing ring is disabled.
ATTENUATION_FACTOR = 0.995


class BoundaryMode(Enum):
    ABSORBING = "absorbing"
    ATTENUATING = "attenuating"

    @classmethod
    def from_flag(cls, use_absorbing_boundary: bool) -> "BoundaryMode":
        return cls.ABSORBING if use_absorbing_boundary else cls.ATTENUATING
    # end def from_flag

# end class BoundaryMode


def mur_reflection_factor(kappa: np.ndarray) -> np.ndarray:
    """
    Coefficient ``(kappa - 1) / (kappa + 1)`` of the first-order Mur condition.

    Args:
        kappa (np.ndarray): Local Courant number ``dt * v / dx``.

    Returns:
        np.ndarray: Factor with the same shape and dtype as ``kappa``.
    """
    return (kappa - 1) / (kappa + 1)
# end def mur_reflection_factor


def apply_mur_boundary(
    current: np.ndarray,
    previous: np.ndarray,
    boundary_size: int,
    kappa: np.ndarray
) -> None:
    """
    First-order Mur absorbing condition on the outer ring, in place.

    Every ring cell is updated from its inward neighbour:

        u_new[edge] = u_prev[inner] + r * (u_new[inner] - u_prev[edge])

    with ``r = (kappa - 1) / (kappa + 1)``. Rings are processed from the
    innermost column outward so each update reads an already final neighbour.
    The x edges are done first over the interior rows, then the y edges over
    the full width, which also fills the corners.

    Args:
        current (np.ndarray): Layer being finished (modified in place).
        previous (np.ndarray): Layer from the previous time step.
        boundary_size (int): Ring width.
        kappa (np.ndarray): Local Courant number per cell.
    """
    dimx, dimy = current.shape
    b = boundary_size
    r = mur_reflection_factor(kappa)
    rows = slice(b, dimy - b)

    for i in range(b - 1, -1, -1):
        # Left edge, neighbour at i + 1.
        current[i, rows] = previous[i + 1, rows] + r[i, rows] * (current[i + 1, rows] - previous[i, rows])
        # Right edge, neighbour at j - 1.
        j = dimx - 1 - i
        current[j, rows] = previous[j - 1, rows] + r[j, rows] * (current[j - 1, rows] - previous[j, rows])
    # end for

    for i in range(b - 1, -1, -1):
        # Bottom edge.
        current[:, i] = previous[:, i + 1] + r[:, i] * (current[:, i + 1] - previous[:, i])
        # Top edge.
        j = dimy - 1 - i
        current[:, j] = previous[:, j - 1] + r[:, j] * (current[:, j - 1] - previous[:, j])
    # end for
# end def apply_mur_boundary


class BoundaryPolicy:
    """
    Boundary post-processing selected once per run.

    Args:
        mode (BoundaryMode): Absorbing ring or global attenuation.
        attenuation (float): Decay factor used by the attenuating mode.
    """

    def __init__(self, mode: BoundaryMode, attenuation: float = ATTENUATION_FACTOR):
        self.mode = mode
        self.attenuation = attenuation
    # end def __init__

    @classmethod
    def from_flag(cls, use_absorbing_boundary: bool) -> "BoundaryPolicy":
        return cls(BoundaryMode.from_flag(use_absorbing_boundary))
    # end def from_flag

    def apply(
        self,
        dimx: int,
        dimy: int,
        boundary_size: int,
        kappa: np.ndarray,
        grid: GridState
    ) -> None:
        """
        Finish the current layer after the interior update.

        Args:
            dimx (int): Number of cells along x.
            dimy (int): Number of cells along y.
            boundary_size (int): Ring width.
            kappa (np.ndarray): Local Courant number per cell.
            grid (GridState): Field history; its current layer is modified.
        """
        current = grid.buffer(Layer.CURRENT)
        if self.mode is BoundaryMode.ABSORBING:
            apply_mur_boundary(
                current[:dimx, :dimy],
                grid.buffer(Layer.PREVIOUS)[:dimx, :dimy],
                boundary_size,
                kappa,
            )
        else:
            current *= current.dtype.type(self.attenuation)
        # end if
    # end def apply

# end class BoundaryPolicy
