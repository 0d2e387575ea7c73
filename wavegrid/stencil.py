"""
Finite-difference Laplacian stencils for the 2D wave equation.

Both stencils feed the same explicit leapfrog update

    u_new = tau * laplacian(u_prev) + 2 * u_prev - u_two_back

and only differ in how many neighbours they read. The stencil order is tied
to the boundary ring width: the five-point stencil needs one halo cell, the
fourth-order stencil is run with a four-cell ring.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np

from .exceptions import ConfigurationError
from .grid import GridState, Layer

# Fourth-order accurate second derivative, offsets -2..2.
FOURTH_ORDER_COEFFICIENTS: Tuple[float, ...] = (-1.0 / 12.0, 4.0 / 3.0, -5.0 / 2.0, 4.0 / 3.0, -1.0 / 12.0)


class StencilOrder(Enum):
    """
    Supported stencils, keyed by the boundary ring width they require.
    """
    FIVE_POINT = 1
    FOURTH_ORDER = 4

    @property
    def halo(self) -> int:
        """Ring width kept outside the interior region."""
        return self.value

    @classmethod
    def from_boundary_size(cls, boundary_size: int) -> "StencilOrder":
        """
        Select the stencil for a boundary ring width.

        Args:
            boundary_size (int): Ring width, 1 or 4.

        Returns:
            StencilOrder: Matching stencil.

        Raises:
            ConfigurationError: For any other width.
        """
        try:
            return cls(boundary_size)
        except ValueError as exc:
            raise ConfigurationError(
                f"No stencil available for boundary_size {boundary_size}; "
                f"expected one of {[order.value for order in cls]}"
            ) from exc
        # end try
    # end def from_boundary_size

# end class StencilOrder


def five_point_laplacian(field: np.ndarray) -> np.ndarray:
    """
    Undivided five-point Laplacian on the cells one step away from the edge.

    Args:
        field (np.ndarray): 2D samples of shape (nx, ny).

    Returns:
        np.ndarray: Array of shape (nx - 2, ny - 2).
    """
    center = field[1:-1, 1:-1]
    return (
        field[2:, 1:-1]
        + field[:-2, 1:-1]
        + field[1:-1, 2:]
        + field[1:-1, :-2]
        - 4 * center
    )
# end def five_point_laplacian


def fourth_order_laplacian(field: np.ndarray, halo: int = 2) -> np.ndarray:
    """
    Undivided fourth-order Laplacian on the cells ``halo`` steps from the edge.

    Each axis uses the five-point second derivative with coefficients
    ``[-1/12, 4/3, -5/2, 4/3, -1/12]``; summing both axes gives a nine-point
    cross-shaped stencil.

    Args:
        field (np.ndarray): 2D samples of shape (nx, ny).
        halo (int): Cells skipped on every side, at least 2.

    Returns:
        np.ndarray: Array of shape (nx - 2 * halo, ny - 2 * halo).
    """
    nx, ny = field.shape
    laplacian = np.zeros((nx - 2 * halo, ny - 2 * halo), dtype=field.dtype)

    for offset, weight in zip(range(-2, 3), FOURTH_ORDER_COEFFICIENTS):
        weight = field.dtype.type(weight)
        laplacian += weight * field[halo + offset:nx - halo + offset, halo:ny - halo]
        laplacian += weight * field[halo:nx - halo, halo + offset:ny - halo + offset]
    # end for

    return laplacian
# end def fourth_order_laplacian


class StencilEvaluator:
    """
    Computes the new interior of the current layer.

    Args:
        boundary_size (int): Ring width; selects the stencil.

    Raises:
        ConfigurationError: If no stencil matches ``boundary_size``.
    """

    def __init__(self, boundary_size: int):
        self.order = StencilOrder.from_boundary_size(boundary_size)
    # end def __init__

    @property
    def boundary_size(self) -> int:
        return self.order.halo

    def compute_interior(
        self,
        dimx: int,
        dimy: int,
        tau: np.ndarray,
        grid: GridState
    ) -> np.ndarray:
        """
        Leapfrog update of every interior cell.

        Reads the previous and two-back layers of ``grid``; the caller writes
        the result into the interior of the current layer.

        Args:
            dimx (int): Number of cells along x.
            dimy (int): Number of cells along y.
            tau (np.ndarray): ``(v * dt / dx) ** 2`` per cell, shape (dimx, dimy).
            grid (GridState): Field history, already rotated for this step.

        Returns:
            np.ndarray: New values of shape (dimx - 2b, dimy - 2b).
        """
        b = self.order.halo
        previous = grid.buffer(Layer.PREVIOUS)
        two_back = grid.buffer(Layer.TWO_BACK)

        if self.order is StencilOrder.FIVE_POINT:
            laplacian = five_point_laplacian(previous)
        else:
            laplacian = fourth_order_laplacian(previous, halo=b)
        # end if

        interior = (slice(b, dimx - b), slice(b, dimy - b))
        return tau[interior] * laplacian + 2 * previous[interior] - two_back[interior]
    # end def compute_interior

# end class StencilEvaluator
