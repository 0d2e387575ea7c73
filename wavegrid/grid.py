"""
Three-layer time history of the scalar wave field.

The leapfrog scheme needs the field at three consecutive times. Instead of
moving samples around, ``GridState`` keeps three fixed buffers and a role
table telling which buffer currently plays the current, previous and two-back
role. Rotating the history only permutes that table.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple, Union

import numpy as np

from .exceptions import IndexOutOfRange


class Layer(IntEnum):
    """
    Role of a time layer in the leapfrog history.
    """
    CURRENT = 0
    PREVIOUS = 1
    TWO_BACK = 2
# end class Layer


LayerLike = Union[Layer, int]


class GridState:
    """
    Arena of three equally shaped sample buffers addressed by role.

    Args:
        dimx (int): Number of cells along x.
        dimy (int): Number of cells along y.
        dtype: NumPy dtype of the samples.
    """

    def __init__(self, dimx: int, dimy: int, dtype=np.float32):
        self.dimx = dimx
        self.dimy = dimy
        self._buffers = np.zeros((3, dimx, dimy), dtype=dtype)
        # _roles[role] is the index of the buffer holding that role.
        self._roles = [0, 1, 2]
    # end def __init__

    @property
    def shape(self) -> Tuple[int, int]:
        return self.dimx, self.dimy

    @property
    def dtype(self) -> np.dtype:
        return self._buffers.dtype

    def rotate(self) -> None:
        """
        Advance the history by one step.

        The old current layer becomes the previous one, the old previous layer
        becomes the two-back one, and the stale two-back buffer is handed out
        as the new current layer, ready to be overwritten.
        """
        current, previous, two_back = self._roles
        self._roles = [two_back, current, previous]
    # end def rotate

    def buffer(self, layer: LayerLike) -> np.ndarray:
        """
        Writable array currently holding ``layer``.

        Only solver components should use this; the returned array is the
        grid's own storage.

        Args:
            layer (Layer): Role to look up.

        Returns:
            np.ndarray: Array of shape (dimx, dimy).
        """
        return self._buffers[self._roles[Layer(layer)]]
    # end def buffer

    def layer(self, layer: LayerLike = Layer.CURRENT) -> np.ndarray:
        """
        Read-only view of a layer, for renderers and diagnostics.

        Args:
            layer (Layer): Role to look up. Defaults to the current layer.

        Returns:
            np.ndarray: Non-writeable view of shape (dimx, dimy).
        """
        view = self.buffer(layer).view()
        view.flags.writeable = False
        return view
    # end def layer

    def _check_index(self, x: int, y: int) -> None:
        if not (0 <= x < self.dimx and 0 <= y < self.dimy):
            raise IndexOutOfRange(x, y, self.dimx, self.dimy)
        # end if
    # end def _check_index

    def read(self, layer: LayerLike, x: int, y: int) -> float:
        """
        Read one sample.

        Raises:
            IndexOutOfRange: If (x, y) lies outside the grid.
        """
        self._check_index(x, y)
        return float(self.buffer(layer)[x, y])
    # end def read

    def write(self, layer: LayerLike, x: int, y: int, value: float) -> None:
        """
        Overwrite one sample.

        Raises:
            IndexOutOfRange: If (x, y) lies outside the grid.
        """
        self._check_index(x, y)
        self.buffer(layer)[x, y] = value
    # end def write

    def snapshot(self) -> np.ndarray:
        """
        Copy of the three layers stacked in role order.

        Returns:
            np.ndarray: Array of shape (3, dimx, dimy); index 0 is current.
        """
        return self._buffers[self._roles].copy()
    # end def snapshot

    def energy(self, layer: LayerLike = Layer.CURRENT) -> float:
        """Sum of squared samples of a layer."""
        samples = self.buffer(layer)
        return float(np.sum(samples.astype(np.float64) ** 2))
    # end def energy

# end class GridState
