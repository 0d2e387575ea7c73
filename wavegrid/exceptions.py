"""
Error types raised by the wave grid solver.
"""


class WaveGridError(Exception):
    """
    Base class for every error raised by wavegrid.
    """
# end class WaveGridError


class ConfigurationError(WaveGridError, ValueError):
    """
    Invalid simulation parameters.

    Raised while building or resetting a simulation, before any grid state is
    touched. Subclasses ``ValueError`` so callers catching the usual
    validation errors keep working.
    """
# end class ConfigurationError


class IndexOutOfRange(WaveGridError, IndexError):
    """
    Access outside ``[0, dimx) x [0, dimy)`` on a grid layer.

    All solver code derives its indices from validated dimensions, so seeing
    this means an internal contract was broken.
    """

    def __init__(self, x: int, y: int, dimx: int, dimy: int):
        super().__init__(
            f"Grid index ({x}, {y}) out of range for a {dimx}x{dimy} grid"
        )
        self.x = x
        self.y = y
        self.dimx = dimx
        self.dimy = dimy
    # end def __init__

# end class IndexOutOfRange
