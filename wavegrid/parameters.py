"""
Simulation parameters and the coefficient fields derived from them.

``SimulationParameters`` is validated once when constructed and is frozen
afterwards. ``CoefficientFields`` holds the per-cell ``Tau`` and ``Kappa``
factors computed from a parameter set; both are rebuilt wholesale on reset.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Literal, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Boundary ring widths with a matching stencil (five-point and fourth-order).
SUPPORTED_BOUNDARY_SIZES: Tuple[int, ...] = (1, 4)

# Largest stable Courant number of the leapfrog scheme in 2D, per stencil.
COURANT_LIMITS = {
    1: 1.0 / math.sqrt(2.0),
    4: math.sqrt(3.0 / 8.0),
}


def _configuration_error(exc: ValidationError) -> ConfigurationError:
    return ConfigurationError(f"Invalid simulation parameters: {exc}")
# end def _configuration_error


class SimulationParameters(BaseModel):
    """
    Immutable configuration of one simulation run.

    Attributes:
        dimx (int): Number of cells along x.
        dimy (int): Number of cells along y.
        wave_velocity (float): Propagation speed of the wave.
        time_step_width (float): Time step of the integrator.
        spatial_step_width (float): Distance between neighbouring cells.
        boundary_size (int): Width of the boundary ring. Also selects the
            stencil: 1 for the five-point Laplacian, 4 for the fourth-order one.
        use_absorbing_boundary (bool): Mur absorbing ring when True, global
            attenuation otherwise.
        applied_force_amplitude (float): Value written by force injection.
        force_period (float): Seconds between two fires of the periodic source.
        force_enabled (bool): Whether the periodic source starts running.
        dtype (str): Sample precision, ``"float32"`` or ``"float64"``.
    """
    dimx: int = Field(gt=0)
    dimy: int = Field(gt=0)
    wave_velocity: float = Field(gt=0.0)
    time_step_width: float = Field(gt=0.0)
    spatial_step_width: float = Field(gt=0.0)
    boundary_size: int = 1
    use_absorbing_boundary: bool = True
    applied_force_amplitude: float = 1.0
    force_period: float = Field(default=0.05, gt=0.0)
    force_enabled: bool = True
    dtype: Literal["float32", "float64"] = "float32"

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    def __init__(self, **data: Any):
        """
        Validate the parameters.

        Raises:
            ConfigurationError: If any field or invariant is violated.
        """
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _configuration_error(exc) from exc
        # end try
    # end def __init__

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> "SimulationParameters":
        """
        Validate a mapping or object into parameters.

        Raises:
            ConfigurationError: If any field or invariant is violated.
        """
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as exc:
            raise _configuration_error(exc) from exc
        # end try
    # end def model_validate

    @classmethod
    def model_validate_json(cls, json_data: Any, **kwargs: Any) -> "SimulationParameters":
        """
        Validate a JSON document into parameters.

        Raises:
            ConfigurationError: If the document is malformed or invalid.
        """
        try:
            return super().model_validate_json(json_data, **kwargs)
        except ValidationError as exc:
            raise _configuration_error(exc) from exc
        # end try
    # end def model_validate_json

    @field_validator("boundary_size")
    @classmethod
    def _check_boundary_size(cls, value: int) -> int:
        if value not in SUPPORTED_BOUNDARY_SIZES:
            raise ValueError(
                f"boundary_size must be one of {SUPPORTED_BOUNDARY_SIZES}, got {value}"
            )
        # end if
        return value
    # end def _check_boundary_size

    @model_validator(mode="after")
    def _check_interior(self) -> "SimulationParameters":
        margin = 2 * self.boundary_size
        if self.dimx <= margin or self.dimy <= margin:
            raise ValueError(
                f"Grid {self.dimx}x{self.dimy} leaves no interior for boundary_size "
                f"{self.boundary_size} (need dimx, dimy > {margin})"
            )
        # end if
        return self
    # end def _check_interior

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of one grid layer."""
        return self.dimx, self.dimy

    @property
    def interior_shape(self) -> Tuple[int, int]:
        """Shape of the region updated by the stencil."""
        return self.dimx - 2 * self.boundary_size, self.dimy - 2 * self.boundary_size

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(self.dtype)

    @property
    def courant_number(self) -> float:
        """Dimensionless ``v * dt / dx``."""
        return self.wave_velocity * self.time_step_width / self.spatial_step_width

    @property
    def is_stable(self) -> bool:
        """Whether the Courant number respects the limit of the selected stencil."""
        return self.courant_number <= COURANT_LIMITS[self.boundary_size]

    @property
    def source_position(self) -> Tuple[int, int]:
        """Cell of the periodic point source."""
        return 4 * self.dimx // 6, 4 * self.dimy // 6

    def with_updates(self, **changes: Any) -> "SimulationParameters":
        """
        Build a new, validated parameter set with some fields replaced.

        Args:
            **changes: Field values to override.

        Returns:
            SimulationParameters: The updated copy.

        Raises:
            ConfigurationError: If the result is invalid.
        """
        values = self.model_dump()
        values.update(changes)
        return SimulationParameters(**values)
    # end def with_updates

# end class SimulationParameters


class CoefficientFields(BaseModel):
    """
    Per-cell factors derived from a parameter set.

    Attributes:
        tau (np.ndarray): ``(v * dt / dx) ** 2``, scales the Laplacian.
        kappa (np.ndarray): ``dt * v / dx``, drives the Mur boundary.
    """
    tau: np.ndarray
    kappa: np.ndarray

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @classmethod
    def from_parameters(cls, parameters: SimulationParameters) -> "CoefficientFields":
        """
        Compute ``Tau`` and ``Kappa`` for every cell.

        Args:
            parameters (SimulationParameters): Validated parameters.

        Returns:
            CoefficientFields: Read-only coefficient arrays of shape (dimx, dimy).
        """
        courant = parameters.courant_number
        if not parameters.is_stable:
            logger.warning(
                "Courant number %.4f exceeds the stability limit %.4f of the "
                "boundary_size=%d stencil; the field will blow up",
                courant,
                COURANT_LIMITS[parameters.boundary_size],
                parameters.boundary_size,
            )
        # end if

        tau = np.full(parameters.shape, courant ** 2, dtype=parameters.numpy_dtype)
        kappa = np.full(parameters.shape, courant, dtype=parameters.numpy_dtype)
        tau.flags.writeable = False
        kappa.flags.writeable = False
        return cls(tau=tau, kappa=kappa)
    # end def from_parameters

# end class CoefficientFields
