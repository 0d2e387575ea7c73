"""Finite-difference simulation of a scalar wave on a 2D grid."""

from .exceptions import (
    WaveGridError,
    ConfigurationError,
    IndexOutOfRange,
)

from .parameters import (
    SimulationParameters,
    CoefficientFields,
    SUPPORTED_BOUNDARY_SIZES,
    COURANT_LIMITS,
)

from .grid import GridState, Layer

from .stencil import (
    StencilOrder,
    StencilEvaluator,
    five_point_laplacian,
    fourth_order_laplacian,
)

from .boundary import (
    ATTENUATION_FACTOR,
    BoundaryMode,
    BoundaryPolicy,
    apply_mur_boundary,
)

from .forcing import ForceEvent, ForceInjector, RepeatingTimer

from .simulation import StepReport, WaveSimulation

__all__ = [
    # Errors
    "WaveGridError",
    "ConfigurationError",
    "IndexOutOfRange",

    # Parameters
    "SimulationParameters",
    "CoefficientFields",
    "SUPPORTED_BOUNDARY_SIZES",
    "COURANT_LIMITS",

    # Grid state
    "GridState",
    "Layer",

    # Stencils
    "StencilOrder",
    "StencilEvaluator",
    "five_point_laplacian",
    "fourth_order_laplacian",

    # Boundary
    "ATTENUATION_FACTOR",
    "BoundaryMode",
    "BoundaryPolicy",
    "apply_mur_boundary",

    # Forcing
    "ForceEvent",
    "ForceInjector",
    "RepeatingTimer",

    # Orchestration
    "StepReport",
    "WaveSimulation",
]
