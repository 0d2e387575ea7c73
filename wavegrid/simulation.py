"""
Step orchestration of the wave solver.

``WaveSimulation`` wires the parameter set, the field history, the stencil,
the boundary policy and the force injector together and advances them one
tick at a time:

1. the periodic source, then queued force events, write into the current layer;
2. the history rotates, so the freshly forced layer becomes the previous one;
3. the stencil fills the interior of the new current layer;
4. the boundary policy finishes the full grid.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, NamedTuple, Optional

import numpy as np

from .boundary import BoundaryPolicy
from .forcing import ForceEvent, ForceInjector
from .grid import GridState, Layer
from .parameters import CoefficientFields, SimulationParameters
from .stencil import StencilEvaluator

logger = logging.getLogger(__name__)

StepCallback = Callable[[np.ndarray, int, "WaveSimulation"], None]


class StepReport(NamedTuple):
    """Outcome of one tick."""
    step: int
    source_fired: bool
    events_applied: int
# end class StepReport


class _Setup(NamedTuple):
    parameters: SimulationParameters
    coefficients: CoefficientFields
    grid: GridState
    stencil: StencilEvaluator
    boundary: BoundaryPolicy
    injector: ForceInjector
# end class _Setup


class WaveSimulation:
    """
    Finite-difference simulation of a scalar wave on a 2D grid.

    Args:
        parameters (SimulationParameters): Validated run configuration.

    Raises:
        ConfigurationError: If the stencil or boundary cannot be set up.
    """

    def __init__(self, parameters: SimulationParameters):
        self._lock = threading.Lock()
        self._setup = self._build(parameters)
        self.step_count = 0
        self.time = 0.0
    # end def __init__

    @staticmethod
    def _build(parameters: SimulationParameters) -> _Setup:
        """
        Create every component for ``parameters`` without touching live state.
        """
        stencil = StencilEvaluator(parameters.boundary_size)
        coefficients = CoefficientFields.from_parameters(parameters)
        grid = GridState(parameters.dimx, parameters.dimy, dtype=parameters.numpy_dtype)
        boundary = BoundaryPolicy.from_flag(parameters.use_absorbing_boundary)
        injector = ForceInjector(parameters)
        logger.debug(
            "Built %dx%d grid, stencil=%s, boundary=%s",
            parameters.dimx,
            parameters.dimy,
            stencil.order.name,
            boundary.mode.value,
        )
        return _Setup(parameters, coefficients, grid, stencil, boundary, injector)
    # end def _build

    @property
    def parameters(self) -> SimulationParameters:
        return self._setup.parameters

    @property
    def coefficients(self) -> CoefficientFields:
        return self._setup.coefficients

    @property
    def grid(self) -> GridState:
        return self._setup.grid

    @property
    def injector(self) -> ForceInjector:
        return self._setup.injector

    @property
    def field(self) -> np.ndarray:
        """Read-only view of the current layer, shape (dimx, dimy)."""
        return self._setup.grid.layer(Layer.CURRENT)

    def submit(self, event: ForceEvent) -> None:
        """
        Queue a force event; it is applied at the start of the next step.
        """
        self._setup.injector.submit(event)
    # end def submit

    def step(
        self,
        elapsed: float = 0.0,
        events: Optional[Iterable[ForceEvent]] = None
    ) -> StepReport:
        """
        Advance the field by one time step.

        Args:
            elapsed (float): Wall-clock seconds since the previous step, used
                by the periodic source.
            events (Iterable[ForceEvent], optional): Events for this step,
                applied after any already queued ones.

        Returns:
            StepReport: Step index and what was injected.

        Raises:
            ValueError: If `elapsed` is negative or not finite. Nothing is
                modified in that case.
        """
        with self._lock:
            setup = self._setup
            params = setup.parameters

            fired = setup.injector.tick(elapsed, setup.grid)
            applied = setup.injector.flush(setup.grid, events)

            setup.grid.rotate()

            b = params.boundary_size
            interior = setup.stencil.compute_interior(
                params.dimx, params.dimy, setup.coefficients.tau, setup.grid
            )
            setup.grid.buffer(Layer.CURRENT)[b:params.dimx - b, b:params.dimy - b] = interior

            setup.boundary.apply(
                params.dimx, params.dimy, b, setup.coefficients.kappa, setup.grid
            )

            self.step_count += 1
            self.time += elapsed
            return StepReport(self.step_count, fired, applied)
        # end with
    # end def step

    def run(
        self,
        num_steps: int,
        elapsed: float = 0.0,
        callback: Optional[StepCallback] = None
    ) -> np.ndarray:
        """
        Advance several steps with a constant elapsed time per step.

        Args:
            num_steps (int): Number of steps.
            elapsed (float): Seconds fed to the periodic source per step.
            callback (callable, optional): Called after each step with
                ``(field, step_index, simulation)``.

        Returns:
            np.ndarray: Read-only view of the final current layer.
        """
        for step_index in range(num_steps):
            self.step(elapsed)
            if callback is not None:
                callback(self.field, step_index, self)
            # end if
        # end for
        return self.field
    # end def run

    def reset(self, parameters: Optional[SimulationParameters] = None) -> None:
        """
        Zero the field and recompute the coefficients.

        The new components are built completely before being swapped in, so
        a failing reset leaves the running simulation untouched.

        Args:
            parameters (SimulationParameters, optional): New configuration.
                Defaults to the current one.

        Raises:
            ConfigurationError: If the new parameters cannot be set up.
        """
        setup = self._build(parameters if parameters is not None else self.parameters)
        with self._lock:
            self._setup = setup
            self.step_count = 0
            self.time = 0.0
        # end with
        logger.debug("Simulation reset")
    # end def reset

    def energy(self) -> float:
        """Sum of squared samples of the current layer."""
        return self._setup.grid.energy(Layer.CURRENT)
    # end def energy

# end class WaveSimulation
