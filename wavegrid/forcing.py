"""
External excitation of the wave field.

Two producers write into the current layer: a periodic point source driven by
a repeating timer, and discrete injection events (typically pointer clicks
translated into grid coordinates). Both go through ``ForceInjector``.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Deque, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .grid import GridState, Layer
from .parameters import SimulationParameters

logger = logging.getLogger(__name__)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
# end def _round_half_away


class ForceEvent(BaseModel):
    """
    One excitation request at possibly fractional grid coordinates.
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def cell(self) -> Tuple[int, int]:
        """Nearest grid cell, rounding halves away from zero."""
        return _round_half_away(self.x), _round_half_away(self.y)
    # end def cell

# end class ForceEvent


class RepeatingTimer:
    """
    Fixed-rate timer fed with elapsed time.

    Args:
        period (float): Seconds between two fires.
        paused (bool): Start paused.
    """

    def __init__(self, period: float, paused: bool = False):
        if not (math.isfinite(period) and period > 0):
            raise ValueError(f"Timer period must be positive and finite, got {period}")
        # end if
        self.period = period
        self.paused = paused
        self.elapsed = 0.0
    # end def __init__

    def tick(self, delta: float) -> int:
        """
        Advance the timer.

        Args:
            delta (float): Seconds since the previous tick.

        Returns:
            int: Number of periods completed during this tick.

        Raises:
            ValueError: If `delta` is negative or not finite. The timer is
                left unchanged.
        """
        if not (math.isfinite(delta) and delta >= 0):
            raise ValueError(f"Elapsed time must be non-negative and finite, got {delta}")
        # end if
        if self.paused:
            return 0
        # end if
        self.elapsed += delta
        fired = int(self.elapsed // self.period)
        self.elapsed -= fired * self.period
        return fired
    # end def tick

# end class RepeatingTimer


class ForceInjector:
    """
    Writes the applied force amplitude into the current layer.

    Args:
        parameters (SimulationParameters): Grid size, amplitude and period.
    """

    def __init__(self, parameters: SimulationParameters):
        self.dimx = parameters.dimx
        self.dimy = parameters.dimy
        self.amplitude = parameters.applied_force_amplitude
        self.source_position = parameters.source_position
        self.timer = RepeatingTimer(parameters.force_period, paused=not parameters.force_enabled)
        self._pending: Deque[ForceEvent] = deque()
    # end def __init__

    @property
    def paused(self) -> bool:
        return self.timer.paused

    def pause(self) -> None:
        """Stop the periodic source; queued events still apply."""
        self.timer.paused = True
    # end def pause

    def resume(self) -> None:
        self.timer.paused = False
    # end def resume

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, event: ForceEvent) -> None:
        """Queue an event for the next step."""
        self._pending.append(event)
    # end def submit

    def tick(self, elapsed: float, grid: GridState) -> bool:
        """
        Advance the periodic source and fire it if its period elapsed.

        Args:
            elapsed (float): Seconds since the previous tick.
            grid (GridState): Field history; its current layer is written.

        Returns:
            bool: True if the source fired.

        Raises:
            ValueError: If `elapsed` is negative or not finite.
        """
        if self.timer.tick(elapsed) <= 0:
            return False
        # end if
        x, y = self.source_position
        grid.write(Layer.CURRENT, x, y, self.amplitude)
        return True
    # end def tick

    def inject_at(self, event: ForceEvent, grid: GridState) -> bool:
        """
        Apply one event, ignoring it unless it lands strictly inside the grid.

        Args:
            event (ForceEvent): Requested position.
            grid (GridState): Field history; its current layer is written.

        Returns:
            bool: True if a sample was written.
        """
        if not (math.isfinite(event.x) and math.isfinite(event.y)):
            return False
        # end if
        x, y = event.cell()
        if not (0 < x < self.dimx and 0 < y < self.dimy):
            logger.debug("Ignoring force event outside the grid interior at (%s, %s)", event.x, event.y)
            return False
        # end if
        grid.write(Layer.CURRENT, x, y, self.amplitude)
        return True
    # end def inject_at

    def flush(self, grid: GridState, events: Optional[Iterable[ForceEvent]] = None) -> int:
        """
        Apply queued events, then ``events``, in arrival order.

        Args:
            grid (GridState): Field history; its current layer is written.
            events (Iterable[ForceEvent], optional): Extra events for this step.

        Returns:
            int: Number of events that wrote a sample.
        """
        if events is not None:
            self._pending.extend(events)
        # end if
        applied = 0
        while self._pending:
            if self.inject_at(self._pending.popleft(), grid):
                applied += 1
            # end if
        # end while
        return applied
    # end def flush

# end class ForceInjector
