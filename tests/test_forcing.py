"""
Tests for force events, the repeating timer and the force injector.
"""

import math

import numpy as np
import pytest

from wavegrid import ForceEvent, ForceInjector, GridState, Layer, RepeatingTimer


@pytest.mark.parametrize(
    "x, y, cell",
    [
        (3.4, 3.6, (3, 4)),
        (2.5, 7.5, (3, 8)),
        (-2.5, -0.4, (-3, 0)),
        (5.0, 0.49, (5, 0)),
    ],
)
def test_event_cell_rounds_half_away_from_zero(x, y, cell):
    assert ForceEvent(x=x, y=y).cell() == cell
# end def test_event_cell_rounds_half_away_from_zero


def test_timer_fires_once_per_period():
    timer = RepeatingTimer(0.05)
    assert timer.tick(0.02) == 0
    assert timer.tick(0.02) == 0
    assert timer.tick(0.02) == 1
    assert timer.tick(0.1) == 2
# end def test_timer_fires_once_per_period


def test_paused_timer_does_not_accumulate():
    timer = RepeatingTimer(0.05, paused=True)
    assert timer.tick(1.0) == 0
    timer.paused = False
    assert timer.tick(0.03) == 0
    assert timer.elapsed == pytest.approx(0.03)
# end def test_paused_timer_does_not_accumulate


def test_timer_rejects_non_positive_period():
    with pytest.raises(ValueError):
        RepeatingTimer(0.0)
    # end with
# end def test_timer_rejects_non_positive_period


@pytest.mark.parametrize(
    "x, y, accepted",
    [
        (5.0, 5.0, True),
        (0.0, 5.0, False),
        (5.0, 0.0, False),
        (10.0, 5.0, False),
        (5.0, 10.0, False),
        (0.4, 5.0, False),
        (0.5, 5.0, True),
        (9.4, 9.4, True),
        (9.5, 5.0, False),
        (-3.0, 5.0, False),
        (math.nan, 5.0, False),
        (5.0, math.inf, False),
    ],
)
def test_injection_is_edge_exclusive(small_parameters, x, y, accepted):
    """Only cells with 0 < x < dimx and 0 < y < dimy are written."""
    params = small_parameters.with_updates(dimx=10, dimy=10)
    injector = ForceInjector(params)
    grid = GridState(10, 10)

    assert injector.inject_at(ForceEvent(x=x, y=y), grid) is accepted
    assert bool(np.count_nonzero(grid.layer()) == 1) == accepted
    if accepted:
        cx, cy = ForceEvent(x=x, y=y).cell()
        assert grid.read(Layer.CURRENT, cx, cy) == 1.0
    # end if
# end def test_injection_is_edge_exclusive


def test_injection_overwrites_instead_of_adding(small_parameters):
    params = small_parameters.with_updates(applied_force_amplitude=0.75)
    injector = ForceInjector(params)
    grid = GridState(20, 20)
    grid.write(Layer.CURRENT, 4, 6, 10.0)

    injector.inject_at(ForceEvent(x=4, y=6), grid)
    injector.inject_at(ForceEvent(x=4.2, y=5.8), grid)

    assert grid.read(Layer.CURRENT, 4, 6) == 0.75
    assert grid.energy(Layer.PREVIOUS) == 0.0
# end def test_injection_overwrites_instead_of_adding


def test_periodic_source_writes_at_source_position(small_parameters):
    params = small_parameters.with_updates(force_enabled=True, applied_force_amplitude=2.0)
    injector = ForceInjector(params)
    grid = GridState(20, 20)

    assert not injector.tick(0.01, grid)
    assert not np.any(grid.layer())
    assert injector.tick(0.05, grid)
    assert params.source_position == (13, 13)
    assert grid.read(Layer.CURRENT, 13, 13) == 2.0
    assert np.count_nonzero(grid.layer()) == 1
# end def test_periodic_source_writes_at_source_position


def test_pause_and_resume(small_parameters):
    injector = ForceInjector(small_parameters)
    grid = GridState(20, 20)
    assert injector.paused
    assert not injector.tick(1.0, grid)

    injector.resume()
    assert not injector.paused
    assert injector.tick(0.05, grid)

    injector.pause()
    assert not injector.tick(1.0, grid)
# end def test_pause_and_resume


def test_flush_applies_queue_then_extra_events(small_parameters):
    """Queued events go first; the last write to a cell wins."""
    injector = ForceInjector(small_parameters)
    grid = GridState(20, 20)
    injector.submit(ForceEvent(x=3, y=3))
    injector.submit(ForceEvent(x=0, y=3))
    assert injector.pending == 2

    applied = injector.flush(grid, [ForceEvent(x=5, y=5), ForceEvent(x=25, y=5)])

    assert applied == 2
    assert injector.pending == 0
    assert grid.read(Layer.CURRENT, 3, 3) == 1.0
    assert grid.read(Layer.CURRENT, 5, 5) == 1.0
    assert injector.flush(grid) == 0
# end def test_flush_applies_queue_then_extra_events


@pytest.mark.parametrize("delta", [-0.01, math.nan, math.inf])
def test_timer_rejects_invalid_elapsed_time(delta):
    """A bad elapsed time raises and leaves the accumulated time intact."""
    timer = RepeatingTimer(0.05)
    timer.tick(0.02)
    with pytest.raises(ValueError):
        timer.tick(delta)
    # end with
    assert timer.elapsed == pytest.approx(0.02)
    assert timer.tick(0.04) == 1
# end def test_timer_rejects_invalid_elapsed_time


@pytest.mark.parametrize("elapsed", [-0.01, math.nan])
def test_periodic_source_rejects_invalid_elapsed(small_parameters, elapsed):
    """The source never fires on a negative or NaN elapsed time."""
    injector = ForceInjector(small_parameters.with_updates(force_enabled=True))
    grid = GridState(20, 20)
    with pytest.raises(ValueError):
        injector.tick(elapsed, grid)
    # end with
    assert not np.any(grid.layer())
    assert injector.tick(0.05, grid)
# end def test_periodic_source_rejects_invalid_elapsed
