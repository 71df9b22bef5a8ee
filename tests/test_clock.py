"""
Tests for the simulation clock.
"""
import pytest

from config import JDPS, START_JD
from clock import SimulationClock, SimulationState


def test_defaults():
    clock = SimulationClock()
    assert clock.epoch_jd == START_JD
    assert clock.rate_per_second == JDPS
    assert clock.max_tick_seconds == 0.05


def test_advance_by_elapsed_time():
    clock = SimulationClock(2451545.0, 40)
    assert clock.advance(0.01) == pytest.approx(2451545.0 + 0.4)


def test_long_frame_is_clamped():
    """A 10 s stall only moves the clock by one maximum tick."""
    clock = SimulationClock(2451545.0, 40, max_tick_seconds=0.05)
    clock.advance(10)
    assert clock.epoch_jd == pytest.approx(2451545.0 + 0.05 * 40)


def test_negative_elapsed_does_not_move_clock():
    clock = SimulationClock(2451545.0, 40)
    clock.advance(-1.0)
    assert clock.epoch_jd == 2451545.0


def test_pause_and_resume_without_rewind():
    clock = SimulationClock(2451545.0, 40)
    clock.advance(0.05)
    clock.pause()
    assert clock.paused
    clock.advance(0.05)
    assert clock.epoch_jd == pytest.approx(2451547.0)

    clock.resume()
    assert clock.rate_per_second == 40
    clock.advance(0.05)
    assert clock.epoch_jd == pytest.approx(2451549.0)


def test_set_rate():
    clock = SimulationClock(0.0, 40)
    clock.set_rate(200)
    clock.advance(0.05)
    assert clock.epoch_jd == pytest.approx(10.0)
    # resume goes back to the rate the clock was created with
    clock.resume()
    assert clock.rate_per_second == 40


def test_clock_created_paused_resumes_at_default_rate():
    clock = SimulationClock(0.0, 0)
    assert clock.paused
    clock.resume()
    assert clock.rate_per_second == JDPS


def test_state_owns_its_own_clock():
    a = SimulationState()
    b = SimulationState()
    a.clock.advance(0.05)
    assert b.clock.epoch_jd == START_JD
    assert a.options.show_orbits
    assert a.options.family_filter == 'All'


@pytest.mark.parametrize("elapsed", [float('nan'), float('inf')])
def test_non_finite_elapsed_does_not_move_clock(elapsed):
    clock = SimulationClock(2451545.0, 40)
    clock.advance(elapsed)
    assert clock.epoch_jd == 2451545.0
