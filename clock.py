"""
SIMULATION CLOCK
----------------
The simulated time of the Orrery and the user options that steer each tick.

Everything that changes between ticks lives in a SimulationState, which is handed
to the tick routine explicitly instead of sitting in module globals.
"""
import math

from config import START_JD, JDPS, MAX_TICK_SECONDS, ALL_FAMILIES


class SimulationClock:
    """
    Simulated epoch (Julian date) advanced at a variable rate.

    rate_per_second is simulated days per real second. Zero pauses the simulation,
    resume() goes back to the nominal rate from wherever the epoch currently is.
    """

    def __init__(self, epoch_jd=START_JD, rate_per_second=JDPS, max_tick_seconds=MAX_TICK_SECONDS):
        self.epoch_jd = float(epoch_jd)
        self.rate_per_second = float(rate_per_second)
        self.nominal_rate = float(rate_per_second) if rate_per_second else float(JDPS)
        self.max_tick_seconds = max_tick_seconds

    def advance(self, elapsed_seconds):
        """
        Moves the epoch forward by one tick.

        elapsed_seconds is clamped to max_tick_seconds so a stalled frame (window drag,
        breakpoint, slow load) cannot throw the epoch years ahead.
        """
        if not math.isfinite(elapsed_seconds):
            elapsed_seconds = 0.0
        elapsed = min(max(elapsed_seconds, 0.0), self.max_tick_seconds)
        self.epoch_jd += elapsed * self.rate_per_second
        return self.epoch_jd

    def set_rate(self, rate_per_second):
        self.rate_per_second = float(rate_per_second)

    def pause(self):
        self.rate_per_second = 0.0

    def resume(self):
        self.rate_per_second = self.nominal_rate

    @property
    def paused(self):
        return self.rate_per_second == 0


class SimulationOptions:
    """User-facing switches: orbit display and the asteroid family filter."""

    def __init__(self, show_orbits=True, family_filter=ALL_FAMILIES):
        self.show_orbits = show_orbits
        self.family_filter = family_filter


class SimulationState:
    """Clock plus options, the only state a tick reads from the outside world."""

    def __init__(self, clock=None, options=None):
        self.clock = clock if clock is not None else SimulationClock()
        self.options = options if options is not None else SimulationOptions()
