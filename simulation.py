import logging
from typing import NamedTuple

import pandas as pd

from config import ALL_FAMILIES, TABLE_ROWS, TABLE_COLUMNS
from clock import SimulationState
from membership import MembershipController


class Frame(NamedTuple):
    """What one tick hands to the renderer."""
    epoch_jd: float
    transitions: list


class Simulation:
    """
    The per-tick engine of the Orrery.

    Functions:
    1.  **Tick**: advance the clock, move every planet and family, reconcile the family filter.
    2.  **Controls**: rate, play/pause, orbit display and family selection, accepted at any time.
    3.  **Inspection**: the raw element records of the selected family, as a table.

    All loading has to be finished before the first tick: the planets and families passed
    in must be complete.
    """

    def __init__(self, planets, families, state=None):
        self.planets = list(planets)
        self.families = list(families)
        self.state = state if state is not None else SimulationState()
        self.membership = MembershipController(self.families, family_filter=self.state.options.family_filter)

    @property
    def clock(self):
        return self.state.clock

    @property
    def options(self):
        return self.state.options

    def tick(self, elapsed_seconds):
        """
        One iteration of the animation loop.

        1.  Advance the clock (elapsed time is clamped by the clock).
        2.  Propagate every planet and every family to the new epoch.
        3.  Reconcile family membership against the current filter.
        """
        jd = self.clock.advance(elapsed_seconds)
        for planet in self.planets:
            planet.move(jd)
        for family in self.families:
            family.move(jd)
        transitions = self.membership.reconcile(self.options.family_filter)
        return Frame(jd, transitions)

    # --- Controls ---
    def set_rate(self, rate_per_second):
        self.clock.set_rate(rate_per_second)

    def play(self):
        self.clock.resume()

    def pause(self):
        self.clock.pause()

    def set_show_orbits(self, show):
        self.options.show_orbits = bool(show)

    def toggle_orbits(self):
        self.options.show_orbits = not self.options.show_orbits
        return self.options.show_orbits

    def select_family(self, name):
        if not self.membership.is_known(name):
            logging.warning(f"No asteroid family named '{name}', scene left unchanged.")
        self.options.family_filter = name

    def family_names(self):
        return [family.name for family in self.families] + [ALL_FAMILIES]

    # --- Inspection ---
    def find_family(self, name):
        for family in self.families:
            if family.name == name:
                return family
        return None

    def family_table(self, name=None, rows=TABLE_ROWS, columns=TABLE_COLUMNS):
        """
        Raw element records of a family, limited to the given columns and row count.

        'All' and unknown names give an empty table.
        """
        name = self.options.family_filter if name is None else name
        family = self.find_family(name)
        if family is None or not family.records:
            return pd.DataFrame(columns=list(columns))
        df = pd.DataFrame.from_records(family.records[:rows])
        return df.reindex(columns=list(columns))

    def info_title(self, name=None):
        name = self.options.family_filter if name is None else name
        label = 'Solar System' if name == ALL_FAMILIES else name
        return f"{label} Asteroids"
