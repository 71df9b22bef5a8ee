"""
MEMBERSHIP CONTROLLER
---------------------
Decides, once per tick, which asteroid families belong in the scene.

Each family is either active or inactive. With the filter set to 'All' every family
should be active, otherwise only the family whose name matches. The controller only
reports real changes, so a family that is already in the right state is never added
or removed again.
"""
import logging
from typing import NamedTuple

from config import ALL_FAMILIES, STARTUP_EXCLUDED_FAMILIES


class Transition(NamedTuple):
    """One membership change. family.representation is the renderer's handle to act on."""
    family: object
    active: bool


def wants_active(family_name, family_filter):
    return family_filter == ALL_FAMILIES or family_filter == family_name


class MembershipController:

    def __init__(self, families, family_filter=ALL_FAMILIES, startup_excluded=STARTUP_EXCLUDED_FAMILIES):
        self.families = list(families)
        self.names = {family.name for family in self.families}
        show_everything = family_filter == ALL_FAMILIES
        for family in self.families:
            family.active = show_everything and family.name not in startup_excluded

    def is_known(self, family_filter):
        return family_filter == ALL_FAMILIES or family_filter in self.names

    def reconcile(self, family_filter):
        """
        Brings every family's active flag in line with the filter.

        An unknown filter leaves everything as it is.

        Returns:
            list[Transition]: the families that changed, in family order.
        """
        if not self.is_known(family_filter):
            return []

        transitions = []
        for family in self.families:
            desired = wants_active(family.name, family_filter)
            if family.active != desired:
                family.active = desired
                transitions.append(Transition(family, desired))

        if transitions:
            logging.debug(f"Filter '{family_filter}': " +
                          ", ".join(f"{'+' if t.active else '-'}{t.family.name}" for t in transitions))
        return transitions

    def active_families(self):
        return [family for family in self.families if family.active]
