"""
Tests for the family membership state machine.
"""
import pytest

from bodies import Family
from membership import MembershipController, Transition

NAMES = ['Amors', 'Atens', 'Apollos', 'Main Belt', 'NEOs', 'Trojans']


@pytest.fixture
def families():
    return [Family(name, [], []) for name in NAMES]


def active_map(families):
    return {family.name: family.active for family in families}


def test_show_everything_at_startup_except_neos(families):
    MembershipController(families)
    expected = {name: name != 'NEOs' for name in NAMES}
    assert active_map(families) == expected


def test_specific_startup_filter_starts_inactive(families):
    MembershipController(families, family_filter='Trojans')
    assert not any(active_map(families).values())


def test_first_reconcile_under_all_adds_neos(families):
    controller = MembershipController(families)
    transitions = controller.reconcile('All')
    assert [(t.family.name, t.active) for t in transitions] == [('NEOs', True)]
    assert all(active_map(families).values())


def test_select_single_family(families):
    controller = MembershipController(families)
    transitions = controller.reconcile('Main Belt')
    removed = {t.family.name for t in transitions if not t.active}
    assert removed == {'Amors', 'Atens', 'Apollos', 'Trojans'}
    assert not any(t.active for t in transitions)
    assert controller.active_families() == [families[3]]


def test_repeating_filter_is_idempotent(families):
    controller = MembershipController(families)
    assert controller.reconcile('Atens')
    assert controller.reconcile('Atens') == []
    assert controller.reconcile('Atens') == []


def test_unknown_filter_changes_nothing(families):
    controller = MembershipController(families)
    before = active_map(families)
    assert controller.reconcile('Centaurs') == []
    assert active_map(families) == before


def test_any_sequence_settles_to_the_rule(families):
    controller = MembershipController(families)
    sequence = ['Atens', 'All', 'NEOs', 'NEOs', 'Kuiper', 'Trojans', 'All', 'All', 'Main Belt']
    last_known = 'All'
    for family_filter in sequence:
        controller.reconcile(family_filter)
        if controller.is_known(family_filter):
            last_known = family_filter
        for family in families:
            assert family.active == (last_known == 'All' or last_known == family.name), \
                f"{family.name} after {family_filter}"


def test_each_change_reported_once(families):
    controller = MembershipController(families)
    toggles = {name: 0 for name in NAMES}
    for family_filter in ['Amors', 'Amors', 'All', 'All', 'Amors']:
        for transition in controller.reconcile(family_filter):
            toggles[transition.family.name] += 1
    # Amors never leaves; the others go out, come back, go out again
    assert toggles['Amors'] == 0
    assert toggles['Atens'] == 3
    assert toggles['NEOs'] == 2


def test_transition_carries_renderer_handle(families):
    handle = object()
    families[0].representation = handle
    controller = MembershipController(families)
    transitions = controller.reconcile('Atens')
    amors = [t for t in transitions if t.family.name == 'Amors'][0]
    assert amors == Transition(families[0], False)
    assert amors.family.representation is handle
