"""
Tests for planets, asteroid families and their construction from raw records.
"""
import logging

import numpy as np
import pytest

from config import ConfigurationError, ORBIT_SCALE, ORBIT_SAMPLES, PLANET_DEFINITIONS
from bodies import Body, build_planets, build_family, build_families
from elements import OrbitalElements
from physics import propagate

CERES = {'name': '1 Ceres', 'a': 2.7675, 'e': 0.0785, 'i': 10.59, 'om': 80.27, 'w': 73.73, 'ma': 291.4, 'n': 0.2141, 'epoch': 2460000.5}
VESTA = {'name': '4 Vesta', 'a': 2.3615, 'e': 0.0887, 'i': 7.14, 'om': 103.81, 'w': 151.20, 'ma': 169.4, 'n': 0.2716, 'epoch': 2460000.5}


def test_build_planets():
    planets = build_planets()
    assert [p.name for p in planets] == list(PLANET_DEFINITIONS)
    for planet in planets:
        assert planet.orbit_path.shape == (ORBIT_SAMPLES + 1, 3)
        np.testing.assert_array_equal(planet.orbit_path[0], planet.orbit_path[-1])


def test_invalid_planet_definition_is_fatal():
    bad = {'Vulcan': {'ephem': {'a': 0.1, 'e': 0.0, 'i': 0.0, 'om': 0.0, 'w': 0.0, 'epoch': 2451545.0}}}
    with pytest.raises(ConfigurationError):
        build_planets(bad)


def test_body_move_and_scene_position():
    mars = build_planets()[3]
    mars.move(2455000.0)
    np.testing.assert_allclose(mars.position, propagate(mars.elements, 2455000.0))
    np.testing.assert_allclose(mars.scene_position, mars.position * ORBIT_SCALE)
    assert mars.visible


def test_degenerate_body_is_hidden_and_logged_once(caplog):
    body = Body('Hyperbolic', OrbitalElements(1.0, 1.5, 0.0, 0.0, 0.0, 0.0, 1.0, 2451545.0))
    with caplog.at_level(logging.WARNING):
        assert body.move(2451545.0) is False
        assert body.move(2451546.0) is False
    assert not body.visible
    assert sum('Skipping Hyperbolic' in r.getMessage() for r in caplog.records) == 1


def test_build_family_drops_bad_records(caplog):
    broken = {'name': 'broken', 'a': 2.0, 'e': 0.1, 'i': 1.0, 'om': 1.0, 'w': 1.0, 'epoch': 2460000.5}
    with caplog.at_level(logging.ERROR):
        family = build_family('Main Belt', [CERES, broken, VESTA])
    assert len(family) == 2
    assert family.records == [CERES, VESTA]
    assert any('Main Belt[1] (broken)' in r.getMessage() for r in caplog.records)


def test_family_move_masks_degenerate_rows():
    hyperbolic = dict(CERES, name='oops', e=1.2)
    family = build_family('Main Belt', [CERES, hyperbolic, VESTA])
    family.move(2460100.5)
    assert family.positions.shape == (3, 3)
    assert family.valid.tolist() == [True, False, True]
    assert family.scene_positions.shape == (2, 3)
    np.testing.assert_allclose(family.scene_positions[0],
                               propagate(family.elements[0], 2460100.5) * ORBIT_SCALE)


def test_build_families_keeps_order():
    families = build_families({'Outer Belt': [CERES], 'Inner Belt': [VESTA], 'Trojans': []})
    assert [f.name for f in families] == ['Outer Belt', 'Inner Belt', 'Trojans']
    assert not any(f.active for f in families)
    families[2].move(2460000.5)
    assert families[2].scene_positions.shape == (0, 3)


def test_build_family_skips_records_that_are_not_objects(caplog):
    with caplog.at_level(logging.ERROR):
        family = build_family('Main Belt', [CERES, None, 42, VESTA])
    assert family.records == [CERES, VESTA]
    messages = [r.getMessage() for r in caplog.records]
    assert any('Main Belt[1]' in m and 'not an object' in m for m in messages)
    assert any('Main Belt[2]' in m and 'not an object' in m for m in messages)


def test_family_logs_degenerate_row_once(caplog):
    hyperbolic = dict(CERES, name='oops', e=1.2)
    family = build_family('Main Belt', [CERES, hyperbolic])
    with caplog.at_level(logging.WARNING):
        family.move(2460100.5)
        family.move(2460101.5)
    assert family.valid.tolist() == [True, False]
    assert sum('Skipping Main Belt[1]' in r.getMessage() for r in caplog.records) == 1
