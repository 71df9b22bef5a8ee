"""
ORBITAL ELEMENTS
----------------
Keplerian element records for planets and asteroids.

Raw ephemeris records (planet tables in config.py, asteroid JSON files) carry
either a mean anomaly ('ma') or a mean longitude ('mlong'), and may or may not
carry a mean motion ('n'). Those options are resolved once, here, so the rest
of the Orrery only ever sees one canonical form.
"""
from collections.abc import Mapping
from typing import NamedTuple

import numpy as np

from config import ConfigurationError

REQUIRED_FIELDS = ('a', 'e', 'i', 'om', 'w', 'epoch')


def _field(record, key):
    """Returns a record value as float, or None when absent or null."""
    value = record.get(key)
    if value is None:
        return None
    return float(value)


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements of a body around the Sun.

    Angles are in degrees, as they come out of the ephemeris tables.

    Attributes:
        a: Semi-major axis (AU)
        e: Eccentricity (0 <= e < 1 for the elliptical orbits the solver handles)
        i: Inclination to the ecliptic (deg)
        om: Longitude of the ascending node (deg)
        w: Argument of periapsis (deg)
        ma: Mean anomaly at the reference epoch (deg)
        n: Mean motion (deg / day)
        epoch: Reference epoch (Julian date)
        source: Record field the mean anomaly came from, 'ma' or 'mlong'
    """
    a: float
    e: float
    i: float
    om: float
    w: float
    ma: float
    n: float
    epoch: float
    source: str = 'ma'

    @classmethod
    def from_record(cls, record, identity=None):
        """
        Builds canonical elements from a raw ephemeris record.

        The mean anomaly is taken from 'ma' when present, otherwise derived as
        mlong - w - om. The mean motion defaults to 1 / sqrt(a^3) (deg / day
        with Earth's period close to 365.25 days).

        Raises:
            ConfigurationError: the record is not a mapping, a required element is
                missing or not numeric, or
                neither 'ma' nor 'mlong' is given.
        """
        if not isinstance(record, Mapping):
            raise ConfigurationError(f"{identity or '<unnamed>'}: record is not an object ({type(record).__name__})")
        label = identity if identity is not None else record.get('name', '<unnamed>')
        try:
            values = {key: _field(record, key) for key in REQUIRED_FIELDS}
            ma = _field(record, 'ma')
            mlong = _field(record, 'mlong')
            n = _field(record, 'n')
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{label}: non-numeric orbital element ({e})") from e

        missing = [key for key, value in values.items() if value is None]
        if missing:
            raise ConfigurationError(f"{label}: missing orbital elements {', '.join(missing)}")

        if ma is not None:
            source = 'ma'
        elif mlong is not None:
            ma = mlong - values['w'] - values['om']
            source = 'mlong'
        else:
            raise ConfigurationError(f"{label}: mean anomaly or mean longitude must be defined")

        if n is None:
            n = 1 / np.sqrt(values['a'] ** 3)

        return cls(a=values['a'], e=values['e'], i=values['i'], om=values['om'], w=values['w'],
                   ma=ma, n=float(n), epoch=values['epoch'], source=source)


class ElementTable:
    """Column arrays of a family's elements, one row per body, for vectorised propagation."""

    COLUMNS = ('a', 'e', 'i', 'om', 'w', 'ma', 'n', 'epoch')

    def __init__(self, elements):
        self.size = len(elements)
        for column in self.COLUMNS:
            setattr(self, column, np.array([getattr(el, column) for el in elements], dtype=float))

    def __len__(self):
        return self.size
