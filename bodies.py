import logging

import numpy as np

from config import ConfigurationError, ORBIT_SCALE, ORBIT_SAMPLES, PLANET_DEFINITIONS, ASTEROID_WHITE
from elements import OrbitalElements, ElementTable
from physics import propagate, propagate_table, sample_orbit, NumericDegeneracy


class Body:
    """
    A single tracked body (a planet).

    Holds its elements, display identity and the orbit path, which is sampled once at
    construction. position is overwritten on every move(), no history is kept.
    """

    def __init__(self, name, elements, color=(255, 255, 255), size=0.1, kind='Planet'):
        self.name = name
        self.kind = kind
        self.elements = elements
        self.color = color
        self.size = size
        self.position = np.zeros(3)
        self.visible = True
        self._degenerate_logged = False
        self.orbit_path = sample_orbit(elements, ORBIT_SAMPLES).to_array(scale=ORBIT_SCALE)

    def move(self, jd):
        try:
            self.position = propagate(self.elements, jd)
            self.visible = True
        except NumericDegeneracy as e:
            self.visible = False
            if not self._degenerate_logged:
                logging.warning(f"Skipping {self.name}: {e}")
                self._degenerate_logged = True
        return self.visible

    @property
    def scene_position(self):
        return self.position * ORBIT_SCALE


class Family:
    """
    A named asteroid family drawn as one point cloud.

    records keeps the raw element dicts (for the table display), elements/table the
    validated form. active is the scene membership flag, representation is whatever
    handle the renderer attached for this family.
    """

    def __init__(self, name, records, elements, color=ASTEROID_WHITE):
        self.name = name
        self.records = records
        self.elements = elements
        self.table = ElementTable(elements)
        self.color = color
        self.positions = np.zeros((len(elements), 3))
        self.valid = np.ones(len(elements), dtype=bool)
        self.active = False
        self.representation = None
        self._logged_rows = set()

    def __len__(self):
        return len(self.elements)

    def __repr__(self):
        return f"Family({self.name!r}, {len(self)} bodies, active={self.active})"

    def move(self, jd):
        positions = propagate_table(self.table, jd)
        valid = np.all(np.isfinite(positions), axis=-1)
        for row in np.flatnonzero(~valid):
            if row not in self._logged_rows:
                self._logged_rows.add(row)
                logging.warning(f"Skipping {self.name}[{row}]: non-finite position (e={self.table.e[row]}).")
        self.positions = positions
        self.valid = valid
        return self.positions

    @property
    def scene_positions(self):
        """Scaled positions of the rows that produced finite coordinates."""
        return self.positions[self.valid] * ORBIT_SCALE


def _record_identity(family_name, index, record):
    if not isinstance(record, dict):
        return f"{family_name}[{index}]"
    name = record.get('name') or record.get('full_name')
    if name:
        return f"{family_name}[{index}] ({name})"
    return f"{family_name}[{index}]"


def build_family(name, records):
    """Validates raw records into a Family. Bad records are logged and left out."""
    kept_records = []
    elements = []
    for index, record in enumerate(records):
        try:
            elements.append(OrbitalElements.from_record(record, identity=_record_identity(name, index, record)))
            kept_records.append(record)
        except ConfigurationError as e:
            logging.error(f"Dropping record: {e}")
    if len(kept_records) < len(records):
        logging.warning(f"{name}: kept {len(kept_records)} of {len(records)} records.")
    return Family(name, kept_records, elements)


def build_families(family_data):
    """Builds one Family per entry of {family name: [raw records]}, keeping the input order."""
    families = [build_family(name, records) for name, records in family_data.items()]
    logging.info(f"Loaded {sum(len(f) for f in families)} asteroids in {len(families)} families.")
    return families


def build_planets(definitions=PLANET_DEFINITIONS):
    """
    Creates the planets from the static ephemeris table.

    The table ships with the program, so an invalid entry is a programming error and
    is raised rather than skipped.
    """
    planets = []
    for name, item in definitions.items():
        try:
            elements = OrbitalElements.from_record(item['ephem'], identity=name)
        except ConfigurationError:
            logging.critical(f"Invalid planet definition for {name}.")
            raise
        planets.append(Body(name, elements, color=item.get('color', (255, 255, 255)), size=item.get('size', 0.1)))
    return planets
