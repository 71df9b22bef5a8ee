"""
General config file for the Orrery
Contains constants and global variables which can be altered.
Planet ephemerides come from https://ssd.jpl.nasa.gov/txt/aprx_pos_planets.pdf
"""
import logging

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(module)s - %(message)s')


class ConfigurationError(Exception):
    """Raised when an ephemeris record cannot be turned into a usable orbit.

    The message names the offending record (family and index, or planet name)
    so the load log points straight at the bad data.
    """
    pass


# --- Constants ---
SCREEN_WIDTH = 1400
SCREEN_HEIGHT = 800
FPS = 60

# Colors
WHITE = (255, 255, 255)
GREY = (30, 30, 30)
LIGHT_GREY = (135, 135, 135)
MID_GREY = (90, 90, 90)
ORBIT_GREY = (40, 40, 40)
BACKGROUND = (18, 18, 18)  # #121212
SUN_CORE = (249, 222, 89)
SUN_GLOW = (232, 166, 40)
ASTEROID_WHITE = (200, 200, 200)

# --- Time ---
J2000_JD = 2451545.0
START_JD = J2000_JD  # starting Julian date of the simulation
JDPS = 40  # julian days per second of simulation. Standard for the simulation
MAX_TICK_SECONDS = 0.05  # ceiling on real seconds consumed by one tick

# --- Orbital mechanics ---
SIN_OBLIQUITY = 0.397777156  # J2000 mean obliquity of the ecliptic
COS_OBLIQUITY = 0.917482062
ORBIT_SAMPLES = 360  # one sample per degree of mean anomaly

# --- Scene ---
ORBIT_SCALE = 2  # scene units per AU
PLANET_SIZE = 0.1
TABLE_ROWS = 10
TABLE_COLUMNS = ('a', 'e', 'i')

# --- Asteroid families ---
ALL_FAMILIES = 'All'
# NEOs are the union of Amors, Atens and Apollos, so they are left out of the
# default scene
STARTUP_EXCLUDED_FAMILIES = ('NEOs',)
ASSETS_SOURCE = 'assets'
ASTEROID_ASSETS = [
    ('Amors', 'amors.json'),
    ('Atens', 'atens.json'),
    ('Apollos', 'apollos.json'),
    ('Inner Belt', 'inner_belt.json'),
    ('Main Belt', 'main_belt.json'),
    ('Outer Belt', 'outer_belt.json'),
    ('Mars Crossing', 'mars_crossing.json'),
    ('NEOs', 'neos.json'),
    ('Trojans', 'trojans.json'),
]
REQUEST_TIMEOUT = 15
USER_AGENT = 'Solar-Orrery-Python-Client'

# --- Planets ---
PLANET_DEFINITIONS = {
    'Mercury': {'ephem': {'a': 0.38709927, 'e': 0.20563593, 'i': 7.00497902, 'om': 48.33076593, 'w': 29.12703035, 'mlong': 252.25032350, 'epoch': 2451545.0},
                'color': (110, 48, 75), 'size': PLANET_SIZE / 1.5},
    'Venus': {'ephem': {'a': 0.72333566, 'e': 0.00677672, 'i': 3.39467605, 'om': 76.67984255, 'w': 54.92262463, 'mlong': 181.97909950, 'epoch': 2451545.0},
              'color': (252, 223, 135), 'size': PLANET_SIZE / 1.5},
    'Earth': {'ephem': {'a': 1.00000261, 'e': 0.01671123, 'i': -0.00001531, 'om': 0.0, 'w': 102.93768193, 'mlong': 100.46457166, 'epoch': 2451545.0},
              'color': (0, 122, 121), 'size': PLANET_SIZE},
    'Mars': {'ephem': {'a': 1.52371034, 'e': 0.09339410, 'i': 1.84969142, 'om': 49.55953891, 'w': 286.4968315, 'n': 0.5240613, 'mlong': 355.44656795, 'epoch': 2451545.0},
             'color': (195, 49, 36), 'size': PLANET_SIZE},
    'Jupiter': {'ephem': {'a': 5.20288700, 'e': 0.04838624, 'i': 1.30439695, 'om': 100.47390909, 'w': 274.25457073, 'mlong': 34.39644051, 'epoch': 2451545.0},
                'color': (188, 109, 76), 'size': PLANET_SIZE * 4},
    'Saturn': {'ephem': {'a': 9.53667594, 'e': 0.05386179, 'i': 2.48599187, 'om': 113.66242448, 'w': 338.93645383, 'mlong': 49.95424423, 'epoch': 2451545.0},
               'color': (199, 206, 223), 'size': PLANET_SIZE * 3},
    'Uranus': {'ephem': {'a': 19.18916464, 'e': 0.04725744, 'i': 0.77263783, 'om': 74.01692503, 'w': 96.93735127, 'mlong': 313.23810451, 'epoch': 2451545.0},
               'color': (161, 223, 251), 'size': PLANET_SIZE * 2},
    'Neptune': {'ephem': {'a': 30.06992276, 'e': 0.00859048, 'i': 1.77004347, 'om': 131.78422574, 'w': 273.18053653, 'mlong': 304.87997031, 'epoch': 2451545.0},
                'color': (27, 150, 243), 'size': PLANET_SIZE * 2},
    'Pluto': {'ephem': {'a': 39.48211675, 'e': 0.24882730, 'i': 17.14001206, 'om': 110.30393684, 'w': 113.76497945, 'mlong': 238.92903833, 'epoch': 2451545.0},
              'color': (246, 237, 220), 'size': PLANET_SIZE},
}

# Scaling factors for visualization
PLANET_RADIUS_PIXELS = 40  # pixels per scene unit of planet size
MIN_PLANET_RADIUS_PIXELS = 2
MAX_PLANET_RADIUS_PIXELS = 8
SUN_RADIUS_PIXELS = 10
CAMERA_Z_OFFSET = 50
DEFAULT_CAMERA_ZOOM = 1000

# Coordinate clamping limits for Pygame
COORD_MIN = -32760
COORD_MAX = 32760
