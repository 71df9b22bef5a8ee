import logging
from datetime import datetime, timedelta, timezone

import numpy as np

from config import SIN_OBLIQUITY, COS_OBLIQUITY, ORBIT_SAMPLES, J2000_JD

"""
PHYSICS MODULE
--------------
This module handles all the orbital mechanics calculations required to position the planets
and asteroids in 3D space at a specific Julian date.

Key Concepts:
1.  **Orbital Elements**: Six numbers that define an orbit (see elements.py).
    - Semi-Major Axis (a), Eccentricity (e), Inclination (i),
      Longitude of Ascending Node (om), Argument of Periapsis (w),
      Mean Anomaly at the reference epoch (ma).

2.  **Anomalies**:
    - Mean Anomaly (M): A "fictitious" angle that grows linearly with time.
    - Eccentric Anomaly (E): The geometric angle from the centre of the ellipse.
    - True Anomaly (nu): The angle from the focus (the Sun) to the body.

    E is taken from the closed-form approximation E = atan(sin M / (cos M - e)) of
    Meeus, Astronomical Algorithms. It is a single pass, not a converged solution of
    Kepler's equation, so it drifts from the true position as e grows. Kept as is so
    positions match the browser orrery the data was tuned against.

3.  **Coordinate Transformation**:
    - The orbital plane is expressed through equatorial amplitude/phase pairs (A,a), (B,b), (C,c).
    - The equatorial coordinates are then rotated by the obliquity of the ecliptic to give
      heliocentric ecliptic coordinates (x, y, z) in AU.
"""


class NumericDegeneracy(ArithmeticError):
    """Raised when an orbit produces a non-finite position (e >= 1, a <= 0, ...)."""
    pass


def jd_to_datetime(jd):
    """Converts a Julian date to a UTC datetime, or None when outside the datetime range."""
    try:
        return datetime(2000, 1, 1, 12, tzinfo=timezone.utc) + timedelta(days=jd - J2000_JD)
    except OverflowError:
        return None


def format_jd(jd):
    date = jd_to_datetime(jd)
    if date is None:
        return f"JD {jd:.2f}"
    return f"{date.strftime('%d-%m-%Y %H:%M')} UTC | JD {jd:.2f}"


def kep2car(mean_anomaly_deg, a, e, inclination_deg, lon_asc_node_deg, arg_periapsis_deg):
    """
    Converts Keplerian elements at a given mean anomaly to ecliptic Cartesian coordinates.

    Every argument may be a scalar or a numpy array; they broadcast together, so one call
    can place a whole asteroid family. Degenerate orbits come back as NaN/inf rows instead of
    raising, callers decide what to do with them.

    Steps:
    1. Convert all angles from degrees to radians.
    2. Build the orbital-plane to equatorial auxiliaries F, G, H, P, Q, R.
    3. Turn them into amplitude/phase pairs per axis.
    4. Approximate the Eccentric Anomaly (E), with the quadrant correction.
    5. Calculate True Anomaly (nu) and Radius (r).
    6. Equatorial coordinates from the amplitude/phase pairs.
    7. Rotate y and z by the obliquity into the ecliptic frame.

    Returns:
        np.ndarray: shape (..., 3), positions in AU.
    """
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        # 1. Convert Degrees to Radians
        M = np.radians(np.asarray(mean_anomaly_deg, dtype=float))
        e = np.asarray(e, dtype=float)
        a = np.asarray(a, dtype=float)
        w_rad = np.radians(np.asarray(arg_periapsis_deg, dtype=float))
        om_rad = np.radians(np.asarray(lon_asc_node_deg, dtype=float))
        i_rad = np.radians(np.asarray(inclination_deg, dtype=float))

        # 2. Auxiliaries
        com = np.cos(om_rad)
        som = np.sin(om_rad)
        cinc = np.cos(i_rad)
        sinc = np.sin(i_rad)

        F = com
        G = som * COS_OBLIQUITY
        H = som * SIN_OBLIQUITY
        P = -som * cinc
        Q = com * cinc * COS_OBLIQUITY - sinc * SIN_OBLIQUITY
        R = com * cinc * SIN_OBLIQUITY + sinc * COS_OBLIQUITY

        # 3. Amplitude / phase pairs
        A = np.arctan2(F, P)
        B = np.arctan2(G, Q)
        C = np.arctan2(H, R)
        amp_a = np.hypot(F, P)
        amp_b = np.hypot(G, Q)
        amp_c = np.hypot(H, R)

        # 4. Eccentric Anomaly
        xx = np.cos(M) - e
        yy = np.sin(M)
        E = np.arctan(yy / xx)
        E = np.where(xx < 0, np.where(yy < 0, E - np.pi, E + np.pi), E)

        # 5. True Anomaly and Radius
        nu = 2 * np.arctan(np.sqrt((1 + e) / (1 - e)) * np.tan(E / 2))
        r = a * (1 - e ** 2) / (1 + e * np.cos(nu))

        # 6. Equatorial coordinates
        xeq = r * amp_a * np.sin(A + w_rad + nu)
        yeq = r * amp_b * np.sin(B + w_rad + nu)
        zeq = r * amp_c * np.sin(C + w_rad + nu)

        # 7. Rotate to the ecliptic
        yecl = yeq * COS_OBLIQUITY + zeq * SIN_OBLIQUITY
        zecl = -yeq * SIN_OBLIQUITY + zeq * COS_OBLIQUITY

    return np.stack(np.broadcast_arrays(xeq, yecl, zecl), axis=-1)


def solve_position(mean_anomaly_deg, elements):
    """
    Position of a single body (AU, ecliptic) at the given mean anomaly.

    Raises:
        NumericDegeneracy: the elements do not describe a usable ellipse.
    """
    pos = kep2car(mean_anomaly_deg, elements.a, elements.e, elements.i, elements.om, elements.w)
    if not np.all(np.isfinite(pos)):
        raise NumericDegeneracy(f"non-finite position for a={elements.a}, e={elements.e} at M={mean_anomaly_deg}")
    return pos


def mean_anomaly_at(elements, jd):
    """Mean anomaly (deg, in [0, 360)) at Julian date jd. Works on ElementTable columns too."""
    dj = jd - elements.epoch
    M = np.mod(elements.ma + elements.n * dj, 360.0)
    # np.mod rounds tiny negative values up to exactly 360
    return M - 360.0 * (M >= 360.0)


def propagate(elements, jd):
    """
    Calculates the 3D position of a body at Julian date jd.

    Evaluated directly from the reference epoch, so the clock can jump anywhere
    (past or future) without replaying the steps in between.
    """
    return solve_position(mean_anomaly_at(elements, jd), elements)


def propagate_table(table, jd):
    """
    Positions of every row of an ElementTable at Julian date jd.

    Returns:
        np.ndarray: shape (N, 3) in AU; rows of degenerate orbits are non-finite.
    """
    if len(table) == 0:
        return np.empty((0, 3))
    M = mean_anomaly_at(table, jd)
    return kep2car(M, table.a, table.e, table.i, table.om, table.w)


class OrbitPath:
    """
    The full orbit of a body as a closed loop of points.

    Iterating evaluates the solver at evenly spaced mean anomalies covering [0, 360)
    and then yields the first point again to close the loop. Nothing is cached, so the
    path can be iterated as many times as needed. The current epoch is never used, the
    path only describes the static shape of the orbit.
    """

    def __init__(self, elements, sample_count=ORBIT_SAMPLES):
        if sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {sample_count}")
        self.elements = elements
        self.sample_count = sample_count

    def __len__(self):
        return self.sample_count + 1

    def mean_anomalies(self):
        return np.arange(self.sample_count) * (360.0 / self.sample_count)

    def __iter__(self):
        first = None
        for ma in self.mean_anomalies():
            pos = kep2car(ma, self.elements.a, self.elements.e, self.elements.i,
                          self.elements.om, self.elements.w)
            if first is None:
                first = pos
            yield pos
        yield first.copy()

    def to_array(self, scale=1.0):
        """All points in one vectorised pass, shape (sample_count + 1, 3)."""
        points = kep2car(self.mean_anomalies(), self.elements.a, self.elements.e, self.elements.i,
                         self.elements.om, self.elements.w)
        points = np.vstack([points, points[:1]])
        if not np.all(np.isfinite(points)):
            logging.warning(f"Orbit path has non-finite points (a={self.elements.a}, e={self.elements.e}).")
        return points * scale


def sample_orbit(elements, sample_count=ORBIT_SAMPLES):
    return OrbitPath(elements, sample_count)
