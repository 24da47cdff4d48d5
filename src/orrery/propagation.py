'''Planar Keplerian orbits for a hierarchical body model
Closed-form two-body propagation'''

import math
import numpy as np
from enum import Enum
from typing import Tuple, Union
from .config import config
from .orbital_elements import OrbitalElements

# Julian Day of the J2000 epoch (January 1, 2000 at approximately 12:00 GMT)
J2000 = 2451545.0

# Fixed number of Kepler fixed-point iterations. Constant per-call cost, enough
# for double precision at the eccentricities of the modeled bodies (e < ~0.3).
KEPLER_ITERATIONS = 10


# define the two time conventions a caller can author elements against
class PropagationMode(Enum):
    """
    Time convention for propagation.

    PHYSICAL
        t is a Julian Day, M = m0 + (t - J2000) * n, r = a (1 - e cos E)
    SIMULATION
        t is an accumulated simulation clock, M = -(m0 + t * n) and the
        radius is negated, r = -a (1 - e cos E)

    Both share the same solver. The sign flip of SIMULATION mirrors the
    direction in which the animated map renders bodies, and the two modes
    trace the same set of distances from the parent.
    """
    PHYSICAL = 'physical'
    SIMULATION = 'simulation'


def parse_mode(mode) -> PropagationMode:
    """Convert string, enum or None (config default) to PropagationMode"""
    if mode is None:
        mode = config.DEFAULT_PROPAGATION_MODE
    if isinstance(mode, PropagationMode):
        return mode
    elif isinstance(mode, str):
        mode_map = {
            'physical': PropagationMode.PHYSICAL,
            'phys': PropagationMode.PHYSICAL,
            'julian': PropagationMode.PHYSICAL,
            'simulation': PropagationMode.SIMULATION,
            'sim': PropagationMode.SIMULATION,
            'clock': PropagationMode.SIMULATION,
        }
        if mode in mode_map:
            return mode_map[mode]
        else:
            raise ValueError(f"Unknown propagation mode '{mode}'. "
                             f"Use: {list(mode_map.keys())}")
    else:
        raise TypeError(f"mode must be PropagationMode or str, got {type(mode)}")


def mean_anomaly(orbit: OrbitalElements, t, mode=None):
    """
    Mean anomaly of the orbit at time t for the given propagation mode.

    Works on scalars and numpy arrays alike.
    """
    mode = parse_mode(mode)
    if mode == PropagationMode.PHYSICAL:
        return orbit.m0 + (t - J2000) * orbit.n
    return -(orbit.m0 + t * orbit.n)


def eccentric_anomaly(M, e):
    """
    Solve Kepler's equation E = M + e sin(E) by fixed-point iteration.

    Seeded at E = M and run for exactly KEPLER_ITERATIONS steps with no
    convergence check, so the cost of a call never depends on its input.
    Accurate for the eccentricities of planets and moons; highly eccentric
    orbits (e close to 1) converge slowly and are only approximated.

    Parameters
    ----------
    M : float or np.ndarray
        Mean anomaly [rad]
    e : float
        Eccentricity

    Returns
    -------
    float or np.ndarray
        Eccentric anomaly [rad]
    """
    E = M
    for _ in range(KEPLER_ITERATIONS):
        E = M + e * np.sin(E)
    return E


def _position_from_mean_anomaly(orbit: OrbitalElements, M, mode: PropagationMode):
    """Planar position for mean anomaly M (scalar or array), a > 0 assumed"""
    a, e, pomega = orbit.a, orbit.e, orbit.pomega
    # e >= 1 yields NaN from the square roots, never an exception
    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        E = eccentric_anomaly(M, e)

        # Half-angle form of the true anomaly avoids acos quadrant ambiguity
        y = np.sqrt(1 - e) * np.cos(E / 2)
        x = np.sqrt(1 + e) * np.sin(E / 2)
        theta = pomega + 2 * np.arctan2(y, x)

        r = a * (1 - e * np.cos(E))
        if mode == PropagationMode.SIMULATION:
            r = -r

        return r * np.cos(theta), r * np.sin(theta)


def position_at(orbit: OrbitalElements, t: float, mode=None) -> Tuple[float, float]:
    """
    Position of the orbiting body relative to its parent at time t.

    Parameters
    ----------
    orbit : OrbitalElements
        Orbit relative to the parent
    t : float
        Julian Day (PHYSICAL) or simulation clock value (SIMULATION)
    mode : PropagationMode or str, optional
        Time convention, defaults to config.DEFAULT_PROPAGATION_MODE

    Returns
    -------
    tuple of float
        (x, y) in the length unit of the semi-major axis. A degenerate
        orbit (a <= 0) always returns (0.0, 0.0).
    """
    mode = parse_mode(mode)
    if orbit.a <= 0:
        return (0.0, 0.0)
    with np.errstate(invalid='ignore', over='ignore'):
        M = mean_anomaly(orbit, np.float64(t), mode)
    x, y = _position_from_mean_anomaly(orbit, M, mode)
    return (float(x), float(y))


def positions_at(orbit: OrbitalElements, times, mode=None) -> np.ndarray:
    """
    Vectorized position_at over an array of times.

    Returns
    -------
    np.ndarray
        Array of shape (len(times), 2)
    """
    mode = parse_mode(mode)
    times = np.atleast_1d(np.asarray(times, dtype=float))
    if orbit.a <= 0:
        return np.zeros((times.size, 2))
    with np.errstate(invalid='ignore', over='ignore'):
        M = mean_anomaly(orbit, times, mode)
    x, y = _position_from_mean_anomaly(orbit, M, mode)
    return np.column_stack((x, y))


def period(orbit: OrbitalElements) -> float:
    """Orbital period, 2 pi / |n|, or math.inf when n == 0"""
    return orbit.period()


def sample_path(orbit: OrbitalElements, n_points: Union[int, None] = None,
                mode=None) -> np.ndarray:
    """
    Sample one full revolution of the orbit.

    Points are evenly spaced in mean anomaly (evenly spaced in time over one
    period), starting at the epoch and ending back on the first point so
    the path closes. Orbits with n == 0 are still sampled over one
    revolution of mean anomaly.

    Parameters
    ----------
    orbit : OrbitalElements
    n_points : int, optional
        Number of points (default: config.DEFAULT_PATH_POINTS)
    mode : PropagationMode or str, optional

    Returns
    -------
    np.ndarray
        Array of shape (n_points, 2)
    """
    mode = parse_mode(mode)
    if n_points is None:
        n_points = config.DEFAULT_PATH_POINTS
    if n_points < 2:
        raise ValueError("n_points must be at least 2, use position_at()")
    if orbit.a <= 0:
        return np.zeros((n_points, 2))

    direction = -1.0 if orbit.n < 0 else 1.0
    sweep = direction * np.linspace(0.0, 2 * math.pi, n_points)
    if mode == PropagationMode.PHYSICAL:
        M = orbit.m0 + sweep
    else:
        M = -(orbit.m0 + sweep)
    x, y = _position_from_mean_anomaly(orbit, M, mode)
    return np.column_stack((x, y))
