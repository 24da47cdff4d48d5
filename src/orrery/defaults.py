"""
Default Solar System Bodies
===========================

Approximate physical constants and J2000 mean orbital elements for the Sun,
the planets, Pluto and a handful of major moons, plus a factory that
assembles them into a complete hierarchy.

Bodies are consumed by the hierarchy builder, so every factory call returns
fresh nodes rather than shared module-level instances.

Units
-----
- lengths (semi-major axes and radii) in AU
- angles in radians, mean motion in radians/day (PHYSICAL propagation,
  t in Julian Days)
- masses in kg

Examples
--------
>>> from orrery import solar_system
>>> sol = solar_system()
>>> sol.root.name
'Sun - Jupiter Barycenter'
>>> sol['Earth'].parent.name
'Earth - Moon Barycenter'
"""
import math
from .orbital_elements import OrbitalElements
from .bodies import Body, BodyType
from .system import System

# Astronomical unit [km]
AU_KM = 1.495978707e8


def _km(value):
    return value / AU_KM


def planet_orbit(a, e, varpi, mean_longitude, period_days):
    """
    Heliocentric orbit from mean elements in the planetary convention.

    Parameters
    ----------
    a : float
        Semi-major axis [AU]
    e : float
        Eccentricity
    varpi : float
        Longitude of perihelion [deg]
    mean_longitude : float
        Mean longitude at J2000 [deg]
    period_days : float
        Sidereal period [days]
    """
    return OrbitalElements(
        a=a,
        e=e,
        pomega=math.radians(varpi),
        m0=math.radians(mean_longitude - varpi),
        n=2 * math.pi / period_days,
    )


def moon_orbit(a_km, e, pomega, m0, period_days):
    """Planetocentric orbit, a in km, pomega and m0 in degrees"""
    return OrbitalElements(
        a=_km(a_km),
        e=e,
        pomega=math.radians(pomega),
        m0=math.radians(m0),
        n=2 * math.pi / period_days,
    )


"""
Physical data: (type, radius [km], mass [kg])
Orbital data: planets (a [AU], e, varpi [deg], L [deg], P [days]),
moons (a [km], e, pomega [deg], M0 [deg], P [days])
Values rounded from JPL approximate mean elements and planetary fact sheets
"""
BODY_DATA = {
    'Sun': (BodyType.STAR, 695700.0, 1.98847e30),
    'Mercury': (BodyType.PLANET, 2439.7, 3.3011e23),
    'Venus': (BodyType.PLANET, 6051.8, 4.8675e24),
    'Earth': (BodyType.PLANET, 6371.0, 5.97237e24),
    'Mars': (BodyType.PLANET, 3389.5, 6.4171e23),
    'Jupiter': (BodyType.PLANET, 69911.0, 1.8982e27),
    'Saturn': (BodyType.PLANET, 58232.0, 5.6834e26),
    'Uranus': (BodyType.PLANET, 25362.0, 8.6810e25),
    'Neptune': (BodyType.PLANET, 24622.0, 1.02413e26),
    'Pluto': (BodyType.DWARF_PLANET, 1188.3, 1.303e22),
    'Moon': (BodyType.MOON, 1737.4, 7.342e22),
    'Io': (BodyType.MOON, 1821.6, 8.9319e22),
    'Europa': (BodyType.MOON, 1560.8, 4.7998e22),
    'Ganymede': (BodyType.MOON, 2634.1, 1.4819e23),
    'Callisto': (BodyType.MOON, 2410.3, 1.0759e23),
    'Charon': (BodyType.MOON, 606.0, 1.586e21),
}

PLANET_ELEMENTS = {
    'Mercury': (0.38709927, 0.20563593, 77.45779628, 252.25032350, 87.969),
    'Venus': (0.72333566, 0.00677672, 131.60246718, 181.97909950, 224.701),
    'Earth': (1.00000261, 0.01671123, 102.93768193, 100.46457166, 365.256),
    'Mars': (1.52371034, 0.09339410, -23.94362959, -4.55343205, 686.980),
    'Jupiter': (5.20288700, 0.04838624, 14.72847983, 34.39644051, 4332.589),
    'Saturn': (9.53667594, 0.05386179, 92.59887831, 49.95424423, 10759.22),
    'Uranus': (19.18916464, 0.04725744, 170.95427630, 313.23810451, 30688.5),
    'Neptune': (30.06992276, 0.00859048, 44.96476227, -55.12002969, 60195.0),
    'Pluto': (39.48211675, 0.24882730, 224.06891629, 238.92903833, 90560.0),
}

MOON_ELEMENTS = {
    'Moon': (384400.0, 0.0549, 83.3532, 134.9634, 27.321661),
    'Io': (421700.0, 0.0041, 128.106, 342.021, 1.769138),
    'Europa': (671034.0, 0.0090, 308.076, 171.016, 3.551181),
    'Ganymede': (1070412.0, 0.0013, 255.969, 317.540, 7.154553),
    'Callisto': (1882709.0, 0.0074, 351.491, 181.408, 16.689018),
    'Charon': (19591.0, 0.0002, 0.0, 0.0, 6.387221),
}


def make_body(name):
    """
    Create a fresh, unconfigured Body from the built-in tables.

    Raises
    ------
    KeyError
        If the body is not in BODY_DATA
    """
    if name not in BODY_DATA:
        raise KeyError(f"Unknown body '{name}'. Available: {list(BODY_DATA)}")
    body_type, radius_km, mass = BODY_DATA[name]
    if name in PLANET_ELEMENTS:
        orbit = planet_orbit(*PLANET_ELEMENTS[name])
    elif name in MOON_ELEMENTS:
        orbit = moon_orbit(*MOON_ELEMENTS[name])
    else:
        orbit = OrbitalElements.degenerate()
    return Body(body_type, name, radius=_km(radius_km), mass=mass, orbit=orbit)


def solar_system() -> System:
    """
    Build the default Solar System hierarchy.

    Planet systems are built first and their roots handed to the Sun:
    Jupiter keeps its moons directly, Earth-Moon and Pluto-Charon become
    barycenters, and at the top level the Sun-Jupiter barycenter is the
    root with the terrestrial planets left orbiting the Sun.

    Returns
    -------
    System
    """
    earth = System.build(make_body('Earth'), [make_body('Moon')]).root
    jupiter = System.build(
        make_body('Jupiter'),
        [make_body(name) for name in ('Io', 'Europa', 'Ganymede', 'Callisto')],
    ).root
    pluto = System.build(make_body('Pluto'), [make_body('Charon')]).root

    planets = [
        make_body('Mercury'),
        make_body('Venus'),
        earth,
        make_body('Mars'),
        jupiter,
        make_body('Saturn'),
        make_body('Uranus'),
        make_body('Neptune'),
        pluto,
    ]
    return System.build(make_body('Sun'), planets)
