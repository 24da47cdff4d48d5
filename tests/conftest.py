"""
Shared fixtures for the Orrery test suite.

Bodies are consumed by the hierarchy builder, so fixtures return fresh
nodes for every test.
"""

import math
import pytest
from orrery import Body, BodyType, OrbitalElements, config


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with package defaults."""
    config.reset()
    yield
    config.reset()


@pytest.fixture
def eccentric_orbit():
    """Moderately eccentric orbit with arbitrary orientation and phase."""
    return OrbitalElements(a=2.0, e=0.3, pomega=0.4, m0=1.1, n=0.05)


def make_planet(name, mass, radius, a=0.0, m0=0.0, e=0.0, pomega=0.0, n=0.0):
    """Body with an orbit given by keyword elements."""
    return Body(BodyType.PLANET, name, radius=radius, mass=mass,
                orbit=OrbitalElements(a=a, e=e, pomega=pomega, m0=m0, n=n))


def make_moon(name, mass, a, radius=0.01, m0=0.0, e=0.0, pomega=0.0, n=None):
    """Moon on a circular orbit with a mean motion derived from a."""
    if n is None:
        n = 2 * math.pi / (10.0 * a)
    return Body(BodyType.MOON, name, radius=radius, mass=mass,
                orbit=OrbitalElements(a=a, e=e, pomega=pomega, m0=m0, n=n))


@pytest.fixture
def heavy_pair():
    """Central body and a satellite heavy enough to need a barycenter.

    Offset of the central body: 20 / (1 + 100/10) = 20/11 >= 0.5 * 1.0
    """
    central = make_planet('Alpha', mass=100.0, radius=1.0, a=5.0, m0=0.25,
                          e=0.02, pomega=0.1, n=0.01)
    satellite = make_moon('Beta', mass=10.0, a=20.0, m0=0.5, e=0.05,
                          pomega=0.7, n=0.3)
    return central, satellite


@pytest.fixture
def light_pair():
    """Central body and a satellite far below the barycenter threshold."""
    central = make_planet('Primary', mass=1e24, radius=1e6)
    satellite = make_moon('Pebble', mass=1e18, a=1.0)
    return central, satellite
