"""
Test suite for orbiting node classes.

Tests cover:
- Body / Barycenter / Craft construction and read-only access
- Serialized projection (field order, satellites omission, type tag)
- Relative and absolute propagation through the tree
- Weak parent references
"""

import gc
import math
import pytest
import numpy as np
from orrery import (
    Body, BodyType, Barycenter, Craft, Orbitable, OrbitalElements,
    build_system, position_at, temp_config, G, SOI_UNBOUNDED, J2000
)
from conftest import make_planet, make_moon


class TestConstruction:

    def test_body_fields(self):
        orbit = OrbitalElements(a=1.0, e=0.1, pomega=0.2, m0=0.3, n=0.4)
        body = Body(BodyType.PLANET, 'Terra', radius=0.5, mass=2e24, orbit=orbit)
        assert body.name == 'Terra'
        assert body.body_type is BodyType.PLANET
        assert body.radius == 0.5
        assert body.mass == 2e24
        assert body.orbit is orbit
        assert body.parent is None
        assert body.soi_radius == SOI_UNBOUNDED
        assert body.satellites == ()
        assert not body.is_configured

    def test_body_type_from_int(self):
        body = Body(4, 'Luna', radius=1.0, mass=1.0)
        assert body.body_type is BodyType.MOON

    def test_invalid_body_type(self):
        with pytest.raises(ValueError):
            Body(42, 'Nope', radius=1.0, mass=1.0)

    def test_body_type_values(self):
        assert [t.value for t in BodyType] == [1, 2, 3, 4, 5, 6]
        assert BodyType.DWARF_PLANET == 3

    def test_default_orbit_is_degenerate(self):
        body = Body(BodyType.STAR, 'Sol', radius=1.0, mass=1.0)
        assert body.orbit.is_degenerate
        assert body.position_at(J2000) == (0.0, 0.0)

    def test_orbit_type_checked(self):
        with pytest.raises(TypeError, match="OrbitalElements"):
            Craft('Probe', orbit=[1.0, 0.0, 0.0, 0.0, 0.0])

    def test_negative_mass_rejected(self):
        with pytest.raises(ValueError, match="mass cannot be negative"):
            make_planet('Anti', mass=-1.0, radius=1.0)

    def test_non_finite_radius_rejected(self):
        with pytest.raises(ValueError, match="radius must be finite"):
            Body(BodyType.MOON, 'Blur', radius=math.inf, mass=1.0)

    def test_soft_validation_keeps_value(self):
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="Odd: radius"):
                body = Body(BodyType.COMET, 'Odd', radius=-2.0, mass=1.0)
        assert body.radius == -2.0

    def test_gm(self):
        body = make_planet('Heavy', mass=2.0, radius=1.0)
        assert body.gm == pytest.approx(2.0 * G)

    def test_read_only(self):
        body = make_planet('Fixed', mass=1.0, radius=1.0)
        with pytest.raises(AttributeError):
            body.radius = 2.0
        with pytest.raises(AttributeError):
            body.satellites = ()
        with pytest.raises(AttributeError):
            body.parent = None

    def test_craft_is_not_orbitable(self):
        craft = Craft('Probe', OrbitalElements(a=0.5, n=1.0))
        assert not isinstance(craft, Orbitable)
        assert not hasattr(craft, 'satellites')

    def test_repr(self):
        assert "Body(PLANET, 'Terra'" in repr(make_planet('Terra', 1.0, 1.0, a=1.0))
        assert repr(Craft('Probe')).startswith("Craft('Probe'")


class TestSerialization:

    def test_body_field_order(self):
        body = make_planet('Terra', mass=5.0, radius=0.1, a=1.0)
        data = body.to_dict()
        assert list(data) == ['type', 'name', 'radius', 'mass', 'soi', 'orbit']
        assert data['type'] == 2
        assert data['soi'] == -1
        assert data['orbit'] == {'a': 1.0, 'e': 0.0, 'pomega': 0.0, 'M0': 0.0, 'n': 0.0}

    def test_satellites_omitted_when_empty(self, heavy_pair):
        central, satellite = heavy_pair
        root = build_system(central, [satellite])
        # central body is configured with no inner satellites
        assert central.is_configured
        assert 'satellites' not in central.to_dict()
        assert 'satellites' not in satellite.to_dict()
        assert 'satellites' in root.to_dict()

    def test_barycenter_has_no_type(self, heavy_pair):
        root = build_system(*_split(heavy_pair))
        data = root.to_dict()
        assert isinstance(root, Barycenter)
        assert 'type' not in data
        assert list(data) == ['name', 'radius', 'mass', 'soi', 'orbit', 'satellites']
        assert [s['name'] for s in data['satellites']] == ['Alpha', 'Beta']
        assert data['satellites'][0]['type'] == int(BodyType.PLANET)

    def test_craft_projection(self):
        craft = Craft('Probe', OrbitalElements(a=0.5, n=1.0))
        assert craft.to_dict() == {
            'name': 'Probe',
            'orbit': {'a': 0.5, 'e': 0.0, 'pomega': 0.0, 'M0': 0.0, 'n': 1.0},
        }


def _split(pair):
    central, satellite = pair
    return central, [satellite]


class TestPropagation:

    def test_position_delegates_to_orbit(self):
        moon = make_moon('Luna', mass=1.0, a=2.0, e=0.1, m0=0.3, n=0.2)
        assert moon.position_at(J2000 + 4.0) == position_at(moon.orbit, J2000 + 4.0)
        assert moon.period() == pytest.approx(10 * math.pi)

    def test_absolute_position_sums_parent_chain(self):
        central = make_planet('Alpha', mass=100.0, radius=1.0)
        inner = make_moon('Gamma', mass=1e-6, a=2.0, m0=0.4)
        dominant = make_moon('Beta', mass=10.0, a=20.0, m0=1.0)
        root = build_system(central, [inner, dominant])
        assert inner.parent is central
        assert central.parent is root

        t = J2000 + 12.0
        gx, gy = inner.position_at(t)
        ax, ay = central.position_at(t)
        assert inner.absolute_position_at(t) == pytest.approx((gx + ax, gy + ay))
        assert central.absolute_position_at(t) == pytest.approx((ax, ay))
        assert root.absolute_position_at(t) == (0.0, 0.0)

    def test_center_of_mass_at_barycenter(self):
        """Circular pair: M * r_central + m * r_satellite == 0."""
        central = make_planet('Alpha', mass=100.0, radius=1.0)
        satellite = make_moon('Beta', mass=10.0, a=20.0, m0=0.9, n=0.3)
        build_root = build_system(central, [satellite])
        for t in (J2000, J2000 + 3.0, J2000 + 7.5):
            pc = np.array(central.position_at(t))
            ps = np.array(satellite.position_at(t))
            assert np.allclose(100.0 * pc + 10.0 * ps, 0.0, atol=1e-9)
        assert build_root.name == 'Alpha - Beta Barycenter'

    def test_depth(self):
        central = make_planet('Alpha', mass=100.0, radius=1.0)
        inner = make_moon('Gamma', mass=1e-6, a=2.0)
        root = build_system(central, [inner, make_moon('Beta', mass=10.0, a=20.0)])
        assert root.depth == 0
        assert central.depth == 1
        assert inner.depth == 2

    def test_walk_preorder(self):
        central = make_planet('Alpha', mass=100.0, radius=1.0)
        inner = make_moon('Gamma', mass=1e-6, a=2.0)
        root = build_system(central, [make_moon('Beta', mass=10.0, a=20.0), inner])
        assert [n.name for n in root.walk()] == [
            'Alpha - Beta Barycenter', 'Alpha', 'Gamma', 'Beta']


class TestParentReference:

    def test_parent_does_not_keep_root_alive(self, heavy_pair):
        central, satellite = heavy_pair
        root = build_system(central, [satellite])
        assert satellite.parent is root
        del root
        gc.collect()
        assert satellite.parent is None
        assert central.parent is None

    def test_mutual_consistency(self, heavy_pair):
        central, satellite = heavy_pair
        root = build_system(central, [satellite])
        for node in root.walk():
            for sat in getattr(node, 'satellites', ()):
                assert sat.parent is node
