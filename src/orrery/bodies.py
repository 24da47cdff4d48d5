'''Planar Keplerian orbits for a hierarchical body model
Orbiting node class definitions (Body, Barycenter, Craft)'''

import weakref
from enum import IntEnum
from typing import Optional, Tuple, Iterator
from .orbital_elements import OrbitalElements
from . import propagation
from .utils import physical_quantity

# Gravitational constant [m^3 kg^-1 s^-2]
G = 6.6740831e-11

# Sphere of influence sentinel for "unbounded / not applicable"
SOI_UNBOUNDED = -1.0


# define an enumerated list of body types
class BodyType(IntEnum):
    STAR = 1
    PLANET = 2
    DWARF_PLANET = 3
    MOON = 4
    ASTEROID = 5
    COMET = 6


class Orbiter:
    """
    Anything that follows an orbit around a parent node.

    The parent is held as a weak reference: a node's satellites are owned by
    the node, the back-reference never keeps a parent alive. Parent links
    and orbits are set by the hierarchy builder and are read-only afterwards.

    Parameters
    ----------
    name : str
        Node identifier
    orbit : OrbitalElements
        Orbit relative to the (intended) parent
    """
    def __init__(self, name: str, orbit: Optional[OrbitalElements] = None):
        if orbit is None:
            orbit = OrbitalElements.degenerate()
        if not isinstance(orbit, OrbitalElements):
            raise TypeError(f"orbit must be OrbitalElements, got {type(orbit)}")
        self._name = str(name)
        self._orbit = orbit
        self._parent_ref = None

    # ========== PROPERTY ACCESS ==========
    @property
    def name(self) -> str:
        return self._name

    @property
    def orbit(self) -> OrbitalElements:
        """Orbit relative to the parent"""
        return self._orbit

    @property
    def parent(self) -> Optional["Orbitable"]:
        """Parent node, or None for a root (or a node not yet placed)"""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        """Number of parent links between this node and the root"""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def _set_parent(self, parent: Optional["Orbitable"]):
        self._parent_ref = None if parent is None else weakref.ref(parent)

    # ========== PROPAGATION ==========
    def period(self) -> float:
        """Orbital period around the parent"""
        return self._orbit.period()

    def position_at(self, t: float, mode=None) -> Tuple[float, float]:
        """Position relative to the parent at time t"""
        return propagation.position_at(self._orbit, t, mode)

    def absolute_position_at(self, t: float, mode=None) -> Tuple[float, float]:
        """
        Position relative to the root of the tree at time t.

        Sums the relative positions along the parent chain. The root's own
        orbit is not included, so the root always sits at (0, 0).
        """
        if self.parent is None:
            return (0.0, 0.0)
        x, y = self.position_at(t, mode)
        node = self.parent
        while node.parent is not None:
            px, py = node.position_at(t, mode)
            x += px
            y += py
            node = node.parent
        return (x, y)

    def walk(self) -> Iterator["Orbiter"]:
        """Depth-first pre-order iteration (an Orbiter has no satellites)"""
        yield self

    # ========== SERIALIZATION ==========
    def to_dict(self) -> dict:
        return {'name': self._name, 'orbit': self._orbit.to_dict()}

    def __repr__(self):
        return f"{type(self).__name__}('{self._name}', a={self._orbit.a:.6g})"


class Orbitable(Orbiter):
    """
    An Orbiter with mass that other nodes can orbit.

    Parameters
    ----------
    name : str
    radius : float
        Physical radius, in the same length unit as the semi-major axes
    mass : float
        Mass [kg]
    orbit : OrbitalElements, optional
        Orbit relative to the intended parent (degenerate for a root)
    """
    def __init__(self, name: str, radius: float, mass: float,
                 orbit: Optional[OrbitalElements] = None):
        super().__init__(name, orbit)
        self._radius = physical_quantity(self._name, "radius", radius)
        self._mass = physical_quantity(self._name, "mass", mass)
        self._soi = SOI_UNBOUNDED
        # None until the hierarchy builder has configured this node
        self._satellites = None

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def mass(self) -> float:
        """Mass [kg]"""
        return self._mass

    @property
    def gm(self) -> float:
        """Gravitational parameter G*M [m^3/s^2]"""
        return self._mass * G

    @property
    def soi_radius(self) -> float:
        """Sphere of influence radius, SOI_UNBOUNDED (-1) when not applicable"""
        return self._soi

    @property
    def satellites(self) -> Tuple[Orbiter, ...]:
        """Satellites ordered by ascending semi-major axis"""
        if self._satellites is None:
            return ()
        return tuple(self._satellites)

    @property
    def is_configured(self) -> bool:
        """True once the hierarchy builder has assigned this node's satellites"""
        return self._satellites is not None

    def walk(self) -> Iterator[Orbiter]:
        yield self
        for sat in self.satellites:
            yield from sat.walk()

    def to_dict(self) -> dict:
        data = {
            'name': self._name,
            'radius': self._radius,
            'mass': self._mass,
            'soi': self._soi,
            'orbit': self._orbit.to_dict(),
        }
        if self._satellites:
            data['satellites'] = [sat.to_dict() for sat in self._satellites]
        return data


class Body(Orbitable):
    """
    A star, planet, dwarf planet, moon, asteroid or comet.

    Examples
    --------
    >>> earth = Body(BodyType.PLANET, 'Earth', radius=4.26e-5, mass=5.97e24,
    ...              orbit=OrbitalElements(1.0, 0.0167, 1.797, -0.043, 0.0172))
    """
    def __init__(self, body_type, name: str, radius: float, mass: float,
                 orbit: Optional[OrbitalElements] = None):
        super().__init__(name, radius, mass, orbit)
        self._body_type = BodyType(body_type)

    @property
    def body_type(self) -> BodyType:
        return self._body_type

    def to_dict(self) -> dict:
        data = {'type': int(self._body_type)}
        data.update(super().to_dict())
        return data

    def __repr__(self):
        return (f"Body({self._body_type.name}, '{self._name}', "
                f"a={self._orbit.a:.6g})")


class Barycenter(Orbitable):
    """
    Common center of mass of a central body and its dominant satellite.

    Only created by the hierarchy builder. Radius and mass are labeled
    approximations: radius is the offset of the central body from the
    barycenter, mass is the sum of the two masses.
    """


class Craft(Orbiter):
    """
    A massless free-flying object (ship, probe) following an orbit.

    Crafts can be placed in a satellite list; they never claim a sphere of
    influence and never pull a barycenter away from their parent.
    """
