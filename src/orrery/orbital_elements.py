'''Planar Keplerian orbits for a hierarchical body model
OrbitalElements class definition'''

import math
import numpy as np
from .config import config
from .utils import validation_error

#define basic orbital element class
class OrbitalElements:
    """
    Represents a closed planar orbit as five Keplerian elements
    [a, e, pomega, m0, n] relative to the parent body.

    Elements are expressed in the units of the system that authored them
    (the predefined bodies use AU, radians and radians/day). OrbitalElements
    is immutable, use replace() to derive a modified copy.

    Parameters
    ----------
    a : float
        Semi-major axis. a <= 0 marks a degenerate orbit that always sits
        at the parent's origin.
    e : float
        Eccentricity, 0 <= e < 1 for closed orbits
    pomega : float
        Longitude of periapsis [rad] (longitude of ascending node +
        argument of periapsis)
    m0 : float
        Mean anomaly at the reference epoch [rad]
    n : float
        Mean angular motion [rad/time]
    validate : bool, optional
        Whether to validate elements (default False). Propagation accepts
        any numeric input, validation is an opt-in check for authored data.
    """
    _FIELDS = ('a', 'e', 'pomega', 'm0', 'n')

    # ========== CONSTRUCTION ==========
    def __init__(self, a=0.0, e=0.0, pomega=0.0, m0=0.0, n=0.0, validate=False):
        self._elements = np.array([a, e, pomega, m0, n], dtype=float)
        # Ensure immutability of elements array
        self._elements.flags.writeable = False
        if validate:
            self._validate()

    @classmethod
    def degenerate(cls):
        """Zero orbit used by the root of a system (always at the origin)"""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, elements, validate=False):
        """
        Create OrbitalElements from a 5-element sequence [a, e, pomega, m0, n]
        """
        elements = np.asarray(elements, dtype=float)
        if elements.shape != (5,):
            raise ValueError(
                f"Orbital elements must be a 5-element vector, got shape {elements.shape}")
        return cls(*elements, validate=validate)

    @classmethod
    def from_dict(cls, data, validate=False):
        """
        Create OrbitalElements from the serialized projection produced by
        to_dict(). Keys: a, e, pomega, M0, n.
        """
        missing = [k for k in ('a', 'e', 'pomega', 'M0', 'n') if k not in data]
        if missing:
            raise ValueError(f"Orbit mapping is missing keys: {missing}")
        return cls(data['a'], data['e'], data['pomega'], data['M0'], data['n'],
                   validate=validate)

    def replace(self, **changes):
        """
        Return a copy with the given elements changed.

        Examples
        --------
        >>> orbit.replace(a=orbit.a - offset, m0=orbit.m0 + np.pi)
        """
        unknown = set(changes) - set(self._FIELDS)
        if unknown:
            raise TypeError(f"Unknown orbital element(s): {sorted(unknown)}. "
                            f"Use: {list(self._FIELDS)}")
        values = dict(zip(self._FIELDS, self._elements.tolist()))
        values.update(changes)
        return OrbitalElements(**values)

    # ========== VALIDATION ==========
    def _validate(self):
        """Check elements describe a closed orbit
        Failures raise or warn depending on config.STRICT_VALIDATION
        """
        if not np.all(np.isfinite(self._elements)):
            validation_error("Elements contain NaN or Inf")
        elif self.e < 0 or self.e >= 1:
            validation_error(
                f"Closed orbit requires 0 <= e < 1, got e={self.e}")

    # ========== PROPERTY ACCESS ==========
    @property
    def elements(self) -> np.ndarray:
        """Read-only element vector [a, e, pomega, m0, n]"""
        return self._elements

    @property
    def a(self) -> float:
        """Semi-major axis"""
        return float(self._elements[0])

    @property
    def e(self) -> float:
        """Eccentricity"""
        return float(self._elements[1])

    @property
    def pomega(self) -> float:
        """Longitude of periapsis [rad]"""
        return float(self._elements[2])

    @property
    def m0(self) -> float:
        """Mean anomaly at epoch [rad]"""
        return float(self._elements[3])

    @property
    def n(self) -> float:
        """Mean angular motion [rad/time]"""
        return float(self._elements[4])

    @property
    def is_degenerate(self) -> bool:
        """True when the orbit collapses onto the parent (a <= 0)"""
        return self.a <= 0

    # ========== ORBITAL PROPERTIES ==========
    def period(self) -> float:
        """
        Orbital period in the time unit of n

        Returns math.inf when n == 0 (the orbit never advances)
        """
        n = self.n
        if n == 0:
            return math.inf
        return 2 * math.pi / abs(n)

    def periapsis(self) -> float:
        """Closest distance to the parent, a(1 - e)"""
        return self.a * (1 - self.e)

    def apoapsis(self) -> float:
        """Farthest distance from the parent, a(1 + e)"""
        return self.a * (1 + self.e)

    # ========== SERIALIZATION ==========
    def to_dict(self) -> dict:
        """Serialized projection {a, e, pomega, M0, n}"""
        a, e, pomega, m0, n = self._elements.tolist()
        return {'a': a, 'e': e, 'pomega': pomega, 'M0': m0, 'n': n}

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        #Length of element vector (always 5)
        return 5

    def __getitem__(self, key):
        #Allow indexing like orbit[0]
        return self._elements[key]

    def __iter__(self):
        #Allow iteration over elements
        return iter(self._elements)

    def __repr__(self):
        #Machine-readable representation
        a, e, pomega, m0, n = self._elements.tolist()
        return (f"OrbitalElements(a={a!r}, e={e!r}, pomega={pomega!r}, "
                f"m0={m0!r}, n={n!r})")

    def __str__(self):
        #Human-readable representation
        a, e, pomega, m0, n = self._elements
        return (f"Orbital Elements:\n"
                f"  a      = {a:14.8f}\n"
                f"  e      = {e:14.8f}\n"
                f"  pomega = {np.degrees(pomega):14.4f}°\n"
                f"  M0     = {np.degrees(m0):14.4f}°\n"
                f"  n      = {np.degrees(n):14.8f}°/time")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return False
        return np.allclose(self._elements, other._elements,
                           rtol=config.EQUALITY_RTOL,
                           atol=config.EQUALITY_ATOL)

    def __hash__(self):
        #Hash with rounding to match equality
        return hash(tuple(round(x, config.HASH_DECIMALS)
                          for x in self._elements.tolist()))
