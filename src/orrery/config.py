"""
Package-wide settings for Orrery
================================

Tolerances used when comparing orbital elements, the strict/soft switch
for input checking, the thresholds the hierarchy builder applies and the
defaults for propagation.

Examples
--------
>>> import orrery
>>> print(orrery.config)
>>> orrery.config.DEFAULT_PATH_POINTS = 720  # smoother orbit paths
>>> orrery.config.reset()

Scoped change:

>>> with orrery.temp_config(DEFAULT_PROPAGATION_MODE='simulation'):
...     earth.position_at(12.5)

Notes
-----
Hierarchy thresholds are read when ``build_system`` runs. Changing them
afterwards leaves trees that were already built untouched.
"""

from dataclasses import dataclass, fields
from contextlib import contextmanager
import math


@dataclass
class OrreryConfig:
    """
    Settings object behind ``orrery.config``.

    Attributes
    ----------
    EQUALITY_RTOL, EQUALITY_ATOL : float
        Tolerances for OrbitalElements equality (1e-12, 1e-14)
    STRICT_VALIDATION : bool
        Raise on bad inputs when True, warn when False (True)
    BARYCENTER_THRESHOLD : float
        Barycenter offset, as a fraction of the central body radius, at
        which a Barycenter node is inserted (0.5)
    SOI_EXPONENT : float
        Mass-ratio exponent in r_soi = a * (m / M)**SOI_EXPONENT (0.4)
    DEFAULT_PROPAGATION_MODE : str
        'physical' (Julian Day from J2000) or 'simulation' (sim clock)
    DEFAULT_PATH_POINTS : int
        Samples per revolution for sample_path (360)
    """

    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    STRICT_VALIDATION: bool = True

    BARYCENTER_THRESHOLD: float = 0.5
    SOI_EXPONENT: float = 0.4

    DEFAULT_PROPAGATION_MODE: str = 'physical'
    DEFAULT_PATH_POINTS: int = 360

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Rounding used by OrbitalElements.__hash__.

        Two decimals coarser than EQUALITY_ATOL so that elements comparing
        equal also hash equal.
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)

    def reset(self):
        """Restore every setting to its default."""
        defaults = OrreryConfig()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))

    def __repr__(self):
        groups = (
            ("Element equality", ("EQUALITY_RTOL", "EQUALITY_ATOL", "HASH_DECIMALS")),
            ("Validation", ("STRICT_VALIDATION",)),
            ("Hierarchy", ("BARYCENTER_THRESHOLD", "SOI_EXPONENT")),
            ("Propagation", ("DEFAULT_PROPAGATION_MODE", "DEFAULT_PATH_POINTS")),
        )
        lines = ["OrreryConfig:"]
        for title, keys in groups:
            lines.append(f"  {title}:")
            lines.extend(f"    {key} = {getattr(self, key)!r}" for key in keys)
        return "\n".join(lines)


config = OrreryConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Override settings for the duration of a ``with`` block.

    Every key is checked before anything changes; previous values come back
    on exit, including when the block raises.

    Examples
    --------
    >>> with orrery.temp_config(BARYCENTER_THRESHOLD=2.0):
    ...     root = orrery.build_system(earth, [moon])  # Earth stays the root

    Raises
    ------
    AttributeError
        For a name that is not a setting.
    """
    settable = [f.name for f in fields(config)]
    for key in kwargs:
        if key not in settable:
            raise AttributeError(
                f"OrreryConfig has no setting '{key}'. "
                f"Valid settings: {settable}"
            )

    saved = {key: getattr(config, key) for key in kwargs}
    for key, value in kwargs.items():
        setattr(config, key, value)
    try:
        yield config
    finally:
        for key, value in saved.items():
            setattr(config, key, value)
