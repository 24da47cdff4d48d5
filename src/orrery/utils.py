"""
Input checking shared by the Orrery node and element classes.
"""

import math
import warnings
from typing import Type
from .config import config


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Report a bad input, strictly or softly.

    With config.STRICT_VALIDATION set (the default) the error is raised;
    otherwise a UserWarning is issued and the caller carries on with the
    value it was given.

    Parameters
    ----------
    message : str
    error_class : Type[Exception], optional
        Raised in strict mode (default: ValueError)

    Examples
    --------
    >>> from orrery import temp_config
    >>> with temp_config(STRICT_VALIDATION=False):
    ...     validation_error("Eccentricity 1.2 outside [0, 1)")  # warns
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    warnings.warn(message, UserWarning, stacklevel=3)


def physical_quantity(owner: str, label: str, value) -> float:
    """
    Coerce a body's radius or mass to float, flagging values no body can have.

    Zero is allowed: massless bodies and point barycenters are legitimate.
    """
    value = float(value)
    if not math.isfinite(value):
        validation_error(f"{owner}: {label} must be finite, got {value}")
    elif value < 0:
        validation_error(f"{owner}: {label} cannot be negative, got {value}")
    return value
