"""
Orrery: Hierarchical Keplerian Body Model

A Python package for modeling systems of stars, planets, moons, barycenters
and craft, and computing their positions from planar Keplerian elements.
"""

import logging

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE
from .bodies import (
    BodyType, Orbiter, Orbitable, Body, Barycenter, Craft, G, SOI_UNBOUNDED
)
from .propagation import (
    PropagationMode, J2000, KEPLER_ITERATIONS,
    position_at, positions_at, period, sample_path,
)
from .hierarchy import build_system
from .system import System

# Predefined bodies
from .defaults import make_body, solar_system

# Library logging: callers decide where records go
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from orrery import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "OrbitalElements",
    "BodyType",
    "Orbiter",
    "Orbitable",
    "Body",
    "Barycenter",
    "Craft",
    "System",
    "PropagationMode",
    # Abbreviations
    "OE",
    # Functions
    "position_at",
    "positions_at",
    "period",
    "sample_path",
    "build_system",
    "make_body",
    "solar_system",
    # Constants
    "G",
    "SOI_UNBOUNDED",
    "J2000",
    "KEPLER_ITERATIONS",
]
