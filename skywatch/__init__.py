"""
SKYWATCH - Celestial Object Name Resolution and Visibility

Resolves free-form object names against star and deep-sky catalogs,
converts equatorial coordinates to altitude/azimuth for an observer, and
computes rise/transit/set windows.

Architecture:
    - skywatch: shared exceptions, types, configuration and logging
    - services.catalog: catalog ingestion, in-memory store, name resolver
    - services.ephemeris: sidereal conversion, visibility windows, Skyfield adapter
    - skywatch.query: SkyQueryService entry point
"""

__version__ = "0.1.0"

# Version tuple for programmatic comparison
VERSION_INFO = (0, 1, 0)

# Core exceptions (import base class for convenience)
from skywatch.exceptions import SkywatchError

# Core types (import commonly used types for convenience)
from skywatch.types import (
    EquatorialCoordinate,
    HorizontalCoordinate,
    Observer,
    VisibilityWindow,
)

__all__ = [
    "__version__",
    "VERSION_INFO",
    "SkywatchError",
    "EquatorialCoordinate",
    "HorizontalCoordinate",
    "Observer",
    "VisibilityWindow",
]
