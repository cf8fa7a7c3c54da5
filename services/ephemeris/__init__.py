"""
SKYWATCH Ephemeris Service

Sidereal-time coordinate conversion and visibility windows for fixed
objects, plus the Skyfield adapter used for solar-system bodies.
"""

from .sidereal import (
    CoordinateFrameConverter,
    convert_to_horizontal,
    days_since_j2000,
    equatorial_to_horizontal,
    greenwich_mean_sidereal_time,
    hour_angle,
    local_sidereal_time,
)
from .visibility import (
    VisibilityWindowCalculator,
    get_visibility_window,
    local_midnight,
)
from .skyfield_service import SkyfieldEphemeris

__all__ = [
    "CoordinateFrameConverter",
    "convert_to_horizontal",
    "days_since_j2000",
    "equatorial_to_horizontal",
    "greenwich_mean_sidereal_time",
    "hour_angle",
    "local_sidereal_time",
    "VisibilityWindowCalculator",
    "get_visibility_window",
    "local_midnight",
    "SkyfieldEphemeris",
]
