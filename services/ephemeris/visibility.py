"""
SKYWATCH Visibility Windows

Rise / transit / set times for fixed objects from the hour angle at the
observer's local midnight, or a circumpolar classification when the
object never crosses the horizon at that latitude.

The calendar day is the one containing the requested instant in its own
time representation: hours, minutes and seconds are zeroed while the
tzinfo is kept, so a caller passing local time gets local days.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from skywatch.logging_config import get_logger
from skywatch.types import EquatorialCoordinate, Observer, VisibilityWindow
from services.ephemeris.sidereal import hour_angle

logger = get_logger(__name__)

# |cos H| within this of 1 is horizon tangency
HORIZON_TANGENCY_TOLERANCE = 1e-12


def local_midnight(when: datetime) -> datetime:
    """Start of the calendar day containing ``when``; naive input is treated as UTC."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.replace(hour=0, minute=0, second=0, microsecond=0)


def horizon_hour_angle_cosine(dec_degrees: float, latitude_degrees: float) -> float:
    """cos(H0) = -tan(lat) * tan(dec) for the geometric horizon."""
    return -math.tan(math.radians(latitude_degrees)) * math.tan(math.radians(dec_degrees))


class VisibilityWindowCalculator:
    """Horizon crossings for fixed objects using closed-form hour angles."""

    def compute(
        self,
        coord: EquatorialCoordinate,
        observer: Observer,
        when: Optional[datetime] = None,
    ) -> VisibilityWindow:
        """
        Compute the visibility window for the day containing ``when``.

        Returns:
            VisibilityWindow with rise/transit/set, or a circumpolar result.
            A circumpolar result is data, not an error.
        """
        if when is None:
            when = datetime.now(timezone.utc)

        cos_h = horizon_hour_angle_cosine(coord.dec_degrees, observer.latitude_degrees)

        # Tangency counts as not crossing.
        if abs(cos_h) >= 1.0 - HORIZON_TANGENCY_TOLERANCE:
            logger.debug(
                "Dec %.4f at latitude %.4f does not cross the horizon (cos H = %.4f)",
                coord.dec_degrees, observer.latitude_degrees, cos_h,
            )
            # Northern same-sign case stays up, all others never rise
            never_sets = coord.dec_degrees > 0 and observer.latitude_degrees > 0
            return VisibilityWindow(circumpolar=True, never_rises=not never_sets)

        semi_arc_hours = math.degrees(math.acos(cos_h)) / 15.0

        midnight = local_midnight(when)
        ha_midnight_hours = hour_angle(coord.ra_hours, midnight, observer.longitude_degrees) / 15.0

        transit_hours = (24.0 - ha_midnight_hours) % 24.0
        rise_hours = (transit_hours - semi_arc_hours + 24.0) % 24.0
        set_hours = (transit_hours + semi_arc_hours) % 24.0

        return VisibilityWindow(
            rise=midnight + timedelta(hours=rise_hours),
            transit=midnight + timedelta(hours=transit_hours),
            set=midnight + timedelta(hours=set_hours),
        )


def get_visibility_window(
    coord: EquatorialCoordinate,
    observer: Observer,
    when: Optional[datetime] = None,
) -> VisibilityWindow:
    """Module-level shortcut for VisibilityWindowCalculator().compute()."""
    return VisibilityWindowCalculator().compute(coord, observer, when)
