"""
SKYWATCH Coordinate Frame Conversion
Sidereal Time and Equatorial -> Horizontal Transform

Closed-form spherical astronomy for fixed (catalog) objects:
- Days since J2000.0
- Greenwich Mean Sidereal Time (linear approximation)
- Local Sidereal Time and Hour Angle
- Altitude/Azimuth from (hour angle, declination, latitude)

No atmospheric refraction is applied. This path never touches the
ephemeris collaborator.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from skywatch.types import Degrees, EquatorialCoordinate, HorizontalCoordinate, Observer

J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
SECONDS_PER_DAY = 86400.0

GMST_AT_J2000_DEGREES = 280.46061837
GMST_RATE_DEGREES_PER_DAY = 360.98564736629


def as_utc(when: Optional[datetime] = None) -> datetime:
    """Timezone-aware UTC datetime; naive input is taken to be UTC."""
    if when is None:
        return datetime.now(timezone.utc)
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def days_since_j2000(when: datetime) -> float:
    """Signed fractional days since 2000-01-01T12:00:00 UTC."""
    return (as_utc(when) - J2000_EPOCH).total_seconds() / SECONDS_PER_DAY


def greenwich_mean_sidereal_time(when: datetime) -> Degrees:
    """GMST in degrees, reduced into [0, 360)."""
    d = days_since_j2000(when)
    return (GMST_AT_J2000_DEGREES + GMST_RATE_DEGREES_PER_DAY * d) % 360.0


def local_sidereal_time(when: datetime, longitude_degrees: Degrees) -> Degrees:
    """LST in degrees for an east-positive longitude, in [0, 360)."""
    return (greenwich_mean_sidereal_time(when) + longitude_degrees) % 360.0


def hour_angle(ra_hours: float, when: datetime, longitude_degrees: Degrees) -> Degrees:
    """Hour angle in degrees, in [0, 360), measured westward from the meridian."""
    lst = local_sidereal_time(when, longitude_degrees)
    return (lst - ra_hours * 15.0 + 360.0) % 360.0


def equatorial_to_horizontal(
    hour_angle_degrees: Degrees,
    dec_degrees: Degrees,
    latitude_degrees: Degrees,
) -> HorizontalCoordinate:
    """
    Standard (H, dec, lat) -> (alt, az) transform.

    Azimuth is measured from north through east and normalized to [0, 360).
    """
    h = math.radians(hour_angle_degrees)
    dec = math.radians(dec_degrees)
    lat = math.radians(latitude_degrees)

    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(h)
    altitude = math.asin(max(-1.0, min(1.0, sin_alt)))

    y = -math.cos(dec) * math.sin(h)
    x = math.sin(dec) * math.cos(lat) - math.cos(dec) * math.sin(lat) * math.cos(h)
    azimuth = math.degrees(math.atan2(y, x)) % 360.0
    if azimuth >= 360.0:
        azimuth = 0.0

    return HorizontalCoordinate(
        altitude_degrees=math.degrees(altitude),
        azimuth_degrees=azimuth,
    )


class CoordinateFrameConverter:
    """Equatorial -> horizontal conversion for a given observer and instant."""

    def convert(
        self,
        coord: EquatorialCoordinate,
        observer: Observer,
        when: Optional[datetime] = None,
    ) -> HorizontalCoordinate:
        """
        Convert a fixed equatorial coordinate to altitude/azimuth.

        Args:
            coord: J2000 RA (hours) / Dec (degrees)
            observer: Observer location
            when: Instant of observation (default: now; naive = UTC)

        Returns:
            HorizontalCoordinate without refraction correction
        """
        when = as_utc(when)
        ha = hour_angle(coord.ra_hours, when, observer.longitude_degrees)
        return equatorial_to_horizontal(ha, coord.dec_degrees, observer.latitude_degrees)


def convert_to_horizontal(
    coord: EquatorialCoordinate,
    observer: Observer,
    when: Optional[datetime] = None,
) -> HorizontalCoordinate:
    """Module-level shortcut for CoordinateFrameConverter().convert()."""
    return CoordinateFrameConverter().convert(coord, observer, when)
