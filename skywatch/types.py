"""
SKYWATCH Shared Type Definitions

Provides type aliases, coordinate types and the ephemeris collaborator
protocol shared by the catalog and ephemeris services.

Types are organized by category:
    - Basic numeric aliases
    - Coordinate types (equatorial and horizontal)
    - Observer
    - Solar system bodies
    - Visibility results
    - Protocol types (for the external ephemeris collaborator)

Usage:
    from skywatch.types import EquatorialCoordinate, Observer, VisibilityWindow
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional, Protocol, TypeAlias, runtime_checkable


# =============================================================================
# Basic Type Aliases
# =============================================================================

Degrees: TypeAlias = float
Hours: TypeAlias = float
Meters: TypeAlias = float
Celsius: TypeAlias = float
Hectopascals: TypeAlias = float
CanonicalKey: TypeAlias = str


# =============================================================================
# Coordinate Types
# =============================================================================

class EquatorialCoordinate(NamedTuple):
    """Equatorial coordinates (Right Ascension / Declination).

    Attributes:
        ra_hours: Right Ascension in decimal hours (0-24)
        dec_degrees: Declination in decimal degrees (-90 to +90)
    """
    ra_hours: Hours
    dec_degrees: Degrees

    @property
    def ra_degrees(self) -> Degrees:
        return self.ra_hours * 15.0

    @property
    def ra_hms(self) -> str:
        """RA in HH:MM:SS format."""
        h = int(self.ra_hours)
        m = int((self.ra_hours - h) * 60)
        s = ((self.ra_hours - h) * 60 - m) * 60
        return f"{h:02d}:{m:02d}:{s:05.2f}"

    @property
    def dec_dms(self) -> str:
        """DEC in sDD:MM:SS format."""
        sign = "+" if self.dec_degrees >= 0 else "-"
        d = abs(self.dec_degrees)
        deg = int(d)
        m = int((d - deg) * 60)
        s = ((d - deg) * 60 - m) * 60
        return f"{sign}{deg:02d}:{m:02d}:{s:05.2f}"


COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


class HorizontalCoordinate(NamedTuple):
    """Horizontal coordinates (Altitude / Azimuth).

    Attributes:
        altitude_degrees: Degrees above the horizon (-90 to +90)
        azimuth_degrees: Degrees from north through east (0=N, 90=E, 180=S, 270=W)
    """
    altitude_degrees: Degrees
    azimuth_degrees: Degrees

    @property
    def is_visible(self) -> bool:
        """Check if object is above horizon."""
        return self.altitude_degrees > 0

    @property
    def compass_direction(self) -> str:
        """Get compass direction string."""
        index = round(self.azimuth_degrees / 22.5) % 16
        return COMPASS_POINTS[index]

    @property
    def visibility_label(self) -> str:
        if self.altitude_degrees > 30:
            return "Excellent visibility"
        if self.altitude_degrees > 0:
            return "Above horizon"
        return "Below horizon (not visible)"


# =============================================================================
# Observer
# =============================================================================

@dataclass(frozen=True)
class Observer:
    """Observer on the Earth's surface. Immutable per query.

    Attributes:
        latitude_degrees: Latitude in decimal degrees (north positive)
        longitude_degrees: Longitude in decimal degrees (east positive)
        elevation_meters: Elevation above sea level in meters
        temperature_celsius: Ambient temperature, carried for refraction-aware callers
        pressure_hectopascals: Ambient pressure, carried for refraction-aware callers
    """
    latitude_degrees: Degrees
    longitude_degrees: Degrees
    elevation_meters: Meters = 0.0
    temperature_celsius: Celsius = 15.0
    pressure_hectopascals: Hectopascals = 1013.25

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude_degrees <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude_degrees}")
        if not -180.0 <= self.longitude_degrees <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude_degrees}")

    @classmethod
    def from_config(cls, config) -> "Observer":
        """Build an Observer from a :class:`skywatch.config.ObserverConfig`."""
        return cls(
            latitude_degrees=config.latitude,
            longitude_degrees=config.longitude,
            elevation_meters=config.elevation,
            temperature_celsius=config.temperature,
            pressure_hectopascals=config.pressure,
        )


# =============================================================================
# Solar System Bodies
# =============================================================================

class CelestialBody(Enum):
    """Solar system bodies routed to the ephemeris collaborator."""
    SUN = "sun"
    MOON = "moon"
    MERCURY = "mercury"
    VENUS = "venus"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"
    PLUTO = "pluto"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


SOLAR_SYSTEM_BODIES: dict[str, CelestialBody] = {body.value: body for body in CelestialBody}


# =============================================================================
# Visibility
# =============================================================================

@dataclass(frozen=True)
class VisibilityWindow:
    """Horizon crossings for one observer-local calendar day.

    Either all three of ``rise``/``transit``/``set`` are populated, or
    ``circumpolar`` is True and ``never_rises`` tells which way the object
    misses the horizon.
    """
    rise: Optional[datetime] = None
    transit: Optional[datetime] = None
    set: Optional[datetime] = None
    circumpolar: bool = False
    never_rises: bool = False

    @property
    def never_sets(self) -> bool:
        return self.circumpolar and not self.never_rises

    @classmethod
    def always_up(cls) -> "VisibilityWindow":
        return cls(circumpolar=True, never_rises=False)

    @classmethod
    def always_down(cls) -> "VisibilityWindow":
        return cls(circumpolar=True, never_rises=True)


# =============================================================================
# Protocol Types
# =============================================================================

@runtime_checkable
class EphemerisProvider(Protocol):
    """External ephemeris collaborator for solar-system bodies.

    Treated strictly as a request/response black box.
    """

    def get_body_position(
        self,
        body: CelestialBody,
        observer: Observer,
        when: datetime,
    ) -> EquatorialCoordinate:
        """Equatorial coordinate of ``body`` seen by ``observer`` at ``when``."""
        ...

    def find_rise_transit_set(
        self,
        body: CelestialBody,
        observer: Observer,
        start: datetime,
        end: datetime,
    ) -> VisibilityWindow:
        """Search ``[start, end)`` for the body's horizon and meridian events."""
        ...
