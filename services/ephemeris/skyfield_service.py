"""
SKYWATCH Ephemeris Service
Skyfield-based Solar System Positions

This module is the ephemeris collaborator for solar-system bodies:
- Apparent RA/Dec (equator of date) of the Sun, Moon and planets
- Rise/transit/set event search over a time window

Fixed catalog objects never come through here; they use the closed-form
hour-angle path in sidereal.py and visibility.py.

Uses the Skyfield library with a JPL DE-series kernel (de421.bsp by
default), loaded lazily on first use.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from skyfield import almanac
from skyfield.api import Loader, wgs84

from skywatch.exceptions import EphemerisError
from skywatch.logging_config import get_logger
from skywatch.types import CelestialBody, EquatorialCoordinate, Observer, VisibilityWindow
from services.ephemeris.sidereal import as_utc

logger = get_logger(__name__)


class SkyfieldEphemeris:
    """
    Skyfield-backed implementation of the EphemerisProvider protocol.

    Treated as a black box by the query layer: it receives a body, an
    observer and an instant (or window) and returns coordinates or events.
    """

    DEFAULT_DATA_DIR = Path("data/ephemeris")
    DEFAULT_KERNEL = "de421.bsp"

    # Body name mappings for Skyfield kernels
    BODY_NAMES = {
        CelestialBody.SUN: "sun",
        CelestialBody.MOON: "moon",
        CelestialBody.MERCURY: "mercury barycenter",
        CelestialBody.VENUS: "venus barycenter",
        CelestialBody.MARS: "mars barycenter",
        CelestialBody.JUPITER: "jupiter barycenter",
        CelestialBody.SATURN: "saturn barycenter",
        CelestialBody.URANUS: "uranus barycenter",
        CelestialBody.NEPTUNE: "neptune barycenter",
        CelestialBody.PLUTO: "pluto barycenter",
    }

    def __init__(
        self,
        data_dir: Optional[str | Path] = None,
        kernel: str = DEFAULT_KERNEL,
    ):
        self.data_dir = Path(data_dir) if data_dir else self.DEFAULT_DATA_DIR
        self.kernel = kernel
        self._ts = None
        self._eph = None
        self._initialized = False

    @classmethod
    def from_config(cls, config) -> "SkyfieldEphemeris":
        """Build from a :class:`skywatch.config.EphemerisConfig`."""
        return cls(data_dir=config.data_dir, kernel=config.kernel)

    def initialize(self):
        """Load timescale and kernel (downloads the kernel on first run)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        loader = Loader(str(self.data_dir))
        try:
            self._ts = loader.timescale()
            self._eph = loader(self.kernel)
        except (OSError, ValueError) as e:
            raise EphemerisError(
                f"Could not load ephemeris kernel {self.kernel}: {e}",
                operation="initialize",
            ) from e
        logger.info("Loaded ephemeris kernel %s from %s", self.kernel, self.data_dir)
        self._initialized = True

    def _ensure_initialized(self):
        """Ensure service is initialized."""
        if not self._initialized:
            self.initialize()

    def _get_time(self, dt: datetime):
        """Get Skyfield time object (naive datetimes are UTC)."""
        return self._ts.from_datetime(as_utc(dt))

    def _target(self, body: CelestialBody):
        return self._eph[self.BODY_NAMES[body]]

    @staticmethod
    def _topos(observer: Observer):
        return wgs84.latlon(
            observer.latitude_degrees,
            observer.longitude_degrees,
            elevation_m=observer.elevation_meters,
        )

    def get_body_position(
        self,
        body: CelestialBody,
        observer: Observer,
        when: datetime,
    ) -> EquatorialCoordinate:
        """
        Apparent position of a solar system body (equator of date).

        Args:
            body: Celestial body to locate
            observer: Observer location
            when: Time for calculation

        Returns:
            EquatorialCoordinate with RA in hours and Dec in degrees
        """
        self._ensure_initialized()
        try:
            t = self._get_time(when)
            site = self._eph["earth"] + self._topos(observer)
            apparent = site.at(t).observe(self._target(body)).apparent()
            ra, dec, _ = apparent.radec(epoch="date")
        except (KeyError, ValueError) as e:
            raise EphemerisError(
                f"Position of {body.value} unavailable: {e}",
                body=body.value,
                operation="position",
            ) from e
        return EquatorialCoordinate(ra_hours=ra.hours % 24.0, dec_degrees=dec.degrees)

    def find_rise_transit_set(
        self,
        body: CelestialBody,
        observer: Observer,
        start: datetime,
        end: datetime,
    ) -> VisibilityWindow:
        """
        Search ``[start, end)`` for rising, upper transit and setting.

        Event times are returned in ``start``'s timezone. When the body
        neither rises nor sets in the window it is classified by its
        altitude at the start of the window.
        """
        self._ensure_initialized()
        target = self._target(body)
        topos = self._topos(observer)
        tz = start.tzinfo if start.tzinfo is not None else None

        try:
            t0 = self._get_time(start)
            t1 = self._get_time(end)

            times, events = almanac.find_discrete(
                t0, t1, almanac.risings_and_settings(self._eph, target, topos)
            )
            rise = next((t for t, e in zip(times, events) if e == 1), None)
            set_ = next((t for t, e in zip(times, events) if e == 0), None)

            transit_times, transit_events = almanac.find_discrete(
                t0, t1, almanac.meridian_transits(self._eph, target, topos)
            )
            transit = next((t for t, e in zip(transit_times, transit_events) if e == 1), None)

            if rise is None and set_ is None:
                site = self._eph["earth"] + topos
                alt, _, _ = site.at(t0).observe(target).apparent().altaz()
                return VisibilityWindow(circumpolar=True, never_rises=alt.degrees < 0)
        except (KeyError, ValueError) as e:
            raise EphemerisError(
                f"Event search for {body.value} failed: {e}",
                body=body.value,
                operation="rise_transit_set",
            ) from e

        def to_datetime(t):
            if t is None:
                return None
            dt = t.utc_datetime()
            return dt.astimezone(tz) if tz is not None else dt

        return VisibilityWindow(
            rise=to_datetime(rise),
            transit=to_datetime(transit),
            set=to_datetime(set_),
        )
