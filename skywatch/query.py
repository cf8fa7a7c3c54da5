"""
SKYWATCH Sky Query Service

Single entry point tying the catalog store, name resolver, coordinate
converter, visibility calculator and ephemeris collaborator together.

Catalog objects take the closed-form sidereal path; solar-system bodies
are delegated to the ephemeris collaborator, which is created lazily the
first time one is requested.

Usage:
    from skywatch.config import load_config
    from skywatch.query import SkyQueryService

    service = SkyQueryService.from_config(load_config())
    position = service.get_position("Andromeda Galaxy")
    print(position.horizontal.altitude_degrees, position.visibility_label)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from skywatch.logging_config import get_logger
from skywatch.types import (
    EphemerisProvider,
    EquatorialCoordinate,
    HorizontalCoordinate,
    Observer,
    VisibilityWindow,
)
from services.catalog import CatalogStore, NameResolver, Resolution, load_catalog_store
from services.ephemeris.sidereal import CoordinateFrameConverter, as_utc
from services.ephemeris.skyfield_service import SkyfieldEphemeris
from services.ephemeris.visibility import VisibilityWindowCalculator, local_midnight

logger = get_logger(__name__)


@dataclass(frozen=True)
class ObjectPosition:
    """Where a named object is for one observer and instant."""
    name: str
    display_name: str
    equatorial: EquatorialCoordinate
    horizontal: HorizontalCoordinate
    when: datetime
    is_solar_system: bool = False

    @property
    def visibility_label(self) -> str:
        return self.horizontal.visibility_label

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "ra_hours": self.equatorial.ra_hours,
            "dec_degrees": self.equatorial.dec_degrees,
            "ra_hms": self.equatorial.ra_hms,
            "dec_dms": self.equatorial.dec_dms,
            "altitude_degrees": self.horizontal.altitude_degrees,
            "azimuth_degrees": self.horizontal.azimuth_degrees,
            "direction": self.horizontal.compass_direction,
            "visibility": self.visibility_label,
            "time": self.when.isoformat(),
            "solar_system": self.is_solar_system,
        }


class SkyQueryService:
    """Query facade over an immutable CatalogStore."""

    def __init__(
        self,
        store: CatalogStore,
        observer: Optional[Observer] = None,
        ephemeris: Optional[EphemerisProvider] = None,
        ephemeris_config=None,
    ):
        self.store = store
        self.observer = observer
        self.resolver = NameResolver(store)
        self.converter = CoordinateFrameConverter()
        self.visibility = VisibilityWindowCalculator()
        self._ephemeris = ephemeris
        self._ephemeris_config = ephemeris_config

    @classmethod
    def from_config(cls, config, ephemeris: Optional[EphemerisProvider] = None) -> "SkyQueryService":
        """Build the store and default observer from a SkywatchConfig."""
        store = load_catalog_store(config.catalog)
        stats = store.get_stats()
        logger.info(
            "Catalog ready: %d stars, %d deep-sky objects, %d aliases",
            stats["stars"], stats["deep_sky_objects"], stats["aliases"],
        )
        return cls(
            store,
            observer=Observer.from_config(config.observer),
            ephemeris=ephemeris,
            ephemeris_config=config.ephemeris,
        )

    @property
    def ephemeris(self) -> EphemerisProvider:
        """Ephemeris collaborator, created on first use."""
        if self._ephemeris is None:
            if self._ephemeris_config is not None:
                self._ephemeris = SkyfieldEphemeris.from_config(self._ephemeris_config)
            else:
                self._ephemeris = SkyfieldEphemeris()
        return self._ephemeris

    def _observer(self, observer: Optional[Observer]) -> Observer:
        observer = observer or self.observer
        if observer is None:
            raise ValueError("No observer given and no default observer configured")
        return observer

    # =========================================================================
    # Resolution and coordinates
    # =========================================================================

    def resolve(self, name: str) -> Resolution:
        return self.resolver.resolve(name)

    def _equatorial(
        self,
        resolution: Resolution,
        observer: Optional[Observer],
        when: datetime,
    ) -> EquatorialCoordinate:
        if resolution.is_solar_system:
            return self.ephemeris.get_body_position(resolution.body, self._observer(observer), when)
        return resolution.coordinate

    def get_equatorial_coordinate(
        self,
        name: str,
        when: Optional[datetime] = None,
        observer: Optional[Observer] = None,
    ) -> EquatorialCoordinate:
        """
        RA/Dec for a named object.

        Catalog objects return their stored J2000 coordinate; solar-system
        bodies are asked of the ephemeris collaborator for ``when``.

        Raises:
            ObjectNotFoundError: Name does not resolve
        """
        resolution = self.resolve(name)
        return self._equatorial(resolution, observer, as_utc(when))

    def convert_to_horizontal(
        self,
        coord: EquatorialCoordinate,
        observer: Optional[Observer] = None,
        when: Optional[datetime] = None,
    ) -> HorizontalCoordinate:
        return self.converter.convert(coord, self._observer(observer), when)

    def get_visibility_window(
        self,
        coord: EquatorialCoordinate,
        observer: Optional[Observer] = None,
        when: Optional[datetime] = None,
    ) -> VisibilityWindow:
        return self.visibility.compute(coord, self._observer(observer), when)

    # =========================================================================
    # Name-based convenience queries
    # =========================================================================

    def get_position(
        self,
        name: str,
        observer: Optional[Observer] = None,
        when: Optional[datetime] = None,
    ) -> ObjectPosition:
        """Equatorial and horizontal position of a named object."""
        observer = self._observer(observer)
        when = as_utc(when)
        resolution = self.resolve(name)
        equatorial = self._equatorial(resolution, observer, when)
        horizontal = self.converter.convert(equatorial, observer, when)

        if resolution.is_solar_system:
            display_name = resolution.body.display_name
        else:
            display_name = resolution.entry.display_name

        return ObjectPosition(
            name=name,
            display_name=display_name,
            equatorial=equatorial,
            horizontal=horizontal,
            when=when,
            is_solar_system=resolution.is_solar_system,
        )

    def get_object_visibility(
        self,
        name: str,
        observer: Optional[Observer] = None,
        when: Optional[datetime] = None,
    ) -> VisibilityWindow:
        """
        Visibility window of a named object for the day containing ``when``.

        Solar-system bodies move during the day, so their events come from
        the collaborator's search over that calendar day.
        """
        observer = self._observer(observer)
        resolution = self.resolve(name)
        if resolution.is_solar_system:
            start = local_midnight(when or as_utc(None))
            return self.ephemeris.find_rise_transit_set(
                resolution.body, observer, start, start + timedelta(days=1)
            )
        return self.visibility.compute(resolution.coordinate, observer, when)

    def list_objects(self, category: str = "all") -> list[dict]:
        return self.store.list_objects(category)
