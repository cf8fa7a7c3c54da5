"""
SKYWATCH Name Resolver

Maps a free-form object name to either a solar-system body (handled by
the ephemeris collaborator) or a catalog entry.

Resolution order, first match wins:
    1. Solar-system body name (sun, moon, mercury ... pluto)
    2. Alias table -> canonical key -> deep-sky objects, then stars
    3. Key in the star table
    4. Key in the deep-sky table

Matching is exact after normalization (trim, lowercase, collapse
whitespace, strip catalog zero padding); there is no fuzzy matching.
"""

from dataclasses import dataclass
from typing import Optional

from skywatch.exceptions import InvalidQueryError, ObjectNotFoundError
from skywatch.types import SOLAR_SYSTEM_BODIES, CanonicalKey, CelestialBody, EquatorialCoordinate
from services.catalog.catalog import CatalogEntry, CatalogStore, CatalogTable
from services.catalog.extractors import canonicalize_key


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one name.

    Exactly one of ``body`` and ``entry`` is set.
    """
    query: str
    body: Optional[CelestialBody] = None
    entry: Optional[CatalogEntry] = None
    table: Optional[CatalogTable] = None
    via_alias: bool = False

    @property
    def is_solar_system(self) -> bool:
        return self.body is not None

    @property
    def canonical_key(self) -> Optional[CanonicalKey]:
        return self.entry.canonical_key if self.entry else None

    @property
    def coordinate(self) -> Optional[EquatorialCoordinate]:
        """Catalog coordinate; None for solar-system bodies."""
        return self.entry.coordinate if self.entry else None


class NameResolver:
    """Read-only resolver over a CatalogStore snapshot."""

    def __init__(self, store: CatalogStore):
        self.store = store

    def resolve(self, name: str) -> Resolution:
        """
        Resolve an object name.

        Examples:
            resolve("Mars")             -> Resolution(body=CelestialBody.MARS)
            resolve("Andromeda Galaxy") -> entry m31 (via alias)
            resolve("NGC0224")          -> entry ngc224

        Raises:
            InvalidQueryError: Empty name
            ObjectNotFoundError: No table or alias matches
        """
        if name is None or not name.strip():
            raise InvalidQueryError("Object name must not be empty", parameter="name", value=name)

        normalized = " ".join(name.strip().lower().split())

        body = SOLAR_SYSTEM_BODIES.get(normalized)
        if body is not None:
            return Resolution(query=name, body=body)

        alias_key = self.store.aliases.get(normalized)
        if alias_key is not None:
            entry = self.store.deep_sky_objects.get(alias_key)
            if entry is not None:
                return Resolution(name, entry=entry, table=CatalogTable.DEEP_SKY_OBJECTS, via_alias=True)
            entry = self.store.stars.get(alias_key)
            if entry is not None:
                return Resolution(name, entry=entry, table=CatalogTable.STARS, via_alias=True)

        key = canonicalize_key(normalized)

        entry = self.store.stars.get(key)
        if entry is not None:
            return Resolution(name, entry=entry, table=CatalogTable.STARS)

        entry = self.store.deep_sky_objects.get(key)
        if entry is not None:
            return Resolution(name, entry=entry, table=CatalogTable.DEEP_SKY_OBJECTS)

        raise ObjectNotFoundError(f"Unknown celestial object: {name}", object_name=name)

    def is_known(self, name: str) -> bool:
        try:
            self.resolve(name)
        except (ObjectNotFoundError, InvalidQueryError):
            return False
        return True
