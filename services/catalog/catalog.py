"""
SKYWATCH Catalog Service
Normalized In-Memory Object Catalog

This module holds the unified catalog model that every ingested source is
normalized into:
- Stars (HYG-style tables, named bright stars)
- Deep-sky objects (NGC / IC / Messier)
- Aliases (common names and alternate designations -> canonical key)

A CatalogStore is built exactly once at startup and is read-only
afterwards, so concurrent readers never need a lock.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from skywatch.exceptions import InvalidCoordinateError, InvalidQueryError
from skywatch.types import CanonicalKey, CelestialBody, EquatorialCoordinate


class CatalogTable(Enum):
    """The two normalized catalog tables."""
    STARS = "stars"
    DEEP_SKY_OBJECTS = "deep_sky_objects"


@dataclass(frozen=True)
class CatalogEntry:
    """One catalog object with validated J2000 coordinates."""
    canonical_key: CanonicalKey    # e.g. "m31", "ngc7000", "sirius"
    ra_hours: float                # Right Ascension in decimal hours, [0, 24)
    dec_degrees: float             # Declination in decimal degrees, [-90, 90]
    common_name: Optional[str] = None
    object_type: Optional[str] = None
    magnitude: Optional[float] = None
    constellation: Optional[str] = None

    def __post_init__(self) -> None:
        ra = self.ra_hours
        dec = self.dec_degrees
        if ra is None or dec is None or not (math.isfinite(ra) and math.isfinite(dec)):
            raise InvalidCoordinateError(
                f"Non-finite coordinate for {self.canonical_key}",
                ra_hours=ra,
                dec_degrees=dec,
            )
        if not -90.0 <= dec <= 90.0:
            raise InvalidCoordinateError(
                f"Declination out of range for {self.canonical_key}",
                ra_hours=ra,
                dec_degrees=dec,
            )
        ra = ra % 24.0
        if ra >= 24.0:  # -1e-17 % 24.0 rounds up to 24.0
            ra = 0.0
        object.__setattr__(self, "ra_hours", ra)

    @property
    def coordinate(self) -> EquatorialCoordinate:
        return EquatorialCoordinate(self.ra_hours, self.dec_degrees)

    @property
    def display_name(self) -> str:
        return self.common_name or self.canonical_key


@dataclass(frozen=True)
class IngestReport:
    """Diagnostics for one table's ingestion."""
    table: CatalogTable
    source: Optional[str]
    format_name: Optional[str]
    rows_read: int = 0
    rows_filtered: int = 0
    rows_skipped: int = 0
    entries: int = 0
    used_fallback: bool = False
    reason: Optional[str] = None


_MESSIER_KEY = re.compile(r"^m(\d+)$")
_NGC_KEY = re.compile(r"^ngc(\d+)")
_IC_KEY = re.compile(r"^ic(\d+)")

LIST_CATEGORIES = ("all", "planets", "stars", "dso")


def _numbered(keys, pattern) -> list[str]:
    matched = [(int(pattern.match(k).group(1)), k) for k in keys if pattern.match(k)]
    return [k for _, k in sorted(matched)]


@dataclass(frozen=True)
class CatalogStore:
    """
    Immutable snapshot of the normalized catalog.

    Tables map canonical keys to CatalogEntry; ``aliases`` maps a lowercase
    common or alternate name to a canonical key.
    """
    stars: Mapping[CanonicalKey, CatalogEntry]
    deep_sky_objects: Mapping[CanonicalKey, CatalogEntry]
    aliases: Mapping[str, CanonicalKey]
    reports: tuple[IngestReport, ...] = field(default=())

    def __post_init__(self) -> None:
        for name in ("stars", "deep_sky_objects", "aliases"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def table(self, table: CatalogTable) -> Mapping[CanonicalKey, CatalogEntry]:
        if table is CatalogTable.STARS:
            return self.stars
        return self.deep_sky_objects

    def get(self, key: CanonicalKey) -> Optional[CatalogEntry]:
        """Direct key lookup, deep-sky objects first."""
        return self.deep_sky_objects.get(key) or self.stars.get(key)

    def report_for(self, table: CatalogTable) -> Optional[IngestReport]:
        for report in self.reports:
            if report.table is table:
                return report
        return None

    def get_stats(self) -> dict:
        """Get catalog statistics."""
        return {
            "stars": len(self.stars),
            "deep_sky_objects": len(self.deep_sky_objects),
            "aliases": len(self.aliases),
            "skipped_rows": sum(r.rows_skipped for r in self.reports),
            "fallback_tables": [r.table.value for r in self.reports if r.used_fallback],
        }

    def list_objects(self, category: str = "all") -> list[dict]:
        """
        List known objects grouped by category.

        Args:
            category: "planets", "stars", "dso" or "all"

        Returns:
            List of {"category": str, "objects": [names]} groups, empty groups omitted
        """
        category = (category or "all").strip().lower()
        if category not in LIST_CATEGORIES:
            raise InvalidQueryError(
                f"Unknown category: {category}",
                parameter="category",
                value=category,
            )

        groups: list[dict] = []

        if category in ("all", "planets"):
            groups.append({
                "category": "Solar System Objects",
                "objects": [body.display_name for body in CelestialBody],
            })

        if category in ("all", "stars") and self.stars:
            groups.append({
                "category": "Bright Stars",
                "objects": sorted(e.display_name for e in self.stars.values()),
            })

        if category in ("all", "dso"):
            keys = list(self.deep_sky_objects)
            for title, pattern in (
                ("Messier Objects", _MESSIER_KEY),
                ("NGC Objects", _NGC_KEY),
                ("Other Deep Sky Objects", _IC_KEY),
            ):
                objects = [k.upper() for k in _numbered(keys, pattern)]
                if objects:
                    groups.append({"category": title, "objects": objects})

        return groups
