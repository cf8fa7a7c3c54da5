"""
SKYWATCH Catalog Format Descriptors

Declarative descriptions of the catalog schema families the ingestor
understands. Each descriptor names the delimiter it expects, the header
columns that identify it, and the ordered extractor lists for every
logical field. Detection walks FORMATS in priority order and picks the
first descriptor whose delimiter and required columns match the header.

Schema families:
    1. Sexagesimal, semicolon-delimited (OpenNGC style)
    2. Decimal, comma-delimited wide star table (HYG style)
    3. Generic CSV (ra_hours/dec_degrees, or RA/Dec in degrees)
"""

import csv
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from services.catalog import extractors as ex


@dataclass(frozen=True)
class CatalogFormat:
    """Per-schema parsing recipe.

    Attributes:
        name: Short identifier used in logs and ingest reports
        delimiter: Required delimiter, or None to accept whatever was sniffed
        required_columns: All of these must appear in the header
        any_columns: At least one of these must appear (empty = no constraint)
        name_extractors: Primary name, tried in order
        ra_extractors: Right Ascension in hours, tried in order
        dec_extractors: Declination in degrees, tried in order
        common_name_extractors: Display name, tried in order
        alias_extractor: Returns every alias the row registers
        type_extractors: Object type, tried in order
        magnitude_extractors: Apparent magnitude, tried in order
        constellation_extractors: Constellation abbreviation, tried in order
        cross_reference_extractors: Each returns an extra canonical key
        row_filter: Cheap pre-filter applied before coordinate parsing
    """
    name: str
    delimiter: Optional[str]
    required_columns: frozenset[str] = frozenset()
    any_columns: frozenset[str] = frozenset()
    name_extractors: Sequence[ex.Extractor] = ()
    ra_extractors: Sequence[ex.Extractor] = ()
    dec_extractors: Sequence[ex.Extractor] = ()
    common_name_extractors: Sequence[ex.Extractor] = ()
    alias_extractor: Optional[Callable[[ex.Row], list[str]]] = None
    type_extractors: Sequence[ex.Extractor] = (ex.object_type,)
    magnitude_extractors: Sequence[ex.Extractor] = (ex.magnitude,)
    constellation_extractors: Sequence[ex.Extractor] = (ex.constellation,)
    cross_reference_extractors: Sequence[ex.Extractor] = ()
    row_filter: Optional[Callable[[ex.Row, float], bool]] = None

    def matches(self, header: Iterable[str], delimiter: str) -> bool:
        columns = set(header)
        if self.delimiter is not None and self.delimiter != delimiter:
            return False
        if not self.required_columns <= columns:
            return False
        if self.any_columns and not (self.any_columns & columns):
            return False
        return True


SEXAGESIMAL_FORMAT = CatalogFormat(
    name="sexagesimal",
    delimiter=";",
    required_columns=frozenset({"Name", "RA", "Dec"}),
    name_extractors=(ex.name_column,),
    ra_extractors=(ex.ra_sexagesimal, ex.ra_split_hms),
    dec_extractors=(ex.dec_sexagesimal, ex.dec_split_dms),
    common_name_extractors=(ex.openngc_common_name,),
    alias_extractor=ex.openngc_aliases,
    cross_reference_extractors=(ex.messier_cross_reference,),
)

STAR_TABLE_FORMAT = CatalogFormat(
    name="star_table",
    delimiter=",",
    any_columns=frozenset({
        "proper", "ProperName", "bf", "BayerFlamsteed", "bayer", "flam",
        "hip", "hd", "rarad", "RArad",
    }),
    name_extractors=(
        ex.proper_name,
        ex.bayer_flamsteed,
        ex.flamsteed,
        ex.henry_draper,
        ex.hipparcos,
        ex.synthesized_star_name,
    ),
    ra_extractors=(
        ex.ra_hours_column,
        ex.ra_hours_lowercase,
        ex.ra_radians,
        ex.ra_degrees,
    ),
    dec_extractors=(
        ex.dec_degrees_column,
        ex.dec_degrees_lowercase,
        ex.dec_radians,
        ex.dec_degrees,
    ),
    common_name_extractors=(ex.proper_name,),
    alias_extractor=ex.star_aliases,
    type_extractors=(),
    row_filter=ex.naked_eye_filter,
)

GENERIC_FORMAT = CatalogFormat(
    name="generic",
    delimiter=None,
    name_extractors=(ex.generic_name, ex.ngc_ic_number),
    ra_extractors=(ex.ra_hours_column, ex.ra_degrees, ex.ra_split_hms),
    dec_extractors=(ex.dec_degrees_column, ex.dec_degrees, ex.dec_split_dms),
    common_name_extractors=(ex.generic_common_name,),
    alias_extractor=ex.generic_aliases,
)

FORMATS: tuple[CatalogFormat, ...] = (
    SEXAGESIMAL_FORMAT,
    STAR_TABLE_FORMAT,
    GENERIC_FORMAT,
)


def sniff_delimiter(header_line: str) -> str:
    """Semicolon if the header has one and no comma, otherwise comma."""
    if ";" in header_line and "," not in header_line:
        return ";"
    return ","


def parse_header(header_line: str, delimiter: str) -> list[str]:
    """Split the header line into stripped column names."""
    row = next(csv.reader([header_line], delimiter=delimiter), [])
    return [column.strip() for column in row]


def detect_format(
    header: Iterable[str],
    delimiter: str,
    formats: Sequence[CatalogFormat] = FORMATS,
) -> CatalogFormat:
    """Pick the first format descriptor that accepts this header."""
    header = list(header)
    for fmt in formats:
        if fmt.matches(header, delimiter):
            return fmt
    return GENERIC_FORMAT
