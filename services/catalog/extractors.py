"""
SKYWATCH Catalog Field Extractors

Small, independently testable functions that pull one logical field
(name, RA, Dec, aliases, type, magnitude, constellation) out of a raw
catalog row. Catalog format descriptors list them in priority order and
the ingestor takes the first one that returns a value.

Every extractor has the shape ``(row) -> Optional[value]`` where ``row`` is
the ``dict`` produced by ``csv.DictReader``; ``None`` means "not present
or not parseable here, try the next one".
"""

import math
import re
from typing import Callable, Iterable, Mapping, Optional

Row = Mapping[str, Optional[str]]
Extractor = Callable[[Row], Optional[object]]

RADIANS_TO_DEGREES = 180.0 / math.pi

_DESIGNATION_RE = re.compile(r"^(ngc|ic|m)\s*0*(\d+)\s*([a-z]?)$")
_SEXAGESIMAL_SPLIT_RE = re.compile(r"[:\s]+")


# =============================================================================
# Primitive parsers
# =============================================================================

def field(row: Row, *names: str) -> Optional[str]:
    """First non-blank value among ``names``, stripped."""
    for name in names:
        value = row.get(name)
        if value is None:
            continue
        value = value.strip()
        if value:
            return value
    return None


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse a finite float; blanks, garbage, NaN and infinities give None."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_catalog_number(value: Optional[str]) -> Optional[int]:
    """Positive integer catalog number (HD, HIP, Messier); '0', '' and '12.0' handled."""
    number = parse_float(value)
    if number is None or number <= 0 or number != int(number):
        return None
    return int(number)


def parse_sexagesimal(value: Optional[str]) -> Optional[float]:
    """Convert ``[±]HH:MM:SS[.ss]`` (or space separated) into decimal units.

    The sign is read from the leading unit field and reapplied after the
    absolute values are summed, so ``-00:30:00`` becomes -0.5.
    Two-part values (``HH MM.mmm``) are accepted with seconds taken as 0.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    sign = -1.0 if text.startswith("-") else 1.0
    parts = _SEXAGESIMAL_SPLIT_RE.split(text.lstrip("+-").strip())
    if not 2 <= len(parts) <= 3:
        return None
    numbers = [parse_float(part) for part in parts]
    if any(n is None or n < 0 for n in numbers):
        return None
    if len(numbers) == 2:
        numbers.append(0.0)
    units, minutes, seconds = numbers
    if minutes >= 60 or seconds >= 60:
        return None
    return sign * (units + minutes / 60.0 + seconds / 3600.0)


def canonicalize_key(name: str) -> str:
    """Normalized lookup key: lowercase, single spaces, catalog padding stripped.

    >>> canonicalize_key("NGC0007")
    'ngc7'
    >>> canonicalize_key("  Alpha   Centauri ")
    'alpha centauri'
    """
    key = " ".join(name.strip().lower().split())
    match = _DESIGNATION_RE.match(key)
    if match:
        prefix, number, suffix = match.groups()
        return f"{prefix}{int(number)}{suffix}"
    return key


def split_names(value: Optional[str]) -> list[str]:
    """Split a comma separated list of names, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


# =============================================================================
# Name extractors
# =============================================================================

def name_column(row: Row) -> Optional[str]:
    return field(row, "Name")


def proper_name(row: Row) -> Optional[str]:
    return field(row, "proper", "ProperName", "name")


def constellation(row: Row) -> Optional[str]:
    return field(row, "con", "Con", "Const", "constellation")


def bayer_flamsteed(row: Row) -> Optional[str]:
    """Combined Bayer/Flamsteed column, else a Bayer letter plus constellation."""
    value = field(row, "bf", "BayerFlamsteed", "alt_name")
    if value:
        return value
    bayer = field(row, "bayer")
    if bayer:
        con = constellation(row)
        return f"{bayer} {con}" if con else bayer
    return None


def flamsteed(row: Row) -> Optional[str]:
    flam = field(row, "flam")
    if flam:
        con = constellation(row)
        return f"{flam} {con}" if con else flam
    return None


def henry_draper(row: Row) -> Optional[str]:
    number = parse_catalog_number(field(row, "hd", "HD"))
    return f"HD {number}" if number else None


def hipparcos(row: Row) -> Optional[str]:
    number = parse_catalog_number(field(row, "hip", "HIP"))
    return f"HIP {number}" if number else None


def synthesized_star_name(row: Row) -> Optional[str]:
    """Last resort for unnamed stars: ``Star mag 4.21 in Ori``."""
    mag = magnitude(row)
    if mag is None:
        return None
    name = f"Star mag {mag:.2f}"
    con = constellation(row)
    if con:
        name += f" in {con}"
    return name


def generic_name(row: Row) -> Optional[str]:
    return field(row, "name", "Name", "id", "ID")


def ngc_ic_number(row: Row) -> Optional[str]:
    """Numeric NGC / IC columns of generic deep-sky tables."""
    ngc = parse_catalog_number(field(row, "NGC"))
    if ngc:
        return f"NGC{ngc}"
    ic = parse_catalog_number(field(row, "IC"))
    if ic:
        return f"IC{ic}"
    return None


# =============================================================================
# Right Ascension extractors (decimal hours)
# =============================================================================

def ra_sexagesimal(row: Row) -> Optional[float]:
    return parse_sexagesimal(field(row, "RA"))


def ra_hours_column(row: Row) -> Optional[float]:
    return parse_float(field(row, "ra_hours"))


def ra_hours_lowercase(row: Row) -> Optional[float]:
    """HYG-style ``ra`` column, already in hours."""
    return parse_float(field(row, "ra"))


def ra_radians(row: Row) -> Optional[float]:
    value = parse_float(field(row, "rarad", "RArad"))
    if value is None:
        return None
    return value * RADIANS_TO_DEGREES / 15.0


def ra_degrees(row: Row) -> Optional[float]:
    value = parse_float(field(row, "RA", "RAJ2000"))
    if value is None:
        return None
    return value / 15.0


def ra_split_hms(row: Row) -> Optional[float]:
    hours = parse_float(field(row, "RA_h"))
    minutes = parse_float(field(row, "RA_m"))
    seconds = parse_float(field(row, "RA_s"))
    if hours is None or minutes is None or seconds is None:
        return None
    return hours + minutes / 60.0 + seconds / 3600.0


# =============================================================================
# Declination extractors (decimal degrees)
# =============================================================================

def dec_sexagesimal(row: Row) -> Optional[float]:
    return parse_sexagesimal(field(row, "Dec"))


def dec_degrees_column(row: Row) -> Optional[float]:
    return parse_float(field(row, "dec_degrees"))


def dec_degrees_lowercase(row: Row) -> Optional[float]:
    return parse_float(field(row, "dec"))


def dec_radians(row: Row) -> Optional[float]:
    value = parse_float(field(row, "decrad", "DErad"))
    if value is None:
        return None
    return value * RADIANS_TO_DEGREES


def dec_degrees(row: Row) -> Optional[float]:
    return parse_float(field(row, "Dec", "DEJ2000"))


def dec_split_dms(row: Row) -> Optional[float]:
    raw_degrees = field(row, "DEC_d")
    degrees = parse_float(raw_degrees)
    minutes = parse_float(field(row, "DEC_m"))
    seconds = parse_float(field(row, "DEC_s"))
    if degrees is None or minutes is None or seconds is None:
        return None
    sign = -1.0 if raw_degrees.startswith("-") else 1.0
    return sign * (abs(degrees) + minutes / 60.0 + seconds / 3600.0)


# =============================================================================
# Optional attribute extractors
# =============================================================================

def object_type(row: Row) -> Optional[str]:
    return field(row, "Type", "type", "TYPE")


def magnitude(row: Row) -> Optional[float]:
    return parse_float(field(row, "mag", "magnitude", "V-Mag", "Vmag", "B-Mag"))


def openngc_common_name(row: Row) -> Optional[str]:
    names = split_names(field(row, "Common names"))
    return names[0] if names else None


def generic_common_name(row: Row) -> Optional[str]:
    return field(row, "common_name", "commonName", "common name", "object", "Object")


def openngc_aliases(row: Row) -> list[str]:
    return split_names(field(row, "Common names"))


def star_aliases(row: Row) -> list[str]:
    """Proper name and Bayer/Flamsteed designation both become lookup aliases."""
    return [name for name in (proper_name(row), bayer_flamsteed(row)) if name]


def generic_aliases(row: Row) -> list[str]:
    return split_names(generic_common_name(row))


def messier_cross_reference(row: Row) -> Optional[str]:
    """Second key for objects that also carry a Messier number (``M`` column)."""
    number = parse_catalog_number(field(row, "M"))
    return f"m{number}" if number else None


# =============================================================================
# Row filters
# =============================================================================

NAME_COLUMNS = ("proper", "name", "ProperName")
DESIGNATION_COLUMNS = ("bf", "BayerFlamsteed", "alt_name", "bayer", "flam")


def naked_eye_filter(row: Row, limiting_magnitude: float) -> bool:
    """Keep named rows, designated rows, or anything brighter than the limit.

    Applied before coordinate parsing so that large star tables only pay
    for the rows that matter.
    """
    if field(row, *NAME_COLUMNS):
        return True
    if field(row, *DESIGNATION_COLUMNS):
        return True
    mag = magnitude(row)
    return mag is not None and mag < limiting_magnitude


def first_value(extractors: Iterable[Extractor], row: Row):
    """Return the first non-None value produced by ``extractors``."""
    for extractor in extractors:
        value = extractor(row)
        if value is not None:
            return value
    return None
