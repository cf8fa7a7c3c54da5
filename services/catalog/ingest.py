"""
SKYWATCH Catalog Ingestion

Turns raw catalog files into normalized CatalogEntry tables:
- Header-line delimiter sniffing and schema detection (see formats.py)
- Streaming row parsing with csv.DictReader, so 100k-row star tables are
  never fully materialized
- Per-row failures are counted and skipped, never fatal
- Missing or wholly unparsable files fall back to the built-in tables

Usage:
    from services.catalog.ingest import build_catalog_store

    store = build_catalog_store("data/ngc.csv", "data/hygdata_v41.csv")
"""

import csv
import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

from skywatch.exceptions import (
    CatalogParseError,
    CatalogUnavailableError,
    InvalidCoordinateError,
)
from skywatch.logging_config import get_logger, log_timing
from services.catalog.catalog import CatalogEntry, CatalogStore, CatalogTable, IngestReport
from services.catalog.extractors import Row, canonicalize_key, first_value
from services.catalog.fallback import fallback_table
from services.catalog.formats import (
    FORMATS,
    CatalogFormat,
    detect_format,
    parse_header,
    sniff_delimiter,
)

logger = get_logger(__name__)

DEFAULT_NAKED_EYE_MAGNITUDE = 6.0
SLOW_PARSE_SECONDS = 10.0


def normalize_alias(name: str) -> str:
    """Lowercase, whitespace-collapsed alias key."""
    return " ".join(name.lower().split())


@dataclass
class IngestResult:
    """Entries and aliases parsed from one source, plus diagnostics."""
    entries: dict[str, CatalogEntry]
    aliases: dict[str, str]
    report: IngestReport


class CatalogIngestor:
    """
    Parses catalog files of any known schema family into one table.

    The same ingestor is used for the star and deep-sky tables; the
    caller decides which table a file populates.
    """

    def __init__(
        self,
        naked_eye_magnitude: float = DEFAULT_NAKED_EYE_MAGNITUDE,
        formats: Sequence[CatalogFormat] = FORMATS,
    ):
        self.naked_eye_magnitude = naked_eye_magnitude
        self.formats = formats

    def ingest(self, path: Optional[str | Path], table: CatalogTable) -> IngestResult:
        """
        Load one table from ``path``, falling back to built-in data.

        Never raises for a missing or broken file; the fallback is logged
        and recorded in the returned report.
        """
        try:
            return self.parse_file(path, table)
        except CatalogUnavailableError as e:
            logger.warning("%s; using built-in %s table", e, table.value)
            return self.fallback(table, source=str(path) if path else None, reason=e.message)

    def parse_file(self, path: Optional[str | Path], table: CatalogTable) -> IngestResult:
        """
        Parse a catalog file.

        Raises:
            CatalogUnavailableError: File missing, unreadable, or yields no entries
        """
        if path is None:
            raise CatalogUnavailableError(f"No {table.value} catalog file configured")
        path = Path(path)
        if not path.is_file():
            raise CatalogUnavailableError("Catalog file not found", path=str(path))

        try:
            with log_timing(logger, f"parse {path.name}", warn_threshold_sec=SLOW_PARSE_SECONDS):
                with path.open("r", encoding="utf-8-sig", errors="replace", newline="") as f:
                    return self.parse_stream(f, table, source=str(path))
        except OSError as e:
            raise CatalogUnavailableError(
                "Catalog file could not be read", path=str(path), reason=str(e)
            ) from e

    def parse_lines(self, lines: Iterable[str], table: CatalogTable, source: str = "<memory>") -> IngestResult:
        """Parse catalog text supplied as an iterable of lines."""
        iterator = iter(lines)
        header_line = next(iterator, "")
        return self._parse(header_line, iterator, table, source)

    def parse_stream(self, stream: TextIO, table: CatalogTable, source: str = "<stream>") -> IngestResult:
        """Parse an open text stream; the header is read, the rest is streamed."""
        header_line = stream.readline()
        return self._parse(header_line, stream, table, source)

    def _parse(
        self,
        header_line: str,
        body: Iterable[str],
        table: CatalogTable,
        source: str,
    ) -> IngestResult:
        if not header_line.strip():
            raise CatalogUnavailableError("Catalog has no header row", path=source)

        delimiter = sniff_delimiter(header_line)
        header = parse_header(header_line, delimiter)
        fmt = detect_format(header, delimiter, self.formats)
        logger.info("Parsing %s as %s catalog (delimiter %r)", source, fmt.name, delimiter)

        reader = csv.DictReader(body, fieldnames=header, delimiter=delimiter)
        entries: dict[str, CatalogEntry] = {}
        aliases: dict[str, str] = {}
        rows_read = rows_filtered = rows_skipped = duplicates = 0

        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                rows_read += 1
                rows_skipped += 1
                logger.debug("Skipping malformed line %d of %s: %s", reader.line_num + 1, source, e)
                continue

            rows_read += 1
            line_number = reader.line_num + 1  # header consumed outside the reader

            if fmt.row_filter is not None and not fmt.row_filter(row, self.naked_eye_magnitude):
                rows_filtered += 1
                continue

            try:
                row_entries, row_aliases = self.parse_row(fmt, row, line_number)
            except CatalogParseError as e:
                rows_skipped += 1
                logger.debug("Skipping row of %s: %s", source, e)
                continue

            for entry in row_entries:
                if entry.canonical_key in entries:
                    duplicates += 1
                    continue
                entries[entry.canonical_key] = entry
            for alias, key in row_aliases:
                aliases.setdefault(alias, key)

        if duplicates:
            logger.debug("Ignored %d duplicate keys in %s", duplicates, source)

        if not entries:
            raise CatalogUnavailableError(
                "Catalog contained no usable rows",
                path=source,
                reason=f"{rows_skipped} skipped, {rows_filtered} filtered of {rows_read}",
            )

        report = IngestReport(
            table=table,
            source=source,
            format_name=fmt.name,
            rows_read=rows_read,
            rows_filtered=rows_filtered,
            rows_skipped=rows_skipped,
            entries=len(entries),
        )
        logger.info(
            "Loaded %d %s entries from %s (%d skipped, %d filtered, %d aliases)",
            len(entries), table.value, source, rows_skipped, rows_filtered, len(aliases),
        )
        return IngestResult(entries=entries, aliases=aliases, report=report)

    def parse_row(
        self,
        fmt: CatalogFormat,
        row: Row,
        line_number: Optional[int] = None,
    ) -> tuple[list[CatalogEntry], list[tuple[str, str]]]:
        """
        Build the entries and alias pairs one row contributes.

        Raises:
            CatalogParseError: No name, RA or Dec could be extracted
            InvalidCoordinateError: RA/Dec parsed but non-finite or out of range
        """
        name = first_value(fmt.name_extractors, row)
        if not name:
            raise CatalogParseError("Row has no usable name", line_number=line_number, field="name")

        ra = first_value(fmt.ra_extractors, row)
        if ra is None:
            raise CatalogParseError("Unparsable right ascension", line_number=line_number, field="ra")

        dec = first_value(fmt.dec_extractors, row)
        if dec is None:
            raise CatalogParseError("Unparsable declination", line_number=line_number, field="dec")

        key = canonicalize_key(name)
        try:
            entry = CatalogEntry(
                canonical_key=key,
                ra_hours=ra,
                dec_degrees=dec,
                common_name=first_value(fmt.common_name_extractors, row),
                object_type=first_value(fmt.type_extractors, row),
                magnitude=first_value(fmt.magnitude_extractors, row),
                constellation=first_value(fmt.constellation_extractors, row),
            )
        except InvalidCoordinateError as e:
            raise InvalidCoordinateError(
                e.message, ra_hours=ra, dec_degrees=dec, line_number=line_number
            ) from e

        entries = [entry]
        alias_target = key
        for extractor in fmt.cross_reference_extractors:
            extra_key = extractor(row)
            if extra_key and extra_key != key:
                entries.append(dataclasses.replace(entry, canonical_key=extra_key))
                alias_target = extra_key

        aliases = []
        if fmt.alias_extractor is not None:
            for alias in fmt.alias_extractor(row):
                alias_key = normalize_alias(alias)
                if alias_key and alias_key != alias_target:
                    aliases.append((alias_key, alias_target))

        return entries, aliases

    def fallback(
        self,
        table: CatalogTable,
        source: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> IngestResult:
        entries, aliases = fallback_table(table)
        report = IngestReport(
            table=table,
            source=source,
            format_name=None,
            entries=len(entries),
            used_fallback=True,
            reason=reason,
        )
        return IngestResult(entries=entries, aliases=aliases, report=report)


# =============================================================================
# STORE CONSTRUCTION
# =============================================================================

def discover_catalog_file(data_dir: str | Path, candidates: Iterable[str]) -> Optional[Path]:
    """First candidate file name that exists in ``data_dir``, in priority order."""
    data_dir = Path(data_dir)
    for name in candidates:
        path = data_dir / name
        if path.is_file():
            return path
    return None


def build_catalog_store(
    dso_path: Optional[str | Path],
    star_path: Optional[str | Path],
    ingestor: Optional[CatalogIngestor] = None,
) -> CatalogStore:
    """
    Ingest both tables and freeze them into a CatalogStore.

    Aliases from the deep-sky table take precedence over star aliases
    with the same name.
    """
    ingestor = ingestor or CatalogIngestor()
    dso = ingestor.ingest(dso_path, CatalogTable.DEEP_SKY_OBJECTS)
    stars = ingestor.ingest(star_path, CatalogTable.STARS)

    aliases = dict(dso.aliases)
    for alias, key in stars.aliases.items():
        aliases.setdefault(alias, key)

    return CatalogStore(
        stars=stars.entries,
        deep_sky_objects=dso.entries,
        aliases=aliases,
        reports=(dso.report, stars.report),
    )


def load_catalog_store(config) -> CatalogStore:
    """
    Build the store described by a :class:`skywatch.config.CatalogConfig`.

    Missing files are not an error: the corresponding table uses the
    built-in fallback.
    """
    dso_path = discover_catalog_file(config.data_dir, config.dso_catalogs)
    star_path = discover_catalog_file(config.data_dir, config.star_catalogs)
    if dso_path is None:
        logger.warning("No deep-sky catalog found in %s", config.data_dir)
    if star_path is None:
        logger.warning("No star catalog found in %s", config.data_dir)
    ingestor = CatalogIngestor(naked_eye_magnitude=config.naked_eye_magnitude)
    return build_catalog_store(dso_path, star_path, ingestor)
