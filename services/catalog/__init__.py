"""
SKYWATCH Catalog Service

Ingests star and deep-sky catalog files into an immutable in-memory store
and resolves object names against it.
"""

from .catalog import (
    CatalogEntry,
    CatalogStore,
    CatalogTable,
    IngestReport,
)
from .ingest import (
    CatalogIngestor,
    IngestResult,
    build_catalog_store,
    discover_catalog_file,
    load_catalog_store,
)
from .resolver import NameResolver, Resolution

__all__ = [
    "CatalogEntry",
    "CatalogStore",
    "CatalogTable",
    "IngestReport",
    "CatalogIngestor",
    "IngestResult",
    "build_catalog_store",
    "discover_catalog_file",
    "load_catalog_store",
    "NameResolver",
    "Resolution",
]
