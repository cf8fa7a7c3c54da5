"""
SKYWATCH Custom Exceptions

Provides the domain-specific exception hierarchy for catalog ingestion,
name resolution and visibility computation.

Exception Hierarchy:
    SkywatchError (base)
    ├── ConfigurationError
    ├── CatalogError
    │   ├── CatalogUnavailableError
    │   └── CatalogParseError
    │       └── InvalidCoordinateError
    ├── ObjectNotFoundError
    ├── InvalidQueryError
    └── EphemerisError

Ingestion-time errors (CatalogUnavailableError, CatalogParseError) are
recovered inside the ingestor. Resolution and computation errors are
raised straight to the caller.
"""

from typing import Any, Optional


class SkywatchError(Exception):
    """Base exception for all SKYWATCH errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(SkywatchError):
    """Error in configuration file or settings.

    Raised when configuration validation fails, the requested file is
    missing, or its YAML cannot be parsed.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ) -> None:
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


# =============================================================================
# Catalog Errors
# =============================================================================

class CatalogError(SkywatchError):
    """Base class for catalog-related errors."""
    pass


class CatalogUnavailableError(CatalogError):
    """Catalog file is missing or could not be parsed at all.

    Never surfaced at query time: the ingestor logs it and populates the
    table from the built-in fallback set.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if path:
            details["path"] = path
        if reason:
            details["reason"] = reason
        super().__init__(message, details)
        self.path = path
        self.reason = reason


class CatalogParseError(CatalogError):
    """A single catalog row could not be turned into an entry."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        field: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if line_number is not None:
            details["line"] = line_number
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.line_number = line_number
        self.field = field


class InvalidCoordinateError(CatalogParseError):
    """RA or Dec is NaN, infinite or outside its valid range."""

    def __init__(
        self,
        message: str,
        ra_hours: Optional[float] = None,
        dec_degrees: Optional[float] = None,
        line_number: Optional[int] = None,
    ) -> None:
        super().__init__(message, line_number=line_number)
        if ra_hours is not None:
            self.details["ra_hours"] = ra_hours
        if dec_degrees is not None:
            self.details["dec_degrees"] = dec_degrees
        self.ra_hours = ra_hours
        self.dec_degrees = dec_degrees


# =============================================================================
# Query Errors
# =============================================================================

class ObjectNotFoundError(SkywatchError):
    """Celestial object not found in any catalog table or alias.

    The offending name is echoed back in ``object_name``.
    """

    def __init__(
        self,
        message: str,
        object_name: Optional[str] = None,
        catalog: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if object_name:
            details["object_name"] = object_name
        if catalog:
            details["catalog"] = catalog
        super().__init__(message, details)
        self.object_name = object_name
        self.catalog = catalog


class InvalidQueryError(SkywatchError):
    """Malformed query parameter (unknown category, unusable time, ...)."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Optional[Any] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if parameter:
            details["parameter"] = parameter
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.parameter = parameter
        self.value = value


class EphemerisError(SkywatchError):
    """The ephemeris collaborator failed to produce a result."""

    def __init__(
        self,
        message: str,
        body: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if body:
            details["body"] = body
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
        self.body = body
        self.operation = operation


# =============================================================================
# Convenience aliases
# =============================================================================

Error = SkywatchError
UnknownObjectError = ObjectNotFoundError
