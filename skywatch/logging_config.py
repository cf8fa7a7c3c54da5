"""
SKYWATCH Logging Configuration

All SKYWATCH loggers hang off the "skywatch" root logger. setup_logging()
attaches a stdout handler and, when asked, a size-rotated log file;
set_service_level() tunes one service subtree (e.g. catalog) on its own.
log_timing() brackets slow steps such as catalog parsing.

Usage:
    from skywatch.logging_config import setup_logging, get_logger

    # Once, at startup
    setup_logging(log_level="INFO", log_file="skywatch.log")

    # Per module
    logger = get_logger(__name__)
    logger.info("Catalog loaded", extra={"entries": 13226})
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

# Module-level constants
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

ROOT_LOGGER_NAME = "skywatch"

# Log level mapping for per-service configuration
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _level(name: str) -> int:
    return LOG_LEVELS.get(name.upper(), logging.INFO)


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str | Path] = None,
) -> None:
    """Configure logging for SKYWATCH.

    Sets up the ``skywatch`` logger with a console handler and an optional
    rotating file handler. Should be called once at application startup;
    calling it again replaces the previous handlers.

    Args:
        log_level: Default logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, enables file logging
                  with rotation.

    Example:
        setup_logging(log_level="DEBUG", log_file="/var/log/skywatch.log")
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(_level(log_level))

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(_level(log_level))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from logging.handlers import RotatingFileHandler

        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
        )
        file_handler.setLevel(_level(log_level))
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module or service.

    Returns a child logger under the skywatch namespace so that levels and
    handlers set by :func:`setup_logging` are inherited.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_service_level(service_name: str, level: str) -> None:
    """Set log level for a specific service.

    Args:
        service_name: Name of the service package (e.g., "catalog", "ephemeris")
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Example:
        set_service_level("catalog", "DEBUG")  # Show every skipped row
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.services.{service_name}")
    logger.setLevel(_level(level))


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    warn_threshold_sec: Optional[float] = None,
) -> Iterator[None]:
    """Log the start, completion and duration of a block.

    Completion is logged even when the block raises. When
    ``warn_threshold_sec`` is given and exceeded, a warning is emitted too.

    Example:
        with log_timing(logger, "parse hygdata_v41.csv", warn_threshold_sec=5.0):
            ingestor.parse_file(path, CatalogTable.STARS)
    """
    logger.log(level, f"Starting {operation}", extra={"operation": operation})
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.log(
            level,
            f"{operation} completed in {elapsed:.3f}s",
            extra={"operation": operation, "elapsed_seconds": elapsed},
        )
        if warn_threshold_sec is not None and elapsed > warn_threshold_sec:
            logger.warning(
                f"{operation} took {elapsed:.3f}s, exceeded threshold of {warn_threshold_sec:.1f}s",
                extra={"operation": operation, "elapsed_seconds": elapsed},
            )
