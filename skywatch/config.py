"""
SKYWATCH Configuration

Pydantic models for observer, catalog, ephemeris and logging settings,
loaded from YAML with environment variable overrides.

Resolution order (later wins):
    1. Model defaults
    2. YAML file (explicit path, or first existing path from get_config_paths())
    3. Environment variables named SKYWATCH_<SECTION>_<FIELD>
       (e.g. SKYWATCH_OBSERVER_LATITUDE=42.5, SKYWATCH_CATALOG_DATA_DIR=/srv/data)

Usage:
    from skywatch.config import load_config

    config = load_config()                 # auto-discover
    config = load_config("skywatch.yaml")  # explicit file
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from skywatch.exceptions import ConfigurationError

ENV_PREFIX = "SKYWATCH_"
CONFIG_FILENAME = "skywatch.yaml"

DEFAULT_DSO_CATALOGS = [
    "ngc.csv",
    "enhanced_dso.csv",
    "messier.csv",
    "dso.csv",
    "sample_dso.csv",
]

DEFAULT_STAR_CATALOGS = [
    "hygdata_v41.csv",
    "enhanced_stars.csv",
    "hygdata_v3.csv",
    "hyg.csv",
    "stars.csv",
    "sample_stars.csv",
]


class ObserverConfig(BaseModel):
    """Default observer location and ambient conditions."""

    name: str = "Vancouver"
    latitude: float = Field(default=49.2827, ge=-90.0, le=90.0)
    longitude: float = Field(default=-123.1207, ge=-180.0, le=180.0)
    elevation: float = Field(default=30.0, ge=-500.0, le=9000.0)
    temperature: float = Field(default=15.0, ge=-90.0, le=60.0)
    pressure: float = Field(default=1013.25, ge=0.0, le=1100.0)


class CatalogConfig(BaseModel):
    """Where catalog files live and how star tables are filtered."""

    data_dir: Path = Path("data")
    dso_catalogs: list[str] = Field(default_factory=lambda: list(DEFAULT_DSO_CATALOGS))
    star_catalogs: list[str] = Field(default_factory=lambda: list(DEFAULT_STAR_CATALOGS))
    naked_eye_magnitude: float = Field(default=6.0, ge=-2.0, le=20.0)

    @field_validator("dso_catalogs", "star_catalogs", mode="before")
    @classmethod
    def split_comma_list(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class EphemerisConfig(BaseModel):
    """Skyfield kernel used for solar-system bodies."""

    data_dir: Path = Path("data/ephemeris")
    kernel: str = "de421.bsp"

    @field_validator("kernel")
    @classmethod
    def validate_kernel(cls, v: str) -> str:
        if not v.endswith(".bsp"):
            raise ValueError("kernel must be a SPICE .bsp file")
        return v


class SkywatchConfig(BaseModel):
    """Root configuration."""

    observer: ObserverConfig = Field(default_factory=ObserverConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    ephemeris: EphemerisConfig = Field(default_factory=EphemerisConfig)
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level


# =============================================================================
# Loading
# =============================================================================

def get_config_paths() -> list[Path]:
    """Candidate config file locations, most specific first."""
    paths = []
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path.cwd() / CONFIG_FILENAME)
    paths.append(Path.home() / ".config" / "skywatch" / CONFIG_FILENAME)
    paths.append(Path("/etc/skywatch") / CONFIG_FILENAME)
    return paths


def _coerce_env_value(raw: str, annotation: Any) -> Any:
    if annotation is bool:
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if annotation is int:
        return int(raw)
    if annotation is float:
        return float(raw)
    return raw


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay SKYWATCH_<SECTION>_<FIELD> variables onto raw config data."""
    for field_name, field_info in SkywatchConfig.model_fields.items():
        annotation = field_info.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            section = data.get(field_name) or {}
            for sub_name, sub_info in annotation.model_fields.items():
                key = f"{ENV_PREFIX}{field_name}_{sub_name}".upper()
                if key in os.environ:
                    try:
                        section[sub_name] = _coerce_env_value(os.environ[key], sub_info.annotation)
                    except ValueError as e:
                        raise ConfigurationError(
                            f"Invalid value in environment variable {key}: {e}",
                            config_key=f"{field_name}.{sub_name}",
                        ) from e
            if section:
                data[field_name] = section
        else:
            key = f"{ENV_PREFIX}{field_name}".upper()
            if key in os.environ:
                data[field_name] = os.environ[key]
    return data


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in configuration file: {e}", config_file=str(path)
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Invalid YAML in configuration file: top level must be a mapping",
            config_file=str(path),
        )
    return data


def load_config(path: Optional[str | Path] = None) -> SkywatchConfig:
    """Load configuration from YAML and the environment.

    Args:
        path: Explicit config file. When omitted, the first existing file
              from get_config_paths() is used, or defaults if none exists.

    Returns:
        Validated SkywatchConfig

    Raises:
        ConfigurationError: File not found, invalid YAML, or validation failure
    """
    data: dict[str, Any] = {}
    source: Optional[Path] = None

    if path is not None:
        source = Path(path)
        if not source.exists():
            raise ConfigurationError(
                f"Configuration file not found: {source}", config_file=str(source)
            )
    else:
        source = next((p for p in get_config_paths() if p.is_file()), None)

    if source is not None:
        data = _read_yaml(source)

    data = _apply_env_overrides(data)

    try:
        return SkywatchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}",
            config_file=str(source) if source else None,
        ) from e
