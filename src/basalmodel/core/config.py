# src/basalmodel/core/config.py
"""
Configuration schema and loading for basalmodel.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

Example YAML:
    logging:
      level: INFO
      json_output: false

    mappers:
      user:
        push_key: primary
        push_falsy: false
        mapping:
          # primary field: [other key, to_primary, from_primary]
          id: [userId, copy, copy]
          createdAt: [created, date, date]
"""

from pathlib import Path
from typing import Any, Literal, Self

from pydantic import BaseModel, Field, ValidationError, field_validator

from basalmodel.contracts.enums import PushKey
from basalmodel.contracts.errors import MapperConfigError
from basalmodel.contracts.mapping import MappingEntry

# Keys Dynaconf adds to as_dict() output that are not settings
_DYNACONF_INTERNAL_KEYS = frozenset({"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"})


class LoggingSettings(BaseModel):
    """Logging output options, applied by ``core.logging.configure_from_settings``."""

    model_config = {"frozen": True, "extra": "forbid"}

    json_output: bool = False
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class MapperSettings(BaseModel):
    """Declarative configuration for one FieldMapper.

    Transformation functions are code and cannot come from settings; they are
    passed separately to ``FieldMapper.from_settings``. Mapping entries may
    reference any transform id; ids the mapper does not know yield None.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    mapping: dict[str, MappingEntry] = Field(default_factory=dict)
    push_key: PushKey = PushKey.PRIMARY
    push_falsy: bool = False

    @field_validator("mapping", mode="before")
    @classmethod
    def coerce_entries(cls, v: Any) -> Any:
        """Accept ``[other_key, to_primary, from_primary]`` lists as entries."""
        if not isinstance(v, dict):
            return v
        return {field: MappingEntry.coerce(entry) for field, entry in v.items()}

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create settings from a dict with a clear error on validation failure.

        Raises:
            MapperConfigError: If the configuration is invalid.
        """
        if not isinstance(config, dict):
            raise MapperConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise MapperConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e


class BasalSettings(BaseModel):
    """Top-level settings file schema."""

    model_config = {"frozen": True, "extra": "forbid"}

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    mappers: dict[str, MapperSettings] = Field(default_factory=dict)

    def mapper(self, name: str) -> MapperSettings:
        """Settings for a named mapper.

        Raises:
            MapperConfigError: If no mapper with that name is configured.
        """
        if name not in self.mappers:
            known = ", ".join(sorted(self.mappers)) or "none"
            raise MapperConfigError(f"No mapper named '{name}' in settings (configured: {known})")
        return self.mappers[name]


def _lower_keys(data: Any) -> Any:
    """Lower-case the keys of one dict level (Dynaconf upper-cases env-provided keys)."""
    if not isinstance(data, dict):
        return data
    return {str(k).lower(): v for k, v in data.items()}


def _normalize_raw_config(raw: dict[str, Any]) -> dict[str, Any]:
    """Lower-case settings keys without touching mapping table field names."""
    config = _lower_keys(raw)
    if "logging" in config:
        config["logging"] = _lower_keys(config["logging"])
    mappers = config.get("mappers")
    if isinstance(mappers, dict):
        # One level only: table field names below "mapping" are case-sensitive
        config["mappers"] = {name: _lower_keys(mapper_config) for name, mapper_config in mappers.items()}
    return config


def load_settings(config_path: Path) -> BasalSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (BASALMODEL_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Environment variable format: BASALMODEL_LOGGING__level for nested keys
    (nested key parts keep the case they are written in).

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated BasalSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="BASALMODEL",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in _DYNACONF_INTERNAL_KEYS}
    return BasalSettings(**_normalize_raw_config(raw_config))
