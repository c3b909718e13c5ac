"""Configuration loading, validation, and access."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from price_reconciler.core.exceptions import ConfigError
from price_reconciler.core.models import TimestampUnit


class AdaptersConfig(BaseModel):
    """Provider adapter settings."""

    model_config = ConfigDict(frozen=True)

    symbol_delimiter: str = "."
    forex_timestamp_unit: TimestampUnit = TimestampUnit.SECONDS
    history_timestamp_unit: TimestampUnit = TimestampUnit.SECONDS
    chart_timestamp_unit: TimestampUnit = TimestampUnit.SECONDS

    @field_validator("symbol_delimiter")
    @classmethod
    def delimiter_single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("symbol_delimiter must be a single character")
        return v


class ReconcileConfig(BaseModel):
    """Merge and interpolation settings."""

    model_config = ConfigDict(frozen=True)

    interpolate: bool = False
    fill_calendar_gaps: bool = True


class ReconcilerConfig(BaseModel):
    """Root configuration for price-reconciler."""

    model_config = ConfigDict(frozen=True)

    adapters: AdaptersConfig = AdaptersConfig()
    reconcile: ReconcileConfig = ReconcileConfig()


CONFIG_PATH_ENV = "PRICE_RECONCILER_CONFIG"
DEFAULT_CONFIG_FILE = "price-reconciler.yml"


def load_config(
    config_path: str | None = None,
    env_prefix: str = "PRICE_RECONCILER_",
) -> ReconcilerConfig:
    """Build the config from defaults, a YAML file, then environment overrides.

    Each setting can be overridden by ``<prefix><SECTION>__<FIELD>``, e.g.
    ``PRICE_RECONCILER_RECONCILE__INTERPOLATE=true``. Override values are
    plain strings; the section models coerce them.
    """
    try:
        yaml_path = _find_config_file(config_path)
        base = _read_yaml_sections(yaml_path) if yaml_path is not None else {}
        return ReconcilerConfig.model_validate(_apply_env_overrides(base, env_prefix))
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(str(e), context={"source": "load_config"}) from e


def _find_config_file(explicit: str | None) -> Path | None:
    """Pick the YAML file: explicit path, then $PRICE_RECONCILER_CONFIG, then cwd."""
    candidates = (
        ("config_path", explicit),
        (CONFIG_PATH_ENV, os.environ.get(CONFIG_PATH_ENV)),
    )
    for field, candidate in candidates:
        if not candidate:
            continue
        path = Path(candidate)
        if not path.exists():
            raise ConfigError(
                f"Config file not found: {candidate}",
                context={"field": field, "value": candidate},
            )
        return path

    default = Path(DEFAULT_CONFIG_FILE)
    return default if default.exists() else None


def _read_yaml_sections(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse YAML config: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"YAML config must be a mapping, got {type(data).__name__}",
            context={"field": "config_file", "value": str(path)},
        )
    return data


def env_var_names(prefix: str = "PRICE_RECONCILER_") -> dict[tuple[str, str], str]:
    """Map every ``(section, field)`` setting to its override variable name."""
    names = {}
    for section, section_field in ReconcilerConfig.model_fields.items():
        for field in section_field.annotation.model_fields:
            names[(section, field)] = f"{prefix}{section.upper()}__{field.upper()}"
    return names


def _apply_env_overrides(base: dict, prefix: str) -> dict:
    """Return a copy of ``base`` with any set override variables applied."""
    result = {k: dict(v) if isinstance(v, dict) else v for k, v in base.items()}
    for (section, field), name in env_var_names(prefix).items():
        value = os.environ.get(name)
        if value is None:
            continue
        existing = result.get(section)
        if not isinstance(existing, dict):
            existing = result[section] = {}
        existing[field] = value
    return result
