"""Configuration loader service."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from simple_record_forms.schema_management import DEFAULT_SCHEMA, SchemaError, parse_field_entries
from simple_record_forms.schema_management.schema_models import RecordSchema

from .runtime_settings import (
    DEFAULT_STORE_SETTINGS,
    ENVIRONMENT_VARIABLES,
    Configuration,
    StoreSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file or environment is invalid."""


def load_configuration(
    config_path: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Configuration:
    """Resolve store settings and schema from an optional file plus the environment.

    Environment variables win over the file, the file wins over built-in defaults.
    Without a file the built-in event schema is used.
    """
    environment = os.environ if environ is None else environ
    if config_path is None:
        return Configuration(
            path=None,
            store=load_store_settings(environment),
            schema=DEFAULT_SCHEMA,
        )

    path = Path(config_path)
    parsed = _read_configuration_file(path)
    file_settings = _parse_store_section(parsed.get("store"))
    schema = _parse_schema_section(parsed.get("schema"))
    return Configuration(
        path=path,
        store=load_store_settings(environment, base=file_settings),
        schema=schema,
    )


def load_store_settings(
    environ: Mapping[str, str], *, base: StoreSettings = DEFAULT_STORE_SETTINGS
) -> StoreSettings:
    """Overlay non-blank environment variables on top of ``base``."""
    overrides: dict[str, str] = {}
    for attribute, variable in ENVIRONMENT_VARIABLES.items():
        value = environ.get(variable)
        if value is not None and value.strip():
            overrides[attribute] = value.strip()
    settings = dataclasses.replace(base, **overrides)
    if not settings.endpoint.startswith(("http://", "https://")):
        raise ConfigurationError(f"Store endpoint must be an http(s) URL: {settings.endpoint}")
    return settings


def _read_configuration_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parsed


def _parse_store_section(value: Any) -> StoreSettings:
    if value is None:
        return DEFAULT_STORE_SETTINGS
    section = _require_mapping(value, "store")
    unknown = sorted(set(section) - set(ENVIRONMENT_VARIABLES))
    if unknown:
        raise ConfigurationError(f"Unknown store setting(s): {', '.join(unknown)}")
    overrides: dict[str, str | None] = {}
    for attribute in ENVIRONMENT_VARIABLES:
        if attribute in section:
            overrides[attribute] = _optional_string(section[attribute], f"store.{attribute}")
    for attribute in ("endpoint", "project_id", "database_id", "collection_id"):
        if attribute in overrides and overrides[attribute] is None:
            raise ConfigurationError(f"store.{attribute} must not be empty.")
    return dataclasses.replace(DEFAULT_STORE_SETTINGS, **overrides)


def _parse_schema_section(value: Any) -> RecordSchema:
    if value is None:
        return DEFAULT_SCHEMA
    section = _require_mapping(value, "schema")
    try:
        return parse_field_entries(section.get("fields"))
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
