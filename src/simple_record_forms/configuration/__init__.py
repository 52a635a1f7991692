"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, load_store_settings
from .runtime_settings import (
    DEFAULT_STORE_SETTINGS,
    ENVIRONMENT_VARIABLES,
    Configuration,
    StoreSettings,
)

__all__ = [
    "Configuration",
    "StoreSettings",
    "DEFAULT_STORE_SETTINGS",
    "ENVIRONMENT_VARIABLES",
    "ConfigurationError",
    "load_configuration",
    "load_store_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
