"""Configuration package for runtime settings, logging and startup validation."""

from .logging import JsonLogFormatter, config_configure_logging
from .settings import AppSettings, SettingsLoadError, config_load_database_url, config_load_settings

__all__ = [
    "AppSettings",
    "JsonLogFormatter",
    "SettingsLoadError",
    "config_configure_logging",
    "config_load_database_url",
    "config_load_settings",
]
