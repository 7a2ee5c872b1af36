"""
Configuration module for modindex.

Exports the main components for convenient imports.
"""

from .loader import ConfigError, load_config
from .resolver import ModuleSettings, resolve_module_settings
from .schema import AppConfig, LoggingConfig, ModuleConfig, ProgressConfig

__all__ = [
    "load_config",
    "ConfigError",
    "AppConfig",
    "ModuleConfig",
    "LoggingConfig",
    "ProgressConfig",
    "ModuleSettings",
    "resolve_module_settings",
]
