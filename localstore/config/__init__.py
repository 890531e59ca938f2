"""
Configuration - Settings for file stores, logging and metrics.
"""

from .settings import (
    MonitoringSettings,
    Settings,
    StorageSettings,
    get_settings,
    configure_logging_from_settings,
    load_config_file,
    reload_settings,
)

__all__ = [
    "MonitoringSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "configure_logging_from_settings",
    "load_config_file",
    "reload_settings",
]
