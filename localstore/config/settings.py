"""
Settings Management

Pydantic-based settings schema with TOML file and environment variable support.

@.architecture
Incoming: Environment variables, TOML config file (LOCALSTORE_CONFIG), data/storage/local.py --- {str from os.getenv, TOML config dict, get_settings calls}
Processing: get_settings(), reload_settings(), load_config_file(), field_validator() --- {4 jobs: configuration_loading, environment_variable_merging, schema_validation, caching}
Outgoing: data/storage/local.py, Embedding applications --- {Settings Pydantic model with typed config sections}
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from pydantic import BaseModel, Field, field_validator

from localstore.data.storage.directories import BaseDirectory, SearchDomain
from localstore.data.storage.errors import InvalidFileNameError
from localstore.monitoring.logging import configure_from_preset
from localstore.security.sanitization import validate_file_name

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "LOCALSTORE_CONFIG"


# =============================================================================
# Settings Schemas
# =============================================================================

class StorageSettings(BaseModel):
    """File store settings."""
    destination_directory_name: str = "localstore"
    base_directory: BaseDirectory = BaseDirectory.DOCUMENTS
    domain: SearchDomain = SearchDomain.USER
    # Explicit base path, takes precedence over base_directory/domain
    base_path: Optional[Path] = None
    max_filename_length: int = Field(default=255, gt=0)

    @field_validator('destination_directory_name')
    @classmethod
    def validate_destination(cls, v: str) -> str:
        """Destination must be a single path component."""
        try:
            return validate_file_name(v)
        except InvalidFileNameError as e:
            raise ValueError(f"destination_directory_name: {e}") from e


class MonitoringSettings(BaseModel):
    """Monitoring and logging configuration."""
    log_level: str = "INFO"
    log_format: str = "text"  # json|text
    metrics_enabled: bool = True

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ('json', 'text'):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


class Settings(BaseModel):
    """
    Main settings.

    Loads configuration from:
    1. TOML config file (path in LOCALSTORE_CONFIG)
    2. Environment variables (prefixed by section)
    3. Defaults defined in schemas

    Priority: Environment variables > TOML config > Defaults
    """

    app_name: str = "localstore"
    environment: str = "development"  # development|production|test

    storage: StorageSettings = Field(default_factory=StorageSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ['development', 'production', 'test']
        if v not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v


# =============================================================================
# Settings Loader
# =============================================================================

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "STORAGE_DESTINATION_DIRECTORY_NAME": ("storage", "destination_directory_name"),
    "STORAGE_BASE_DIRECTORY": ("storage", "base_directory"),
    "STORAGE_DOMAIN": ("storage", "domain"),
    "STORAGE_BASE_PATH": ("storage", "base_path"),
    "STORAGE_MAX_FILENAME_LENGTH": ("storage", "max_filename_length"),
    "MONITORING_LOG_LEVEL": ("monitoring", "log_level"),
    "MONITORING_LOG_FORMAT": ("monitoring", "log_format"),
    "MONITORING_METRICS_ENABLED": ("monitoring", "metrics_enabled"),
}


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the TOML config file.

    Args:
        path: Config file path (defaults to $LOCALSTORE_CONFIG)

    Returns:
        Parsed config, or an empty dict if there is no usable file
    """
    path = path or os.getenv(CONFIG_PATH_ENV)
    if not path:
        return {}

    config_file = Path(path).expanduser()
    if not config_file.is_file():
        logger.warning(f"Config file not found: {config_file}")
        return {}

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Failed to load config file {config_file}: {e}")
        return {}


@lru_cache()
def get_settings() -> Settings:
    """
    Load and return settings (cached).

    Returns:
        Settings: Complete settings
    """
    file_config = load_config_file()

    settings_dict: Dict[str, Any] = {
        "environment": os.getenv(
            "LOCALSTORE_ENVIRONMENT",
            file_config.get("environment", "development")
        ),
        "storage": dict(file_config.get("storage", {}) or {}),
        "monitoring": dict(file_config.get("monitoring", {}) or {}),
    }

    for env_name, (section, field) in ENV_OVERRIDES.items():
        if value := os.getenv(env_name):
            settings_dict[section][field] = value

    return Settings(**settings_dict)


def reload_settings() -> Settings:
    """
    Reload settings (clears cache).

    Returns:
        Settings: Reloaded settings
    """
    get_settings.cache_clear()
    return get_settings()


# Settings environment -> logging preset
_LOGGING_PRESET_FOR_ENVIRONMENT = {
    "development": "development",
    "production": "production",
    "test": "testing",
}


def configure_logging_from_settings(settings: Optional[Settings] = None) -> None:
    """
    Configure logging from the environment preset and monitoring settings.

    Args:
        settings: Settings to use (loaded via get_settings() if None)
    """
    settings = settings or get_settings()
    configure_from_preset(
        _LOGGING_PRESET_FOR_ENVIRONMENT[settings.environment],
        level=settings.monitoring.log_level,
        format_type=settings.monitoring.log_format,
    )
