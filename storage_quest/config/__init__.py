"""
Configuration module for Storage Quest.

This module provides type-safe, validated configuration using Pydantic BaseSettings.

Usage:
    from storage_quest.config import get_config

    config = get_config()
    logger.info("Snapshot location", data_dir=config.storage.data_dir, name=config.storage.snapshot_name)
"""

import sys
import threading
from functools import lru_cache
from os import getenv

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import AppConfig, GridConfig, LoggingConfig, StorageConfig

__all__ = ["get_config", "reset_config", "AppConfig", "GridConfig", "LoggingConfig", "StorageConfig"]

_config_instance = None
_config_lock = threading.Lock()


def _is_test_mode() -> bool:
    """
    Detect if running in test environment.

    Returns:
        bool: True if running under pytest, False otherwise
    """
    if "pytest" in sys.modules:
        return True

    if getenv("PYTEST_CURRENT_TEST"):
        return True

    return False


def _load_config() -> AppConfig:
    """Build AppConfig, reporting invalid settings as a ConfigurationError."""
    try:
        return AppConfig()
    except ValidationError as e:
        errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
        config_key = errors[0].split(":", 1)[0] if errors else None
        raise ConfigurationError(
            "Invalid configuration",
            config_key=config_key,
            details={"errors": errors},
            user_friendly=f"Invalid configuration: {errors[0] if errors else e}",
        ) from e


@lru_cache(maxsize=1)
def _get_config_cached() -> AppConfig:
    """
    Production config loader with caching.

    Returns:
        AppConfig: Cached application configuration
    """
    global _config_instance  # pylint: disable=global-statement
    with _config_lock:
        if _config_instance is None:
            _config_instance = _load_config()
    return _config_instance


def get_config() -> AppConfig:
    """
    Get application configuration (singleton in production, fresh in tests).

    Configuration is loaded from environment variables and .env file.

    Returns:
        AppConfig: The application configuration

    Raises:
        ConfigurationError: If an environment variable or .env value is invalid
    """
    if _is_test_mode():
        return _load_config()
    return _get_config_cached()


def reset_config() -> None:
    """Reset the configuration cache so the next get_config() reloads it."""
    global _config_instance  # pylint: disable=global-statement

    with _config_lock:
        _get_config_cached.cache_clear()
        _config_instance = None
