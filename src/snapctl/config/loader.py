"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

import toml
from dotenv import load_dotenv
from pydantic import ValidationError

from snapctl.config.models.settings import Settings
from snapctl.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    create_config_error,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SNAPCTL_CONFIG"
HOME_DIR = ".snapctl"
CONFIG_FILE_NAME = "config.toml"
LOCAL_CONFIG_FILE_NAME = "snapctl.toml"


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self, config_path: str | Path | None = None) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings(config_path)

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance

    def reset(self) -> None:
        """Forget the cached settings (used by tests and the CLI callback)."""
        with self._lock:
            self._instance = None


_loader = SettingsLoader()


def get_settings(config_path: str | Path | None = None) -> Settings:
    """Return the process-wide Settings instance."""
    return _loader.get_config(config_path)


def reload_settings(config_path: str | Path | None = None) -> Settings:
    """Reload and return the process-wide Settings instance."""
    return _loader.reload_config(config_path)


def reset_settings() -> None:
    """Drop the cached Settings instance."""
    _loader.reset()


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load environment variables from a .env file, if there is one.

    Variables already present in the environment win over the file.

    Raises:
        ApplicationError: If the file exists but cannot be read
    """
    if not env_file.exists():
        return

    try:
        load_dotenv(env_file, override=False)
    except OSError as e:
        raise create_config_error(
            f"Failed to read .env file: {e}",
            config_key=env_file.name,
            operation="load_env",
            original_error=e,
        ) from e


def _default_config_paths() -> list[Path]:
    return [
        Path(LOCAL_CONFIG_FILE_NAME),
        Path.home() / HOME_DIR / CONFIG_FILE_NAME,
    ]


def resolve_config_path(config_path: str | Path | None = None) -> Path | None:
    """Find the configuration file to load.

    Order: explicit path, ``$SNAPCTL_CONFIG``, ``./snapctl.toml``,
    ``~/.snapctl/config.toml``. Explicit and environment paths are returned
    even when missing so the caller can report them.

    Returns:
        Path to load, or None to use environment variables only
    """
    if config_path:
        return Path(config_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    for candidate in _default_config_paths():
        if candidate.exists():
            return candidate

    return None


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file and the environment.

    Args:
        config_path: Optional path to a TOML configuration file

    Returns:
        Settings instance

    Raises:
        ApplicationError: If the file is missing, malformed or invalid
    """
    _load_env_file()
    path = resolve_config_path(config_path)

    try:
        if path is None:
            logger.debug("No configuration file found, using environment only")
            return Settings()

        logger.debug("Loading configuration from %s", path)
        return Settings.from_toml_file(path)

    except FileNotFoundError as e:
        raise ApplicationError(
            ErrorCode.CONFIG_MISSING,
            f"Configuration file not found: {path}",
            ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path)},
            ),
            original_error=e,
        ) from e
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Malformed configuration file {path}: {e}",
            config_key=str(path),
            operation="load_settings",
            original_error=e,
        ) from e
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            config_key=str(path) if path else None,
            operation="load_settings",
            original_error=e,
        ) from e
