"""Configuration package for snapctl."""

from snapctl.config.loader import (
    get_settings,
    load_settings,
    reload_settings,
    reset_settings,
    resolve_config_path,
)
from snapctl.config.models import (
    CloudApiSettings,
    LoggingSettings,
    PerformanceSettings,
    Settings,
    WaitSettings,
)

__all__ = [
    "CloudApiSettings",
    "LoggingSettings",
    "PerformanceSettings",
    "Settings",
    "WaitSettings",
    "get_settings",
    "load_settings",
    "reload_settings",
    "reset_settings",
    "resolve_config_path",
]
