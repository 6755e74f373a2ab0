"""Configuration models for snapctl."""

from snapctl.config.models.api_settings import CloudApiSettings, WaitSettings
from snapctl.config.models.app_settings import LoggingSettings, PerformanceSettings
from snapctl.config.models.settings import Settings

__all__ = [
    "CloudApiSettings",
    "LoggingSettings",
    "PerformanceSettings",
    "Settings",
    "WaitSettings",
]
