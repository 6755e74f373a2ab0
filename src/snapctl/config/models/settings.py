"""snapctl Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from snapctl.config.models.api_settings import CloudApiSettings, WaitSettings
from snapctl.config.models.app_settings import LoggingSettings, PerformanceSettings


class Settings(BaseSettings):
    """Unified configuration for snapctl.

    Every field can be set from the environment, e.g.
    ``SNAPCTL_API__URL`` or ``SNAPCTL_WAIT__POLL_INTERVAL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SNAPCTL_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    api: CloudApiSettings = Field(default_factory=CloudApiSettings)
    wait: WaitSettings = Field(default_factory=WaitSettings)
    performance: PerformanceSettings = Field(default_factory=PerformanceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; environment variables fill what the file leaves unset."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)
