"""Application-level configuration models: logging and concurrency."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseModel):
    """Logging configuration.

    Diagnostics go to stderr; user notices are not logs and are printed
    regardless of the level.
    """

    level: str = Field(default="WARNING", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file")
    rich_console: bool = Field(default=True, description="Use Rich for console logs")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"Invalid log level '{value}', expected one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


class PerformanceSettings(BaseModel):
    """Concurrency limits for batches."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound on targets in flight (unset = all at once)",
    )


__all__ = [
    "LoggingSettings",
    "PerformanceSettings",
]
