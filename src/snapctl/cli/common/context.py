"""Per-invocation CLI state.

The root callback resolves ``-v``, ``--log-level`` and ``--config`` once,
before any subcommand runs, and stores the result here. Command handlers read
it back to find the configuration file the settings were loaded from.

Handlers called directly (tests, embedding) see a default context.
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Values accepted by ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """Root options of one snapctl invocation.

    Attributes:
        verbose: Number of ``-v`` flags; any verbosity means DEBUG logs
        log_level: ``--log-level``, or ``[logging] level`` from the settings
        config_path: File given with ``--config`` (None = discovered or env only)
    """

    model_config = ConfigDict(frozen=True)

    verbose: int = Field(default=0, ge=0, description="Count of -v flags")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Diagnostics level")
    config_path: Path | None = Field(default=None, description="Explicit configuration file")

    def is_verbose(self) -> bool:
        return self.verbose > 0

    def get_effective_log_level(self) -> str:
        """Level handed to ``setup_structured_logger``; ``-v`` wins over ``--log-level``."""
        if self.is_verbose():
            return LogLevel.DEBUG.value
        return self.log_level.value


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "snapctl_cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """Return the context set by the root callback, or the defaults."""
    context = cli_context_var.get()
    return context if context is not None else CliContext()


def set_cli_context(context: CliContext) -> None:
    cli_context_var.set(context)


def clear_cli_context() -> None:
    cli_context_var.set(None)
