"""CLI error handling decorator.

This module provides a decorator for standardizing error handling in CLI
handlers, eliminating repetitive try-except blocks across command handlers.

Every error leaving a decorated handler is a ``CliError`` carrying the exit
code; the original error is chained and its message is kept so the top-level
``Error: <message>`` line names the failing target.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from snapctl.shared.errors import (
    CliError,
    ErrorCode,
    ErrorContext,
    SnapctlError,
)
from snapctl.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(
    operation: str,
    command_name: str,
    error_code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> Callable[[F], F]:
    """Decorator for standardized CLI error handling.

    The decorator:
    1. Passes CliError through unchanged
    2. Logs snapctl errors with their structured context
    3. Re-raises them as CliError with ``error_code``
    4. Wraps unexpected exceptions as CLI_UNEXPECTED_ERROR

    Args:
        operation: Operation name for error context (e.g., "snapshot_delete")
        command_name: CLI command name (e.g., "snapshot delete")
        error_code: Code given to wrapped snapctl errors

    Returns:
        Decorated function with error handling
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)

            except CliError:
                raise

            except SnapctlError as e:
                _handle_snapctl_error(e, operation, command_name, error_code)

            except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
                # Must catch all exceptions to provide user-friendly CLI error messages
                _handle_unexpected_error(e, operation, command_name)

        return wrapper  # type: ignore[return-value]

    return decorator


def _handle_snapctl_error(
    error: SnapctlError,
    operation: str,
    command_name: str,
    error_code: ErrorCode,
) -> None:
    """Log a snapctl error and re-raise it as a CliError.

    Raises:
        CliError: Always
    """
    log_operation_error(
        logger,
        error,
        operation=operation,
        additional_context={"command": command_name},
    )

    raise CliError(
        error_code,
        _target_message(error),
        ErrorContext(
            operation=operation,
            additional_data={
                "command": command_name,
                "original_code": error.code.value,
            },
        ),
        original_error=error,
        command=command_name,
    ) from error


def _target_message(error: SnapctlError) -> str:
    """Prefix the message with the failing target unless it already names it."""
    target = error.context.target
    if target and f'"{target}"' not in error.message:
        return f"{target}: {error.message}"
    return error.message


def _handle_unexpected_error(
    error: Exception,
    operation: str,
    command_name: str,
) -> None:
    """Log an unexpected exception and re-raise it as a CliError.

    Raises:
        CliError: Always
    """
    logger.exception(
        "Unexpected error during %s",
        operation,
        extra={"context": {"command": command_name, "error_type": type(error).__name__}},
    )

    raise CliError(
        ErrorCode.CLI_UNEXPECTED_ERROR,
        f"Unexpected error: {error}",
        ErrorContext(
            operation=operation,
            additional_data={"command": command_name},
        ),
        original_error=error,
        command=command_name,
    ) from error

