"""CLI setup decorator module.

This module provides a decorator for standardizing CLI handler initialization,
including Console creation and logger adapter setup.

The decorated function receives enhanced keyword arguments:
- console: Rich Console on stdout for prompts and progress notices
- error_console: Rich Console on stderr for failure notices and spinners
- logger_adapter: LoggerAdapter with command context
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from rich.console import Console

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def setup_handler(
    *,
    command_name: str | None = None,
    require_console: bool = True,
) -> Callable[[F], F]:
    """Decorator for standardized CLI handler initialization.

    Consoles passed explicitly by the caller (tests) are left untouched.

    Args:
        command_name: Command name recorded on the logger adapter
            (defaults to the function name)
        require_console: Whether Rich Consoles should be created

    Returns:
        Decorated function with initialization handling

    Example:
        >>> @setup_handler(command_name="snapshot delete")
        ... @handle_cli_errors(operation="snapshot_delete", command_name="snapshot delete")
        ... def handle_snapshot_delete_command(options, **kwargs):
        ...     console = kwargs["console"]

    Note:
        This decorator should be applied BEFORE handle_cli_errors decorator
        to ensure initialization happens before error handling.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if require_console:
                # Notices and prompts stay on one line whatever the terminal width
                kwargs.setdefault("console", Console(soft_wrap=True))
                kwargs.setdefault("error_console", Console(stderr=True, soft_wrap=True))

            kwargs.setdefault(
                "logger_adapter",
                logging.LoggerAdapter(
                    logger,
                    extra={
                        "command": command_name or func.__name__,
                        "operation": func.__name__,
                    },
                ),
            )

            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
