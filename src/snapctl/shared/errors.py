"""snapctl Error Handling Module

This module defines the error handling system for snapctl, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- User-friendly Messages: Errors can be converted to user-friendly messages
- Proper Exception Chaining: Original exceptions are preserved

A declined confirmation is not an error: it is ``Confirmation.ABORT``
(see ``snapctl.core.models``).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("token",)


class ErrorCode(str, Enum):
    """Error codes for snapctl.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_AUTHENTICATION_FAILED = "API_AUTHENTICATION_FAILED"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_TIMEOUT = "API_TIMEOUT"
    API_SERVER_ERROR = "API_SERVER_ERROR"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Snapshot Errors
    SNAPSHOT_DELETE_FAILED = "SNAPSHOT_DELETE_FAILED"
    SNAPSHOT_WAIT_FAILED = "SNAPSHOT_WAIT_FAILED"
    UNEXPECTED_STATE = "UNEXPECTED_STATE"

    # Configuration Errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Wait Errors
    OPERATION_TIMEOUT = "OPERATION_TIMEOUT"

    # CLI Errors
    CLI_INVALID_ARGUMENTS = "CLI_INVALID_ARGUMENTS"
    CLI_SNAPSHOT_DELETE_FAILED = "CLI_SNAPSHOT_DELETE_FAILED"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization and prevent
    credentials from leaking into logs.

    Attributes:
        operation: Optional operation name that caused the error
        target: Optional snapshot name the error belongs to
        instance: Optional instance identifier the error belongs to
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    target: str | None = None
    instance: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            # Frozen dataclass: internal field update goes through object.__setattr__
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with secret masking.

        Args:
            mask_keys: additional_data keys to drop. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with guaranteed additional_data key.

        Example:
            >>> context = ErrorContextModel(operation="delete", additional_data={"token": "x"})
            >>> context.safe_dict()
            {'operation': 'delete', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.target is not None:
            data["target"] = self.target
        if self.instance is not None:
            data["instance"] = self.instance

        additional = self.additional_data or {}
        data["additional_data"] = {
            key: val for key, val in additional.items() if key not in mask_keys
        }

        return data


ErrorContext = ErrorContextModel


class SnapctlError(Exception):
    """Base exception class for all snapctl errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize SnapctlError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        formatted_message = f"{code.value}: {message}"
        super().__init__(formatted_message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging with secret masking.

        Returns:
            Dictionary representation of the error with code, message,
            masked context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(SnapctlError):
    """Domain-specific errors.

    These errors occur when the rules of the batch itself are violated,
    for example a collaborator reporting success with a state that was
    never asked for.
    """


class InfrastructureError(SnapctlError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems
    like the CloudAPI endpoint or the network.
    """


class ApplicationError(SnapctlError):
    """Application-level errors.

    These errors occur at the application layer, typically
    related to configuration, command handling, or application flow.
    """


class MutationError(InfrastructureError):
    """The mutating call (snapshot delete) failed for one target."""


class ConvergenceError(InfrastructureError):
    """The state query failed while waiting for a target to converge."""


class ConvergenceTimeoutError(ConvergenceError):
    """The target did not reach an acceptable state before the wait timed out."""


class InternalConsistencyError(DomainError):
    """The state query succeeded but returned a state outside the accepted set."""


class CliError(ApplicationError):
    """CLI-specific error with enhanced context for command-line operations."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


class UsageError(CliError):
    """Malformed or missing command-line arguments."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(
            ErrorCode.CLI_INVALID_ARGUMENTS,
            message,
            ErrorContext(operation="parse_arguments"),
            original_error,
            command,
            exit_code=2,
        )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return CliError(
        code,
        message,
        context,
        original_error,
        command,
        exit_code,
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_INVALID,
        message,
        context,
        original_error,
    )


def create_unexpected_state_error(
    message: str,
    name: str,
    state: str,
    acceptable_states: frozenset[str],
    instance: str | None = None,
) -> InternalConsistencyError:
    """Create the error raised when a wait ends in a state nobody asked for."""
    context = ErrorContext(
        operation="wait_for_states",
        target=name,
        instance=instance,
        additional_data={
            "state": state,
            "acceptable_states": ",".join(sorted(acceptable_states)),
        },
    )
    return InternalConsistencyError(
        ErrorCode.UNEXPECTED_STATE,
        message,
        context,
    )
