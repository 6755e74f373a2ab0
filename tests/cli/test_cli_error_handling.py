"""Tests for handle_cli_error and the handle_cli_errors decorator."""

import pytest

from snapctl.cli.common.error_decorator import handle_cli_errors
from snapctl.cli.common.error_handler import handle_cli_error
from snapctl.shared.errors import (
    ApplicationError,
    CliError,
    ConvergenceError,
    ErrorCode,
    ErrorContext,
    UsageError,
)


class TestHandleCliError:
    """예외 타입별 종료 코드 매핑."""

    @pytest.mark.parametrize(
        ("error", "exit_code"),
        [
            (UsageError("missing <inst> and <snapname> argument(s)"), 2),
            (KeyboardInterrupt(), 130),
            (ConvergenceError(ErrorCode.SNAPSHOT_WAIT_FAILED, "query failed"), 1),
            (ValueError("bad"), 1),
        ],
    )
    def test_exit_codes(self, error, exit_code: int, capsys) -> None:
        assert handle_cli_error(error, "snapshot delete") == exit_code
        assert capsys.readouterr().err.startswith("Error: ")

    def test_writes_error_message(self, capsys) -> None:
        handle_cli_error(ConvergenceError(ErrorCode.SNAPSHOT_WAIT_FAILED, "query failed"), "snapshot delete")

        assert capsys.readouterr().err == "Error: query failed\n"

    def test_interrupt_message(self, capsys) -> None:
        handle_cli_error(KeyboardInterrupt(), "snapshot delete")

        assert capsys.readouterr().err == "Error: Command interrupted by user\n"


class TestHandleCliErrors:
    def test_passes_through_return_value(self) -> None:
        @handle_cli_errors(operation="op", command_name="cmd")
        def handler() -> int:
            return 0

        assert handler() == 0

    def test_wraps_snapctl_error(self) -> None:
        # Given
        original = ConvergenceError(
            ErrorCode.OPERATION_TIMEOUT,
            "timed out after 60s waiting for state deleted (last state: queued)",
            ErrorContext(operation="wait_for_snapshot_states", target="nightly"),
        )

        @handle_cli_errors(operation="op", command_name="cmd", error_code=ErrorCode.CLI_SNAPSHOT_DELETE_FAILED)
        def handler() -> int:
            raise original

        # When
        with pytest.raises(CliError) as exc_info:
            handler()

        # Then
        assert exc_info.value.code == ErrorCode.CLI_SNAPSHOT_DELETE_FAILED
        assert exc_info.value.message == (
            "nightly: timed out after 60s waiting for state deleted (last state: queued)"
        )
        assert exc_info.value.__cause__ is original

    def test_message_naming_target_is_kept(self) -> None:
        @handle_cli_errors(operation="op", command_name="cmd")
        def handler() -> int:
            raise ApplicationError(
                ErrorCode.UNEXPECTED_STATE,
                'Failed to delete snapshot "nightly"',
                ErrorContext(target="nightly"),
            )

        with pytest.raises(CliError) as exc_info:
            handler()

        assert exc_info.value.message == 'Failed to delete snapshot "nightly"'

    def test_cli_error_passes_unchanged(self) -> None:
        usage = UsageError("bad arguments")

        @handle_cli_errors(operation="op", command_name="cmd")
        def handler() -> int:
            raise usage

        with pytest.raises(UsageError) as exc_info:
            handler()

        assert exc_info.value is usage

    def test_unexpected_exception_wrapped(self) -> None:
        @handle_cli_errors(operation="op", command_name="cmd")
        def handler() -> int:
            raise RuntimeError("boom")

        with pytest.raises(CliError) as exc_info:
            handler()

        assert exc_info.value.code == ErrorCode.CLI_UNEXPECTED_ERROR
        assert exc_info.value.message == "Unexpected error: boom"
        assert exc_info.value.exit_code == 1
