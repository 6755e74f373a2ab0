"""Snapshot delete command handler for snapctl CLI.

Wires the CloudAPI client, the confirmation gate, the per-target executor
and the convergence waiter into a BatchCoordinator, then runs one batch.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from snapctl.cli.common.context import get_cli_context
from snapctl.cli.common.error_decorator import handle_cli_errors
from snapctl.cli.common.error_handler import handle_cli_error
from snapctl.cli.common.options import force_option, wait_option
from snapctl.cli.common.setup_decorator import setup_handler
from snapctl.cli.progress import create_progress_manager
from snapctl.config import Settings, get_settings
from snapctl.core import (
    BatchCoordinator,
    ConfirmationGate,
    ConvergenceWaiter,
    MutationExecutor,
    Target,
    WaitSpec,
)
from snapctl.services import CloudApiClient
from snapctl.shared.constants import CLIDefaults, CLIHelp, CLIMessages
from snapctl.shared.errors import ErrorCode, UsageError
from snapctl.shared.protocols import SnapshotApiProtocol
from snapctl.shared.types.cli import SnapshotDeleteOptions

logger = logging.getLogger(__name__)

COMMAND_NAME = CLIMessages.CommandNames.SNAPSHOT_DELETE


@setup_handler(command_name=COMMAND_NAME)
@handle_cli_errors(
    operation="handle_snapshot_delete",
    command_name=COMMAND_NAME,
    error_code=ErrorCode.CLI_SNAPSHOT_DELETE_FAILED,
)
def handle_snapshot_delete_command(options: SnapshotDeleteOptions, **kwargs: Any) -> int:
    """Handle the snapshot delete command.

    Args:
        options: Validated snapshot delete options
        **kwargs: Injected by decorators (console, error_console,
            logger_adapter); tests may also pass api, settings and
            input_stream

    Returns:
        Exit code (0 for success or a declined confirmation)

    Raises:
        CliError: The first per-target failure, after every target has run
    """
    console: Console = kwargs["console"]
    error_console: Console = kwargs["error_console"]
    logger_adapter = kwargs.get("logger_adapter", logger)

    logger_adapter.info(CLIMessages.Info.COMMAND_STARTED.format(command=COMMAND_NAME))

    settings: Settings = kwargs.get("settings") or get_settings(get_cli_context().config_path)
    api: SnapshotApiProtocol = kwargs.get("api") or CloudApiClient.from_settings(settings)

    wait_spec = WaitSpec.from_count(options.wait)
    targets = [Target(options.instance, name) for name in options.names]

    # Spinners only make sense on an interactive stderr
    can_show_indicator = error_console.is_terminal
    progress = create_progress_manager(
        error_console,
        intensity=wait_spec.intensity,
        disabled=not (wait_spec.indicated and can_show_indicator),
    )

    waiter = ConvergenceWaiter(
        api,
        console,
        indicator_factory=progress.indicator,
        can_show_indicator=can_show_indicator,
    )
    executor = MutationExecutor(api, waiter, console, error_console=error_console)
    gate = ConfirmationGate(console, error_console, input_stream=kwargs.get("input_stream"))
    coordinator = BatchCoordinator(gate, executor, max_workers=settings.performance.max_workers)

    outcome = coordinator.run(targets, wait_spec, forced=options.force)

    if outcome.aborted:
        logger_adapter.info("Snapshot delete aborted at confirmation")
        return CLIDefaults.EXIT_SUCCESS

    logger_adapter.info(CLIMessages.Info.COMMAND_COMPLETED.format(command=COMMAND_NAME))
    return CLIDefaults.EXIT_SUCCESS


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


def snapshot_delete_command(
    instance: Annotated[
        Optional[str],
        typer.Argument(help=CLIHelp.DELETE_INSTANCE_HELP, metavar="<inst>", show_default=False),
    ] = None,
    names: Annotated[
        Optional[list[str]],
        typer.Argument(help=CLIHelp.DELETE_NAMES_HELP, metavar="<snapname>...", show_default=False),
    ] = None,
    force: Annotated[bool, force_option] = False,
    wait: Annotated[int, wait_option] = 0,
) -> None:
    """Remove one or more snapshots from an instance.

    All snapshots are confirmed with a single prompt, then deleted in
    parallel. With --wait the command returns once every deletion is
    complete; -ww also shows a spinner while waiting.

    Examples:
        # Delete one snapshot, asking first
        snapctl snapshot delete web01 nightly

        # Delete two snapshots without asking and wait for both
        snapctl snapshot delete -f -w web01 nightly weekly
    """
    try:
        if not instance or not names:
            raise UsageError(CLIMessages.Error.MISSING_ARGUMENTS, command=COMMAND_NAME)

        try:
            options = SnapshotDeleteOptions(
                instance=instance,
                names=names,
                force=force,
                wait=wait,
            )
        except ValidationError as e:
            raise UsageError(
                f"{CLIMessages.Error.VALIDATION_ERROR}{_validation_message(e)}",
                command=COMMAND_NAME,
                original_error=e,
            ) from e

        exit_code = handle_snapshot_delete_command(options)

    except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
        exit_code = handle_cli_error(e, COMMAND_NAME)
        raise typer.Exit(exit_code) from e

    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)
