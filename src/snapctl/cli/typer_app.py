"""
snapctl Typer CLI Application

This is the main Typer-based CLI application for snapctl.
It provides a type-safe command-line interface with automatic
help generation and shell completion.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from snapctl.cli.common.context import CliContext, LogLevel, set_cli_context
from snapctl.cli.common.error_handler import handle_cli_error
from snapctl.cli.common.options import (
    config_option,
    log_level_option,
    verbose_option,
    version_option,
)
from snapctl.cli.snapshot_delete_handler import snapshot_delete_command
from snapctl.config import reload_settings
from snapctl.shared.constants import CLICommands, CLIDefaults, CLIHelp
from snapctl.shared.logging import setup_structured_logger

# Version information
__version__ = CLIDefaults.VERSION

CONTEXT_SETTINGS = {"help_option_names": list(CLIDefaults.HELP_OPTION_NAMES)}


def main_callback(
    verbose: int,
    log_level: LogLevel | None,
    config: Path | None,
) -> None:
    """
    Main callback function for processing common options.

    This function is called before any command is executed. It loads the
    settings, sets up the global CLI context and configures logging.

    Args:
        verbose: Verbosity level (count-based)
        log_level: Logging level given on the command line, if any
        config: Explicit configuration file, if any
    """
    settings = reload_settings(config)

    context = CliContext(
        verbose=verbose,
        log_level=log_level or LogLevel(settings.logging.level),
        config_path=config,
    )
    set_cli_context(context)

    setup_structured_logger(
        "snapctl",
        level=context.get_effective_log_level(),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )


# Create the main Typer app with callback
app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    context_settings=CONTEXT_SETTINGS,
)

snapshot_app = typer.Typer(
    name=CLICommands.SNAPSHOT,
    help=CLIHelp.SNAPSHOT_DESCRIPTION,
    no_args_is_help=True,
    context_settings=CONTEXT_SETTINGS,
)
snapshot_app.command(CLICommands.DELETE)(snapshot_delete_command)
snapshot_app.command(CLICommands.DELETE_ALIAS, hidden=True)(snapshot_delete_command)

app.add_typer(snapshot_app, name=CLICommands.SNAPSHOT)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[Optional[LogLevel], log_level_option] = None,
    config: Annotated[Optional[Path], config_option] = None,
    version: Annotated[bool, version_option] = False,  # pylint: disable=unused-argument
) -> None:
    """Main CLI callback with error handling."""
    try:
        # Process the common options
        main_callback(verbose, log_level, config)
    except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
        exit_code = handle_cli_error(e, "main-callback")
        raise typer.Exit(exit_code) from e
