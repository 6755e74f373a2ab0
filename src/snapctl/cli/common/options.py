"""
Reusable Typer Options Module

This module provides reusable Typer options for the root callback and the
snapshot commands, so option names and help text live in one place.

Usage:
    def command(force: Annotated[bool, force_option] = False) -> None: ...
"""

from __future__ import annotations

import typer

from snapctl.shared.constants import CLIDefaults, CLIHelp, CLIOptions

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    CLIOptions.VERBOSE,
    CLIOptions.VERBOSE_SHORT,
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    CLIOptions.LOG_LEVEL,
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING.",
)

config_option = typer.Option(
    CLIOptions.CONFIG,
    help=CLIHelp.CONFIG_HELP,
    dir_okay=False,
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


# Version option - for main app only, handled while parsing
version_option = typer.Option(
    CLIOptions.VERSION,
    CLIOptions.VERSION_SHORT,
    help=CLIHelp.VERSION_HELP,
    callback=version_callback,
    is_eager=True,
)

force_option = typer.Option(
    CLIOptions.FORCE,
    CLIOptions.FORCE_SHORT,
    help=CLIHelp.DELETE_FORCE_HELP,
)

# Wait option - count-based: -w waits, -ww also shows a spinner
wait_option = typer.Option(
    CLIOptions.WAIT,
    CLIOptions.WAIT_SHORT,
    count=True,
    help=CLIHelp.DELETE_WAIT_HELP,
)
