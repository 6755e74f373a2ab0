"""
CLI Configuration Constants

This module contains all constants related to command-line interface
configuration, default values, and user interaction settings.
"""

from typing import Literal


class CLIMessages:
    """CLI message templates."""

    class Error:
        """Error message templates."""

        VALIDATION_ERROR = "Validation error: "
        UNEXPECTED_ERROR = "Unexpected error: "
        MISSING_ARGUMENTS = "missing <inst> and <snapname> argument(s)"

    class CommandNames:
        """Command names used in error messages and logging."""

        SNAPSHOT_DELETE = "snapshot delete"

    class Info:
        """Info message templates."""

        COMMAND_STARTED = "Starting {command} command"
        COMMAND_COMPLETED = "Completed {command} command"


class CLIOptions:
    """CLI option names and flags."""

    # Common options
    VERBOSE = "--verbose"
    VERBOSE_SHORT = "-v"
    LOG_LEVEL = "--log-level"
    CONFIG = "--config"
    VERSION = "--version"
    VERSION_SHORT = "-V"
    HELP = "--help"
    HELP_SHORT = "-h"

    # Snapshot delete options
    FORCE = "--force"
    FORCE_SHORT = "-f"
    WAIT = "--wait"
    WAIT_SHORT = "-w"


class CLICommands:
    """CLI command names."""

    SNAPSHOT = "snapshot"
    DELETE = "delete"
    DELETE_ALIAS = "rm"


class CLIHelp:
    """CLI help text and descriptions."""

    VERSION_HELP = "Print version information and exit."
    VERSION_TEXT = "snapctl v{version}"

    APP_NAME = "snapctl"
    APP_DESCRIPTION = "snapctl - manage instance snapshots on a CloudAPI endpoint"
    APP_STYLE: Literal["rich"] = "rich"

    SNAPSHOT_DESCRIPTION = "Manage instance snapshots."

    DELETE_INSTANCE_HELP = "Instance name, short id or UUID."
    DELETE_NAMES_HELP = "Snapshot name(s) to delete."
    DELETE_FORCE_HELP = "Skip confirmation of delete."
    DELETE_WAIT_HELP = "Wait for the deletion to complete. Use multiple times for a spinner."
    CONFIG_HELP = "Path to a TOML configuration file."


class CLIDefaults:
    """CLI default values."""

    VERSION = "0.1.0"

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_USAGE = 2
    EXIT_INTERRUPTED = 130

    HELP_OPTION_NAMES = ("-h", "--help")
