"""
snapctl CLI Main Entry Point

Console-script entry point: runs the Typer application and turns anything
that escapes it into an exit code.
"""

from __future__ import annotations

import logging
import sys

from snapctl.cli.common.error_handler import handle_cli_error
from snapctl.cli.typer_app import app
from snapctl.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


def main() -> int:
    """
    Main entry point for snapctl CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        app(prog_name="snapctl")
    except SystemExit as e:
        # Typer always ends with SystemExit; keep its code
        code = e.code
        if code is None:
            return CLIDefaults.EXIT_SUCCESS
        return code if isinstance(code, int) else CLIDefaults.EXIT_ERROR
    except KeyboardInterrupt as e:
        logger.info("Command interrupted by user")
        return handle_cli_error(e, "snapctl-main")
    except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
        # Handle unexpected errors with structured logging
        return handle_cli_error(e, "snapctl-main")
    return CLIDefaults.EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
