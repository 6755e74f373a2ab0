"""snapctl command-line interface."""

from snapctl.cli.typer_app import app

__all__ = ["app"]
