"""
snapctl Constants Module

This module provides centralized constants for the snapctl application.
All magic values and configuration constants are defined here to ensure
consistency and maintainability across the codebase.
"""

from .cli import CLICommands, CLIDefaults, CLIHelp, CLIMessages, CLIOptions
from .snapshot import SnapshotMessages, SnapshotState

__all__ = [
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "CLIOptions",
    "SnapshotMessages",
    "SnapshotState",
]
