"""
snapctl - Instance Snapshot Management

Command-line tool for deleting instance snapshots on a CloudAPI endpoint,
with a single confirmation for the whole batch, parallel execution and an
optional wait until every deletion has completed.
"""

from snapctl.shared.constants import CLIDefaults

__version__ = CLIDefaults.VERSION

__all__ = ["__version__"]
