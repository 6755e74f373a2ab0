"""Type definitions shared across snapctl layers."""

from snapctl.shared.types.cli import SnapshotDeleteOptions

__all__ = ["SnapshotDeleteOptions"]
