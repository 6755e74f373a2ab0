"""Protocol interfaces shared across layers."""

from snapctl.shared.protocols.services import SnapshotApiProtocol

__all__ = ["SnapshotApiProtocol"]
