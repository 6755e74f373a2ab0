"""Shared data models for snapctl."""

from snapctl.shared.models.cloudapi import DeleteResult, Instance, Snapshot

__all__ = [
    "DeleteResult",
    "Instance",
    "Snapshot",
]
