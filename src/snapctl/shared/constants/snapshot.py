"""
Snapshot Constants

States reported by CloudAPI for instance snapshots and the user-facing
notice templates used by the snapshot delete batch.
"""

from typing import Final


class SnapshotState:
    """Snapshot states as reported by CloudAPI."""

    QUEUED: Final = "queued"
    CREATED: Final = "created"
    FAILED: Final = "failed"
    DELETED: Final = "deleted"


class SnapshotMessages:
    """Notice templates for the snapshot delete command."""

    NOUN = "snapshot"
    NOUN_PLURAL = "snapshots"

    CONFIRM_ONE = 'Delete snapshot "{name}"? [y/n] '
    CONFIRM_MANY = "Delete {count} snapshots ({names})? [y/n] "
    AFFIRMATIVE = "y"
    ABORTING = "Aborting"

    DISPATCHED = 'Deleting snapshot "{name}" of instance "{instance_id}"'
    CONVERGED = 'Deleted snapshot "{name}" in {duration}'
    UNEXPECTED_STATE = 'Failed to delete snapshot "{name}"'
    FAILED = 'Failed to delete snapshot "{name}": {error}'
    WAITING = 'Waiting for snapshot "{name}"'
