"""Service protocols for dependency inversion.

This module defines Protocol interfaces so the core batch logic can drive
the CloudAPI client without importing from the services layer.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from snapctl.shared.models.cloudapi import DeleteResult, Snapshot


class SnapshotApiProtocol(Protocol):
    """Protocol for the snapshot collaborators of the delete batch.

    Implementations must be safe to call concurrently for distinct snapshot
    names of the same instance.

    Example:
        >>> from snapctl.services.cloudapi import CloudApiClient
        >>> api: SnapshotApiProtocol = CloudApiClient.from_settings(settings.api)
        >>> result = api.delete_instance_snapshot("web0", "nightly")
        >>> api.wait_for_snapshot_states(result.instance_id, "nightly", {"deleted"})
    """

    def delete_instance_snapshot(self, instance: str, name: str) -> DeleteResult:
        """Request deletion of a snapshot.

        Args:
            instance: Instance name, short id or UUID
            name: Snapshot name

        Returns:
            DeleteResult carrying the resolved instance UUID

        Raises:
            MutationError: If the delete request fails
        """

    def wait_for_snapshot_states(
        self,
        instance_id: str,
        name: str,
        states: Collection[str],
    ) -> Snapshot:
        """Block until the snapshot reaches one of ``states``.

        Args:
            instance_id: Resolved instance UUID
            name: Snapshot name
            states: Acceptable terminal states

        Returns:
            The snapshot as last observed

        Raises:
            ConvergenceError: If polling fails or times out
        """
