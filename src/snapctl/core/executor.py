"""Per-target mutation: delete one snapshot, then optionally wait for it."""

from __future__ import annotations

import logging
import time
from collections.abc import Collection
from typing import Callable

from rich.console import Console

from snapctl.core.convergence import ConvergenceWaiter
from snapctl.core.models import Target, TargetOutcome, WaitSpec
from snapctl.shared.constants import SnapshotMessages, SnapshotState
from snapctl.shared.errors import SnapctlError
from snapctl.shared.logging import log_operation_error
from snapctl.shared.protocols import SnapshotApiProtocol

logger = logging.getLogger(__name__)

DEFAULT_ACCEPTABLE_STATES: frozenset[str] = frozenset({SnapshotState.DELETED})


class MutationExecutor:
    """Run the mutation for one target and turn the result into an outcome.

    Errors never escape ``execute``: each one is reported for its own target
    and returned as a failed TargetOutcome, so sibling targets are unaffected.

    Args:
        api: Mutating collaborator
        waiter: Convergence waiter used when the batch waits
        console: Console for progress notices
        error_console: Console for per-target failure notices
        acceptable_states: States that end a wait successfully
        clock: Monotonic clock in seconds, shared with the batch start time
        messages: Message templates to render
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        api: SnapshotApiProtocol,
        waiter: ConvergenceWaiter,
        console: Console,
        *,
        error_console: Console | None = None,
        acceptable_states: Collection[str] = DEFAULT_ACCEPTABLE_STATES,
        clock: Callable[[], float] = time.monotonic,
        messages: type[SnapshotMessages] = SnapshotMessages,
    ) -> None:
        if not acceptable_states:
            msg = "acceptable_states must not be empty"
            raise ValueError(msg)
        self.api = api
        self.waiter = waiter
        self.console = console
        self.error_console = error_console or console
        self.acceptable_states = frozenset(acceptable_states)
        self.clock = clock
        self.messages = messages

    def execute(self, target: Target, wait_spec: WaitSpec, batch_start: float) -> TargetOutcome:
        """Process one target.

        Args:
            target: Target to mutate
            wait_spec: Wait behaviour for the batch
            batch_start: Clock reading taken when the batch began mutating

        Returns:
            Success with the elapsed milliseconds, or Failure with the error
        """
        try:
            duration_ms = self._run(target, wait_spec, batch_start)
        except Exception as error:  # noqa: BLE001  # pylint: disable=broad-exception-caught
            # Every error belongs to this target only; it is returned, not raised
            self._report_failure(target, error)
            return TargetOutcome.failure(target, error)

        return TargetOutcome.success(target, duration_ms)

    def _run(self, target: Target, wait_spec: WaitSpec, batch_start: float) -> int:
        result = self.api.delete_instance_snapshot(target.instance, target.name)

        self.console.print(
            self.messages.DISPATCHED.format(name=target.name, instance_id=result.instance_id),
            markup=False,
            highlight=False,
        )

        if not wait_spec.enabled:
            return int((self.clock() - batch_start) * 1000)

        return self.waiter.wait(
            result.instance_id,
            target.name,
            self.acceptable_states,
            batch_start,
            indicated=wait_spec.indicated,
        )

    def _report_failure(self, target: Target, error: Exception) -> None:
        message = error.message if isinstance(error, SnapctlError) else str(error)
        if f'"{target.name}"' not in message:
            message = self.messages.FAILED.format(name=target.name, error=message)
        self.error_console.print(message, markup=False, highlight=False)

        if isinstance(error, SnapctlError):
            log_operation_error(
                logger,
                error,
                operation="delete_snapshot",
                additional_context={"target": target.name, "instance": target.instance},
            )
        else:
            logger.error(
                "Unexpected error deleting snapshot %s of %s",
                target.name,
                target.instance,
                exc_info=error,
            )
