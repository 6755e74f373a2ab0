"""Batch coordinator: one confirmation, then every target in parallel.

State machine::

    Idle -> Confirming -> Aborted            (declined: no error, no mutation)
                       -> Executing -> Done  (every target runs to completion)

Targets never cancel each other. When several fail, every failure has
already been reported by its own notice and ``run`` raises the first one
in completion order; ``execute_all`` returns all of them instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from snapctl.core.confirmation import ConfirmationGate
from snapctl.core.executor import MutationExecutor
from snapctl.core.models import (
    BatchOutcome,
    Confirmation,
    Target,
    TargetOutcome,
    WaitSpec,
)
from snapctl.shared.logging import log_operation_start, log_operation_success

logger = logging.getLogger(__name__)


class BatchCoordinator:
    """Confirm once, then fan the mutation out over all targets.

    Args:
        gate: Confirmation gate asked before anything is mutated
        executor: Per-target mutation executor
        max_workers: Upper bound on concurrent targets (None = one thread per target)
    """

    def __init__(
        self,
        gate: ConfirmationGate,
        executor: MutationExecutor,
        *,
        max_workers: int | None = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self.gate = gate
        self.executor = executor
        self.max_workers = max_workers

    def run(
        self,
        targets: Sequence[Target],
        wait_spec: WaitSpec,
        *,
        forced: bool = False,
    ) -> BatchOutcome:
        """Confirm and execute the batch.

        Args:
            targets: Targets to mutate, each processed exactly once
            wait_spec: Wait behaviour shared by all targets
            forced: Skip the confirmation prompt

        Returns:
            The batch outcome; ``aborted`` is set when the prompt was declined

        Raises:
            Exception: The first per-target error in completion order
        """
        if not targets:
            return BatchOutcome()

        confirmation = self.gate.confirm([target.name for target in targets], forced=forced)
        if confirmation is Confirmation.ABORT:
            return BatchOutcome.from_abort()

        outcome = self.execute_all(targets, wait_spec)
        outcome.raise_for_failure()
        return outcome

    def execute_all(self, targets: Sequence[Target], wait_spec: WaitSpec) -> BatchOutcome:
        """Execute every target concurrently without confirming or raising.

        Args:
            targets: Targets to mutate
            wait_spec: Wait behaviour shared by all targets

        Returns:
            BatchOutcome with outcomes in input order and errors in completion order
        """
        if not targets:
            return BatchOutcome()

        batch_start = self.executor.clock()
        workers = self._worker_count(len(targets))
        log_operation_start(
            logger,
            "delete_batch",
            {"targets": len(targets), "workers": workers, "wait": wait_spec.mode.value},
        )

        outcomes: dict[int, TargetOutcome] = {}
        errors: list[Exception] = []

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="snapctl") as pool:
            future_to_index: dict[Future[TargetOutcome], int] = {
                pool.submit(self.executor.execute, target, wait_spec, batch_start): index
                for index, target in enumerate(targets)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                outcome = self._collect(future, targets[index])
                outcomes[index] = outcome
                if outcome.error is not None:
                    errors.append(outcome.error)

        result = BatchOutcome(
            outcomes=[outcomes[index] for index in range(len(targets))],
            errors=errors,
        )
        log_operation_success(
            logger,
            "delete_batch",
            int((self.executor.clock() - batch_start) * 1000),
            result_info={"succeeded": len(result.succeeded), "failed": len(result.failed)},
        )
        return result

    def _worker_count(self, target_count: int) -> int:
        if self.max_workers is None:
            return target_count
        return min(self.max_workers, target_count)

    @staticmethod
    def _collect(future: Future[TargetOutcome], target: Target) -> TargetOutcome:
        try:
            return future.result()
        except Exception as error:  # noqa: BLE001  # pylint: disable=broad-exception-caught
            # MutationExecutor.execute returns failures; reaching this means it was bypassed
            logger.exception("Worker for snapshot %s crashed", target.name)
            return TargetOutcome.failure(target, error)
