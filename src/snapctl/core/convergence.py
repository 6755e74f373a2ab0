"""Convergence wait for a single target.

The waiter does not poll by itself: the state-query collaborator blocks
until the target converges, fails or times out. The waiter owns the optional
progress indicator around that call and the timing notice after it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Collection
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Callable

from rich.console import Console

from snapctl.core.duration import human_duration_from_ms
from snapctl.shared.constants import SnapshotMessages
from snapctl.shared.errors import create_unexpected_state_error
from snapctl.shared.logging import log_operation_start, log_operation_success
from snapctl.shared.protocols import SnapshotApiProtocol

logger = logging.getLogger(__name__)

IndicatorFactory = Callable[[str], AbstractContextManager[Any]]


class ConvergenceWaiter:
    """Wait for one target to reach an acceptable terminal state.

    Args:
        api: State-query collaborator
        console: Console for the convergence notice
        indicator_factory: Builds a progress indicator from a description
        can_show_indicator: Whether an indicator is meaningful at all
            (false when output is not an interactive terminal)
        clock: Monotonic clock in seconds, shared with the batch start time
        messages: Message templates to render
    """

    def __init__(
        self,
        api: SnapshotApiProtocol,
        console: Console,
        *,
        indicator_factory: IndicatorFactory | None = None,
        can_show_indicator: bool = False,
        clock: Callable[[], float] = time.monotonic,
        messages: type[SnapshotMessages] = SnapshotMessages,
    ) -> None:
        self.api = api
        self.console = console
        self.indicator_factory = indicator_factory
        self.can_show_indicator = can_show_indicator
        self.clock = clock
        self.messages = messages

    def wait(
        self,
        resource_id: str,
        name: str,
        acceptable_states: Collection[str],
        batch_start: float,
        *,
        indicated: bool = False,
    ) -> int:
        """Block until ``name`` converges and report how long the batch took.

        Args:
            resource_id: Resolved id of the resource holding the target
            name: Target name
            acceptable_states: Non-empty set of states that end the wait
            batch_start: Clock reading taken when the batch began mutating
            indicated: Show a progress indicator while waiting

        Returns:
            Milliseconds elapsed since ``batch_start``

        Raises:
            ValueError: If acceptable_states is empty
            InternalConsistencyError: If the wait ends in any other state
            ConvergenceError: Propagated unchanged from the collaborator
        """
        states = frozenset(acceptable_states)
        if not states:
            msg = "acceptable_states must not be empty"
            raise ValueError(msg)

        log_operation_start(
            logger,
            "wait_for_states",
            {"target": name, "instance": resource_id, "states": sorted(states)},
        )

        with self._indicator(name, indicated=indicated):
            snapshot = self.api.wait_for_snapshot_states(resource_id, name, states)

        if snapshot.state not in states:
            raise create_unexpected_state_error(
                self.messages.UNEXPECTED_STATE.format(name=name),
                name,
                snapshot.state,
                states,
                instance=resource_id,
            )

        duration_ms = int((self.clock() - batch_start) * 1000)
        self.console.print(
            self.messages.CONVERGED.format(
                name=name,
                duration=human_duration_from_ms(duration_ms),
            ),
            markup=False,
            highlight=False,
        )
        log_operation_success(
            logger,
            "wait_for_states",
            duration_ms,
            result_info={"state": snapshot.state},
            context={"target": name, "instance": resource_id},
        )
        return duration_ms

    def _indicator(self, name: str, *, indicated: bool) -> AbstractContextManager[Any]:
        if indicated and self.can_show_indicator and self.indicator_factory is not None:
            return self.indicator_factory(self.messages.WAITING.format(name=name))
        return nullcontext()
