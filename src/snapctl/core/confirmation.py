"""Confirmation gate for destructive batches.

The gate asks a single yes/no question for the whole batch. Anything other
than the literal affirmative answer yields ``Confirmation.ABORT``, which the
caller treats as a successful no-op rather than an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import IO

from rich.console import Console

from snapctl.core.models import Confirmation
from snapctl.shared.constants import SnapshotMessages

logger = logging.getLogger(__name__)


def build_prompt(
    target_names: Sequence[str],
    messages: type[SnapshotMessages] = SnapshotMessages,
) -> str:
    """Build the pluralised confirmation prompt.

    Args:
        target_names: Names of the targets about to be mutated
        messages: Message templates to render

    Returns:
        Prompt text, ending with ``[y/n] ``
    """
    if len(target_names) == 1:
        return messages.CONFIRM_ONE.format(name=target_names[0])
    return messages.CONFIRM_MANY.format(
        count=len(target_names),
        names=", ".join(target_names),
    )


class ConfirmationGate:
    """Single yes/no confirmation in front of a batch.

    Args:
        console: Console the prompt is written to
        error_console: Console the cancellation notice is written to
        input_stream: Optional stream to read the answer from (stdin by default)
        messages: Message templates to render
    """

    def __init__(
        self,
        console: Console,
        error_console: Console | None = None,
        input_stream: IO[str] | None = None,
        messages: type[SnapshotMessages] = SnapshotMessages,
    ) -> None:
        self.console = console
        self.error_console = error_console or console
        self.input_stream = input_stream
        self.messages = messages

    def confirm(self, target_names: Sequence[str], *, forced: bool = False) -> Confirmation:
        """Ask whether the batch should proceed.

        Args:
            target_names: Names of the targets about to be mutated
            forced: Skip the prompt and proceed

        Returns:
            Confirmation.PROCEED or Confirmation.ABORT
        """
        if forced:
            logger.debug("Confirmation skipped (forced) for %d target(s)", len(target_names))
            return Confirmation.PROCEED

        prompt = build_prompt(target_names, self.messages)
        try:
            answer = self.console.input(prompt, markup=False, stream=self.input_stream)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            answer = ""

        if answer.strip() != self.messages.AFFIRMATIVE:
            self.error_console.print(self.messages.ABORTING, markup=False, highlight=False)
            logger.info("Batch declined at confirmation prompt")
            return Confirmation.ABORT

        return Confirmation.PROCEED
