"""
Progress Display Utility Module

This module provides the spinner shown while snapctl waits for a target to
converge. It wraps the Rich library's progress functionality behind a small
per-wait handle, the ProgressIndicator.

Several targets may wait at the same time, and Rich allows a single live
display per console. Each indicator is therefore one spinner task on a
display shared by its ProgressManager; the display starts when the first
indicator opens and stops when the last one closes.
"""

from __future__ import annotations

import threading
import types

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from typing_extensions import Self

# Spinner style per --wait intensity, starting at 2 (-ww)
INTENSITY_SPINNERS: tuple[str, ...] = ("dots", "dots12", "bouncingBall", "earth", "moon")


def spinner_for_intensity(intensity: int) -> str:
    """Pick the spinner style for a ``--wait`` repeat count.

    Args:
        intensity: Number of times ``--wait`` was given

    Returns:
        Name of a Rich spinner
    """
    index = max(0, min(intensity - 2, len(INTENSITY_SPINNERS) - 1))
    return INTENSITY_SPINNERS[index]


class ProgressIndicator:
    """A visible "work in progress" handle for exactly one wait.

    Created by ProgressManager.indicator() and used as a context manager;
    leaving the ``with`` block destroys it, whatever the exit path.
    """

    def __init__(self, manager: ProgressManager, description: str) -> None:
        self._manager = manager
        self.description = description
        self._task_id: TaskID | None = None
        self.started = False
        self.destroyed = False

    def start(self) -> None:
        if self.started:
            return
        self._task_id = self._manager._acquire(self.description)
        self.started = True

    def destroy(self) -> None:
        """Remove the indicator from the display. Safe to call twice."""
        if not self.started or self.destroyed:
            return
        self.destroyed = True
        self._manager._release(self._task_id)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.destroy()


class ProgressManager:
    """
    A wrapper around Rich's Progress class that hands out per-wait spinners.

    Args:
        console: Console the spinners are drawn on (stderr in the CLI)
        spinner_name: Rich spinner style
        disabled: If True, indicators are created and destroyed without
                  drawing anything. Useful for non-interactive output.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        spinner_name: str = INTENSITY_SPINNERS[0],
        disabled: bool = False,
    ) -> None:
        self.disabled = disabled
        self._progress = Progress(
            SpinnerColumn(spinner_name),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            disable=disabled,
            transient=True,
        )
        self._lock = threading.Lock()
        self._active = 0

    @property
    def active_count(self) -> int:
        """Number of indicators currently on the display."""
        return self._active

    def indicator(self, description: str) -> ProgressIndicator:
        """Create an indicator; it is shown once entered as a context manager.

        Example:
            >>> manager = ProgressManager()
            >>> with manager.indicator('Waiting for snapshot "nightly"'):
            ...     api.wait_for_snapshot_states(instance_id, "nightly", {"deleted"})
        """
        return ProgressIndicator(self, description)

    def _acquire(self, description: str) -> TaskID | None:
        with self._lock:
            self._active += 1
            if self.disabled:
                return None
            if self._active == 1:
                self._progress.start()
            return self._progress.add_task(description, total=None)

    def _release(self, task_id: TaskID | None) -> None:
        with self._lock:
            self._active -= 1
            if self.disabled:
                return
            try:
                if task_id is not None:
                    self._progress.remove_task(task_id)
            finally:
                if self._active == 0:
                    self._progress.stop()


def create_progress_manager(
    console: Console | None = None,
    *,
    intensity: int = 2,
    disabled: bool = False,
) -> ProgressManager:
    """
    Factory function to create a ProgressManager for a ``--wait`` intensity.

    Args:
        console: Console the spinners are drawn on
        intensity: Number of times ``--wait`` was given
        disabled: If True, progress display will be disabled

    Returns:
        A new ProgressManager instance
    """
    return ProgressManager(
        console,
        spinner_name=spinner_for_intensity(intensity),
        disabled=disabled,
    )
