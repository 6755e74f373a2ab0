"""Core data models for the snapshot delete batch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Confirmation(str, Enum):
    """Answer of the confirmation gate.

    ``ABORT`` is a normal result: the batch ends successfully without
    touching any target.
    """

    PROCEED = "proceed"
    ABORT = "abort"


class WaitMode(str, Enum):
    """How the batch waits for each target to converge."""

    NONE = "none"
    PLAIN = "plain"
    INDICATED = "indicated"


MIN_INDICATOR_INTENSITY = 2


@dataclass(frozen=True)
class WaitSpec:
    """Wait behaviour shared read-only by every target of a batch.

    Attributes:
        mode: NONE, PLAIN or INDICATED
        intensity: Repeat count of ``--wait``; at least 2 when INDICATED
    """

    mode: WaitMode = WaitMode.NONE
    intensity: int = 0

    def __post_init__(self) -> None:
        if self.mode is WaitMode.INDICATED and self.intensity < MIN_INDICATOR_INTENSITY:
            msg = f"Indicated wait needs intensity >= {MIN_INDICATOR_INTENSITY}, got {self.intensity}"
            raise ValueError(msg)

    @classmethod
    def from_count(cls, count: int) -> WaitSpec:
        """Build a WaitSpec from how many times ``--wait`` was given.

        Args:
            count: 0 for no wait, 1 for a silent wait, 2+ for a spinner

        Returns:
            The matching WaitSpec

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            msg = f"Wait count cannot be negative: {count}"
            raise ValueError(msg)
        if count == 0:
            return cls()
        if count == 1:
            return cls(WaitMode.PLAIN, 1)
        return cls(WaitMode.INDICATED, count)

    @property
    def enabled(self) -> bool:
        return self.mode is not WaitMode.NONE

    @property
    def indicated(self) -> bool:
        return self.mode is WaitMode.INDICATED


@dataclass(frozen=True)
class Target:
    """One snapshot to delete.

    Attributes:
        instance: Instance name, short id or UUID as given on the command line
        name: Snapshot name
    """

    instance: str
    name: str


@dataclass(frozen=True)
class TargetOutcome:
    """Result of processing one target: a success with its duration or a failure."""

    target: Target
    duration_ms: int | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, target: Target, duration_ms: int) -> TargetOutcome:
        return cls(target=target, duration_ms=duration_ms)

    @classmethod
    def failure(cls, target: Target, error: Exception) -> TargetOutcome:
        return cls(target=target, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchOutcome:
    """Aggregate result of a batch.

    Attributes:
        outcomes: Per-target outcomes, in input order
        errors: Per-target errors, in completion order
        aborted: True when the confirmation gate declined the batch
    """

    outcomes: list[TargetOutcome] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)
    aborted: bool = False

    @classmethod
    def from_abort(cls) -> BatchOutcome:
        return cls(aborted=True)

    @property
    def ok(self) -> bool:
        """True iff every target succeeded (an aborted batch is not a failure)."""
        return not self.errors

    @property
    def first_error(self) -> Exception | None:
        return self.errors[0] if self.errors else None

    @property
    def succeeded(self) -> list[TargetOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> list[TargetOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    def raise_for_failure(self) -> None:
        """Raise the first error in completion order, if any target failed."""
        if self.first_error is not None:
            raise self.first_error
