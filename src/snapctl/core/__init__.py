"""Core batch logic: confirmation, parallel mutation and convergence wait."""

from snapctl.core.batch import BatchCoordinator
from snapctl.core.confirmation import ConfirmationGate, build_prompt
from snapctl.core.convergence import ConvergenceWaiter
from snapctl.core.duration import human_duration_from_ms
from snapctl.core.executor import MutationExecutor
from snapctl.core.models import (
    BatchOutcome,
    Confirmation,
    Target,
    TargetOutcome,
    WaitMode,
    WaitSpec,
)

__all__ = [
    "BatchCoordinator",
    "BatchOutcome",
    "Confirmation",
    "ConfirmationGate",
    "ConvergenceWaiter",
    "MutationExecutor",
    "Target",
    "TargetOutcome",
    "WaitMode",
    "WaitSpec",
    "build_prompt",
    "human_duration_from_ms",
]
