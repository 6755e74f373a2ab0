"""Tests for WaitSpec, TargetOutcome and BatchOutcome."""

import pytest

from snapctl.core.models import (
    BatchOutcome,
    Target,
    TargetOutcome,
    WaitMode,
    WaitSpec,
)
from snapctl.shared.errors import ErrorCode, MutationError


class TestWaitSpec:
    """--wait repeat count to wait behaviour."""

    @pytest.mark.parametrize(
        ("count", "mode", "enabled", "indicated"),
        [
            (0, WaitMode.NONE, False, False),
            (1, WaitMode.PLAIN, True, False),
            (2, WaitMode.INDICATED, True, True),
            (5, WaitMode.INDICATED, True, True),
        ],
    )
    def test_from_count(self, count: int, mode: WaitMode, enabled: bool, indicated: bool) -> None:
        wait_spec = WaitSpec.from_count(count)

        assert wait_spec.mode is mode
        assert wait_spec.enabled is enabled
        assert wait_spec.indicated is indicated

    def test_indicated_keeps_intensity(self) -> None:
        assert WaitSpec.from_count(3).intensity == 3

    def test_negative_count_raises(self) -> None:
        with pytest.raises(ValueError):
            WaitSpec.from_count(-1)

    def test_indicated_requires_intensity_two(self) -> None:
        with pytest.raises(ValueError):
            WaitSpec(WaitMode.INDICATED, 1)


class TestBatchOutcome:
    """Aggregate success and first-error surfacing."""

    def test_empty_outcome_is_ok(self) -> None:
        outcome = BatchOutcome()

        assert outcome.ok
        assert not outcome.aborted
        assert outcome.first_error is None
        outcome.raise_for_failure()

    def test_abort_is_not_a_failure(self) -> None:
        outcome = BatchOutcome.from_abort()

        assert outcome.aborted
        assert outcome.ok
        outcome.raise_for_failure()

    def test_raise_for_failure_raises_first_error(self) -> None:
        # Given
        first = MutationError(ErrorCode.SNAPSHOT_DELETE_FAILED, "first")
        second = MutationError(ErrorCode.SNAPSHOT_DELETE_FAILED, "second")
        a, b, c = Target("web", "a"), Target("web", "b"), Target("web", "c")
        outcome = BatchOutcome(
            outcomes=[
                TargetOutcome.success(a, 10),
                TargetOutcome.failure(b, second),
                TargetOutcome.failure(c, first),
            ],
            errors=[first, second],
        )

        # When & Then
        assert not outcome.ok
        assert [item.target for item in outcome.succeeded] == [a]
        assert [item.target for item in outcome.failed] == [b, c]
        with pytest.raises(MutationError) as exc_info:
            outcome.raise_for_failure()
        assert exc_info.value is first
