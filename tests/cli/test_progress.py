"""Tests for the shared spinner display."""

import pytest

from snapctl.cli.progress import (
    INTENSITY_SPINNERS,
    ProgressManager,
    create_progress_manager,
    spinner_for_intensity,
)


class TestSpinnerForIntensity:
    @pytest.mark.parametrize(
        ("intensity", "expected"),
        [
            (0, INTENSITY_SPINNERS[0]),
            (2, INTENSITY_SPINNERS[0]),
            (3, INTENSITY_SPINNERS[1]),
            (99, INTENSITY_SPINNERS[-1]),
        ],
    )
    def test_intensity_selects_spinner(self, intensity: int, expected: str) -> None:
        assert spinner_for_intensity(intensity) == expected


class TestProgressIndicator:
    """Each indicator is created once and destroyed exactly once."""

    def test_context_manager_starts_and_destroys(self) -> None:
        manager = ProgressManager(disabled=True)

        with manager.indicator("Waiting") as indicator:
            assert indicator.started
            assert manager.active_count == 1

        assert indicator.destroyed
        assert manager.active_count == 0

    def test_destroyed_on_error(self) -> None:
        manager = ProgressManager(disabled=True)

        with pytest.raises(RuntimeError):
            with manager.indicator("Waiting") as indicator:
                raise RuntimeError("wait failed")

        assert indicator.destroyed
        assert manager.active_count == 0

    def test_destroy_is_idempotent(self) -> None:
        manager = ProgressManager(disabled=True)
        indicator = manager.indicator("Waiting")
        indicator.start()

        indicator.destroy()
        indicator.destroy()

        assert manager.active_count == 0

    def test_destroy_without_start_is_noop(self) -> None:
        manager = ProgressManager(disabled=True)
        indicator = manager.indicator("Waiting")

        indicator.destroy()

        assert not indicator.destroyed
        assert manager.active_count == 0


class TestProgressManager:
    def test_concurrent_indicators_share_one_display(self, console_pair, mocker) -> None:
        # Given
        console, _ = console_pair
        manager = create_progress_manager(console, intensity=2)
        start = mocker.patch.object(manager._progress, "start")
        stop = mocker.patch.object(manager._progress, "stop")

        # When: 두 인디케이터가 겹쳐도 디스플레이는 하나
        with manager.indicator('Waiting for snapshot "a"'):
            with manager.indicator('Waiting for snapshot "b"'):
                assert manager.active_count == 2
            stop.assert_not_called()

        # Then
        start.assert_called_once()
        stop.assert_called_once()
        assert manager._progress.tasks == []

    def test_disabled_manager_never_draws(self, mocker) -> None:
        manager = create_progress_manager(disabled=True)
        start = mocker.patch.object(manager._progress, "start")

        with manager.indicator("Waiting"):
            pass

        start.assert_not_called()
