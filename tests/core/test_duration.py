"""Tests for human_duration_from_ms."""

import pytest

from snapctl.core.duration import human_duration_from_ms


class TestHumanDurationFromMs:
    """Two largest non-zero units, sub-second rounds down to 0s."""

    @pytest.mark.parametrize(
        ("ms", "expected"),
        [
            (0, "0s"),
            (500, "0s"),
            (999, "0s"),
            (1_000, "1s"),
            (59_999, "59s"),
            (65_000, "1m5s"),
            (120_000, "2m"),
            (3_600_000, "1h"),
            (3_605_000, "1h5s"),
            (3_661_000, "1h1m"),
            (86_400_000, "1d"),
            (90_061_000, "1d1h"),
            (2 * 86_400_000 + 30_000, "2d30s"),
        ],
    )
    def test_renders_two_largest_units(self, ms: int, expected: str) -> None:
        assert human_duration_from_ms(ms) == expected

    def test_accepts_float_milliseconds(self) -> None:
        assert human_duration_from_ms(65_000.9) == "1m5s"

    def test_negative_duration_raises(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            human_duration_from_ms(-1)
