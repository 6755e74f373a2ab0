"""Tests for SnapshotDeleteOptions validation."""

import pytest
from pydantic import ValidationError

from snapctl.shared.types.cli import SnapshotDeleteOptions


def test_defaults() -> None:
    options = SnapshotDeleteOptions(instance=" web01 ", names=["b", "a"])

    assert options.instance == "web01"
    assert options.names == ["b", "a"]
    assert options.force is False
    assert options.wait == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"instance": "", "names": ["a"]},
        {"instance": "   ", "names": ["a"]},
        {"instance": "web01", "names": []},
        {"instance": "web01", "names": ["a", " "]},
        {"instance": "web01", "names": ["a"], "wait": -1},
    ],
)
def test_invalid_options(kwargs) -> None:
    with pytest.raises(ValidationError):
        SnapshotDeleteOptions(**kwargs)


def test_frozen() -> None:
    options = SnapshotDeleteOptions(instance="web01", names=["a"])

    with pytest.raises(ValidationError):
        options.force = True
