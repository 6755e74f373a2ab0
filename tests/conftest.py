"""
Pytest configuration and shared fixtures for snapctl tests.

This module provides common fixtures and configuration that can be used
across all test modules in the project.
"""

from __future__ import annotations

import io
import os
import threading
from collections.abc import Callable, Collection, Generator
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from snapctl.cli.common.context import clear_cli_context
from snapctl.config import reset_settings
from snapctl.shared.constants import SnapshotState
from snapctl.shared.models.cloudapi import DeleteResult, Snapshot

INSTANCE_ID = "b6979942-7d5d-4fe6-a2ec-b812e950625a"


class FakeSnapshotApi:
    """In-memory stand-in for CloudApiClient that records every call.

    Args:
        delete_errors: Snapshot name -> exception raised by the delete
        wait_errors: Snapshot name -> exception raised by the wait
        wait_states: Snapshot name -> state returned by the wait (default "deleted")
        on_wait: Called with the snapshot name before the wait returns
    """

    def __init__(
        self,
        *,
        delete_errors: dict[str, Exception] | None = None,
        wait_errors: dict[str, Exception] | None = None,
        wait_states: dict[str, str] | None = None,
        on_wait: Callable[[str], None] | None = None,
        instance_id: str = INSTANCE_ID,
    ) -> None:
        self.delete_errors = delete_errors or {}
        self.wait_errors = wait_errors or {}
        self.wait_states = wait_states or {}
        self.on_wait = on_wait
        self.instance_id = instance_id
        self.calls: list[tuple[str, str]] = []
        self.wait_requests: list[tuple[str, str, frozenset[str]]] = []
        self._lock = threading.Lock()

    def _record(self, kind: str, name: str) -> None:
        with self._lock:
            self.calls.append((kind, name))

    def names(self, kind: str) -> list[str]:
        return [name for call_kind, name in self.calls if call_kind == kind]

    def delete_instance_snapshot(self, instance: str, name: str) -> DeleteResult:
        self._record("delete", name)
        if name in self.delete_errors:
            raise self.delete_errors[name]
        return DeleteResult(instance_id=self.instance_id, name=name)

    def wait_for_snapshot_states(
        self,
        instance_id: str,
        name: str,
        states: Collection[str],
    ) -> Snapshot:
        self._record("wait", name)
        with self._lock:
            self.wait_requests.append((instance_id, name, frozenset(states)))
        if self.on_wait is not None:
            self.on_wait(name)
        if name in self.wait_errors:
            raise self.wait_errors[name]
        return Snapshot(name=name, state=self.wait_states.get(name, SnapshotState.DELETED))


class FakeClock:
    """Monotonic clock under test control (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingIndicators:
    """Indicator factory that counts how often each indicator is opened and closed."""

    def __init__(self) -> None:
        self.created: list[str] = []
        self.destroyed: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, description: str) -> Any:
        indicators = self

        class _Indicator:
            def __enter__(self) -> _Indicator:
                with indicators._lock:
                    indicators.created.append(description)
                return self

            def __exit__(self, *exc: object) -> None:
                with indicators._lock:
                    indicators.destroyed.append(description)

        return _Indicator()


def make_console() -> tuple[Console, io.StringIO]:
    """Create a non-interactive Rich console shaped like the CLI ones, writing into a buffer."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        force_terminal=False,
        color_system=None,
        width=80,
        soft_wrap=True,
        highlight=False,
    )
    return console, buffer


@pytest.fixture
def fake_api_factory() -> type[FakeSnapshotApi]:
    """Return the FakeSnapshotApi class so tests can configure failures."""
    return FakeSnapshotApi


@pytest.fixture
def fake_api() -> FakeSnapshotApi:
    """A FakeSnapshotApi where every delete and wait succeeds."""
    return FakeSnapshotApi()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def indicators() -> RecordingIndicators:
    return RecordingIndicators()


@pytest.fixture
def console_pair() -> tuple[Console, io.StringIO]:
    """Console and the buffer it writes to."""
    return make_console()


@pytest.fixture
def error_console_pair() -> tuple[Console, io.StringIO]:
    """Second console for failure notices, kept apart from the main one."""
    return make_console()


@pytest.fixture(autouse=True)
def _isolate_global_state(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[None, None, None]:
    """Run each test in an empty directory with no SNAPCTL_ variables or cached state."""
    for key in list(os.environ):
        if key.startswith("SNAPCTL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    reset_settings()
    clear_cli_context()
    yield
    reset_settings()
    clear_cli_context()
