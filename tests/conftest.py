"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from door_opener.remote.client import RemoteTriggerClient
from door_opener.settings_store import SettingsStore
from door_opener.trigger.controller import TriggerController


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InlineExecutor(Executor):
    """Run submitted work immediately on the calling thread."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as e:
            future.set_exception(e)
        return future


class DeferredExecutor(Executor):
    """Hold submitted work until the test runs it explicitly."""

    def __init__(self) -> None:
        self.pending: list[tuple[Future[Any], Callable[[], Any]]] = []

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        self.pending.append((future, lambda: fn(*args, **kwargs)))
        return future

    def run(self, index: int) -> None:
        future, work = self.pending[index]
        future.set_result(work())


class ManualScheduler:
    """Record scheduled callbacks instead of starting timers."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, Callable[[], None]]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self.calls.append((delay, callback))

    def fire_all(self) -> None:
        calls, self.calls = self.calls, []
        for _delay, callback in calls:
            callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    """Provide a temporary preferences file location."""
    return tmp_path / "door_state" / "prefs.json"


@pytest.fixture
def store(prefs_path: Path) -> SettingsStore:
    store = SettingsStore(prefs_path)
    store.save("http://10.0.0.5/open")
    return store


@pytest.fixture
def client() -> Mock:
    """Provide a stub trigger client that answers "OK"."""
    mock_client = Mock(spec=RemoteTriggerClient)
    mock_client.fire.return_value = "OK"
    return mock_client


@pytest.fixture
def controller(
    store: SettingsStore, client: Mock, clock: FakeClock, scheduler: ManualScheduler
) -> TriggerController:
    return TriggerController(
        store=store,
        client=client,
        executor=InlineExecutor(),
        clock=clock,
        schedule=scheduler,
    )


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()
