"""Cooldown-gated trigger controller.

All gate transitions go through one locked entry point, whether they come from
a trigger request, the re-enable timer, or a status read. The outbound request
runs on an executor and its result is marshalled back through a future
callback, so callers never block on the network.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from concurrent.futures import Executor, Future
from dataclasses import dataclass

from door_opener.remote.client import RemoteTriggerClient, format_error
from door_opener.settings_store import SettingsStore

from .events import TriggerRequest
from .state_machine import (
    COOLDOWN_SECONDS,
    TriggerSnapshot,
    TriggerState,
    is_expired,
    transition,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Scheduler = Callable[[float, Callable[[], None]], object]

READY_LABEL = "Open door"
COOLING_DOWN_LABEL = f"Wait {COOLDOWN_SECONDS:g}s"


def thread_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass(frozen=True, slots=True)
class StatusView:
    """What a front end needs to render the trigger button."""

    enabled: bool
    result: str
    label: str

    def to_json(self) -> dict[str, object]:
        return {"enabled": self.enabled, "result": self.result, "label": self.label}


StatusListener = Callable[[StatusView], None]


class TriggerController:
    """Forward at most one trigger per cooldown window to the remote client.

    Requests arriving while cooling down are dropped, not queued, and do not
    restart the timer. The cooldown is independent of the request: the gate
    can reopen before a slow request returns.
    """

    def __init__(
        self,
        *,
        store: SettingsStore,
        client: RemoteTriggerClient,
        executor: Executor,
        clock: Clock = time.monotonic,
        schedule: Scheduler = thread_timer,
    ) -> None:
        self._store = store
        self._client = client
        self._executor = executor
        self._clock = clock
        self._schedule = schedule

        self._lock = threading.Lock()
        self._snapshot = TriggerSnapshot()
        self._result = ""
        self._attempt = 0
        self._listeners: list[StatusListener] = []

    def add_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def request_trigger(self, request: TriggerRequest | None = None) -> Future[str] | None:
        """Fire the door request unless cooling down.

        Returns the future carrying the display result, or ``None`` when the
        request was dropped by the cooldown gate.
        """

        request = request or TriggerRequest()
        with self._lock:
            self._refresh_unlocked()
            if not self._snapshot.enabled:
                logger.info(
                    "Trigger ignored during cooldown",
                    extra={
                        "source": request.source.value,
                        "cooldown_expires_at": self._snapshot.cooldown_expires_at,
                    },
                )
                return None

            self._snapshot = transition(
                current=self._snapshot, to=TriggerState.COOLING_DOWN, now=self._clock()
            )
            self._attempt += 1
            attempt = self._attempt
            url = self._store.load()

        logger.info(
            "Trigger accepted",
            extra={"source": request.source.value, "attempt": attempt, "url": url},
        )
        self._schedule(COOLDOWN_SECONDS, self._on_cooldown_elapsed)
        self._notify()

        future = self._executor.submit(self._fire, url)
        future.add_done_callback(lambda f: self._on_result(attempt, f))
        return future

    def is_enabled(self) -> bool:
        return self.state() is TriggerState.READY

    def current_result(self) -> str:
        with self._lock:
            return self._result

    def state(self) -> TriggerState:
        with self._lock:
            changed = self._refresh_unlocked()
            state = self._snapshot.state
        if changed:
            self._notify()
        return state

    def status(self) -> StatusView:
        enabled = self.is_enabled()
        with self._lock:
            result = self._result
        return StatusView(
            enabled=enabled,
            result=result,
            label=READY_LABEL if enabled else COOLING_DOWN_LABEL,
        )

    def _refresh_unlocked(self) -> bool:
        now = self._clock()
        if self._snapshot.state is TriggerState.COOLING_DOWN and is_expired(self._snapshot, now=now):
            self._snapshot = transition(current=self._snapshot, to=TriggerState.READY, now=now)
            logger.debug("Cooldown elapsed")
            return True
        return False

    def _on_cooldown_elapsed(self) -> None:
        self.state()

    def _fire(self, url: str) -> str:
        try:
            return self._client.fire(url)
        except Exception as e:
            logger.exception("Trigger client raised", extra={"url": url})
            return format_error(e)

    def _on_result(self, attempt: int, future: Future[str]) -> None:
        if future.cancelled():
            return
        result = future.result()
        with self._lock:
            if attempt != self._attempt:
                logger.info(
                    "Discarding stale trigger result",
                    extra={"attempt": attempt, "latest_attempt": self._attempt},
                )
                return
            self._result = result
        self._notify()

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        if not listeners:
            return
        view = self.status()
        for listener in listeners:
            listener(view)
