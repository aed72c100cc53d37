from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

COOLDOWN_SECONDS = 5.0


class TriggerState(str, Enum):
    READY = "ready"
    COOLING_DOWN = "cooling_down"


ALLOWED_TRANSITIONS: dict[TriggerState, set[TriggerState]] = {
    TriggerState.READY: {TriggerState.COOLING_DOWN},
    TriggerState.COOLING_DOWN: {TriggerState.READY},
}


class IllegalTransitionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class TriggerSnapshot:
    """Gate state at a point in time.

    Invariant: ``state is COOLING_DOWN`` iff ``cooldown_expires_at`` is set.
    Expiry is measured on the controller's (monotonic) clock.
    """

    state: TriggerState = TriggerState.READY
    cooldown_expires_at: float | None = None

    @property
    def enabled(self) -> bool:
        return self.state is TriggerState.READY

    def to_json(self) -> dict[str, object]:
        return {
            "state": self.state.value,
            "enabled": self.enabled,
            "cooldown_expires_at": self.cooldown_expires_at,
        }


def transition(*, current: TriggerSnapshot, to: TriggerState, now: float) -> TriggerSnapshot:
    allowed = ALLOWED_TRANSITIONS.get(current.state, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.state.value} -> {to.value}")
    if to is TriggerState.COOLING_DOWN:
        return TriggerSnapshot(state=to, cooldown_expires_at=now + COOLDOWN_SECONDS)
    return TriggerSnapshot(state=to, cooldown_expires_at=None)


def is_expired(snapshot: TriggerSnapshot, *, now: float) -> bool:
    """True when a cooldown is recorded and its deadline has been reached."""

    return snapshot.cooldown_expires_at is not None and now >= snapshot.cooldown_expires_at
