"""Trigger gate: cooldown state machine and the controller driving it."""

from door_opener.trigger.controller import StatusView, TriggerController
from door_opener.trigger.events import TriggerRequest, TriggerSource
from door_opener.trigger.state_machine import COOLDOWN_SECONDS, TriggerSnapshot, TriggerState

__all__ = [
    "COOLDOWN_SECONDS",
    "StatusView",
    "TriggerController",
    "TriggerRequest",
    "TriggerSnapshot",
    "TriggerSource",
    "TriggerState",
]
