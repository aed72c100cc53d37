from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TriggerSource(str, Enum):
    MANUAL = "manual"
    LAUNCH_ACTION = "launch_action"
    DEEP_LINK = "deep_link"
    HTTP = "http"


@dataclass(frozen=True, slots=True)
class TriggerRequest:
    """A request to open the door.

    Requests carry where they came from for logging only; the gate treats
    every source the same way.
    """

    source: TriggerSource = TriggerSource.MANUAL
