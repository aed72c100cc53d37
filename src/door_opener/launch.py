"""Launch-time external trigger detection.

A process may be started by a shortcut (launch action identifier) or by a deep
link such as ``dooropener://openMainDoor``. Either one means "open the door
now", and it is honoured once per process start.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from urllib.parse import urlsplit

from door_opener.trigger.controller import TriggerController
from door_opener.trigger.events import TriggerRequest, TriggerSource

logger = logging.getLogger(__name__)

OPEN_DOOR_ACTION = "OPEN_APP_FEATURE"
OPEN_DOOR_HOST = "openMainDoor"
DEEP_LINK_SCHEME = "dooropener"


@dataclass(frozen=True, slots=True)
class LaunchContext:
    """What the process was started with."""

    action: str | None = None
    uri: str | None = None


def uri_host(uri: str) -> str:
    """Host component of ``uri`` with its original casing.

    ``urlsplit(...).hostname`` lowercases, and the recognized host is
    case-sensitive, so the netloc is trimmed by hand.
    """

    netloc = urlsplit(uri).netloc
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        return host.partition("]")[0] + "]"
    return host.partition(":")[0]


def matches_action(action: str | None) -> bool:
    return action is not None and OPEN_DOOR_ACTION in action


def matches_deep_link(uri: str | None) -> bool:
    return uri is not None and uri_host(uri) == OPEN_DOOR_HOST


def detect_external_signal(context: LaunchContext) -> TriggerSource | None:
    """Return the source that asked for a trigger, or ``None``.

    The action identifier wins when both are present; either way the result is
    a single signal.
    """

    if matches_action(context.action):
        return TriggerSource.LAUNCH_ACTION
    if matches_deep_link(context.uri):
        return TriggerSource.DEEP_LINK
    return None


class ExternalTriggerListener:
    """Turn the launch signal into at most one trigger request.

    Calling :meth:`dispatch` again (re-created views, reloaded configuration)
    never fires a second request for the same process start.
    """

    def __init__(self, context: LaunchContext) -> None:
        self._source = detect_external_signal(context)
        self._consumed = False
        self._lock = threading.Lock()

    @property
    def signalled(self) -> bool:
        return self._source is not None

    def dispatch(self, controller: TriggerController) -> Future[str] | None:
        with self._lock:
            if self._source is None or self._consumed:
                return None
            self._consumed = True
            source = self._source

        logger.info("External trigger signal received", extra={"source": source.value})
        return controller.request_trigger(TriggerRequest(source=source))
