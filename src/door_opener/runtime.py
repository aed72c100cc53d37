"""Wiring for one door opener process.

Builds the preferences store, the HTTP client, the worker pool and the trigger
controller from settings, and tears them down together.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor

from door_opener.config import DoorOpenerSettings
from door_opener.remote.client import RemoteTriggerClient
from door_opener.settings_store import SettingsStore
from door_opener.trigger.controller import TriggerController

logger = logging.getLogger(__name__)


class DoorOpenerRuntime:
    """Owns the long-lived collaborators of a door opener process.

    Collaborators passed in are used as-is and are not closed by :meth:`close`.
    """

    def __init__(
        self,
        settings: DoorOpenerSettings,
        *,
        client: RemoteTriggerClient | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.settings = settings
        self.store = SettingsStore(settings.settings_path)

        self._owns_client = client is None
        self._owns_executor = executor is None
        self.client = client or RemoteTriggerClient()
        self.executor = executor or ThreadPoolExecutor(
            max_workers=settings.max_workers, thread_name_prefix="door-trigger"
        )

        self.controller = TriggerController(
            store=self.store,
            client=self.client,
            executor=self.executor,
        )
        logger.debug("Runtime initialized", extra={"settings_path": str(settings.settings_path)})

    def close(self) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=False)
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> DoorOpenerRuntime:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()
