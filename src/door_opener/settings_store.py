"""Persisted preferences for the door opener.

The only user-facing setting is the target URL. It is stored in a small JSON
object on disk so that it survives restarts, and the store is passed explicitly
to whatever needs it (no process-global preferences).
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TARGET_URL_KEY = "saved_url"


@dataclass
class SettingsStore:
    """Key/value preferences file holding the target URL.

    Any string is accepted and stored verbatim; no URL validation happens here.
    Unknown keys found in the file are preserved on save.
    """

    path: Path

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    def _read_unlocked(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Preferences file is not valid JSON", extra={"path": str(self.path)})
            return {}
        if not isinstance(raw, dict):
            logger.warning("Preferences file is not a JSON object", extra={"path": str(self.path)})
            return {}
        return raw

    def _write_unlocked(self, prefs: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(prefs, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        os.replace(tmp, self.path)

    def load(self) -> str:
        """Return the persisted target URL, or an empty string if never saved."""

        with self._lock:
            value = self._read_unlocked().get(TARGET_URL_KEY, "")
        return value if isinstance(value, str) else ""

    def save(self, url: str) -> None:
        """Persist the target URL; subsequent loads (and fresh stores) observe it."""

        with self._lock:
            prefs = self._read_unlocked()
            prefs[TARGET_URL_KEY] = url
            self._write_unlocked(prefs)
        logger.info("Target URL saved", extra={"path": str(self.path)})
