"""Launchable shortcut advertised to the desktop.

The shortcut is a freedesktop ``.desktop`` entry: the main entry opens the
status view, and a desktop action starts the process with the open-door action
identifier. The entry also claims the deep-link scheme so ``dooropener://``
URIs are routed to the same executable.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel, Field

from door_opener.launch import DEEP_LINK_SCHEME, OPEN_DOOR_ACTION

logger = logging.getLogger(__name__)

DESKTOP_FILE_NAME = "door-opener.desktop"

_NEEDS_QUOTING = re.compile(r"[\s\"'\\><~|&;$*?#()`]")


def quote_exec_arg(arg: str) -> str:
    """Quote one Exec argument the way the desktop entry spec expects (double quotes)."""

    if arg and not _NEEDS_QUOTING.search(arg):
        return arg
    escaped = re.sub(r"([\"`$\\])", r"\\\1", arg)
    return f'"{escaped}"'


class ShortcutDefinition(BaseModel):
    """One launchable shortcut bound to the open-door action."""

    shortcut_id: str = Field(default="open_door", description="Stable shortcut identifier")
    short_label: str = Field(default="Open door")
    long_label: str = Field(default="Open the main door")
    icon: str = Field(default="door-open", description="Icon name or absolute path")
    action: str = Field(default=OPEN_DOOR_ACTION)


def render_desktop_entry(
    shortcut: ShortcutDefinition | None = None,
    *,
    executable: str = "door-opener",
) -> str:
    """Render the ``.desktop`` entry text for ``shortcut``."""

    shortcut = shortcut or ShortcutDefinition()
    exe = quote_exec_arg(executable)
    action_key = shortcut.shortcut_id.replace("_", "-")

    lines = [
        "[Desktop Entry]",
        "Type=Application",
        "Version=1.0",
        "Name=Door opener",
        f"Comment={shortcut.long_label}",
        f"Icon={shortcut.icon}",
        f"Exec={exe} launch %u",
        "Terminal=false",
        f"MimeType=x-scheme-handler/{DEEP_LINK_SCHEME};",
        f"Actions={action_key};",
        "",
        f"[Desktop Action {action_key}]",
        f"Name={shortcut.short_label}",
        f"Comment={shortcut.long_label}",
        f"Icon={shortcut.icon}",
        f"Exec={exe} launch --action {quote_exec_arg(shortcut.action)}",
        "",
    ]
    return "\n".join(lines)


def write_desktop_entry(
    path: Path,
    shortcut: ShortcutDefinition | None = None,
    *,
    executable: str = "door-opener",
) -> Path:
    """Write the entry to ``path`` (a directory gets the default file name)."""

    if path.is_dir():
        path = path / DESKTOP_FILE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_desktop_entry(shortcut, executable=executable), encoding="utf-8")
    logger.info("Shortcut written", extra={"path": str(path)})
    return path
