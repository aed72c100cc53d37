"""FastAPI adapter for the door opener.

Design intent:
- Keep trigger/cooldown logic in `door_opener.trigger`
- Keep server-specific concerns (routing, CORS, status codes) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from door_opener.server.app import create_app
