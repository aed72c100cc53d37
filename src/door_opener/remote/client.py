"""HTTP client that fires the door-open request.

This intentionally wraps `requests` to keep transport details out of the
controller and make tests easy (inject a session).
"""

from __future__ import annotations

import logging
from types import TracebackType

import requests

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response"


def format_error(exc: BaseException) -> str:
    """Render a failure the way it is shown in place of a response body."""

    return f"Error: {exc}"


class RemoteTriggerClient:
    """Send one GET per call and report the outcome as a display string.

    An empty body counts as absent and is reported as ``"No response"``, so a
    relay that answers with a bare 200 still shows something.

    Failures are reported through the return value (``"Error: <message>"``);
    :meth:`fire` does not raise for transport problems. No retries and no
    timeout override: the session's defaults apply.
    """

    def __init__(self, *, session: requests.Session | None = None) -> None:
        self._session = session or requests.Session()

    def fire(self, url: str) -> str:
        logger.info("Sending trigger request", extra={"url": url})
        try:
            response = self._session.get(url)
            response.raise_for_status()
        except (requests.RequestException, ValueError) as e:
            # ValueError covers URLs requests refuses before any I/O happens.
            logger.warning("Trigger request failed", extra={"url": url, "error": str(e)})
            return format_error(e)

        body = response.text
        logger.info(
            "Trigger request completed",
            extra={"url": url, "status_code": response.status_code, "bytes": len(body)},
        )
        return body or NO_RESPONSE

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> RemoteTriggerClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
