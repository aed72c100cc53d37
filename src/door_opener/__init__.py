"""Door opener.

A local-first tool that fires one HTTP GET at a configured URL to open a door:
- the target URL is persisted in a small JSON preferences file
- triggers go through a fixed 5 second cooldown gate
- launch actions / deep links can fire the same trigger once per process
"""

__version__ = "0.1.0"

from door_opener.config import DoorOpenerSettings

__all__ = ["__version__", "DoorOpenerSettings"]
