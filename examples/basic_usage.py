#!/usr/bin/env python3
"""Programmatic door opening example.

This demonstrates using the door opener components directly:

* load settings from `.env`
* optionally save a new target URL to the preferences file
* fire the trigger once and print the result

Pass `--action OPEN_APP_FEATURE` or a `dooropener://openMainDoor` URI to go
through the launch-signal path instead of a manual press.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from door_opener.config import DoorOpenerSettings
from door_opener.launch import ExternalTriggerListener, LaunchContext
from door_opener.logging import configure_logging
from door_opener.runtime import DoorOpenerRuntime


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Open the door (programmatic example).")
    parser.add_argument("--url", default=None, help="Save this target URL before firing")
    parser.add_argument("--action", default=None, help="Launch action identifier (optional)")
    parser.add_argument("--uri", default=None, help="Deep-link URI (optional)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = DoorOpenerSettings()
    configure_logging(settings.log_level)

    with DoorOpenerRuntime(settings) as runtime:
        if args.url is not None:
            runtime.store.save(args.url)

        if args.action or args.uri:
            listener = ExternalTriggerListener(LaunchContext(action=args.action, uri=args.uri))
            future = listener.dispatch(runtime.controller)
        else:
            future = runtime.controller.request_trigger()

        if future is None:
            print(f"Nothing fired ({runtime.controller.status().label})")
            return 0

        print(future.result(timeout=30))
        print(f"Status: {runtime.controller.status().label}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
