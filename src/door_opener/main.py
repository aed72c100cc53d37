"""CLI entrypoint for the door opener.

Every command loads settings, configures logging, and works against the
persisted preferences file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

from pydantic import ValidationError

from door_opener import __version__
from door_opener.config import DoorOpenerSettings
from door_opener.launch import ExternalTriggerListener, LaunchContext
from door_opener.logging import configure_logging
from door_opener.runtime import DoorOpenerRuntime
from door_opener.shortcuts import render_desktop_entry, write_desktop_entry
from door_opener.trigger.controller import TriggerController
from door_opener.trigger.events import TriggerRequest, TriggerSource

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2
EXIT_TRIGGER_ERROR = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="door-opener",
        description="Open a door by firing one HTTP GET at a configured URL",
    )
    parser.add_argument("--version", action="version", version=f"door-opener {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    open_door = subparsers.add_parser("open", help="Fire the door request once")
    open_door.add_argument(
        "--wait",
        type=float,
        default=30.0,
        help="Seconds to wait for the response before giving up on displaying it",
    )

    launch = subparsers.add_parser(
        "launch",
        help="Start as if launched by a shortcut or deep link, and fire the trigger if asked to",
    )
    launch.add_argument(
        "--action",
        default=None,
        help="Launch action identifier (the shortcut uses OPEN_APP_FEATURE)",
    )
    launch.add_argument(
        "--uri",
        dest="uri_option",
        default=None,
        help="Deep-link URI, e.g. dooropener://openMainDoor",
    )
    launch.add_argument(
        "uri",
        nargs="?",
        default=None,
        help="Deep-link URI as a bare argument (what the desktop entry passes as %%u)",
    )
    launch.add_argument(
        "--wait",
        type=float,
        default=30.0,
        help="Seconds to wait for the response before giving up on displaying it",
    )

    set_url = subparsers.add_parser("set-url", help="Save the target URL")
    set_url.add_argument("url", help="URL to GET when the door is opened (stored verbatim)")

    subparsers.add_parser("show-url", help="Print the saved target URL")

    shortcut = subparsers.add_parser(
        "shortcut", help="Print or write the desktop shortcut for the open-door action"
    )
    shortcut.add_argument(
        "--output",
        default=None,
        help="File or directory to write the .desktop entry to (prints when omitted)",
    )
    shortcut.add_argument(
        "--exec",
        dest="executable",
        default="door-opener",
        help="Executable the shortcut should start",
    )

    return parser


def _await_result(future: Future[str], wait: float) -> int:
    try:
        result = future.result(timeout=wait)
    except FutureTimeoutError:
        print(f"No response within {wait:g}s; the request is still in flight", file=sys.stderr)
        return EXIT_TRIGGER_ERROR

    print(result)
    return EXIT_TRIGGER_ERROR if result.startswith("Error: ") else EXIT_OK


def _fire(controller: TriggerController, source: TriggerSource, wait: float) -> int:
    future = controller.request_trigger(TriggerRequest(source=source))
    if future is None:
        print(controller.status().label, file=sys.stderr)
        return EXIT_OK
    return _await_result(future, wait)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = DoorOpenerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIG

    configure_logging(settings.log_level)

    try:
        if args.command == "shortcut":
            if args.output is None:
                print(render_desktop_entry(executable=args.executable), end="")
                return EXIT_OK
            path = write_desktop_entry(Path(args.output), executable=args.executable)
            print(f"Wrote shortcut to {path}")
            return EXIT_OK

        with DoorOpenerRuntime(settings) as runtime:
            if args.command == "set-url":
                runtime.store.save(args.url)
                print(f"Saved target URL: {args.url}")
                return EXIT_OK

            if args.command == "show-url":
                print(runtime.store.load())
                return EXIT_OK

            if args.command == "open":
                return _fire(runtime.controller, TriggerSource.MANUAL, args.wait)

            if args.command == "launch":
                uri = args.uri_option or args.uri
                listener = ExternalTriggerListener(LaunchContext(action=args.action, uri=uri))
                future = listener.dispatch(runtime.controller)
                if future is None:
                    print(runtime.controller.status().label)
                    return EXIT_OK
                return _await_result(future, args.wait)

        logger.error("Unknown command", extra={"command": args.command})
        return EXIT_CONFIG

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
