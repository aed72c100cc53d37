"""Unit tests for launch-time external trigger detection."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from door_opener.launch import (
    OPEN_DOOR_ACTION,
    ExternalTriggerListener,
    LaunchContext,
    detect_external_signal,
    uri_host,
)
from door_opener.trigger.controller import TriggerController
from door_opener.trigger.events import TriggerRequest, TriggerSource


@pytest.mark.parametrize(
    ("uri", "host"),
    [
        ("dooropener://openMainDoor", "openMainDoor"),
        ("dooropener://openMainDoor/extra?x=1", "openMainDoor"),
        ("dooropener://user@openMainDoor:99", "openMainDoor"),
        ("https://[::1]:8080/open", "[::1]"),
        ("not a uri", ""),
    ],
)
def test_uri_host_keeps_case(uri: str, host: str) -> None:
    assert uri_host(uri) == host


def test_detect_external_signal() -> None:
    assert detect_external_signal(LaunchContext()) is None
    assert detect_external_signal(LaunchContext(action="android.intent.action.MAIN")) is None
    assert (
        detect_external_signal(LaunchContext(action=OPEN_DOOR_ACTION))
        == TriggerSource.LAUNCH_ACTION
    )
    assert (
        detect_external_signal(LaunchContext(action=f"com.example.{OPEN_DOOR_ACTION}"))
        == TriggerSource.LAUNCH_ACTION
    )
    assert (
        detect_external_signal(LaunchContext(uri="dooropener://openMainDoor"))
        == TriggerSource.DEEP_LINK
    )
    assert detect_external_signal(LaunchContext(uri="dooropener://openmaindoor")) is None
    assert detect_external_signal(LaunchContext(uri="dooropener://openBackDoor")) is None


def test_action_wins_when_both_are_present() -> None:
    ctx = LaunchContext(action=OPEN_DOOR_ACTION, uri="dooropener://openMainDoor")
    assert detect_external_signal(ctx) == TriggerSource.LAUNCH_ACTION


def test_recognized_action_fires_exactly_once() -> None:
    controller = Mock(spec=TriggerController)
    listener = ExternalTriggerListener(LaunchContext(action=OPEN_DOOR_ACTION))

    assert listener.signalled is True
    listener.dispatch(controller)
    listener.dispatch(controller)
    listener.dispatch(controller)

    controller.request_trigger.assert_called_once_with(
        TriggerRequest(source=TriggerSource.LAUNCH_ACTION)
    )


def test_no_signal_fires_nothing() -> None:
    controller = Mock(spec=TriggerController)
    listener = ExternalTriggerListener(LaunchContext(action="android.intent.action.MAIN"))

    assert listener.signalled is False
    assert listener.dispatch(controller) is None
    controller.request_trigger.assert_not_called()


def test_both_signals_make_one_network_call(controller, client) -> None:
    listener = ExternalTriggerListener(
        LaunchContext(action=OPEN_DOOR_ACTION, uri="dooropener://openMainDoor")
    )

    future = listener.dispatch(controller)

    assert future is not None
    assert future.result() == "OK"
    assert client.fire.call_count == 1
