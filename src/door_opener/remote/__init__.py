"""Outbound HTTP trigger client."""

from door_opener.remote.client import NO_RESPONSE, RemoteTriggerClient, format_error

__all__ = ["NO_RESPONSE", "RemoteTriggerClient", "format_error"]
