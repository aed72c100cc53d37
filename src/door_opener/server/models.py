"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel


class ApiStatus(BaseModel):
    enabled: bool
    result: str
    label: str


class TargetUrl(BaseModel):
    url: str
