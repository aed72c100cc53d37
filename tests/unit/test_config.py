"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from door_opener.config import DoorOpenerSettings

_ENV_VARS = [
    "LOG_LEVEL",
    "DOOR_OPENER_SETTINGS_PATH",
    "DOOR_OPENER_MAX_WORKERS",
    "DOOR_OPENER_CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults() -> None:
    settings = DoorOpenerSettings()

    assert settings.log_level == "INFO"
    assert settings.settings_path == Path("door_state/prefs.json")
    assert settings.max_workers == 2
    assert settings.parsed_cors_origins() == ["http://localhost:5173", "http://127.0.0.1:5173"]


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "LOG_LEVEL=DEBUG",
                "DOOR_OPENER_SETTINGS_PATH=/var/lib/door/prefs.json",
                "DOOR_OPENER_CORS_ORIGINS= http://a , ,http://b",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = DoorOpenerSettings()

    assert settings.log_level == "DEBUG"
    assert settings.settings_path == Path("/var/lib/door/prefs.json")
    assert settings.parsed_cors_origins() == ["http://a", "http://b"]


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOOR_OPENER_MAX_WORKERS", "4")

    assert DoorOpenerSettings().max_workers == 4


def test_max_workers_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOOR_OPENER_MAX_WORKERS", "0")

    with pytest.raises(ValidationError):
        DoorOpenerSettings()
