"""Configuration for the door opener.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The target URL itself is NOT configuration: it lives in the preferences file
managed by :class:`door_opener.settings_store.SettingsStore` and only changes
through an explicit save.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DoorOpenerSettings(BaseSettings):
    """Settings for the door opener.

    Environment variables:
    - LOG_LEVEL                   (optional)
    - DOOR_OPENER_SETTINGS_PATH   (optional)
    - DOOR_OPENER_MAX_WORKERS     (optional)
    - DOOR_OPENER_CORS_ORIGINS    (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `DoorOpenerSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    settings_path: Path = Field(
        default=Path("door_state/prefs.json"),
        validation_alias="DOOR_OPENER_SETTINGS_PATH",
        description="JSON file where the target URL is persisted",
    )

    max_workers: int = Field(
        default=2,
        ge=1,
        validation_alias="DOOR_OPENER_MAX_WORKERS",
        description="Worker threads used for outbound trigger requests",
    )

    # Dev-friendly CORS for a local dashboard. Override via DOOR_OPENER_CORS_ORIGINS=...
    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="DOOR_OPENER_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
