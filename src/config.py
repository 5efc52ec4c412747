from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


DEFAULT_TIME_ZONE = "Asia/Kuala_Lumpur"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def _get_first_set(*env_names: str) -> str:
    for env_name in env_names:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return ""


def _default_time_zone() -> str:
    raw = os.getenv("DEFAULT_TIME_ZONE", DEFAULT_TIME_ZONE).strip() or DEFAULT_TIME_ZONE
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Invalid DEFAULT_TIME_ZONE: {raw}") from exc
    return raw


@dataclass(frozen=True)
class Settings:
    app_debug: bool = os.getenv("APP_DEBUG", "false").lower() == "true"
    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    app_port: int = int(os.getenv("APP_PORT", "8004"))

    server_name: str = os.getenv("SERVER_NAME", "google-tasks-calendar")
    server_version: str = os.getenv("SERVER_VERSION", "0.2.0")

    google_client_id: str = _get_first_set("GOOGLE_CLIENT_ID")
    google_client_secret: str = _get_first_set("GOOGLE_CLIENT_SECRET")
    google_refresh_token: str = _get_first_set("GOOGLE_REFRESH_TOKEN")
    google_token_uri: str = _get_first_set("GOOGLE_TOKEN_URI") or DEFAULT_TOKEN_URI

    default_time_zone: str = _default_time_zone()
    default_calendar_id: str = os.getenv("DEFAULT_CALENDAR_ID", "primary").strip() or "primary"
    default_max_results: int = int(os.getenv("DEFAULT_MAX_RESULTS", "10"))


settings = Settings()


def get_settings() -> Settings:
    return settings
