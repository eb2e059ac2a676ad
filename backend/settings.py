from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_SETTINGS = {
    "theme": "light",
    "language": "ja",
    "notifications_enabled": True,
    "email_notifications": True,
    "default_notification_minutes": 15,
    "timezone": "Asia/Tokyo",
}


class Settings(BaseSettings):
    database_url: str = Field(..., alias="DATABASE_URL")
    backend_api_key: str = Field(..., alias="BACKEND_API_KEY")

    session_ttl_hours: int = Field(336, alias="SESSION_TTL_HOURS")
    auth_require_email_confirmation: bool = Field(False, alias="AUTH_REQUIRE_EMAIL_CONFIRMATION")
    auth_max_failed_attempts: int = Field(5, alias="AUTH_MAX_FAILED_ATTEMPTS")
    auth_rate_limit_window_seconds: int = Field(300, alias="AUTH_RATE_LIMIT_WINDOW_SECONDS")

    reminder_poll_seconds: int = Field(60, alias="REMINDER_POLL_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.strip().startswith("sqlite")


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


# For local dev convenience only.
if os.getenv("BACKEND_DEBUG_SETTINGS"):
    print(get_settings().model_dump(exclude={"backend_api_key"}))
