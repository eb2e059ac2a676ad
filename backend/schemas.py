from __future__ import annotations

from datetime import datetime, time, timezone
from typing import Optional, List, Dict, Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Reminders are scanned this far ahead of event starts.
MAX_NOTIFICATION_MINUTES = 7 * 24 * 60


def _coerce_date_only(value):
    if isinstance(value, str) and len(value.strip()) == 10:
        return f"{value.strip()}T00:00:00+00:00"
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _truncate_to_day(value: datetime) -> datetime:
    # All-day events are anchored at midnight UTC of their own calendar date.
    return datetime.combine(value.date(), time.min, tzinfo=timezone.utc)


def _clean_tags(values) -> list[str]:
    clean = []
    for value in values or []:
        tag = str(value).strip()
        if tag and tag not in clean:
            clean.append(tag)
    return clean


class SignUpPayload(BaseModel):
    email: str
    password: str
    full_name: str = ""


class SignInPayload(BaseModel):
    email: str
    password: str


class ConfirmPayload(BaseModel):
    email: str
    token: str


class ProfilePatch(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=1, max_length=120)


class SessionResponse(BaseModel):
    access_token: Optional[str]
    expires_at: Optional[str]
    user: Dict[str, Any]
    confirmation_token: Optional[str] = None


class EntryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=10)
    emotion_score: int = Field(..., ge=1, le=10)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _tags(cls, value):
        return _clean_tags(value)


class EntryPatch(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=10)
    emotion_score: Optional[int] = Field(None, ge=1, le=10)
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def _tags(cls, value):
        if value is None:
            return None
        return _clean_tags(value)


class EventCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    location: str = ""
    start_date: datetime
    end_date: datetime
    all_day: bool = False
    notification_enabled: bool = True
    notification_minutes: int = Field(15, ge=0, le=MAX_NOTIFICATION_MINUTES)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return _coerce_date_only(value)

    @field_validator("description", "location", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return "" if value is None else value

    @model_validator(mode="after")
    def _check_range(self):
        if self.all_day:
            self.start_date = _truncate_to_day(self.start_date)
            self.end_date = _truncate_to_day(self.end_date)
        else:
            self.start_date = _as_utc(self.start_date)
            self.end_date = _as_utc(self.end_date)
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class EventPatch(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    all_day: Optional[bool] = None
    notification_enabled: Optional[bool] = None
    notification_minutes: Optional[int] = Field(None, ge=0, le=MAX_NOTIFICATION_MINUTES)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return _coerce_date_only(value)


class SettingsPatch(BaseModel):
    theme: Optional[Literal["light", "dark", "auto"]] = None
    language: Optional[Literal["ja", "en"]] = None
    notifications_enabled: Optional[bool] = None
    email_notifications: Optional[bool] = None
    default_notification_minutes: Optional[int] = Field(None, ge=0, le=MAX_NOTIFICATION_MINUTES)
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def _timezone(cls, value):
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value}")
        return value

