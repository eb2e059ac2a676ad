"""Form validation that is independent of any widget library.

Every validator returns ``Ok(data)`` with the cleaned payload or
``Err(errors)`` with one ``FieldError`` per offending field (first failure
only, in field order).
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mindjournal.constants import (
    EMOTION_MAX,
    EMOTION_MIN,
    LANGUAGES,
    MAX_NOTIFICATION_MINUTES,
    MIN_CONTENT_LENGTH,
    MIN_FULL_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    THEMES,
)
from mindjournal.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MESSAGES = {
    "email_required": {"ja": "メールアドレスを入力してください", "en": "Enter your email address."},
    "email_invalid": {"ja": "有効なメールアドレスを入力してください", "en": "Enter a valid email address."},
    "password_required": {"ja": "パスワードを入力してください", "en": "Enter your password."},
    "password_short": {
        "ja": f"パスワードは{MIN_PASSWORD_LENGTH}文字以上で入力してください",
        "en": f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
    },
    "full_name_required": {"ja": "氏名を入力してください", "en": "Enter your name."},
    "full_name_short": {
        "ja": f"氏名は{MIN_FULL_NAME_LENGTH}文字以上で入力してください",
        "en": f"Name must be at least {MIN_FULL_NAME_LENGTH} characters.",
    },
    "confirm_required": {"ja": "パスワード確認を入力してください", "en": "Confirm your password."},
    "password_mismatch": {"ja": "パスワードが一致しません", "en": "Passwords do not match."},
    "title_required": {"ja": "タイトルを入力してください", "en": "Enter a title."},
    "content_short": {
        "ja": f"内容は{MIN_CONTENT_LENGTH}文字以上で入力してください",
        "en": f"Content must be at least {MIN_CONTENT_LENGTH} characters.",
    },
    "emotion_range": {
        "ja": f"感情スコアは{EMOTION_MIN}〜{EMOTION_MAX}で選択してください",
        "en": f"Emotion score must be between {EMOTION_MIN} and {EMOTION_MAX}.",
    },
    "start_required": {"ja": "開始日時を入力してください", "en": "Enter a start date."},
    "end_required": {"ja": "終了日時を入力してください", "en": "Enter an end date."},
    "date_invalid": {"ja": "日時の形式が正しくありません", "en": "Invalid date/time."},
    "end_before_start": {
        "ja": "終了日時は開始日時以降にしてください",
        "en": "End must be on or after the start.",
    },
    "minutes_range": {
        "ja": f"通知時間は0〜{MAX_NOTIFICATION_MINUTES}分で入力してください",
        "en": f"Reminder minutes must be between 0 and {MAX_NOTIFICATION_MINUTES}.",
    },
    "theme_invalid": {"ja": "テーマが正しくありません", "en": "Unknown theme."},
    "language_invalid": {"ja": "言語が正しくありません", "en": "Unknown language."},
    "timezone_invalid": {"ja": "タイムゾーンが正しくありません", "en": "Unknown timezone."},
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class Ok:
    data: dict

    @property
    def ok(self):
        return True

    def unwrap(self):
        return self.data


@dataclass(frozen=True)
class Err:
    errors: list = field(default_factory=list)

    @property
    def ok(self):
        return False

    def unwrap(self):
        raise ValidationError(self.errors)

    def for_field(self, name):
        return [err.message for err in self.errors if err.field == name]


class _Collector:
    def __init__(self, language):
        self.language = language if language in LANGUAGES else "ja"
        self.errors = []

    def add(self, field_name, key):
        if any(err.field == field_name for err in self.errors):
            return
        self.errors.append(FieldError(field_name, MESSAGES[key][self.language]))

    def result(self, data):
        if self.errors:
            return Err(self.errors)
        return Ok(data)


def _check_email(collector, email):
    if not email:
        collector.add("email", "email_required")
    elif not EMAIL_PATTERN.match(email):
        collector.add("email", "email_invalid")


def _check_password(collector, password):
    if not password:
        collector.add("password", "password_required")
    elif len(password) < MIN_PASSWORD_LENGTH:
        collector.add("password", "password_short")


def validate_sign_in(email, password, language="ja"):
    collector = _Collector(language)
    email = str(email or "").strip()
    password = str(password or "")
    _check_email(collector, email)
    _check_password(collector, password)
    return collector.result({"email": email, "password": password})


def validate_sign_up(full_name, email, password, confirm_password, language="ja"):
    collector = _Collector(language)
    full_name = " ".join(str(full_name or "").split())
    email = str(email or "").strip()
    password = str(password or "")
    confirm_password = str(confirm_password or "")
    if not full_name:
        collector.add("full_name", "full_name_required")
    elif len(full_name) < MIN_FULL_NAME_LENGTH:
        collector.add("full_name", "full_name_short")
    _check_email(collector, email)
    _check_password(collector, password)
    if not confirm_password:
        collector.add("confirm_password", "confirm_required")
    elif password != confirm_password:
        collector.add("confirm_password", "password_mismatch")
    return collector.result({"full_name": full_name, "email": email, "password": password})


def clean_tags(tags):
    clean = []
    for tag in tags or []:
        value = str(tag).strip()
        if value and value not in clean:
            clean.append(value)
    return clean


def validate_entry(title, content, emotion_score, tags=None, language="ja"):
    collector = _Collector(language)
    title = str(title or "").strip()
    content = str(content or "").strip()
    if not title:
        collector.add("title", "title_required")
    if len(content) < MIN_CONTENT_LENGTH:
        collector.add("content", "content_short")
    score = None
    if isinstance(emotion_score, bool) or (isinstance(emotion_score, float) and not emotion_score.is_integer()):
        collector.add("emotion_score", "emotion_range")
    else:
        try:
            score = int(emotion_score)
        except (TypeError, ValueError):
            collector.add("emotion_score", "emotion_range")
        else:
            if not EMOTION_MIN <= score <= EMOTION_MAX:
                collector.add("emotion_score", "emotion_range")
    return collector.result(
        {"title": title, "content": content, "emotion_score": score, "tags": clean_tags(tags)}
    )


def _parse_when(value, tz):
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        if len(text) == 10:
            parsed = datetime.combine(date.fromisoformat(text), time.min)
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _truncate_all_day(value):
    # Mirrors the backend: all-day events sit at midnight UTC of their own date.
    return datetime.combine(value.date(), time.min, tzinfo=timezone.utc)


def validate_event(
    title,
    start_date,
    end_date,
    all_day=False,
    description="",
    location="",
    notification_enabled=True,
    notification_minutes=15,
    timezone_name="Asia/Tokyo",
    language="ja",
):
    collector = _Collector(language)
    tz = ZoneInfo(timezone_name)
    title = str(title or "").strip()
    if not title:
        collector.add("title", "title_required")

    parsed = {}
    for name, value, missing_key in (
        ("start_date", start_date, "start_required"),
        ("end_date", end_date, "end_required"),
    ):
        if value is None or (isinstance(value, str) and not value.strip()):
            collector.add(name, missing_key)
            continue
        try:
            when = _parse_when(value, tz)
        except ValueError:
            collector.add(name, "date_invalid")
            continue
        parsed[name] = _truncate_all_day(when) if all_day else when.astimezone(timezone.utc)

    if len(parsed) == 2 and parsed["end_date"] < parsed["start_date"]:
        collector.add("end_date", "end_before_start")

    try:
        minutes = int(notification_minutes or 0)
    except (TypeError, ValueError):
        minutes = -1
    if not 0 <= minutes <= MAX_NOTIFICATION_MINUTES:
        collector.add("notification_minutes", "minutes_range")

    return collector.result(
        {
            "title": title,
            "description": str(description or "").strip(),
            "location": str(location or "").strip(),
            "start_date": parsed["start_date"].isoformat() if "start_date" in parsed else None,
            "end_date": parsed["end_date"].isoformat() if "end_date" in parsed else None,
            "all_day": bool(all_day),
            "notification_enabled": bool(notification_enabled),
            "notification_minutes": minutes,
        }
    )


def validate_profile(full_name, email, language="ja"):
    collector = _Collector(language)
    full_name = " ".join(str(full_name or "").split())
    email = str(email or "").strip()
    if not full_name:
        collector.add("full_name", "full_name_required")
    if not EMAIL_PATTERN.match(email):
        collector.add("email", "email_invalid")
    return collector.result({"full_name": full_name, "email": email})


def validate_settings(patch, language="ja"):
    collector = _Collector(language)
    clean = dict(patch or {})
    if "theme" in clean and clean["theme"] not in THEMES:
        collector.add("theme", "theme_invalid")
    if "language" in clean and clean["language"] not in LANGUAGES:
        collector.add("language", "language_invalid")
    if "timezone" in clean:
        try:
            ZoneInfo(str(clean["timezone"]))
        except (ZoneInfoNotFoundError, ValueError):
            collector.add("timezone", "timezone_invalid")
    if "default_notification_minutes" in clean:
        try:
            clean["default_notification_minutes"] = int(clean["default_notification_minutes"])
        except (TypeError, ValueError):
            clean["default_notification_minutes"] = -1
        if not 0 <= clean["default_notification_minutes"] <= MAX_NOTIFICATION_MINUTES:
            collector.add("default_notification_minutes", "minutes_range")
    for key in ("notifications_enabled", "email_notifications"):
        if key in clean:
            clean[key] = bool(clean[key])
    return collector.result(clean)
