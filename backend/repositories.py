from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from sqlalchemy import text as sql_text

from backend.db import get_sessionmaker
from backend.db_init import (
    ENTRIES_TABLE,
    EVENTS_TABLE,
    REMINDER_LOG_TABLE,
    SESSIONS_TABLE,
    USER_SETTINGS_TABLE,
    USERS_TABLE,
)
from backend.errors import NotFound
from backend.settings import DEFAULT_USER_SETTINGS

USER_COLUMNS = [
    "id",
    "email",
    "full_name",
    "email_confirmed",
    "created_at",
    "updated_at",
]

ENTRY_COLUMNS = [
    "id",
    "user_id",
    "title",
    "content",
    "emotion_score",
    "tags_json",
    "created_at",
    "updated_at",
]

EVENT_COLUMNS = [
    "id",
    "user_id",
    "title",
    "description",
    "location",
    "start_date",
    "end_date",
    "all_day",
    "notification_enabled",
    "notification_minutes",
    "created_at",
    "updated_at",
]

SETTINGS_COLUMNS = [
    "id",
    "user_id",
    "theme",
    "language",
    "notifications_enabled",
    "email_notifications",
    "default_notification_minutes",
    "timezone",
    "created_at",
    "updated_at",
]

EVENT_BOOL_KEYS = {"all_day", "notification_enabled"}
SETTINGS_BOOL_KEYS = {"notifications_enabled", "email_notifications"}


def _new_id() -> str:
    return uuid4().hex


def utc_iso(value) -> str:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds")


def _now_iso() -> str:
    return utc_iso(datetime.now(timezone.utc))


def _normalize_user_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    payload.pop("password_hash", None)
    payload.pop("confirmation_token", None)
    payload["email_confirmed"] = bool(payload.get("email_confirmed"))
    return payload


def _normalize_entry_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    raw_tags = payload.pop("tags_json", None) or "[]"
    try:
        tags = json.loads(raw_tags)
    except ValueError:
        tags = []
    payload["tags"] = [str(tag) for tag in tags] if isinstance(tags, list) else []
    payload["emotion_score"] = int(payload.get("emotion_score") or 0)
    return payload


def _normalize_event_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key in EVENT_BOOL_KEYS:
        payload[key] = bool(payload.get(key))
    payload["notification_minutes"] = int(payload.get("notification_minutes") or 0)
    payload["description"] = payload.get("description") or ""
    payload["location"] = payload.get("location") or ""
    return payload


def _normalize_settings_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key in SETTINGS_BOOL_KEYS:
        payload[key] = bool(payload.get(key))
    payload["default_notification_minutes"] = int(payload.get("default_notification_minutes") or 0)
    return payload


def _update_clause(patch: dict, allowed: set[str]) -> tuple[list[str], dict]:
    updates = []
    params = {}
    for key, value in patch.items():
        if key not in allowed:
            continue
        updates.append(f"{key} = :{key}")
        params[key] = value
    return updates, params


# --- users & sessions ---


async def create_user(email: str, password_hash: str, full_name: str, confirmed: bool, confirmation_token: str | None) -> dict:
    now = _now_iso()
    record = {
        "id": _new_id(),
        "email": email,
        "password_hash": password_hash,
        "full_name": full_name,
        "email_confirmed": int(confirmed),
        "confirmation_token": confirmation_token,
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {USERS_TABLE}
                (id, email, password_hash, full_name, email_confirmed, confirmation_token, created_at, updated_at)
                VALUES
                (:id, :email, :password_hash, :full_name, :email_confirmed, :confirmation_token, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    return _normalize_user_row(record)


async def get_user_credentials(email: str) -> dict:
    """Full user row, including the password hash and confirmation token."""
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(f"SELECT * FROM {USERS_TABLE} WHERE email = :email"),
            {"email": email},
        )).mappings().fetchone()
    return dict(row) if row else {}


async def get_user(user_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(f"SELECT {', '.join(USER_COLUMNS)} FROM {USERS_TABLE} WHERE id = :id"),
            {"id": user_id},
        )).mappings().fetchone()
    if not row:
        raise NotFound("User not found")
    return _normalize_user_row(row)


async def confirm_user(user_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"UPDATE {USERS_TABLE} SET email_confirmed = 1, confirmation_token = NULL, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {"id": user_id, "updated_at": _now_iso()},
        )
        await session.commit()


async def update_user_profile(user_id: str, full_name: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(f"UPDATE {USERS_TABLE} SET full_name = :full_name, updated_at = :updated_at WHERE id = :id"),
            {"id": user_id, "full_name": full_name, "updated_at": _now_iso()},
        )
        await session.commit()
    return await get_user(user_id)


async def delete_user_cascade(user_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"DELETE FROM {REMINDER_LOG_TABLE} WHERE event_id IN "
                f"(SELECT id FROM {EVENTS_TABLE} WHERE user_id = :user_id)"
            ),
            {"user_id": user_id},
        )
        for table in (ENTRIES_TABLE, EVENTS_TABLE, USER_SETTINGS_TABLE, SESSIONS_TABLE):
            await session.execute(
                sql_text(f"DELETE FROM {table} WHERE user_id = :user_id"),
                {"user_id": user_id},
            )
        await session.execute(sql_text(f"DELETE FROM {USERS_TABLE} WHERE id = :user_id"), {"user_id": user_id})
        await session.commit()


async def create_session(user_id: str, token: str, ttl_hours: int) -> dict:
    now = datetime.now(timezone.utc)
    record = {
        "token": token,
        "user_id": user_id,
        "created_at": utc_iso(now),
        "expires_at": utc_iso(now + timedelta(hours=ttl_hours)),
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"INSERT INTO {SESSIONS_TABLE} (token, user_id, created_at, expires_at) "
                "VALUES (:token, :user_id, :created_at, :expires_at)"
            ),
            record,
        )
        await session.commit()
    return record


async def get_session_user(token: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join('u.' + col for col in USER_COLUMNS)}
                FROM {SESSIONS_TABLE} s
                JOIN {USERS_TABLE} u ON u.id = s.user_id
                WHERE s.token = :token AND s.expires_at > :now
                """
            ),
            {"token": token, "now": _now_iso()},
        )).mappings().fetchone()
    return _normalize_user_row(row)


async def delete_session(token: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(sql_text(f"DELETE FROM {SESSIONS_TABLE} WHERE token = :token"), {"token": token})
        await session.execute(
            sql_text(f"DELETE FROM {SESSIONS_TABLE} WHERE expires_at <= :now"),
            {"now": _now_iso()},
        )
        await session.commit()


# --- journal entries ---


async def create_entry(user_id: str, payload: dict) -> dict:
    now = _now_iso()
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "title": payload["title"],
        "content": payload["content"],
        "emotion_score": int(payload["emotion_score"]),
        "tags_json": json.dumps(payload.get("tags") or [], ensure_ascii=False),
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {ENTRIES_TABLE}
                (id, user_id, title, content, emotion_score, tags_json, created_at, updated_at)
                VALUES
                (:id, :user_id, :title, :content, :emotion_score, :tags_json, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    return _normalize_entry_row(record)


async def list_entries(user_id: str, limit: int | None = None) -> list[dict]:
    query = (
        f"SELECT {', '.join(ENTRY_COLUMNS)} FROM {ENTRIES_TABLE} "
        "WHERE user_id = :user_id ORDER BY created_at DESC"
    )
    params: dict = {"user_id": user_id}
    if limit is not None:
        query += " LIMIT :limit"
        params["limit"] = int(limit)
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(sql_text(query), params)).mappings().all()
    return [_normalize_entry_row(row) for row in rows]


async def get_entry(user_id: str, entry_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(ENTRY_COLUMNS)} FROM {ENTRIES_TABLE} "
                "WHERE id = :id AND user_id = :user_id"
            ),
            {"id": entry_id, "user_id": user_id},
        )).mappings().fetchone()
    if not row:
        raise NotFound("Journal entry not found")
    return _normalize_entry_row(row)


async def update_entry(user_id: str, entry_id: str, patch: dict) -> dict:
    clean = dict(patch)
    if "tags" in clean:
        clean["tags_json"] = json.dumps(clean.pop("tags") or [], ensure_ascii=False)
    updates, params = _update_clause(clean, {"title", "content", "emotion_score", "tags_json"})
    if not updates:
        return await get_entry(user_id, entry_id)
    updates.append("updated_at = :updated_at")
    params.update({"id": entry_id, "user_id": user_id, "updated_at": _now_iso()})
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {ENTRIES_TABLE} SET {', '.join(updates)} WHERE id = :id AND user_id = :user_id"
            ),
            params,
        )
        await session.commit()
    if result.rowcount == 0:
        raise NotFound("Journal entry not found")
    return await get_entry(user_id, entry_id)


async def delete_entry(user_id: str, entry_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {ENTRIES_TABLE} WHERE id = :id AND user_id = :user_id"),
            {"id": entry_id, "user_id": user_id},
        )
        await session.commit()
    if result.rowcount == 0:
        raise NotFound("Journal entry not found")


# --- events ---


def _event_record(payload: dict) -> dict:
    return {
        "title": payload["title"],
        "description": payload.get("description") or "",
        "location": payload.get("location") or "",
        "start_date": utc_iso(payload["start_date"]),
        "end_date": utc_iso(payload["end_date"]),
        "all_day": int(bool(payload.get("all_day"))),
        "notification_enabled": int(bool(payload.get("notification_enabled"))),
        "notification_minutes": int(payload.get("notification_minutes") or 0),
    }


async def create_event(user_id: str, payload: dict) -> dict:
    now = _now_iso()
    record = {"id": _new_id(), "user_id": user_id, **_event_record(payload), "created_at": now, "updated_at": now}
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {EVENTS_TABLE}
                (id, user_id, title, description, location, start_date, end_date, all_day,
                 notification_enabled, notification_minutes, created_at, updated_at)
                VALUES
                (:id, :user_id, :title, :description, :location, :start_date, :end_date, :all_day,
                 :notification_enabled, :notification_minutes, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    return _normalize_event_row(record)


async def _select_events(where: str, params: dict) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(EVENT_COLUMNS)}
                FROM {EVENTS_TABLE}
                WHERE {where}
                ORDER BY start_date ASC, created_at ASC
                """
            ),
            params,
        )).mappings().all()
    return [_normalize_event_row(row) for row in rows]


async def list_events(user_id: str) -> list[dict]:
    return await _select_events("user_id = :user_id", {"user_id": user_id})


async def list_events_overlapping(user_id: str, start, end) -> list[dict]:
    return await _select_events(
        "user_id = :user_id AND start_date <= :range_end AND end_date >= :range_start",
        {"user_id": user_id, "range_start": utc_iso(start), "range_end": utc_iso(end)},
    )


async def list_events_touching_day(user_id: str, day_start, day_end) -> list[dict]:
    # All-day rows are anchored at 00:00 UTC, so they match on the date prefix.
    return await _select_events(
        """
        user_id = :user_id AND (
            (all_day = 1 AND substr(start_date, 1, 10) <= :day AND substr(end_date, 1, 10) >= :day)
            OR (COALESCE(all_day, 0) = 0 AND (
                (start_date >= :day_start AND start_date <= :day_end)
                OR (end_date >= :day_start AND end_date <= :day_end)
                OR (start_date <= :day_start AND end_date >= :day_end)
            ))
        )
        """,
        {
            "user_id": user_id,
            "day": day_start.date().isoformat(),
            "day_start": utc_iso(day_start),
            "day_end": utc_iso(day_end),
        },
    )


async def get_event(user_id: str, event_id: str) -> dict:
    items = await _select_events("id = :id AND user_id = :user_id", {"id": event_id, "user_id": user_id})
    if not items:
        raise NotFound("Event not found")
    return items[0]


async def replace_event(user_id: str, event_id: str, payload: dict) -> dict:
    params = {**_event_record(payload), "id": event_id, "user_id": user_id, "updated_at": _now_iso()}
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"""
                UPDATE {EVENTS_TABLE}
                SET title = :title, description = :description, location = :location,
                    start_date = :start_date, end_date = :end_date, all_day = :all_day,
                    notification_enabled = :notification_enabled,
                    notification_minutes = :notification_minutes,
                    updated_at = :updated_at
                WHERE id = :id AND user_id = :user_id
                """
            ),
            params,
        )
        await session.commit()
    if result.rowcount == 0:
        raise NotFound("Event not found")
    return await get_event(user_id, event_id)


async def delete_event(user_id: str, event_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {EVENTS_TABLE} WHERE id = :id AND user_id = :user_id"),
            {"id": event_id, "user_id": user_id},
        )
        await session.execute(
            sql_text(f"DELETE FROM {REMINDER_LOG_TABLE} WHERE event_id = :id"),
            {"id": event_id},
        )
        await session.commit()
    if result.rowcount == 0:
        raise NotFound("Event not found")


async def list_pending_reminder_events(now, horizon) -> list[dict]:
    """Enabled-notification events starting in (now, horizon] with no reminder logged yet."""
    return await _select_events(
        f"""
        notification_enabled = 1
        AND start_date > :now
        AND start_date <= :horizon
        AND NOT EXISTS (
            SELECT 1 FROM {REMINDER_LOG_TABLE} r
            WHERE r.event_id = {EVENTS_TABLE}.id AND r.start_date = {EVENTS_TABLE}.start_date
        )
        """,
        {"now": utc_iso(now), "horizon": utc_iso(horizon)},
    )


async def mark_reminder_sent(event_id: str, start_date: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"INSERT INTO {REMINDER_LOG_TABLE} (event_id, start_date, sent_at) "
                "VALUES (:event_id, :start_date, :sent_at) "
                "ON CONFLICT(event_id, start_date) DO NOTHING"
            ),
            {"event_id": event_id, "start_date": start_date, "sent_at": _now_iso()},
        )
        await session.commit()


# --- user settings ---


async def get_user_settings(user_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(SETTINGS_COLUMNS)} FROM {USER_SETTINGS_TABLE} WHERE user_id = :user_id"
            ),
            {"user_id": user_id},
        )).mappings().fetchone()
    return _normalize_settings_row(row)


async def create_user_settings(user_id: str, values: dict | None = None) -> dict:
    now = _now_iso()
    merged = {**DEFAULT_USER_SETTINGS, **(values or {})}
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "theme": merged["theme"],
        "language": merged["language"],
        "notifications_enabled": int(bool(merged["notifications_enabled"])),
        "email_notifications": int(bool(merged["email_notifications"])),
        "default_notification_minutes": int(merged["default_notification_minutes"]),
        "timezone": merged["timezone"],
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {USER_SETTINGS_TABLE}
                (id, user_id, theme, language, notifications_enabled, email_notifications,
                 default_notification_minutes, timezone, created_at, updated_at)
                VALUES
                (:id, :user_id, :theme, :language, :notifications_enabled, :email_notifications,
                 :default_notification_minutes, :timezone, :created_at, :updated_at)
                ON CONFLICT(user_id) DO NOTHING
                """
            ),
            record,
        )
        await session.commit()
    return await get_user_settings(user_id)


async def get_or_create_user_settings(user_id: str) -> dict:
    settings = await get_user_settings(user_id)
    if not settings:
        settings = await create_user_settings(user_id)
    return settings


async def update_user_settings(user_id: str, patch: dict) -> dict:
    await get_or_create_user_settings(user_id)
    clean = dict(patch)
    for key in SETTINGS_BOOL_KEYS:
        if key in clean:
            clean[key] = int(bool(clean[key]))
    updates, params = _update_clause(clean, set(SETTINGS_COLUMNS) - {"id", "user_id", "created_at", "updated_at"})
    if updates:
        updates.append("updated_at = :updated_at")
        params.update({"user_id": user_id, "updated_at": _now_iso()})
        session_factory = get_sessionmaker()
        async with session_factory() as session:
            await session.execute(
                sql_text(f"UPDATE {USER_SETTINGS_TABLE} SET {', '.join(updates)} WHERE user_id = :user_id"),
                params,
            )
            await session.commit()
    return await get_user_settings(user_id)
