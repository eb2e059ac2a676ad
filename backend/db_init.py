from __future__ import annotations

import logging

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from backend.db import get_engine

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
SESSIONS_TABLE = "auth_sessions"
ENTRIES_TABLE = "journal_entries"
EVENTS_TABLE = "events"
USER_SETTINGS_TABLE = "user_settings"
REMINDER_LOG_TABLE = "event_reminder_log"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {USERS_TABLE} (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    full_name TEXT,
                    email_confirmed INTEGER DEFAULT 0,
                    confirmation_token TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {SESSIONS_TABLE} (
                    token TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    expires_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {ENTRIES_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    emotion_score INTEGER NOT NULL,
                    tags_json TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {EVENTS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT DEFAULT '',
                    location TEXT DEFAULT '',
                    start_date TEXT NOT NULL,
                    end_date TEXT NOT NULL,
                    all_day INTEGER DEFAULT 0,
                    notification_enabled INTEGER DEFAULT 1,
                    notification_minutes INTEGER DEFAULT 15,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {USER_SETTINGS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL UNIQUE,
                    theme TEXT NOT NULL DEFAULT 'light',
                    language TEXT NOT NULL DEFAULT 'ja',
                    notifications_enabled INTEGER DEFAULT 1,
                    email_notifications INTEGER DEFAULT 1,
                    default_notification_minutes INTEGER DEFAULT 15,
                    timezone TEXT NOT NULL DEFAULT 'Asia/Tokyo',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {REMINDER_LOG_TABLE} (
                    event_id TEXT NOT NULL,
                    start_date TEXT NOT NULL,
                    sent_at TEXT NOT NULL,
                    PRIMARY KEY (event_id, start_date)
                )
                """
            )
        )

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except SQLAlchemyError as exc:
            logger.warning("Index creation skipped: %s", exc)

    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{ENTRIES_TABLE}_user_created "
        f"ON {ENTRIES_TABLE} (user_id, created_at)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{EVENTS_TABLE}_user_range "
        f"ON {EVENTS_TABLE} (user_id, start_date, end_date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{EVENTS_TABLE}_reminders "
        f"ON {EVENTS_TABLE} (notification_enabled, start_date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{SESSIONS_TABLE}_user "
        f"ON {SESSIONS_TABLE} (user_id)"
    )
