import asyncio
from datetime import datetime, timedelta, timezone

from backend import repositories
from backend.db import dispose_engine
from backend.db_init import init_db
from backend.workers.reminder_worker import due_reminders, process_reminders_once, reminder_at

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _event(start, minutes=15, enabled=True):
    return {
        "id": "evt",
        "title": "Check-up",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(hours=1)).isoformat(),
        "notification_enabled": enabled,
        "notification_minutes": minutes,
    }


def test_reminder_at_subtracts_minutes():
    assert reminder_at(_event(NOW, minutes=30)) == NOW - timedelta(minutes=30)


def test_due_reminders_window():
    due = _event(NOW + timedelta(minutes=10))
    not_yet = _event(NOW + timedelta(minutes=20))
    started = _event(NOW - timedelta(minutes=1))
    disabled = _event(NOW + timedelta(minutes=5), enabled=False)
    assert due_reminders([due, not_yet, started, disabled], NOW) == [due]


def test_process_reminders_marks_each_event_once(backend_env):
    async def scenario():
        await init_db()
        try:
            user = await repositories.create_user("remind@example.com", "x", "Remind", True, None)
            start = NOW + timedelta(minutes=10)
            await repositories.create_event(
                user["id"],
                {
                    "title": "Soon",
                    "start_date": start,
                    "end_date": start + timedelta(hours=1),
                    "notification_enabled": True,
                    "notification_minutes": 15,
                },
            )
            await repositories.create_event(
                user["id"],
                {
                    "title": "Later",
                    "start_date": NOW + timedelta(days=2),
                    "end_date": NOW + timedelta(days=2, hours=1),
                    "notification_enabled": True,
                    "notification_minutes": 15,
                },
            )
            first = await process_reminders_once(NOW)
            second = await process_reminders_once(NOW)
            return first, second
        finally:
            await dispose_engine()

    assert asyncio.run(scenario()) == (1, 0)


def test_week_long_lead_time_is_picked_up(backend_env):
    async def scenario():
        await init_db()
        try:
            user = await repositories.create_user("week@example.com", "x", "Week", True, None)
            start = NOW + timedelta(days=6, hours=23)
            await repositories.create_event(
                user["id"],
                {
                    "title": "Exam",
                    "start_date": start,
                    "end_date": start + timedelta(hours=3),
                    "notification_enabled": True,
                    "notification_minutes": 7 * 24 * 60,
                },
            )
            return await process_reminders_once(NOW)
        finally:
            await dispose_engine()

    assert asyncio.run(scenario()) == 1
