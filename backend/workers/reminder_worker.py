from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from backend import repositories
from backend.db_init import init_db
from backend.schemas import MAX_NOTIFICATION_MINUTES
from backend.settings import get_settings

logger = logging.getLogger(__name__)

LOOKAHEAD = timedelta(minutes=MAX_NOTIFICATION_MINUTES)


def _parse(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def reminder_at(event: dict) -> datetime:
    return _parse(event["start_date"]) - timedelta(minutes=int(event.get("notification_minutes") or 0))


def due_reminders(events: list[dict], now: datetime) -> list[dict]:
    """Events whose reminder instant has passed while the event itself has not started."""
    due = []
    for event in events:
        if not event.get("notification_enabled"):
            continue
        if _parse(event["start_date"]) <= now:
            continue
        if reminder_at(event) <= now:
            due.append(event)
    return due


async def process_reminders_once(now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    candidates = await repositories.list_pending_reminder_events(now, now + LOOKAHEAD)
    sent = 0
    for event in due_reminders(candidates, now):
        minutes_left = int((_parse(event["start_date"]) - now).total_seconds() // 60)
        logger.info(
            "Reminder for user %s: '%s' starts in %s minutes",
            event["user_id"],
            event["title"],
            minutes_left,
        )
        await repositories.mark_reminder_sent(event["id"], event["start_date"])
        sent += 1
    return sent


async def run_forever() -> None:
    await init_db()
    interval = get_settings().reminder_poll_seconds
    while True:
        try:
            await process_reminders_once()
        except Exception:
            logger.exception("Reminder pass failed")
        await asyncio.sleep(interval)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    asyncio.run(run_forever())
