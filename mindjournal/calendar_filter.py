"""Date-range selection for calendar events.

Range bounds are built in the user's timezone (``tz`` may be a ``ZoneInfo``,
an IANA name, or ``None`` for the machine's local zone). Events carry ISO
timestamps; all-day events are anchored at midnight UTC of their dates.
"""
import calendar as _calendar
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from mindjournal.metrics import parse_timestamp

END_OF_DAY = time(23, 59, 59, 999000)


def _zone(tz):
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _localize(naive, tz):
    zone = _zone(tz)
    if zone is None:
        return naive.astimezone()
    return naive.replace(tzinfo=zone)


def day_bounds(day, tz=None):
    day = _as_date(day)
    return (
        _localize(datetime.combine(day, time.min), tz),
        _localize(datetime.combine(day, END_OF_DAY), tz),
    )


def month_bounds(reference, tz=None):
    reference = _as_date(reference)
    last_day = _calendar.monthrange(reference.year, reference.month)[1]
    first = date(reference.year, reference.month, 1)
    last = date(reference.year, reference.month, last_day)
    return day_bounds(first, tz)[0], day_bounds(last, tz)[1]


def sort_by_start(events):
    return sorted(events, key=lambda event: parse_timestamp(event["start_date"]))


def overlaps_range(event, range_start, range_end):
    start = parse_timestamp(event["start_date"])
    end = parse_timestamp(event["end_date"])
    return start <= range_end and end >= range_start


def _utc_date(moment):
    return moment.astimezone(timezone.utc).date()


def event_touches_day(event, day_start, day_end):
    """Starts within the day, ends within the day, or spans the whole day.

    All-day events compare their UTC dates against the calendar date of
    ``day_start``.
    """
    start = parse_timestamp(event["start_date"])
    end = parse_timestamp(event["end_date"])
    if event.get("all_day"):
        return _utc_date(start) <= day_start.date() <= _utc_date(end)
    return (
        day_start <= start <= day_end
        or day_start <= end <= day_end
        or (start <= day_start and end >= day_end)
    )


def select_events_for_date(events, day, tz=None):
    day_start, day_end = day_bounds(day, tz)
    return sort_by_start([event for event in events if event_touches_day(event, day_start, day_end)])


def select_events_for_month(events, reference, tz=None):
    month_start, month_end = month_bounds(reference, tz)
    return sort_by_start([event for event in events if overlaps_range(event, month_start, month_end)])


def _falls_on_grid_day(event, day, tz):
    start = parse_timestamp(event["start_date"])
    if event.get("all_day"):
        end = parse_timestamp(event["end_date"])
        return _utc_date(start) <= day <= _utc_date(end)
    return start.astimezone(_zone(tz)).date() == day


def events_for_grid_day(events, day, tz=None):
    day = _as_date(day)
    return sort_by_start([event for event in events if _falls_on_grid_day(event, day, tz)])


def month_grid(reference):
    """Sunday-first weeks covering the month of ``reference``."""
    reference = _as_date(reference)
    first = reference.replace(day=1)
    last = first.replace(day=_calendar.monthrange(first.year, first.month)[1])
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    days = [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
    return [days[idx:idx + 7] for idx in range(0, len(days), 7)]


def group_events_by_day(events, days, tz=None):
    return {day: events_for_grid_day(events, day, tz) for day in days}
