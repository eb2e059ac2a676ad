from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from mindjournal.calendar_filter import (
    day_bounds,
    events_for_grid_day,
    month_bounds,
    month_grid,
    select_events_for_date,
    select_events_for_month,
)


def _event(title, start, end, all_day=False):
    return {"title": title, "start_date": start, "end_date": end, "all_day": all_day}


def test_day_bounds_in_timezone():
    start, end = day_bounds(date(2026, 3, 10), "Asia/Tokyo")
    assert start == datetime(2026, 3, 10, 0, 0, tzinfo=ZoneInfo("Asia/Tokyo"))
    assert end == datetime(2026, 3, 10, 23, 59, 59, 999000, tzinfo=ZoneInfo("Asia/Tokyo"))


def test_month_bounds_cover_whole_month():
    start, end = month_bounds(date(2026, 2, 14), "UTC")
    assert start == datetime(2026, 2, 1, tzinfo=ZoneInfo("UTC"))
    assert end == datetime(2026, 2, 28, 23, 59, 59, 999000, tzinfo=ZoneInfo("UTC"))


def test_day_selection_includes_spanning_event():
    events = [
        _event("Trip", "2026-03-09T12:00:00+00:00", "2026-03-11T12:00:00+00:00"),
        _event("Elsewhere", "2026-03-12T12:00:00+00:00", "2026-03-12T13:00:00+00:00"),
        _event("Ends today", "2026-03-09T22:00:00+00:00", "2026-03-10T01:00:00+00:00"),
    ]
    selected = select_events_for_date(events, date(2026, 3, 10), "UTC")
    assert [event["title"] for event in selected] == ["Trip", "Ends today"]


def test_month_selection_uses_overlap():
    events = [
        _event("Prior month", "2026-02-10T10:00:00+00:00", "2026-02-11T10:00:00+00:00"),
        _event("Crosses in", "2026-02-27T10:00:00+00:00", "2026-03-02T10:00:00+00:00"),
        _event("Inside", "2026-03-15T10:00:00+00:00", "2026-03-15T11:00:00+00:00"),
    ]
    selected = select_events_for_month(events, date(2026, 3, 1), "UTC")
    assert [event["title"] for event in selected] == ["Crosses in", "Inside"]


def test_grid_day_all_day_uses_utc_dates():
    holiday = _event("Holiday", "2026-05-03T00:00:00+00:00", "2026-05-05T00:00:00+00:00", all_day=True)
    # In New York these instants fall on the previous evening; all-day events keep their own dates.
    assert events_for_grid_day([holiday], date(2026, 5, 3), "America/New_York") == [holiday]
    assert events_for_grid_day([holiday], date(2026, 5, 5), "America/New_York") == [holiday]
    assert events_for_grid_day([holiday], date(2026, 5, 6), "America/New_York") == []


def test_day_list_matches_grid_for_all_day_event_west_of_utc():
    holiday = _event("Holiday", "2026-10-17T00:00:00+00:00", "2026-10-17T00:00:00+00:00", all_day=True)
    zone = "America/New_York"
    assert events_for_grid_day([holiday], date(2026, 10, 17), zone) == [holiday]
    assert select_events_for_date([holiday], date(2026, 10, 17), zone) == [holiday]
    assert select_events_for_date([holiday], date(2026, 10, 16), zone) == []
    assert select_events_for_date([holiday], date(2026, 10, 18), zone) == []


def test_grid_day_timed_event_uses_local_start_date():
    late = _event("Late call", "2026-03-09T20:00:00+00:00", "2026-03-09T21:00:00+00:00")
    assert events_for_grid_day([late], date(2026, 3, 10), "Asia/Tokyo") == [late]
    assert events_for_grid_day([late], date(2026, 3, 9), "Asia/Tokyo") == []


def test_results_sorted_by_start():
    later = _event("Later", "2026-03-10T15:00:00+00:00", "2026-03-10T16:00:00+00:00")
    earlier = _event("Earlier", "2026-03-10T08:00:00+00:00", "2026-03-10T09:00:00+00:00")
    assert select_events_for_date([later, earlier], date(2026, 3, 10), timezone.utc) == [earlier, later]


def test_month_grid_is_sunday_first():
    weeks = month_grid(date(2026, 3, 18))
    assert all(len(week) == 7 for week in weeks)
    assert weeks[0][0] == date(2026, 3, 1)  # March 2026 starts on a Sunday
    assert weeks[0][0].weekday() == 6
    assert weeks[-1][-1].weekday() == 5
    assert date(2026, 3, 31) in weeks[-1]
