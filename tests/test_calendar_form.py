from datetime import date, datetime, time

from mindjournal.tabs.calendar_tab import event_form_defaults
from mindjournal.validation import validate_event

SETTINGS = {"notifications_enabled": True, "default_notification_minutes": 30}


def test_new_event_defaults_come_from_settings():
    initial = event_form_defaults(None, "Asia/Tokyo", date(2026, 3, 10), SETTINGS)
    assert initial["start_day"] == initial["end_day"] == date(2026, 3, 10)
    assert (initial["start_time"], initial["end_time"]) == (time(9, 0), time(10, 0))
    assert initial["notify"] is True
    assert initial["minutes"] == 30


def test_existing_timed_event_is_shown_in_user_zone():
    event = {
        "id": "ev1",
        "title": "Dentist",
        "description": "",
        "location": "Clinic",
        "start_date": "2026-03-10T01:00:00.000+00:00",
        "end_date": "2026-03-10T02:30:00.000+00:00",
        "all_day": False,
        "notification_enabled": False,
        "notification_minutes": 15,
    }
    initial = event_form_defaults(event, "Asia/Tokyo", None, SETTINGS)
    assert (initial["start_day"], initial["start_time"]) == (date(2026, 3, 10), time(10, 0))
    assert (initial["end_day"], initial["end_time"]) == (date(2026, 3, 10), time(11, 30))
    assert initial["location"] == "Clinic"
    assert initial["notify"] is False


def test_all_day_event_keeps_its_date_when_resubmitted_west_of_utc():
    event = {
        "id": "ev2",
        "title": "Holiday",
        "start_date": "2026-10-17T00:00:00.000+00:00",
        "end_date": "2026-10-17T00:00:00.000+00:00",
        "all_day": True,
        "notification_enabled": True,
        "notification_minutes": 0,
    }
    initial = event_form_defaults(event, "America/New_York", None, SETTINGS)
    assert initial["start_day"] == initial["end_day"] == date(2026, 10, 17)

    result = validate_event(
        initial["title"],
        datetime.combine(initial["start_day"], initial["start_time"]),
        datetime.combine(initial["end_day"], initial["end_time"]),
        all_day=True,
        timezone_name="America/New_York",
    )
    assert result.unwrap()["start_date"] == "2026-10-17T00:00:00+00:00"
