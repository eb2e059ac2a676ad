import logging
from datetime import datetime, timezone

import pytest

from mindjournal.export import build_export_payload, dumps, export_filename, parse_import

USER = {"id": "u1", "email": "taro@example.com", "full_name": "山田太郎", "email_confirmed": True}
ENTRIES = [
    {
        "id": "e1",
        "user_id": "u1",
        "title": "良い一日",
        "content": "川沿いを長く散歩した。",
        "emotion_score": 8,
        "tags": ["散歩", "nature"],
        "created_at": "2026-03-10T01:00:00.000+00:00",
        "updated_at": "2026-03-10T01:00:00.000+00:00",
    }
]
EVENTS = [
    {
        "id": "v1",
        "user_id": "u1",
        "title": "Dentist",
        "description": "",
        "location": "Clinic",
        "start_date": "2026-03-12T01:00:00.000+00:00",
        "end_date": "2026-03-12T02:00:00.000+00:00",
        "all_day": False,
        "notification_enabled": True,
        "notification_minutes": 15,
        "created_at": "2026-03-10T01:00:00.000+00:00",
        "updated_at": "2026-03-10T01:00:00.000+00:00",
    }
]
EXPORTED_AT = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


def test_payload_shape():
    payload = build_export_payload(USER, ENTRIES, EVENTS, exported_at=EXPORTED_AT)
    assert set(payload) == {"user", "journal_entries", "events", "exported_at"}
    assert payload["user"] == {"id": "u1", "email": "taro@example.com", "full_name": "山田太郎"}
    assert payload["exported_at"] == "2026-03-14T09:30:00+00:00"


def test_filename_uses_export_date():
    assert export_filename(EXPORTED_AT) == "mindjournal-data-2026-03-14.json"


def test_dumps_keeps_unicode_and_indents():
    text = dumps(build_export_payload(USER, ENTRIES, EVENTS, exported_at=EXPORTED_AT))
    assert "山田太郎" in text
    assert '\n  "user"' in text


def test_reparse_preserves_rows(caplog):
    text = dumps(build_export_payload(USER, ENTRIES, EVENTS, exported_at=EXPORTED_AT))
    with caplog.at_level(logging.INFO, logger="mindjournal.export"):
        parsed = parse_import(text.encode("utf-8"))
    assert parsed["journal_entries"] == ENTRIES
    assert parsed["events"] == EVENTS
    assert "1 entries, 1 events" in caplog.text


@pytest.mark.parametrize(
    "raw, message",
    [
        ("{not json", "not valid JSON"),
        ("[]", "JSON object"),
        ('{"user": {}, "events": []}', "missing keys"),
        ('{"user": {}, "journal_entries": {}, "events": [], "exported_at": "x"}', "must be a list"),
    ],
)
def test_parse_import_rejects_bad_documents(raw, message):
    with pytest.raises(ValueError, match=message):
        parse_import(raw)
