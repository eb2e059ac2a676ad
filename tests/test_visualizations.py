import math
from datetime import date

from mindjournal.data.loaders import daily_average_emotion, entries_frame
from mindjournal.theme import THEME_PRESETS, resolve_theme_name
from mindjournal.visualizations import (
    build_month_calendar_html,
    build_month_emotion_grid,
    emotion_trend_chart,
)

ENTRIES = [
    {"id": "1", "title": "a", "emotion_score": 8, "tags": ["x"], "created_at": "2026-03-10T01:00:00.000+00:00"},
    {"id": "2", "title": "b", "emotion_score": 4, "tags": ["x", "y"], "created_at": "2026-03-10T05:00:00.000+00:00"},
    {"id": "3", "title": "c", "emotion_score": 6, "tags": [], "created_at": "2026-03-09T20:00:00.000+00:00"},
]


def test_daily_average_groups_by_local_day():
    frame = entries_frame(ENTRIES, "Asia/Tokyo")
    assert daily_average_emotion(frame) == {date(2026, 3, 10): 6.0}

    frame_utc = entries_frame(ENTRIES, "UTC")
    assert daily_average_emotion(frame_utc) == {date(2026, 3, 9): 6.0, date(2026, 3, 10): 6.0}


def test_empty_frame():
    frame = entries_frame([], "UTC")
    assert frame.empty
    assert daily_average_emotion(frame) == {}


def test_month_emotion_grid_places_scores():
    z, text = build_month_emotion_grid(date(2026, 3, 1), {date(2026, 3, 10): 6.5})
    # March 2026 starts on Sunday, so the 10th is row 1, Tuesday.
    assert z[1][2] == 6.5
    assert math.isnan(z[0][0])
    assert text[1][2] == "2026-03-10 • 6.5"
    assert text[-1][-1] == ""


def test_month_calendar_html_marks_today_and_escapes():
    events = {date(2026, 3, 10): [{"title": "<b>Dentist</b>"}]}
    markup = build_month_calendar_html(date(2026, 3, 1), events, "en", today=date(2026, 3, 10))
    assert "<th>Sun</th>" in markup
    assert "class='today'" in markup
    assert "&lt;b&gt;Dentist&lt;/b&gt;" in markup
    assert "class='outside'" in markup


def test_trend_chart_has_one_point_per_entry():
    trend = [{"date": "2026-03-09T01:00:00.000+00:00", "score": 6}, {"date": "2026-03-10T01:00:00.000+00:00", "score": 8}]
    fig = emotion_trend_chart(trend, "Trend", THEME_PRESETS["light"])
    assert list(fig.data[0].y) == [6, 8]


def test_resolve_theme_name():
    assert resolve_theme_name("dark") == "dark"
    assert resolve_theme_name("auto", "dark") == "dark"
    assert resolve_theme_name("auto", None) == "light"
