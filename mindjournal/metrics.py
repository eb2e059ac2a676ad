from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

from mindjournal.constants import EMOTION_TREND_POINTS, MAX_TOP_TAGS


@dataclass
class DashboardStats:
    total_entries: int = 0
    average_emotion: float = 0
    streak_days: int = 0
    top_tags: list = field(default_factory=list)
    emotion_trend: list = field(default_factory=list)

    def to_dict(self):
        return {
            "totalEntries": self.total_entries,
            "averageEmotion": self.average_emotion,
            "streakDays": self.streak_days,
            "topTags": list(self.top_tags),
            "emotionTrend": [dict(point) for point in self.emotion_trend],
        }


def parse_timestamp(value):
    """ISO-8601 string or datetime -> aware datetime.

    Naive values are read as local wall-clock time. Anything unparseable
    raises ``ValueError``.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value or "").strip()
        if not text:
            raise ValueError(f"Malformed timestamp: {value!r}")
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Malformed timestamp: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def local_day(moment, tz):
    if isinstance(tz, str):
        tz = ZoneInfo(tz)
    return moment.astimezone(tz).date() if tz is not None else moment.astimezone().date()


def average_emotion(entries):
    if not entries:
        return 0
    return sum(int(entry["emotion_score"]) for entry in entries) / len(entries)


def top_tags(entries, limit=MAX_TOP_TAGS):
    counts = Counter()
    for entry in entries:
        counts.update(entry.get("tags") or [])
    # most_common keeps first-encountered order among equal counts
    return [tag for tag, _ in counts.most_common(limit)]


def emotion_trend(entries, points=EMOTION_TREND_POINTS):
    recent = [{"date": entry["created_at"], "score": int(entry["emotion_score"])} for entry in entries[:points]]
    recent.reverse()
    return recent


def calculate_streak(entries, now=None, tz=None):
    """Consecutive-day streak over entries sorted newest-first.

    Walks entries from the newest; an entry extends the streak when it falls
    exactly ``streak`` calendar days before today. The first entry that does
    not stops the walk, so a newest entry older than today yields 0 and two
    entries on the same day end the streak at that day.
    """
    if not entries:
        return 0
    today = local_day(parse_timestamp(now) if now is not None else datetime.now().astimezone(), tz)
    streak = 0
    for entry in entries:
        entry_day = local_day(parse_timestamp(entry["created_at"]), tz)
        if (today - entry_day).days == streak:
            streak += 1
        else:
            break
    return streak


def compute_dashboard_stats(entries, now=None, tz=None):
    entries = list(entries or [])
    for entry in entries:
        parse_timestamp(entry.get("created_at"))
    return DashboardStats(
        total_entries=len(entries),
        average_emotion=average_emotion(entries),
        streak_days=calculate_streak(entries, now=now, tz=tz),
        top_tags=top_tags(entries),
        emotion_trend=emotion_trend(entries),
    )
