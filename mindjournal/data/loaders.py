from __future__ import annotations

import pandas as pd

from mindjournal.metrics import local_day, parse_timestamp

ENTRY_FRAME_COLUMNS = ["id", "title", "emotion_score", "tags", "created_at", "day"]


def entries_frame(entries, tz=None) -> pd.DataFrame:
    """Entries as a frame with a ``day`` column in the user's timezone."""
    if not entries:
        return pd.DataFrame(columns=ENTRY_FRAME_COLUMNS)
    frame = pd.DataFrame(entries)
    frame["day"] = [local_day(parse_timestamp(value), tz) for value in frame["created_at"]]
    frame["emotion_score"] = pd.to_numeric(frame["emotion_score"], errors="coerce")
    if "tags" not in frame:
        frame["tags"] = [[] for _ in range(len(frame))]
    return frame


def daily_average_emotion(frame: pd.DataFrame) -> dict:
    if frame.empty:
        return {}
    grouped = frame.groupby("day")["emotion_score"].mean()
    return {day: float(value) for day, value in grouped.items()}

