APP_NAME = "MindJournal"
EXPORT_FILENAME_PREFIX = "mindjournal-data"

EMOTION_MIN = 1
EMOTION_MAX = 10
EMOTION_LABELS = {
    1: "Terrible",
    2: "Very bad",
    3: "Bad",
    4: "Low",
    5: "So-so",
    6: "Okay",
    7: "Good",
    8: "Very good",
    9: "Great",
    10: "Wonderful",
}
EMOTION_EMOJI = {
    1: "😭",
    2: "😢",
    3: "😞",
    4: "😕",
    5: "😐",
    6: "🙂",
    7: "😊",
    8: "😄",
    9: "😁",
    10: "🤩",
}
EMOTION_COLORS = {
    1: "#b23a48",
    2: "#d1495b",
    3: "#e07a5f",
    4: "#f2a65a",
    5: "#f2cc8f",
    6: "#d8e2a7",
    7: "#a8d5a2",
    8: "#81b29a",
    9: "#5fa8d3",
    10: "#3d5a80",
}

MIN_CONTENT_LENGTH = 10
MIN_PASSWORD_LENGTH = 6
MAX_NOTIFICATION_MINUTES = 7 * 24 * 60
MIN_FULL_NAME_LENGTH = 2
MAX_TOP_TAGS = 5
EMOTION_TREND_POINTS = 30

THEMES = ["light", "dark", "auto"]
LANGUAGES = ["ja", "en"]
LANGUAGE_LABELS = {"ja": "日本語", "en": "English"}
NOTIFICATION_MINUTE_OPTIONS = [0, 5, 10, 15, 30, 60, 120, 1440]
TIMEZONE_OPTIONS = [
    "Asia/Tokyo",
    "Asia/Seoul",
    "Asia/Shanghai",
    "Asia/Singapore",
    "Europe/London",
    "Europe/Paris",
    "America/New_York",
    "America/Los_Angeles",
    "UTC",
]

DEFAULT_USER_SETTINGS = {
    "theme": "light",
    "language": "ja",
    "notifications_enabled": True,
    "email_notifications": True,
    "default_notification_minutes": 15,
    "timezone": "Asia/Tokyo",
}

WEEKDAY_LABELS = {
    "ja": ["日", "月", "火", "水", "木", "金", "土"],
    "en": ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
}
