import json
import logging
from datetime import datetime, timezone

from mindjournal.constants import EXPORT_FILENAME_PREFIX
from mindjournal.metrics import parse_timestamp

logger = logging.getLogger(__name__)

EXPORT_KEYS = ("user", "journal_entries", "events", "exported_at")
USER_EXPORT_FIELDS = ("id", "email", "full_name")


def build_export_payload(user, entries, events, exported_at=None):
    if exported_at is None:
        exported_at = datetime.now(timezone.utc)
    user = user or {}
    return {
        "user": {key: user.get(key) for key in USER_EXPORT_FIELDS},
        "journal_entries": [dict(entry) for entry in entries or []],
        "events": [dict(event) for event in events or []],
        "exported_at": parse_timestamp(exported_at).isoformat(),
    }


def export_filename(exported_at=None):
    if exported_at is None:
        exported_at = datetime.now(timezone.utc)
    return f"{EXPORT_FILENAME_PREFIX}-{parse_timestamp(exported_at).date().isoformat()}.json"


def dumps(payload):
    return json.dumps(payload, indent=2, ensure_ascii=False)


def parse_import(raw):
    """Parse and check an export document. Nothing is written back to the store."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Import file is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Import file must contain a JSON object")
    missing = [key for key in EXPORT_KEYS if key not in payload]
    if missing:
        raise ValueError(f"Import file is missing keys: {', '.join(missing)}")
    for key in ("journal_entries", "events"):
        if not isinstance(payload[key], list):
            raise ValueError(f"Import field '{key}' must be a list")
    logger.info(
        "Parsed import file: %s entries, %s events (exported_at=%s)",
        len(payload["journal_entries"]),
        len(payload["events"]),
        payload["exported_at"],
    )
    return payload
