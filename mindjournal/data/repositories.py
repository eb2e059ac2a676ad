"""Client-side accessors for the MindJournal service.

Every function performs exactly one HTTP round trip through ``api_client``
(except the composed reads at the bottom) and returns plain dicts.
"""
import logging

from mindjournal import calendar_filter, metrics
from mindjournal.data import api_client
from mindjournal.export import build_export_payload

logger = logging.getLogger(__name__)


def _items(payload):
    return list((payload or {}).get("items") or [])


# Auth


def sign_up(email, password, full_name):
    logger.info("Signing up a new account")
    return api_client.request(
        "POST",
        "/v1/auth/signup",
        json={"email": email, "password": password, "full_name": full_name},
        authenticated=False,
    )


def sign_in(email, password):
    logger.info("Signing in")
    return api_client.request(
        "POST",
        "/v1/auth/signin",
        json={"email": email, "password": password},
        authenticated=False,
    )


def confirm_email(email, token):
    return api_client.request(
        "POST",
        "/v1/auth/confirm",
        json={"email": email, "token": token},
        authenticated=False,
    )


def sign_out():
    api_client.request("POST", "/v1/auth/signout")


def update_profile(full_name):
    return api_client.request("PATCH", "/v1/auth/profile", json={"full_name": full_name})["user"]


def delete_account():
    logger.info("Deleting account")
    api_client.request("DELETE", "/v1/auth/account")


def bootstrap():
    return api_client.request("GET", "/v1/bootstrap")


# Journal entries


def list_entries(limit=None):
    params = {"limit": limit} if limit else None
    items = _items(api_client.request("GET", "/v1/entries", params=params))
    logger.debug("Loaded %s entries", len(items))
    return items


def get_entry(entry_id):
    return api_client.request("GET", f"/v1/entries/{entry_id}")


def create_entry(data):
    return api_client.request("POST", "/v1/entries", json=data)


def update_entry(entry_id, patch):
    return api_client.request("PATCH", f"/v1/entries/{entry_id}", json=patch)


def delete_entry(entry_id):
    api_client.request("DELETE", f"/v1/entries/{entry_id}")


# Events


def list_events():
    return _items(api_client.request("GET", "/v1/events"))


def list_events_in_range(start, end):
    params = {"start": start.isoformat(), "end": end.isoformat()}
    return _items(api_client.request("GET", "/v1/events", params=params))


def list_events_for_day(day_start, day_end):
    params = {"start": day_start.isoformat(), "end": day_end.isoformat()}
    return _items(api_client.request("GET", "/v1/events/day", params=params))


def get_event(event_id):
    return api_client.request("GET", f"/v1/events/{event_id}")


def create_event(data):
    return api_client.request("POST", "/v1/events", json=data)


def update_event(event_id, patch):
    return api_client.request("PATCH", f"/v1/events/{event_id}", json=patch)


def delete_event(event_id):
    api_client.request("DELETE", f"/v1/events/{event_id}")


# Settings


def get_settings():
    return api_client.request("GET", "/v1/settings")


def update_settings(patch):
    return api_client.request("PATCH", "/v1/settings", json=patch)


# Composed reads


def get_dashboard_stats(now=None, tz=None):
    entries = list_entries()
    return metrics.compute_dashboard_stats(entries, now=now, tz=tz)


def get_month_events(reference, tz=None):
    start, end = calendar_filter.month_bounds(reference, tz)
    return list_events_in_range(start, end)


def get_events_for_date(day, tz=None):
    start, end = calendar_filter.day_bounds(day, tz)
    return list_events_for_day(start, end)


def export_user_data(user, exported_at=None):
    entries = list_entries()
    events = list_events()
    logger.info("Exporting %s entries and %s events", len(entries), len(events))
    return build_export_payload(user, entries, events, exported_at=exported_at)
