from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

import streamlit as st

from mindjournal import calendar_filter
from mindjournal.constants import MAX_NOTIFICATION_MINUTES
from mindjournal.data import repositories
from mindjournal.errors import AuthError, StoreError, user_message
from mindjournal.i18n import t
from mindjournal.metrics import parse_timestamp
from mindjournal.state import session_slices
from mindjournal.validation import validate_event
from mindjournal.visualizations import build_month_calendar_html

SLICE = "calendar"


def _shift_month(reference, months):
    month_index = reference.year * 12 + reference.month - 1 + months
    return reference.replace(year=month_index // 12, month=month_index % 12 + 1, day=1)


def _format_event_time(event, tz):
    start = parse_timestamp(event["start_date"])
    end = parse_timestamp(event["end_date"])
    if event.get("all_day"):
        return start.date().isoformat() if start.date() == end.date() else f"{start.date()} → {end.date()}"
    zone = ZoneInfo(tz)
    return f"{start.astimezone(zone):%m/%d %H:%M} → {end.astimezone(zone):%m/%d %H:%M}"


def event_form_defaults(event, tz, default_day, settings):
    """Initial widget values for the event form, from an existing event or the user's settings."""
    if not event:
        return {
            "title": "",
            "description": "",
            "location": "",
            "all_day": False,
            "start_day": default_day,
            "start_time": time(9, 0),
            "end_day": default_day,
            "end_time": time(10, 0),
            "notify": bool(settings.get("notifications_enabled")),
            "minutes": int(settings.get("default_notification_minutes") or 0),
        }
    start = parse_timestamp(event["start_date"])
    end = parse_timestamp(event["end_date"])
    # All-day dates are anchored in UTC; timed events are shown in the user's zone.
    zone = timezone.utc if event.get("all_day") else ZoneInfo(tz)
    start, end = start.astimezone(zone), end.astimezone(zone)
    return {
        "title": event.get("title") or "",
        "description": event.get("description") or "",
        "location": event.get("location") or "",
        "all_day": bool(event.get("all_day")),
        "start_day": start.date(),
        "start_time": start.time().replace(second=0, microsecond=0),
        "end_day": end.date(),
        "end_time": end.time().replace(second=0, microsecond=0),
        "notify": bool(event.get("notification_enabled")),
        "minutes": int(event.get("notification_minutes") or 0),
    }


def _render_event_form(ctx, form_key, initial, clear_on_submit=False):
    """Event fields in a form; returns validated data on a clean submit, else None."""
    state = ctx["state"]
    language = state.language
    with st.form(form_key, clear_on_submit=clear_on_submit):
        title = st.text_input(t("title", language), value=initial["title"], key=f"{form_key}.title")
        description = st.text_area(
            t("description", language), value=initial["description"], height=80, key=f"{form_key}.description"
        )
        location = st.text_input(t("location", language), value=initial["location"], key=f"{form_key}.location")
        all_day = st.checkbox(t("all_day", language), value=initial["all_day"], key=f"{form_key}.all_day")
        start_col, end_col = st.columns(2)
        start_day = start_col.date_input(t("start", language), value=initial["start_day"], key=f"{form_key}.start_day")
        start_time = start_col.time_input(t("start", language), value=initial["start_time"], key=f"{form_key}.start_time")
        end_day = end_col.date_input(t("end", language), value=initial["end_day"], key=f"{form_key}.end_day")
        end_time = end_col.time_input(t("end", language), value=initial["end_time"], key=f"{form_key}.end_time")
        notify = st.checkbox(t("notify", language), value=initial["notify"], key=f"{form_key}.notify")
        minutes = st.number_input(
            t("minutes_before", language),
            min_value=0,
            max_value=MAX_NOTIFICATION_MINUTES,
            value=min(initial["minutes"], MAX_NOTIFICATION_MINUTES),
            step=5,
            key=f"{form_key}.minutes",
        )
        submitted = st.form_submit_button(t("save", language))
    if not submitted:
        return None
    result = validate_event(
        title,
        datetime.combine(start_day, start_time),
        datetime.combine(end_day, end_time),
        all_day=all_day,
        description=description,
        location=location,
        notification_enabled=notify,
        notification_minutes=minutes,
        timezone_name=state.timezone,
        language=language,
    )
    if not result.ok:
        for err in result.errors:
            st.error(err.message)
        return None
    return result.data


def _open_editor(event_id, language):
    try:
        event = repositories.get_event(event_id)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    session_slices.set_value(SLICE, "editing", event)
    session_slices.toggle_menu(SLICE, event_id)


def _render_editor(ctx, event_id):
    language = ctx["state"].language
    event = session_slices.get_value(SLICE, "editing") or {}
    if event.get("id") != event_id:
        return
    initial = event_form_defaults(event, ctx["state"].timezone, None, ctx["state"].settings)
    data = _render_event_form(ctx, f"calendar.edit.{event_id}", initial)
    if data is None:
        return
    try:
        repositories.update_event(event_id, data)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    session_slices.toggle_menu(SLICE, event_id)
    session_slices.set_value(SLICE, "editing", None)
    st.success(t("saved", language))
    st.rerun()


def _render_month(ctx, month_ref):
    state = ctx["state"]
    language = state.language
    prev_col, label_col, next_col = st.columns([1, 3, 1])
    if prev_col.button(t("previous", language), key="calendar.prev"):
        session_slices.set_value(SLICE, "month_ref", _shift_month(month_ref, -1))
        st.rerun()
    label_col.markdown(f"<div class='section-title'>{month_ref:%Y-%m}</div>", unsafe_allow_html=True)
    if next_col.button(t("next", language), key="calendar.next"):
        session_slices.set_value(SLICE, "month_ref", _shift_month(month_ref, 1))
        st.rerun()

    try:
        events = repositories.get_month_events(month_ref, state.timezone)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    days = [day for week in calendar_filter.month_grid(month_ref) for day in week]
    by_day = calendar_filter.group_events_by_day(events, days, state.timezone)
    st.markdown(
        build_month_calendar_html(month_ref, by_day, language, today=ctx["today"]),
        unsafe_allow_html=True,
    )


def _render_day(ctx, selected_day):
    state = ctx["state"]
    language = state.language
    st.markdown(
        f"<div class='section-title'>{selected_day.isoformat()} {t('events_on', language)}</div>",
        unsafe_allow_html=True,
    )
    try:
        events = repositories.get_events_for_date(selected_day, state.timezone)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    if not events:
        st.caption(t("no_events", language))
    for event in events:
        event_id = event["id"]
        title_col, edit_col, action_col = st.columns([4, 1, 1])
        title_col.markdown(
            f"**{event['title']}** <span class='small-label'>{_format_event_time(event, state.timezone)}"
            f"{' • ' + event['location'] if event.get('location') else ''}</span>",
            unsafe_allow_html=True,
        )
        if event.get("description"):
            title_col.caption(event["description"])
        if edit_col.button(t("edit", language), key=f"calendar.edit_toggle.{event_id}"):
            if session_slices.is_menu_open(SLICE, event_id):
                session_slices.toggle_menu(SLICE, event_id)
            else:
                _open_editor(event_id, language)
        if action_col.button(t("delete", language), key=f"calendar.delete.{event_id}"):
            session_slices.request_delete(SLICE, event_id)
        if session_slices.pending_delete(SLICE) == event_id:
            st.warning(t("confirm_delete", language))
            yes_col, no_col = st.columns(2)
            if yes_col.button(t("delete", language), key=f"calendar.confirm.{event_id}"):
                try:
                    repositories.delete_event(event_id)
                except (AuthError, StoreError) as exc:
                    st.error(user_message(exc, language))
                    return
                session_slices.cancel_delete(SLICE)
                st.rerun()
            if no_col.button(t("cancel", language), key=f"calendar.cancel.{event_id}"):
                session_slices.cancel_delete(SLICE)
                st.rerun()
        if session_slices.is_menu_open(SLICE, event_id):
            _render_editor(ctx, event_id)


def _render_new_event(ctx, selected_day):
    state = ctx["state"]
    language = state.language
    initial = event_form_defaults(None, state.timezone, selected_day, state.settings)
    with st.expander(t("new_event", language)):
        data = _render_event_form(ctx, "calendar.new_event", initial, clear_on_submit=True)
    if data is None:
        return
    try:
        repositories.create_event(data)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    st.success(t("saved", language))
    st.rerun()


def render_calendar_tab(ctx):
    today = ctx["today"]
    month_ref = session_slices.get_value(SLICE, "month_ref") or today.replace(day=1)
    _render_month(ctx, month_ref)
    default_day = today if (today.year, today.month) == (month_ref.year, month_ref.month) else month_ref
    selected_day = st.date_input(
        t("selected_day", ctx["state"].language),
        value=default_day,
        key=f"calendar.selected.{month_ref:%Y-%m}",
    )
    _render_day(ctx, selected_day)
    _render_new_event(ctx, selected_day)
