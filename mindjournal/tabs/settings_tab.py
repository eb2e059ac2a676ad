import logging

import streamlit as st

from mindjournal import export
from mindjournal.auth import sign_out
from mindjournal.constants import (
    LANGUAGE_LABELS,
    LANGUAGES,
    NOTIFICATION_MINUTE_OPTIONS,
    THEMES,
    TIMEZONE_OPTIONS,
)
from mindjournal.data import repositories
from mindjournal.errors import AuthError, StoreError, user_message
from mindjournal.i18n import t
from mindjournal.state import session_slices
from mindjournal.validation import validate_profile, validate_settings

logger = logging.getLogger(__name__)

SLICE = "settings"


def _save_settings(state, patch):
    language = state.language
    result = validate_settings(patch, language)
    if not result.ok:
        for err in result.errors:
            st.error(err.message)
        return
    try:
        updated = repositories.update_settings(result.data)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    state.set_settings(updated)
    st.success(t("saved", state.language))


def _render_profile(state):
    language = state.language
    user = state.user or {}
    with st.form("settings.profile"):
        full_name = st.text_input(t("full_name", language), value=user.get("full_name") or "")
        st.text_input(t("email", language), value=user.get("email") or "", disabled=True)
        submitted = st.form_submit_button(t("save", language))
    if not submitted:
        return
    result = validate_profile(full_name, user.get("email"), language)
    if not result.ok:
        for err in result.errors:
            st.error(err.message)
        return
    try:
        updated = repositories.update_profile(result.data["full_name"])
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    state.set_user(updated)
    st.success(t("saved", language))


def _render_notifications(state):
    language = state.language
    settings = state.settings
    current_minutes = int(settings.get("default_notification_minutes") or 0)
    minute_options = sorted(set(NOTIFICATION_MINUTE_OPTIONS) | {current_minutes})
    with st.form("settings.notifications"):
        enabled = st.toggle(t("notifications_enabled", language), value=bool(settings.get("notifications_enabled")))
        email = st.toggle(t("email_notifications", language), value=bool(settings.get("email_notifications")))
        minutes = st.selectbox(
            t("default_minutes", language),
            minute_options,
            index=minute_options.index(current_minutes),
        )
        submitted = st.form_submit_button(t("save", language))
    if submitted:
        _save_settings(
            state,
            {
                "notifications_enabled": enabled,
                "email_notifications": email,
                "default_notification_minutes": minutes,
            },
        )


def _render_appearance(state):
    language = state.language
    settings = state.settings
    timezones = list(TIMEZONE_OPTIONS)
    if settings["timezone"] not in timezones:
        timezones.append(settings["timezone"])
    with st.form("settings.appearance"):
        theme = st.selectbox(t("theme", language), THEMES, index=THEMES.index(settings["theme"]))
        new_language = st.selectbox(
            t("language", language),
            LANGUAGES,
            index=LANGUAGES.index(settings["language"]),
            format_func=lambda code: LANGUAGE_LABELS[code],
        )
        timezone_name = st.selectbox(t("timezone", language), timezones, index=timezones.index(settings["timezone"]))
        submitted = st.form_submit_button(t("save", language))
    if submitted:
        _save_settings(state, {"theme": theme, "language": new_language, "timezone": timezone_name})
        st.rerun()


def _render_data(state):
    language = state.language
    if st.button(t("export", language), key="settings.export"):
        try:
            session_slices.set_value(SLICE, "export_payload", repositories.export_user_data(state.user))
        except (AuthError, StoreError) as exc:
            st.error(user_message(exc, language))
    payload = session_slices.get_value(SLICE, "export_payload")
    if payload is not None:
        st.download_button(
            "⬇ JSON",
            data=export.dumps(payload),
            file_name=export.export_filename(payload["exported_at"]),
            mime="application/json",
        )

    uploaded = st.file_uploader(t("import", language), type=["json"], key="settings.import")
    if uploaded is not None:
        try:
            parsed = export.parse_import(uploaded.getvalue())
        except ValueError as exc:
            st.error(str(exc))
            return
        st.info(t("import_parsed", language))
        st.caption(f"{len(parsed['journal_entries'])} entries • {len(parsed['events'])} events")


def _render_privacy(state):
    language = state.language
    st.warning(t("delete_account_warning", language))
    if st.button(t("delete_account", language), key="settings.delete_account"):
        session_slices.request_delete(SLICE, "account")
    if session_slices.pending_delete(SLICE) != "account":
        return
    yes_col, no_col = st.columns(2)
    if yes_col.button(t("delete", language), key="settings.delete_account.confirm"):
        try:
            repositories.delete_account()
        except (AuthError, StoreError) as exc:
            st.error(user_message(exc, language))
            return
        session_slices.clear_slice(SLICE)
        state.clear()
        st.rerun()
    if no_col.button(t("cancel", language), key="settings.delete_account.cancel"):
        session_slices.cancel_delete(SLICE)
        st.rerun()


def render_settings_tab(ctx):
    state = ctx["state"]
    language = state.language
    sections = st.tabs(
        [
            t("profile", language),
            t("notifications", language),
            t("appearance", language),
            t("data", language),
            t("privacy", language),
        ]
    )
    with sections[0]:
        _render_profile(state)
    with sections[1]:
        _render_notifications(state)
    with sections[2]:
        _render_appearance(state)
    with sections[3]:
        _render_data(state)
    with sections[4]:
        _render_privacy(state)
    st.divider()
    if st.button(t("sign_out", language), key="settings.sign_out"):
        sign_out(state)
        st.rerun()
