import streamlit as st

from mindjournal.i18n import t
from mindjournal.tabs.calendar_tab import render_calendar_tab
from mindjournal.tabs.dashboard_tab import render_dashboard_tab
from mindjournal.tabs.entries_tab import render_entries_tab
from mindjournal.tabs.settings_tab import render_settings_tab
from mindjournal.tabs.write_tab import render_write_tab


TAB_OPTIONS = ["dashboard", "write", "entries", "calendar", "settings"]


def render_router(ctx):
    language = ctx["state"].language
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
        format_func=lambda option: t(f"tab_{option}", language),
        label_visibility="collapsed",
    )

    if active == "write":
        return _render_write(ctx)

    if active == "entries":
        return _render_entries(ctx)

    if active == "calendar":
        return _render_calendar(ctx)

    if active == "settings":
        # Settings can sign out or switch language, so it reruns the whole app.
        return render_settings_tab(ctx)

    return _render_dashboard(ctx)


@st.fragment
def _render_dashboard(ctx):
    render_dashboard_tab(ctx)


@st.fragment
def _render_write(ctx):
    render_write_tab(ctx)


@st.fragment
def _render_entries(ctx):
    render_entries_tab(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)
