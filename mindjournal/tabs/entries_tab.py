import streamlit as st

from mindjournal.constants import EMOTION_EMOJI, EMOTION_MAX, EMOTION_MIN
from mindjournal.data import repositories
from mindjournal.errors import AuthError, StoreError, user_message
from mindjournal.i18n import t
from mindjournal.search import filter_by_emotion, filter_entries
from mindjournal.state import session_slices
from mindjournal.tabs.write_tab import render_entry_form
from mindjournal.visualizations import tag_chips_html

SLICE = "entries"


def _delete(entry_id, language):
    try:
        repositories.delete_entry(entry_id)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    session_slices.cancel_delete(SLICE)
    st.success(t("deleted", language))
    st.rerun()


def _render_entry(entry, language):
    entry_id = entry["id"]
    score = int(entry["emotion_score"])
    header = f"{EMOTION_EMOJI.get(score, '')} {entry['title']} · {entry['created_at'][:10]}"
    with st.expander(header):
        st.write(entry["content"])
        st.markdown(tag_chips_html(entry.get("tags")), unsafe_allow_html=True)

        edit_col, delete_col = st.columns(2)
        if edit_col.button(t("edit", language), key=f"entries.edit.{entry_id}"):
            session_slices.toggle_menu(SLICE, entry_id)
        if delete_col.button(t("delete", language), key=f"entries.delete.{entry_id}"):
            session_slices.request_delete(SLICE, entry_id)

        if session_slices.pending_delete(SLICE) == entry_id:
            st.warning(t("confirm_delete", language))
            yes_col, no_col = st.columns(2)
            if yes_col.button(t("delete", language), key=f"entries.confirm.{entry_id}"):
                _delete(entry_id, language)
            if no_col.button(t("cancel", language), key=f"entries.cancel.{entry_id}"):
                session_slices.cancel_delete(SLICE)
                st.rerun()

        if session_slices.is_menu_open(SLICE, entry_id):
            data = render_entry_form(language, f"entries.form.{entry_id}", initial=entry)
            if data is not None:
                try:
                    repositories.update_entry(entry_id, data)
                except (AuthError, StoreError) as exc:
                    st.error(user_message(exc, language))
                    return
                session_slices.toggle_menu(SLICE, entry_id)
                st.success(t("saved", language))
                st.rerun()


def render_entries_tab(ctx):
    language = ctx["state"].language
    query_col, range_col = st.columns([2, 1])
    query = query_col.text_input(t("search", language), key="entries.query")
    low, high = range_col.slider(
        t("emotion_score", language),
        min_value=EMOTION_MIN,
        max_value=EMOTION_MAX,
        value=(EMOTION_MIN, EMOTION_MAX),
        key="entries.emotion_range",
    )
    try:
        entries = repositories.list_entries()
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    visible = filter_by_emotion(filter_entries(entries, query), minimum=low, maximum=high)
    if not visible:
        st.info(t("no_entries", language))
        return
    st.caption(f"{len(visible)} / {len(entries)}")
    for entry in visible:
        _render_entry(entry, language)
