import streamlit as st

from mindjournal.constants import EMOTION_EMOJI, EMOTION_LABELS, EMOTION_MAX, EMOTION_MIN
from mindjournal.data import repositories
from mindjournal.errors import AuthError, StoreError, user_message
from mindjournal.i18n import t
from mindjournal.validation import validate_entry


def split_tags(raw):
    return [item.strip() for item in str(raw or "").split(",") if item.strip()]


def _emotion_label(score):
    return f"{EMOTION_EMOJI[score]} {score} · {EMOTION_LABELS[score]}"


def render_entry_form(language, form_key, initial=None):
    """Entry fields in a form; returns validated data on a clean submit, else None."""
    initial = initial or {}
    scores = list(range(EMOTION_MIN, EMOTION_MAX + 1))
    with st.form(form_key, clear_on_submit=not initial):
        title = st.text_input(t("title", language), value=initial.get("title", ""))
        content = st.text_area(t("content", language), value=initial.get("content", ""), height=220)
        score = st.select_slider(
            t("emotion_score", language),
            options=scores,
            value=int(initial.get("emotion_score") or 5),
            format_func=_emotion_label,
        )
        tags_raw = st.text_input(t("tags", language), value=", ".join(initial.get("tags") or []))
        submitted = st.form_submit_button(t("save", language))
    if not submitted:
        return None
    result = validate_entry(title, content, score, split_tags(tags_raw), language)
    if not result.ok:
        for err in result.errors:
            st.error(err.message)
        return None
    return result.data


def render_write_tab(ctx):
    language = ctx["state"].language
    data = render_entry_form(language, "write.entry_form")
    if data is None:
        return
    try:
        repositories.create_entry(data)
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return
    st.success(t("saved", language))
