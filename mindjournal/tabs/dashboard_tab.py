import logging

import streamlit as st

from mindjournal.constants import EMOTION_EMOJI
from mindjournal.data import repositories
from mindjournal.data.loaders import daily_average_emotion, entries_frame
from mindjournal.errors import AuthError, StoreError, user_message
from mindjournal.i18n import t
from mindjournal.metrics import compute_dashboard_stats
from mindjournal.visualizations import (
    build_month_emotion_grid,
    emotion_heatmap,
    emotion_trend_chart,
    tag_chips_html,
)

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


def render_dashboard_tab(ctx):
    state = ctx["state"]
    language = state.language
    theme = ctx["theme"]["palette"]

    try:
        entries = repositories.list_entries()
    except (AuthError, StoreError) as exc:
        st.error(user_message(exc, language))
        return

    stats = compute_dashboard_stats(entries, tz=state.timezone)
    col_total, col_avg, col_streak = st.columns(3)
    col_total.metric(t("total_entries", language), stats.total_entries)
    col_avg.metric(t("average_emotion", language), f"{stats.average_emotion:.1f}")
    col_streak.metric(t("streak_days", language), stats.streak_days)

    st.markdown(f"<div class='section-title'>{t('top_tags', language)}</div>", unsafe_allow_html=True)
    if stats.top_tags:
        st.markdown(tag_chips_html(stats.top_tags), unsafe_allow_html=True)
    else:
        st.caption("-")

    if not entries:
        st.info(t("no_entries", language))
        return

    st.plotly_chart(
        emotion_trend_chart(stats.emotion_trend, t("emotion_trend", language), theme),
        use_container_width=True,
    )

    daily = daily_average_emotion(entries_frame(entries, state.timezone))
    z, text = build_month_emotion_grid(ctx["today"], daily)
    st.plotly_chart(emotion_heatmap(z, text, language, theme), use_container_width=True)

    st.markdown(f"<div class='section-title'>{t('recent_entries', language)}</div>", unsafe_allow_html=True)
    for entry in entries[:RECENT_LIMIT]:
        score = int(entry["emotion_score"])
        st.markdown(
            f"{EMOTION_EMOJI.get(score, '')} **{entry['title']}** "
            f"<span class='small-label'>{entry['created_at'][:10]} • {score}/10</span>",
            unsafe_allow_html=True,
        )
