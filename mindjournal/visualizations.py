from __future__ import annotations

import html
from datetime import date

from mindjournal.calendar_filter import month_grid
from mindjournal.constants import EMOTION_COLORS, EMOTION_MAX, EMOTION_MIN, WEEKDAY_LABELS


def apply_common_plot_style(fig, title, theme, show_xgrid=True, show_ygrid=True):
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=16, family="Crimson Text"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"], family="IBM Plex Sans"),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
            showline=True,
            linecolor=theme["border"],
            mirror=True,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=theme["plot_grid"],
            zeroline=False,
            tickfont=dict(color=theme["text_soft"]),
            showline=True,
            linecolor=theme["border"],
            mirror=True,
        ),
    )
    return fig


def emotion_trend_chart(trend, title, theme, height=280):
    import pandas as pd
    import plotly.graph_objects as go

    frame = pd.DataFrame(trend, columns=["date", "score"])
    frame["date"] = pd.to_datetime(frame["date"], utc=True, format="ISO8601")
    colors = [EMOTION_COLORS.get(int(score), theme["accent"]) for score in frame["score"]]
    fig = go.Figure(
        data=go.Scatter(
            x=frame["date"],
            y=frame["score"],
            mode="lines+markers",
            line=dict(color=theme["accent"], width=2),
            marker=dict(size=9, color=colors, line=dict(width=1, color=theme["plot_marker_line"])),
        )
    )
    apply_common_plot_style(fig, title, theme)
    fig.update_layout(height=height)
    fig.update_yaxes(range=[EMOTION_MIN - 0.5, EMOTION_MAX + 0.5], dtick=1)
    return fig


def build_month_emotion_grid(reference, daily_scores):
    """Sunday-first week rows of average emotion for the month (NaN = no entry / other month)."""
    import numpy as np

    weeks = month_grid(reference)
    z = np.full((len(weeks), 7), np.nan)
    text = [["" for _ in range(7)] for _ in weeks]
    for row, week in enumerate(weeks):
        for col, day in enumerate(week):
            if day.month != reference.month:
                continue
            score = daily_scores.get(day)
            if score is None:
                text[row][col] = f"{day.isoformat()} • -"
            else:
                z[row, col] = score
                text[row][col] = f"{day.isoformat()} • {score:.1f}"
    return z, text


def emotion_heatmap(z, hover_text, language, theme, title=""):
    import plotly.graph_objects as go

    span = EMOTION_MAX - EMOTION_MIN
    colorscale = [((score - EMOTION_MIN) / span, color) for score, color in sorted(EMOTION_COLORS.items())]
    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            text=hover_text,
            hoverinfo="text",
            colorscale=colorscale,
            showscale=False,
            zmin=EMOTION_MIN,
            zmax=EMOTION_MAX,
            xgap=3,
            ygap=3,
        )
    )
    apply_common_plot_style(fig, title, theme, show_xgrid=False, show_ygrid=False)
    labels = WEEKDAY_LABELS.get(language, WEEKDAY_LABELS["en"])
    fig.update_layout(margin=dict(l=20, r=20, t=40, b=20), height=260)
    fig.update_xaxes(tickmode="array", tickvals=list(range(7)), ticktext=labels, side="top")
    fig.update_yaxes(showticklabels=False, autorange="reversed")
    return fig


def tag_chips_html(tags):
    return "".join(f"<span class='tag-chip'>#{html.escape(str(tag))}</span>" for tag in tags or [])


def build_month_calendar_html(reference, events_by_day, language, today=None, max_chips=3):
    today = today or date.today()
    labels = WEEKDAY_LABELS.get(language, WEEKDAY_LABELS["en"])
    header_cells = "".join(f"<th>{label}</th>" for label in labels)
    rows = []
    for week in month_grid(reference):
        cells = []
        for day in week:
            classes = []
            if day.month != reference.month:
                classes.append("outside")
            if day == today:
                classes.append("today")
            events = events_by_day.get(day, [])
            chips = "".join(
                f"<span class='event-chip'>{html.escape(str(event.get('title') or ''))}</span>"
                for event in events[:max_chips]
            )
            if len(events) > max_chips:
                chips += f"<span class='small-label'>+{len(events) - max_chips}</span>"
            cells.append(f"<td class='{' '.join(classes)}'><div>{day.day}</div>{chips}</td>")
        rows.append(f"<tr>{''.join(cells)}</tr>")
    return (
        "<table class='month-grid'>"
        f"<thead><tr>{header_cells}</tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
    )
