import streamlit as st

THEME_PRESETS = {
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "accent": "#8e79af",
        "plot_grid": "#3d3550",
        "plot_marker_line": "#ddd1ea",
        "today_border": "#d9c979",
        "today_bg": "rgba(217, 201, 121, 0.12)",
        "calendar_panel": "rgba(24, 20, 32, 0.55)",
        "outside_month": "rgba(255, 255, 255, 0.25)",
        "event_chip": "rgba(142, 121, 175, 0.45)",
    },
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "border": "#c4b59f",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "accent": "#8f7aa9",
        "plot_grid": "#d9ccbb",
        "plot_marker_line": "#ffffff",
        "today_border": "#9b845f",
        "today_bg": "rgba(203, 184, 154, 0.32)",
        "calendar_panel": "rgba(255, 248, 238, 0.88)",
        "outside_month": "rgba(0, 0, 0, 0.3)",
        "event_chip": "rgba(143, 122, 169, 0.3)",
    },
}


def resolve_theme_name(choice, system_base=None):
    """Map the stored preference (light, dark, auto) to a concrete preset name."""
    if choice in THEME_PRESETS:
        return choice
    if system_base in THEME_PRESETS:
        return system_base
    return "light"


def _system_base():
    try:
        return st.context.theme.type
    except AttributeError:
        return st.get_option("theme.base")


def get_active_theme(settings):
    name = resolve_theme_name((settings or {}).get("theme"), _system_base())
    return name, THEME_PRESETS[name]


def inject_theme_css(settings) -> dict:
    active_name, active_theme = get_active_theme(settings)
    theme_vars_css = "\n".join(
        f"    --{key.replace('_', '-')}: {value};" for key, value in active_theme.items()
    )
    st.markdown(
        """
<style>
@import url('https://fonts.googleapis.com/css2?family=Crimson+Text:wght@400;600&family=IBM+Plex+Sans:wght@300;400;500&display=swap');
:root {
"""
        + theme_vars_css
        + """
}

html, body, [class*="css"] {
    font-family: 'IBM Plex Sans', sans-serif;
    color: var(--text-main);
}

h1, h2, h3, .page-title {
    font-family: 'Crimson Text', serif;
    letter-spacing: 0.4px;
}

.stApp {
    background: radial-gradient(1400px 900px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 58%);
    color: var(--text-main);
}

.section-title {
    font-size: 14px;
    font-weight: 600;
    margin: 0 0 8px 0;
}

.card {
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 14px;
    padding: 16px 18px;
    margin-bottom: 14px;
}

.small-label {
    color: var(--text-soft);
    font-size: 12px;
    letter-spacing: 0.2px;
}

.stMetric {
    background: var(--bg-card);
    padding: 10px 12px;
    border-radius: 12px;
    border: 1px solid var(--border);
}

.tag-chip {
    display: inline-block;
    padding: 2px 8px;
    margin: 0 4px 4px 0;
    border-radius: 10px;
    border: 1px solid var(--border);
    color: var(--text-soft);
    font-size: 12px;
}

.month-grid {
    width: 100%;
    border-collapse: collapse;
    background: var(--calendar-panel);
    table-layout: fixed;
}

.month-grid th {
    color: var(--text-soft);
    font-size: 12px;
    font-weight: 500;
    padding: 6px 0;
}

.month-grid td {
    vertical-align: top;
    height: 84px;
    border: 1px solid var(--border);
    padding: 4px;
    font-size: 12px;
}

.month-grid td.outside {
    color: var(--outside-month);
}

.month-grid td.today {
    border: 2px solid var(--today-border);
    background: var(--today-bg);
}

.event-chip {
    display: block;
    margin-top: 2px;
    padding: 1px 4px;
    border-radius: 4px;
    background: var(--event-chip);
    white-space: nowrap;
    overflow: hidden;
    text-overflow: ellipsis;
}
</style>
""",
        unsafe_allow_html=True,
    )
    return {"name": active_name, "palette": active_theme}
