import streamlit as st

# === COLOR PALETTE ===
PRIMARY_COLOR    = "#2563eb"
SUCCESS_COLOR    = "#10b981"
WARNING_COLOR    = "#f59e0b"
DANGER_COLOR     = "#ef4444"

THEMES = {
    False: {"background": "#f3f4f6", "card": "#ffffff", "text": "#111827", "subtle": "#4b5563", "grid": "#e5e7eb"},
    True:  {"background": "#111827", "card": "#1f2937", "text": "#f9fafb", "subtle": "#9ca3af", "grid": "#374151"},
}

STATUS_COLORS = {
    "NORMAL": SUCCESS_COLOR,
    "LOW": WARNING_COLOR,
    "EMPTY": DANGER_COLOR,
}

STATUS_LABELS = {
    "NORMAL": "Normal",
    "LOW": "Below minimum",
    "EMPTY": "Out of stock",
}


def palette(dark_mode: bool) -> dict:
    return THEMES[bool(dark_mode)]


def apply_css(dark_mode: bool = False):
    colors = palette(dark_mode)
    st.markdown(f"""
        <style>
        .stApp {{ background-color: {colors['background']}; color: {colors['text']}; }}
        .kpi-card {{
            background: {colors['card']}; padding: 1rem 1.2rem; border-radius: 10px;
            border: 1px solid {colors['grid']}; box-shadow: 0 2px 6px rgba(0,0,0,0.06);
        }}
        .kpi-card.blue {{ border-left: 4px solid {PRIMARY_COLOR}; }}
        .kpi-card.green {{ border-left: 4px solid {SUCCESS_COLOR}; }}
        .kpi-card.yellow {{ border-left: 4px solid {WARNING_COLOR}; }}
        .kpi-card.red {{ border-left: 4px solid {DANGER_COLOR}; }}
        .kpi-label {{ font-size: 0.85rem; color: {colors['subtle']}; }}
        .kpi-value {{ font-size: 1.6rem; font-weight: 700; color: {colors['text']}; }}
        </style>
    """, unsafe_allow_html=True)


def kpi_card(label: str, value: str, accent: str = "blue"):
    st.markdown(
        f'<div class="kpi-card {accent}"><div class="kpi-label">{label}</div>'
        f'<div class="kpi-value">{value}</div></div>',
        unsafe_allow_html=True,
    )
