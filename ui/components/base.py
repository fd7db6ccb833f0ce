import streamlit as st

from domain.constants import DEFAULT_SETTINGS

GREEN = "#059669"  # emerald-600
YELLOW = "#D97706"  # amber-600
RED = "#DC2626"  # red-600
GRAY = "#64748b"  # slate-500
CHIP_BG = "#374151"

_STATUS_CLASSES = {
    "active": "green", "approved": "green",
    "pending": "yellow", "inactive": "gray",
    "suspended": "red", "rejected": "red",
}


def inject_base_css(settings=None):
    """Apply badge styles plus the configured theme color / dark mode."""
    settings = settings or DEFAULT_SETTINGS
    primary = settings.get('primary_color', DEFAULT_SETTINGS['primary_color'])
    dark = bool(settings.get('dark_mode'))
    page_bg = "#0f172a" if dark else "#f8fafc"  # slate-900 / slate-50
    text = "#f1f5f9" if dark else "#0f172a"
    st.markdown(
        f"""
        <style>
        :root {{--primary-color:{primary};}}
        .stApp {{background:{page_bg}; color:{text};}}
        .stButton > button[kind="primary"], .stFormSubmitButton > button {{background:{primary}; border-color:{primary}; color:#fff;}}
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            background:{CHIP_BG}; color:#F9FAFB; margin-right:4px; margin-bottom:4px;
        }}
        .badge.green {{background:{GREEN};}}
        .badge.yellow {{background:{YELLOW};}}
        .badge.red {{background:{RED};}}
        .badge.gray {{background:{GRAY};}}
        .brand-bar {{background:{primary}; color:#fff; padding:0.8rem 1.1rem; border-radius:10px; margin-bottom:1rem;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def status_badge(status: str) -> str:
    cls = _STATUS_CLASSES.get((status or '').lower(), "yellow")
    return f'<span class="badge {cls}">{status}</span>'


def confirm_action(label: str, key: str) -> bool:
    """Checkbox gate in front of destructive buttons (no undo)."""
    return st.checkbox(label, key=f"confirm_{key}")
