"""
This package provides a collection of reusable UI components for the Streamlit application.

- `base`: CSS/theme injection, status badges and the confirmation gate.
- `cards`: senior ID cards and application cards.
- `person_form`: the personal-details form used by staff and public registration.

By importing the components here, we provide a single, consistent access point
for the rest of the application (`from ui import components`).
"""

from .base import (
    inject_base_css,
    status_badge,
    confirm_action,
)

from .cards import (
    senior_card,
    application_card,
)

from typing import Optional
import streamlit as st


def dataframe_with_status(df, status_col: Optional[str] = None):
    inject_base_css(st.session_state.get('site_settings'))
    if df is None or df.empty:
        st.caption("No records to show.")
        return
    if status_col and status_col in df.columns:
        df = df.copy()
        df[status_col] = df[status_col].apply(status_badge)
    st.write(df.to_html(escape=False, index=False), unsafe_allow_html=True)
