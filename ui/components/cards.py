import streamlit as st
from typing import Dict, Any

from .base import inject_base_css, status_badge
from services import seniors as senior_svc
from utils.images import from_data_url


def show_image(value: str, caption: str, width: int = 160):
    if not value:
        st.caption(f"No {caption.lower()}")
        return
    decoded = from_data_url(value)
    st.image(decoded[1] if decoded else value, caption=caption, width=width)


def senior_card(senior: Dict[str, Any]):
    """
    Displays an ID-style card with the senior's photo, details and verification link.
    """
    with st.container(border=True):
        c1, c2 = st.columns([1, 3])
        with c1:
            show_image(senior.get('photo', ''), "Photo")
            show_image(senior.get('signature', ''), "Signature", width=120)
        with c2:
            st.markdown(f"### {senior_svc.full_name(senior)}")
            st.markdown(status_badge(senior.get('status', '')), unsafe_allow_html=True)
            st.write(f"**Control #:** `{senior.get('control_number', '-')}`")
            st.write(f"**Birth date:** {senior.get('dob', '-')} "
                     f"(age {senior_svc.calculate_age(senior.get('dob', ''))})")
            st.write(f"**Gender:** {senior.get('gender') or '-'}")
            st.write(f"**Address:** {senior.get('address') or '-'}")
            st.write(f"**Contact:** {senior.get('contact_number') or '-'}")
            st.write(f"**Emergency:** {senior.get('emergency_contact') or '-'} "
                     f"{senior.get('emergency_phone') or ''}")
            st.caption(f"Verification link: {senior_svc.verification_url(senior)}")


def application_card(app: Dict[str, Any]):
    """Render a single registration application in a card style."""
    inject_base_css(st.session_state.get('site_settings'))
    with st.container(border=True):
        top_cols = st.columns([4, 2])
        with top_cols[0]:
            st.markdown(f"**{app.get('application_id', '?')}** | {senior_svc.full_name(app)}")
            st.caption(f"Filed {app.get('created_at', '?')} | Born {app.get('dob', '?')} | {app.get('address', '')}")
        with top_cols[1]:
            st.markdown(status_badge(app.get('app_status', 'Pending')), unsafe_allow_html=True)
        if app.get('reviewed_at'):
            st.caption(f"Reviewed {app['reviewed_at']} by {app.get('reviewed_by') or '-'}")
        with st.expander("Photo / Signature", expanded=False):
            c1, c2 = st.columns(2)
            with c1:
                show_image(app.get('photo', ''), "Photo")
            with c2:
                show_image(app.get('signature', ''), "Signature")
