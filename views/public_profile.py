import streamlit as st

from domain.constants import STATUS_ACTIVE
from services import seniors as senior_svc
from ui.components.cards import show_image


def render_profile(senior):
    if not senior:
        with st.container(border=True):
            st.error("Record Not Found")
            st.write("The ID you are attempting to verify is not registered in our database or may have been revoked.")
        return

    is_active = senior.get('status') == STATUS_ACTIVE
    with st.container(border=True):
        if is_active:
            st.success("VERIFIED - Active senior citizen")
        else:
            st.warning(f"NOT VALID - Record status: {senior.get('status')}")
        c1, c2 = st.columns([1, 2])
        with c1:
            show_image(senior.get('photo', ''), "Photo")
        with c2:
            st.markdown(f"### {senior_svc.full_name(senior)}")
            st.write(f"**Control #:** {senior.get('control_number')}")
            st.write(f"**Age:** {senior_svc.calculate_age(senior.get('dob', ''))}")
            st.write(f"**Address:** {senior.get('address') or '-'}")
            if senior.get('emergency_contact'):
                st.write(f"**In case of emergency:** {senior['emergency_contact']} "
                         f"{senior.get('emergency_phone') or ''}")


def view(record_id: str = ''):
    """Read-only page reached from the QR code on a printed ID card."""
    settings = st.session_state.get('site_settings', {})
    st.markdown(f"<div class='brand-bar'><b>{settings.get('title', '')}</b> - ID Verification</div>",
                unsafe_allow_html=True)
    with st.spinner("Verifying credentials..."):
        senior = senior_svc.get_senior(record_id)
    render_profile(senior)
