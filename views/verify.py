import streamlit as st

from services import seniors as senior_svc
from views import public_profile


def view():
    st.header("Verify Senior ID")
    st.markdown("Enter the control number printed on the card, or the record id from its QR link.")

    key = st.text_input("Control number or record id", key="verify_lookup").strip()
    if not key:
        return
    # QR links carry the whole verification URL
    if "verify=" in key:
        key = key.split("verify=", 1)[1].split("&", 1)[0]
    public_profile.render_profile(senior_svc.get_senior(key))
