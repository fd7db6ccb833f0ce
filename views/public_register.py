import streamlit as st

from services import applications as app_svc
from ui.components import person_form


def view():
    settings = st.session_state.get('site_settings', {})
    st.markdown(f"<div class='brand-bar'><b>{settings.get('title', '')}</b> - Online Registration</div>",
                unsafe_allow_html=True)

    filed = st.session_state.get('filed_application_id')
    if filed:
        st.success("Registration Filed")
        st.write(f"Your application has been submitted to {settings.get('title', 'the office')}.")
        st.metric("Application number", filed)
        st.caption("Keep this number. Staff will review your application and issue your ID.")
        if st.button("File another application"):
            del st.session_state.filed_application_id
            st.rerun()
        return

    st.header("Senior Citizen Self-Registration")
    st.markdown("Fields marked * are required. A photo and a signature are needed to process your ID.")
    fields = person_form.render({}, key_prefix="public_register", staff=False, require_images=True)
    if not fields:
        return

    result = app_svc.submit_application(fields)
    if not result.ok:
        st.error(result.message)
        return
    st.session_state.filed_application_id = result.record['application_id']
    st.rerun()
