import streamlit as st

from services import users as user_svc


def view():
    settings = st.session_state.get('site_settings', {})
    st.markdown(f"<div class='brand-bar'><b>{settings.get('title', '')}</b><br/>"
                "<small>Office of Senior Citizens Affairs - Staff Portal</small></div>",
                unsafe_allow_html=True)
    st.header("Sign in")

    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        user = user_svc.login(username.strip(), password)
        if user:
            st.session_state.app_state.current_user = user
            st.session_state.pop('navigation_radio', None)
            st.rerun()
        else:
            st.error("Invalid credentials. Please try again.")

    st.markdown("---")
    st.caption("Not yet registered? Senior citizens can apply online.")
    if st.button("Open public registration form"):
        st.query_params['page'] = 'register'
        st.rerun()
