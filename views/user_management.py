import pandas as pd
import streamlit as st

from domain.constants import ROLES, ROLE_STAFF
from services import users as user_svc
from ui.components import confirm_action


def view():
    """Admin page for creating and removing staff accounts."""
    st.header("System User Accounts")

    with st.expander("➕ Add new user", expanded=False):
        with st.form("add_user_form", clear_on_submit=True):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            role = st.selectbox("Role", ROLES, index=ROLES.index(ROLE_STAFF))
            if st.form_submit_button("Create account"):
                if not password:
                    st.error("Password is required.")
                else:
                    result = user_svc.create_user(username, password, role)
                    if result.ok:
                        st.success(f"Account '{result.record['username']}' created.")
                    else:
                        st.error(result.message)

    users = user_svc.list_users()
    df = pd.DataFrame([user_svc.public_view(u) for u in users])
    st.dataframe(df, hide_index=True, use_container_width=True)

    current = st.session_state.app_state.current_user
    display_map = {f"{u['username']} ({u['role']})": u['id'] for u in users}
    sel = st.selectbox("Select account", options=["-"] + list(display_map.keys()))
    if sel == "-":
        return
    sel_id = display_map[sel]

    with st.container(border=True):
        new_password = st.text_input("New password", type="password", key=f"pw_{sel_id}")
        if st.button("Reset password", key=f"reset_{sel_id}"):
            target = next(u for u in users if u['id'] == sel_id)
            result = user_svc.save_user({**target, 'password': new_password}) if new_password else None
            if result is None:
                st.error("Enter a new password first.")
            elif result.ok:
                st.success("Password updated.")
            else:
                st.error(result.message)

        blocker = user_svc.deletion_blocker(sel_id, current)
        if blocker:
            st.caption(blocker)
        elif confirm_action("Delete this user account", f"del_user_{sel_id}"):
            if st.button("Delete", type="primary", key=f"del_user_btn_{sel_id}"):
                result = user_svc.delete_user(sel_id)
                if result.ok:
                    st.warning("Account deleted.")
                    st.rerun()
                else:
                    st.error(result.message)
