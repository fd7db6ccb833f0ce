import pandas as pd
import streamlit as st

from domain.constants import ROLE_ADMIN
from services import admin as admin_svc, seniors as senior_svc
from ui.components import confirm_action, dataframe_with_status, senior_card


def view():
    st.header("Senior Citizen Registry")
    stats = admin_svc.get_dashboard_stats()

    with st.container(border=True):
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total Registered", stats["total_seniors"])
        c2.metric("Active", stats["active_seniors"])
        c3.metric("Inactive / Suspended", stats["inactive_seniors"] + stats["suspended_seniors"])
        c4.metric("Pending Applications", stats["pending_applications"])
        if stats["pending_applications"]:
            if c4.button("Review queue ▶"):
                st.session_state.nav_target = "Applications"
                st.rerun()

    query = st.text_input("Search by name or control number", key="dashboard_search")
    seniors = senior_svc.search_seniors(query)

    if not seniors:
        st.info("No matching records.")
        return

    df = pd.DataFrame([{
        "Control #": s.get('control_number'),
        "Name": senior_svc.full_name(s),
        "Age": senior_svc.calculate_age(s.get('dob', '')),
        "Gender": s.get('gender'),
        "Address": s.get('address'),
        "Status": s.get('status'),
    } for s in seniors])
    dataframe_with_status(df, status_col="Status")

    st.markdown("---")
    options = {f"{s.get('control_number')} - {senior_svc.full_name(s)}": s['id'] for s in seniors}
    sel = st.selectbox("Open record", options=["-"] + list(options.keys()))
    if sel == "-":
        return
    senior = senior_svc.get_senior(options[sel])
    if not senior:
        st.warning("The record no longer exists.")
        return

    senior_card(senior)
    col1, col2 = st.columns(2)
    if col1.button("Edit", key=f"edit_{senior['id']}"):
        st.session_state.edit_senior_id = senior['id']
        st.session_state.nav_target = "Register Senior"
        st.rerun()

    app_state = st.session_state.app_state
    if app_state.role == ROLE_ADMIN:
        with col2:
            if confirm_action("Delete permanently (cannot be undone)", f"del_senior_{senior['id']}"):
                if st.button("Delete record", type="primary", key=f"del_{senior['id']}"):
                    result = senior_svc.delete_senior(senior['id'])
                    if result.ok:
                        st.success("Record deleted.")
                        st.rerun()
                    else:
                        st.error(result.message)
