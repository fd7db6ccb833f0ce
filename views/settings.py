import streamlit as st

from views.admin_tabs.branding import render_branding_tab
from views.admin_tabs.data import render_data_tab


def view():
    st.header("System Customization")
    st.markdown("Configure branding and manage the registry data.")

    tabs = st.tabs(["🎨 Branding", "💾 Data"])
    with tabs[0]:
        render_branding_tab()
    with tabs[1]:
        render_data_tab()
