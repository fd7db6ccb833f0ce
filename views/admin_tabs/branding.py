import streamlit as st

from domain.constants import THEME_COLORS
from services import settings as settings_svc
from ui.components.cards import show_image
from utils.images import uploaded_to_data_url


def render_branding_tab():
    """Site title, logo, theme color and dark mode."""
    current = settings_svc.get_settings()

    with st.form("branding_form"):
        title = st.text_input("Site title", value=current['title'])
        show_image(current["logo"], "Logo", width=64)
        logo_file = st.file_uploader("Change logo", type=["png", "jpg", "jpeg", "svg"])

        names = list(THEME_COLORS.keys())
        current_name = next((n for n, v in THEME_COLORS.items() if v == current['primary_color']), names[0])
        color_name = st.radio("Primary theme color", names, index=names.index(current_name), horizontal=True)
        dark_mode = st.toggle("Dark mode", value=current['dark_mode'])

        if st.form_submit_button("Save System Settings"):
            result = settings_svc.save_settings({
                'title': title.strip(),
                'logo': uploaded_to_data_url(logo_file) or current['logo'],
                'primary_color': THEME_COLORS[color_name],
                'dark_mode': dark_mode,
            })
            if result.ok:
                st.session_state.app_state.settings = result.record
                st.success("Changes applied")
                st.rerun()
            else:
                st.error(result.message)
