import streamlit as st
import datetime as dt

from domain.constants import ROLE_ADMIN, ROLE_STAFF, ROLE_QR_CHECKER, ROLES
from domain.models import AppState
from services import settings as settings_svc, users as user_svc
from ui.components import inject_base_css
from utils.log import setup_logging

# Import the page rendering functions from the view modules
from views import (dashboard, applications, senior_form, verify, user_management, settings,
                   login, public_profile, public_register)

# --- Page Registry ---
# Maps a page key to its label, rendering function and the roles allowed to open it.
PAGE_REGISTRY = {
    "dashboard": {
        "label": "Dashboard",
        "render_func": dashboard.view,
        "roles": [ROLE_ADMIN, ROLE_STAFF],
    },
    "applications": {
        "label": "Applications",
        "render_func": applications.view,
        "roles": [ROLE_ADMIN, ROLE_STAFF],
    },
    "senior_form": {
        "label": "Register Senior",
        "render_func": senior_form.view,
        "roles": [ROLE_ADMIN, ROLE_STAFF],
    },
    "verify": {
        "label": "Verify ID",
        "render_func": verify.view,
        "roles": list(ROLES),
    },
    "user_management": {
        "label": "Users",
        "render_func": user_management.view,
        "roles": [ROLE_ADMIN],
    },
    "settings": {
        "label": "Settings & Data",
        "render_func": settings.view,
        "roles": [ROLE_ADMIN],
    },
}


def pages_for_role(role):
    """Registry entries visible to a role, in registry order."""
    return {k: v for k, v in PAGE_REGISTRY.items() if role in v["roles"]}


def landing_page(role):
    return "verify" if role == ROLE_QR_CHECKER else "dashboard"


def _load_app_state() -> AppState:
    """Refresh the controller state on every rerun.

    Only a login made in this browser session signs it in; the persisted
    session slot is never adopted. An account deleted meanwhile is signed out.
    """
    state = st.session_state.get('app_state') or AppState()
    state.settings = settings_svc.get_settings()
    if state.current_user:
        account = user_svc.get_user(state.current_user.get('id'))
        if account is None:
            state.current_user = None
        else:
            state.current_user = {**state.current_user, **user_svc.public_view(account)}
    st.session_state.app_state = state
    st.session_state.site_settings = state.settings
    return state


def main():
    """
    Main application router.

    Public routes (QR verification, self-registration) are served by query
    parameter without a login; everything else needs a session and is
    filtered by the signed-in user's role.
    """
    setup_logging()
    state = _load_app_state()
    st.set_page_config(page_title=state.settings['title'], layout="wide")
    inject_base_css(state.settings)

    qs = st.query_params
    if qs.get('verify'):
        public_profile.view(qs.get('verify'))
        return
    if qs.get('page') == 'register':
        public_register.view()
        if st.button("◀ Back"):
            del st.query_params['page']
            st.rerun()
        return

    if not state.current_user:
        login.view()
        return

    # --- Sidebar ---
    user = state.current_user
    st.sidebar.markdown(f"<div class='brand-bar'><b>{state.settings['title']}</b></div>", unsafe_allow_html=True)
    st.sidebar.caption(f"{user['role']}")
    st.sidebar.markdown(f"**{user['username']}**")

    visible_pages = pages_for_role(user['role'])
    page_keys = list(visible_pages.keys())
    page_labels = [v["label"] for v in visible_pages.values()]

    if 'nav_target' in st.session_state:
        target_label = st.session_state.nav_target
        if target_label in page_labels:
            st.session_state.navigation_radio = target_label
        del st.session_state.nav_target
    elif st.session_state.get('navigation_radio') not in page_labels:
        st.session_state.navigation_radio = visible_pages[landing_page(user['role'])]["label"]

    selected_page_label = st.sidebar.radio("Menu", page_labels, key="navigation_radio")
    selected_page_key = page_keys[page_labels.index(selected_page_label)]

    st.sidebar.markdown("---")
    if st.sidebar.checkbox("Confirm logout", key="confirm_logout"):
        if st.sidebar.button("Logout"):
            user_svc.logout()
            state.current_user = None
            for k in ('navigation_radio', 'confirm_logout', 'edit_senior_id'):
                st.session_state.pop(k, None)
            st.rerun()

    # --- Page Rendering ---
    visible_pages[selected_page_key]["render_func"]()

    # --- Footer ---
    st.sidebar.caption(
        f"© {dt.date.today().year} {state.settings['title']} (OSCA) | {dt.datetime.now(dt.timezone.utc).strftime('%H:%M:%S')}Z"
    )


if __name__ == "__main__":
    main()
