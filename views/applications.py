import streamlit as st

from domain.constants import APP_STATUSES, APP_PENDING
from services import applications as app_svc
from services.persistence import ConcurrentWriteError
from ui.components import application_card, confirm_action

FLASH_KEY = "applications_flash"


def view():
    st.header("Registration Applications")
    st.markdown("Public self-registrations waiting for review.")

    # outcome of the action that triggered the last rerun
    flash = st.session_state.pop(FLASH_KEY, None)
    if flash:
        st.success(flash)

    status_filter = st.radio("Show", ["All"] + APP_STATUSES, index=1, horizontal=True, key="app_status_filter")
    apps = app_svc.list_applications(None if status_filter == "All" else status_filter)
    if not apps:
        st.info("No applications in this view.")
        return

    reviewer = st.session_state.app_state.current_user
    st.write(f"**{len(apps)}** application(s)")
    for app in sorted(apps, key=lambda a: a.get('created_at', ''), reverse=True):
        application_card(app)
        if app.get('app_status') == APP_PENDING:
            c1, c2 = st.columns(2)
            if c1.button("Approve and issue ID", key=f"approve_{app['id']}", type="primary"):
                _run(lambda: app_svc.approve_application(app['id'], reviewer['id']), "Approved")
            if c2.button("Reject", key=f"reject_{app['id']}"):
                _run(lambda: app_svc.reject_application(app['id'], reviewer['id']), "Rejected")
        else:
            # Pending items stay until reviewed
            if confirm_action("Permanently delete this application record", f"del_app_{app['id']}"):
                if st.button("Delete", key=f"del_app_btn_{app['id']}"):
                    _run(lambda: app_svc.delete_application(app['id']), "Deleted")


def _run(action, verb):
    try:
        result = action()
    except ConcurrentWriteError:
        st.warning("Another user changed the applications at the same time. The list was reloaded; please try again.")
        return
    if result.ok:
        st.session_state[FLASH_KEY] = f"{verb}. {result.message or ''}".strip()
        st.rerun()
    else:
        st.error(result.message)
