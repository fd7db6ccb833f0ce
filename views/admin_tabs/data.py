import datetime as dt
import streamlit as st
import time

from services import admin as admin_svc, backup as backup_svc


def render_data_tab():
    """Provides data management functions like backup, restore, export and reset."""
    with st.container(border=True):
        st.subheader("Backup")
        st.caption("Download the whole database to move it to another device.")
        st.download_button(
            "Download backup (.json)",
            backup_svc.export_database(),
            f"seniorid-backup-{dt.date.today().isoformat()}.json",
            "application/json",
        )

    with st.container(border=True):
        st.subheader("Restore")
        st.warning("Restoring replaces every senior, application and user with the file's contents.")
        upload = st.file_uploader("Backup file", type=["json"], key="restore_upload")
        if upload is not None and st.checkbox("I understand the current data will be overwritten."):
            if st.button("Restore backup", type="primary"):
                try:
                    counts = backup_svc.import_database(upload.getvalue())
                except backup_svc.BackupFormatError as e:
                    st.error(f"Backup rejected: {e}")
                else:
                    st.success("Restored: " + ", ".join(f"{k} {v}" for k, v in counts.items()))
                    st.rerun()

    with st.container(border=True):
        st.subheader("Export (CSV)")
        c1, c2 = st.columns(2)
        c1.download_button("seniors.csv", admin_svc.export_to_csv('seniors'), "seniors.csv", "text/csv")
        c2.download_button("applications.csv", admin_svc.export_to_csv('applications'), "applications.csv", "text/csv")

    with st.expander("🚨 Danger Zone: reset data"):
        st.warning("This permanently deletes all seniors and applications and resets user accounts. It cannot be undone.")
        if st.checkbox("I understand and want to delete all data."):
            if st.text_input("Type 'ERASE ALL DATA' to confirm.") == "ERASE ALL DATA":
                if st.button("Delete all data", type="primary"):
                    admin_svc.reset_all_data()
                    st.session_state.app_state.current_user = None
                    st.success("All registry data was deleted.")
                    time.sleep(2)
                    st.rerun()
