import streamlit as st

from domain.models import _now_iso
from services import seniors as senior_svc
from ui.components import person_form


def view():
    edit_id = st.session_state.get('edit_senior_id')
    existing = senior_svc.get_senior(edit_id) if edit_id else None

    if existing:
        st.header(f"Edit Record: {senior_svc.full_name(existing)}")
        if st.button("Cancel editing"):
            del st.session_state.edit_senior_id
            st.rerun()
        data = existing
    else:
        st.header("Register Senior Citizen")
        # one control number per blank form, not per rerun
        if 'draft_control_number' not in st.session_state:
            st.session_state.draft_control_number = senior_svc.generate_control_number()
        data = {'control_number': st.session_state.draft_control_number}

    fields = person_form.render(data, key_prefix=f"senior_{edit_id or 'new'}", staff=True)
    if not fields:
        return

    if existing:
        record = {**existing, **fields, 'created_at': existing.get('created_at') or _now_iso()}
    else:
        record = senior_svc.new_senior(fields)

    result = senior_svc.save_senior(record)
    if not result.ok:
        st.error(result.message)
        return

    st.success(f"Saved {senior_svc.full_name(record)} ({record['control_number']})")
    for k in ('edit_senior_id', 'draft_control_number'):
        st.session_state.pop(k, None)
    st.session_state.nav_target = "Dashboard"
    st.rerun()
