import datetime as dt
import streamlit as st
from typing import Dict, Any, Optional

from domain.constants import GENDERS, SENIOR_STATUSES
from services import seniors as senior_svc
from utils.images import uploaded_to_data_url


def _parse_date(value: str) -> Optional[dt.date]:
    try:
        return dt.date.fromisoformat(value[:10]) if value else None
    except ValueError:
        return None


def render(data: Dict[str, Any], key_prefix: str, staff: bool = True,
           require_images: bool = False) -> Optional[Dict[str, Any]]:
    """
    Renders the personal-details form shared by staff registration and public self-registration.

    Args:
        data (Dict[str, Any]): Record used to prefill the form.
        key_prefix (str): A unique prefix for Streamlit widget keys.
        staff (bool): Show control number and status fields.
        require_images (bool): Refuse submission without photo and signature.

    Returns:
        Dict[str, Any]: The submitted fields, or None if not submitted / invalid.
    """
    with st.form(f"form_{key_prefix}"):
        if staff:
            c1, c2 = st.columns(2)
            control_number = c1.text_input("Control #", value=data.get('control_number', ''),
                                           key=f"{key_prefix}_control")
            status_idx = SENIOR_STATUSES.index(data['status']) if data.get('status') in SENIOR_STATUSES else 0
            status = c2.selectbox("Status", SENIOR_STATUSES, index=status_idx, key=f"{key_prefix}_status")

        c1, c2, c3, c4 = st.columns([3, 3, 3, 1])
        first_name = c1.text_input("First name *", value=data.get('first_name', ''), key=f"{key_prefix}_first")
        middle_name = c2.text_input("Middle name", value=data.get('middle_name', ''), key=f"{key_prefix}_middle")
        last_name = c3.text_input("Last name *", value=data.get('last_name', ''), key=f"{key_prefix}_last")
        suffix = c4.text_input("Suffix", value=data.get('suffix', ''), key=f"{key_prefix}_suffix")

        c1, c2 = st.columns(2)
        dob = c1.date_input("Date of birth *", value=_parse_date(data.get('dob', '')),
                            min_value=dt.date(1900, 1, 1), max_value=dt.date.today(), key=f"{key_prefix}_dob")
        gender_idx = GENDERS.index(data['gender']) if data.get('gender') in GENDERS else 0
        gender = c2.selectbox("Gender", GENDERS, index=gender_idx, key=f"{key_prefix}_gender")

        address = st.text_area("Address *", value=data.get('address', ''), key=f"{key_prefix}_address")
        c1, c2, c3 = st.columns(3)
        contact_number = c1.text_input("Contact number", value=data.get('contact_number', ''), key=f"{key_prefix}_contact")
        emergency_contact = c2.text_input("Emergency contact", value=data.get('emergency_contact', ''),
                                          key=f"{key_prefix}_emergency")
        emergency_phone = c3.text_input("Emergency phone", value=data.get('emergency_phone', ''),
                                        key=f"{key_prefix}_emergency_phone")

        st.markdown("**Photo and signature**")
        c1, c2 = st.columns(2)
        photo_file = c1.file_uploader("Photo", type=["png", "jpg", "jpeg"], key=f"{key_prefix}_photo")
        camera_shot = c1.camera_input("Or take a photo", key=f"{key_prefix}_camera")
        signature_file = c2.file_uploader("Signature image", type=["png", "jpg", "jpeg"], key=f"{key_prefix}_signature")

        submitted = st.form_submit_button("Save Record" if staff else "Submit Application")

        if submitted:
            fields = {
                'first_name': first_name.strip(),
                'middle_name': middle_name.strip(),
                'last_name': last_name.strip(),
                'suffix': suffix.strip(),
                'dob': dob.isoformat() if dob else '',
                'gender': gender,
                'address': address.strip(),
                'contact_number': contact_number.strip(),
                'emergency_contact': emergency_contact.strip(),
                'emergency_phone': emergency_phone.strip(),
                'photo': uploaded_to_data_url(camera_shot or photo_file) or data.get('photo', ''),
                'signature': uploaded_to_data_url(signature_file) or data.get('signature', ''),
            }
            if staff:
                fields['control_number'] = control_number.strip()
                fields['status'] = status

            missing = senior_svc.missing_required_fields(fields)
            if missing:
                st.error("Please fill in: " + ", ".join(m.replace('_', ' ') for m in missing))
                return None
            if require_images and not (fields['photo'] and fields['signature']):
                st.error("Please provide both a photo and a signature.")
                return None
            return fields

    return None
