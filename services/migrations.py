"""Upgrade persisted shapes to the current schema.

Version 1 is the legacy layout: bare JSON lists/objects as written by the
browser edition (camelCase keys, epoch-millisecond timestamps, plaintext
passwords). Version 2 wraps data in an envelope and uses snake_case records.
"""
import datetime as dt
from typing import Any, Dict

from utils.passwords import hash_password

LEGACY_KEY_MAP = {
    'seniorId': 'control_number',
    'firstName': 'first_name',
    'middleName': 'middle_name',
    'lastName': 'last_name',
    'contactNumber': 'contact_number',
    'emergencyContact': 'emergency_contact',
    'emergencyPhone': 'emergency_phone',
    'photoUrl': 'photo',
    'signatureUrl': 'signature',
    'createdAt': 'created_at',
    'applicationId': 'application_id',
    'appStatus': 'app_status',
    'reviewedBy': 'reviewed_by',
    'reviewedAt': 'reviewed_at',
    'logoUrl': 'logo',
    'primaryColor': 'primary_color',
    'isDarkMode': 'dark_mode',
    'loggedInAt': 'logged_in_at',
}

TIMESTAMP_FIELDS = ('created_at', 'reviewed_at', 'logged_in_at')
CREDENTIAL_FIELDS = ('password', 'password_hash', 'salt')


def epoch_ms_to_iso(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    stamp = dt.datetime.fromtimestamp(value / 1000, tz=dt.timezone.utc).replace(microsecond=0)
    return stamp.isoformat().replace('+00:00', 'Z')


def migrate_record(key: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """Return a v2 copy of one legacy record for the given storage key."""
    out = {LEGACY_KEY_MAP.get(k, k): v for k, v in record.items()}
    for name in TIMESTAMP_FIELDS:
        if name in out:
            out[name] = epoch_ms_to_iso(out[name])
    if key == 'users':
        if isinstance(out.get('username'), str):
            out['username'] = out['username'].lower()
        plaintext = out.pop('password', None)
        if plaintext is not None and not out.get('password_hash'):
            out['password_hash'], out['salt'] = hash_password(plaintext)
    elif key == 'session':
        for name in CREDENTIAL_FIELDS:
            out.pop(name, None)
    return out


def migrate_payload(key: str, data: Any, collection: bool) -> Any:
    if data is None:
        return None
    if collection:
        return [migrate_record(key, r) if isinstance(r, dict) else r for r in data]
    if isinstance(data, dict):
        return migrate_record(key, data)
    return data
