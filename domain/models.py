from dataclasses import dataclass, field, fields
from typing import Dict, Optional, Any
import datetime as _dt

from domain.constants import STATUS_ACTIVE, APP_PENDING, ROLE_STAFF, DEFAULT_SETTINGS


def _now_iso():
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat().replace('+00:00', 'Z')


@dataclass
class SeniorRecord:
    id: str
    control_number: str
    first_name: str
    last_name: str
    dob: str  # YYYY-MM-DD
    gender: str
    address: str
    middle_name: str = ''
    suffix: str = ''
    contact_number: str = ''
    emergency_contact: str = ''
    emergency_phone: str = ''
    photo: str = ''  # data URL
    signature: str = ''  # data URL
    status: str = STATUS_ACTIVE  # Active | Inactive | Suspended
    created_at: str = field(default_factory=_now_iso)


@dataclass
class RegistrationApplication:
    id: str
    application_id: str
    first_name: str
    last_name: str
    dob: str
    gender: str
    address: str
    middle_name: str = ''
    suffix: str = ''
    contact_number: str = ''
    emergency_contact: str = ''
    emergency_phone: str = ''
    photo: str = ''
    signature: str = ''
    app_status: str = APP_PENDING  # Pending | Approved | Rejected
    created_at: str = field(default_factory=_now_iso)
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[str] = None


@dataclass
class UserAccount:
    id: str
    username: str
    password_hash: str
    salt: str
    role: str = ROLE_STAFF  # Admin | Staff | QR Checker Staff
    created_at: str = field(default_factory=_now_iso)


@dataclass
class SiteSettings:
    title: str = DEFAULT_SETTINGS['title']
    logo: str = DEFAULT_SETTINGS['logo']
    primary_color: str = DEFAULT_SETTINGS['primary_color']
    dark_mode: bool = DEFAULT_SETTINGS['dark_mode']


@dataclass
class AppState:
    """What the top-level controller keeps between Streamlit reruns."""
    current_user: Optional[Dict[str, Any]] = None
    settings: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_SETTINGS))

    @property
    def role(self) -> Optional[str]:
        return self.current_user.get('role') if self.current_user else None


# Result statuses returned by mutating store operations
RESULT_OK = "ok"
RESULT_NOT_FOUND = "not_found"
RESULT_INVALID = "invalid"


@dataclass
class OpResult:
    status: str
    message: str = ''
    record: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == RESULT_OK

    @classmethod
    def success(cls, record=None, message=''):
        return cls(RESULT_OK, message, record)

    @classmethod
    def not_found(cls, message='Record not found'):
        return cls(RESULT_NOT_FOUND, message)

    @classmethod
    def invalid(cls, message):
        return cls(RESULT_INVALID, message)


def from_dict(model, d: Dict[str, Any]):
    """Safe conversion dropping unknown keys (e.g., legacy browser fields)."""
    allowed = {f.name for f in fields(model)}
    return model(**{k: v for k, v in d.items() if k in allowed})
