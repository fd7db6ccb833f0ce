"""Senior record store: lookups, upserts, control numbers and dashboard search."""
from __future__ import annotations
import datetime as dt
import logging
from dataclasses import asdict
from typing import List, Dict, Any, Optional

from domain.constants import SENIOR_STATUSES, GENDERS, REQUIRED_PERSON_FIELDS, PERSON_FIELDS, STATUS_ACTIVE
from domain.models import SeniorRecord, OpResult
from services import persistence
from utils.ids import create_id_with_prefix, control_number
from utils.paths import public_base_url

logger = logging.getLogger(__name__)

KEY = 'seniors'


def list_seniors() -> List[Dict[str, Any]]:
    return persistence.load_list(KEY)


def get_senior(key: str) -> Optional[Dict[str, Any]]:
    """First record whose id or control number equals key."""
    if not key:
        return None
    for s in list_seniors():
        if s.get('id') == key or s.get('control_number') == key:
            return s
    return None


def validate_senior(record: Dict[str, Any]) -> Optional[str]:
    """Structural checks only; required-field checks belong to the forms."""
    if not record.get('id'):
        return "Senior record needs an id"
    if record.get('status', STATUS_ACTIVE) not in SENIOR_STATUSES:
        return f"Unknown status: {record.get('status')}"
    if record.get('gender') and record['gender'] not in GENDERS:
        return f"Unknown gender: {record['gender']}"
    return None


def save_senior(record: Dict[str, Any]) -> OpResult:
    """Upsert by id: replace in place when present, append otherwise."""
    problem = validate_senior(record)
    if problem:
        return OpResult.invalid(problem)
    seniors, revision = persistence.load_map(KEY)
    existed = record['id'] in seniors
    seniors[record['id']] = dict(record)
    persistence.save_map(KEY, seniors, expected_revision=revision)
    logger.info("%s senior %s (%s)", "Updated" if existed else "Added",
                record['id'], record.get('control_number', '-'))
    return OpResult.success(seniors[record['id']])


def delete_senior(senior_id: str) -> OpResult:
    seniors, revision = persistence.load_map(KEY)
    removed = seniors.pop(senior_id, None)
    if removed is None:
        return OpResult.not_found(f"No senior record with id {senior_id}")
    persistence.save_map(KEY, seniors, expected_revision=revision)
    logger.info("Deleted senior %s", senior_id)
    return OpResult.success(removed)


def generate_control_number() -> str:
    return control_number(dt.date.today().year)


def new_senior(fields: Dict[str, Any], senior_id: Optional[str] = None) -> Dict[str, Any]:
    """Build a fresh Active record from personal fields (not persisted)."""
    person = {k: fields.get(k) or '' for k in PERSON_FIELDS}
    record = SeniorRecord(
        id=senior_id or create_id_with_prefix('sr'),
        control_number=fields.get('control_number') or generate_control_number(),
        status=fields.get('status') or STATUS_ACTIVE,
        **person,
    )
    return asdict(record)


def missing_required_fields(record: Dict[str, Any]) -> List[str]:
    return [f for f in REQUIRED_PERSON_FIELDS if not str(record.get(f) or '').strip()]


def full_name(record: Dict[str, Any]) -> str:
    parts = [record.get('first_name'), record.get('middle_name'), record.get('last_name'), record.get('suffix')]
    return ' '.join(p.strip() for p in parts if p and p.strip())


def search_seniors(query: str, seniors: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
    """Case-insensitive match on "first last" or control number."""
    seniors = list_seniors() if seniors is None else seniors
    q = (query or '').strip().lower()
    if not q:
        return seniors
    return [
        s for s in seniors
        if q in f"{s.get('first_name', '')} {s.get('last_name', '')}".lower()
        or q in (s.get('control_number') or '').lower()
    ]


def calculate_age(dob: str, today: Optional[dt.date] = None) -> int:
    if not dob:
        return 0
    try:
        born = dt.date.fromisoformat(dob[:10])
    except ValueError:
        return 0
    today = today or dt.date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def verification_url(record: Dict[str, Any]) -> str:
    """Link encoded in the ID card QR code."""
    return f"{public_base_url()}/?verify={record['id']}"
