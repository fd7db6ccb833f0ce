"""Public self-registration applications and the review workflow.

An application moves forward only: Pending -> Approved or Pending -> Rejected.
Approval is the only path that turns an application into a senior record; the
record reuses the application id and starts Active.
"""
from __future__ import annotations
import logging
from dataclasses import asdict
from typing import List, Dict, Any, Optional

from domain.constants import APP_PENDING, APP_APPROVED, APP_REJECTED, APP_STATUSES, PERSON_FIELDS, STATUS_ACTIVE
from domain.models import RegistrationApplication, OpResult, _now_iso
from services import persistence, seniors as senior_svc
from utils.ids import create_id_with_prefix, application_number

logger = logging.getLogger(__name__)

KEY = 'applications'


def list_applications(status: Optional[str] = None) -> List[Dict[str, Any]]:
    apps = persistence.load_list(KEY)
    if status is None:
        return apps
    return [a for a in apps if a.get('app_status') == status]


def get_application(app_id: str) -> Optional[Dict[str, Any]]:
    return persistence.load_map(KEY)[0].get(app_id)


def save_application(app: Dict[str, Any]) -> OpResult:
    """Append a new application. Never replaces an existing one."""
    if not app.get('id'):
        return OpResult.invalid("Application needs an id")
    apps, revision = persistence.load_map(KEY)
    if app['id'] in apps:
        return OpResult.invalid(f"Application {app['id']} already exists")
    apps[app['id']] = dict(app)
    persistence.save_map(KEY, apps, expected_revision=revision)
    logger.info("Filed application %s (%s)", app['id'], app.get('application_id', '-'))
    return OpResult.success(apps[app['id']])


def update_application(app: Dict[str, Any]) -> OpResult:
    """Upsert by id. A reviewed application cannot change status again."""
    if not app.get('id'):
        return OpResult.invalid("Application needs an id")
    if app.get('app_status', APP_PENDING) not in APP_STATUSES:
        return OpResult.invalid(f"Unknown application status: {app.get('app_status')}")
    apps, revision = persistence.load_map(KEY)
    current = apps.get(app['id'])
    if current is not None:
        before = current.get('app_status', APP_PENDING)
        after = app.get('app_status', APP_PENDING)
        if before != APP_PENDING and after != before:
            return OpResult.invalid(f"Application already {before}")
    apps[app['id']] = dict(app)
    persistence.save_map(KEY, apps, expected_revision=revision)
    return OpResult.success(apps[app['id']])


def delete_application(app_id: str) -> OpResult:
    apps, revision = persistence.load_map(KEY)
    removed = apps.pop(app_id, None)
    if removed is None:
        return OpResult.not_found(f"No application with id {app_id}")
    persistence.save_map(KEY, apps, expected_revision=revision)
    logger.info("Deleted application %s", app_id)
    return OpResult.success(removed)


def generate_application_id() -> str:
    return application_number()


def missing_submission_fields(fields: Dict[str, Any]) -> List[str]:
    missing = senior_svc.missing_required_fields(fields)
    missing += [f for f in ('photo', 'signature') if not fields.get(f)]
    return missing


def submit_application(fields: Dict[str, Any]) -> OpResult:
    """Public registration: validate, stamp identifiers and file as Pending."""
    missing = missing_submission_fields(fields)
    if missing:
        return OpResult.invalid("Missing required fields: " + ", ".join(missing))
    app = RegistrationApplication(
        id=create_id_with_prefix('app'),
        application_id=generate_application_id(),
        **{k: fields.get(k) or '' for k in PERSON_FIELDS},
    )
    return save_application(asdict(app))


def _review(app_id: str, reviewer_id: str, new_status: str):
    apps, revision = persistence.load_map(KEY)
    app = apps.get(app_id)
    if app is None:
        return None, None, None, OpResult.not_found(f"No application with id {app_id}")
    if app.get('app_status') != APP_PENDING:
        return None, None, None, OpResult.invalid(f"Application already {app.get('app_status')}")
    app['app_status'] = new_status
    app['reviewed_by'] = reviewer_id
    app['reviewed_at'] = _now_iso()
    return apps, revision, app, None


def approve_application(app_id: str, reviewer_id: str) -> OpResult:
    """Approve a pending application and register the senior it describes.

    Unknown ids return not_found and nothing is written.
    """
    apps, revision, app, failure = _review(app_id, reviewer_id, APP_APPROVED)
    if failure:
        return failure
    senior = senior_svc.new_senior(
        {**{k: app.get(k) for k in PERSON_FIELDS}, 'status': STATUS_ACTIVE}, senior_id=app['id'])
    saved = senior_svc.save_senior(senior)
    if not saved.ok:
        return saved
    persistence.save_map(KEY, apps, expected_revision=revision)
    logger.info("Application %s approved by %s as %s", app_id, reviewer_id, senior['control_number'])
    return OpResult.success(saved.record, message=f"Issued control number {senior['control_number']}")


def reject_application(app_id: str, reviewer_id: str) -> OpResult:
    apps, revision, app, failure = _review(app_id, reviewer_id, APP_REJECTED)
    if failure:
        return failure
    persistence.save_map(KEY, apps, expected_revision=revision)
    logger.info("Application %s rejected by %s", app_id, reviewer_id)
    return OpResult.success(app)
