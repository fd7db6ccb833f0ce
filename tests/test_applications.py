import re

import pytest

from domain.models import RESULT_NOT_FOUND, RESULT_INVALID
from services import applications as app_svc, seniors as senior_svc, persistence

IMG = "data:image/png;base64,iVBORw0KGgo="


def fields(**overrides):
    data = {
        'first_name': 'Teresita', 'last_name': 'Bautista', 'dob': '1948-07-01', 'gender': 'Female',
        'address': 'Brgy. Marikit, Paluan', 'photo': IMG, 'signature': IMG,
    }
    data.update(overrides)
    return data


def submit(**overrides):
    result = app_svc.submit_application(fields(**overrides))
    assert result.ok, result.message
    return result.record


def test_submit_files_pending_application():
    app = submit()
    assert app['app_status'] == 'Pending'
    assert re.match(r'^APP-\d{6}$', app['application_id'])
    assert app['reviewed_by'] is None
    assert app_svc.list_applications() == [app]


def test_submit_requires_photo_and_signature():
    result = app_svc.submit_application(fields(photo='', signature=''))
    assert result.status == RESULT_INVALID
    assert 'photo' in result.message and 'signature' in result.message
    assert app_svc.list_applications() == []


def test_approve_creates_active_senior_with_same_id():
    app = submit()
    result = app_svc.approve_application(app['id'], 'reviewer-1')
    assert result.ok

    stored = app_svc.get_application(app['id'])
    assert stored['app_status'] == 'Approved'
    assert stored['reviewed_by'] == 'reviewer-1'
    assert stored['reviewed_at']

    senior = senior_svc.get_senior(app['id'])
    assert senior['status'] == 'Active'
    assert senior['first_name'] == 'Teresita'
    assert senior['photo'] == IMG
    assert re.match(r'^PLN-\d{4}-\d{5}$', senior['control_number'])


def test_approve_unknown_id_changes_nothing():
    app = submit()
    result = app_svc.approve_application('missing', 'reviewer-1')
    assert result.status == RESULT_NOT_FOUND
    assert app_svc.list_applications() == [app]
    assert senior_svc.list_seniors() == []


def test_reviewed_application_cannot_be_reviewed_again():
    app = submit()
    assert app_svc.approve_application(app['id'], 'r').ok
    assert app_svc.reject_application(app['id'], 'r').status == RESULT_INVALID
    assert app_svc.approve_application(app['id'], 'r').status == RESULT_INVALID
    assert len(senior_svc.list_seniors()) == 1


def test_reject_stamps_reviewer_without_creating_senior():
    app = submit()
    assert app_svc.reject_application(app['id'], 'r2').ok
    stored = app_svc.get_application(app['id'])
    assert stored['app_status'] == 'Rejected'
    assert stored['reviewed_by'] == 'r2'
    assert senior_svc.list_seniors() == []


def test_pending_filter_excludes_approved():
    first = submit()
    second = submit(first_name='Alfredo')
    app_svc.approve_application(first['id'], 'r')
    pending = app_svc.list_applications('Pending')
    assert [a['id'] for a in pending] == [second['id']]


def test_save_application_is_append_only():
    app = submit()
    result = app_svc.save_application({**app, 'first_name': 'Changed'})
    assert result.status == RESULT_INVALID
    assert app_svc.get_application(app['id'])['first_name'] == 'Teresita'


def test_update_application_forward_only():
    app = submit()
    assert app_svc.update_application({**app, 'contact_number': '09171234567'}).ok
    assert app_svc.update_application({**app, 'app_status': 'Rejected'}).ok
    back = app_svc.update_application({**app, 'app_status': 'Pending'})
    assert back.status == RESULT_INVALID
    assert app_svc.get_application(app['id'])['app_status'] == 'Rejected'


def test_update_application_inserts_unknown_id():
    assert app_svc.update_application({'id': 'new1', 'app_status': 'Pending'}).ok
    assert app_svc.get_application('new1') is not None


def test_delete_application():
    app = submit()
    assert app_svc.delete_application(app['id']).ok
    assert app_svc.delete_application(app['id']).status == RESULT_NOT_FOUND
    assert persistence.load_list('applications') == []


def test_approve_that_loses_write_race_stays_pending(monkeypatch):
    app = submit()
    other = submit(first_name='Alfredo')
    real_save = senior_svc.save_senior
    interfered = []

    def save_then_interfere(record):
        result = real_save(record)
        if not interfered:
            # another reviewer edits the queue between our read and our write
            interfered.append(True)
            app_svc.update_application({**app_svc.get_application(other['id']), 'contact_number': '0917'})
        return result

    monkeypatch.setattr(senior_svc, 'save_senior', save_then_interfere)
    with pytest.raises(persistence.ConcurrentWriteError):
        app_svc.approve_application(app['id'], 'r1')

    assert app_svc.get_application(app['id'])['app_status'] == 'Pending'
    assert senior_svc.get_senior(app['id']) is not None

    # retry upserts the same senior id
    assert app_svc.approve_application(app['id'], 'r1').ok
    assert app_svc.get_application(app['id'])['app_status'] == 'Approved'
    assert [s['id'] for s in senior_svc.list_seniors()] == [app['id']]
