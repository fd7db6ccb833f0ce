import json

import pytest

from scripts.migration import legacy_to_backup, migrate_file
from services import backup, persistence, seniors as senior_svc, applications as app_svc, users as user_svc
from services import settings as settings_svc

IMG = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture
def populated():
    for i in range(3):
        senior_svc.save_senior(senior_svc.new_senior(
            {'first_name': f'Name{i}', 'last_name': 'Ramos', 'dob': '1955-01-01', 'address': 'Paluan'},
            senior_id=f's{i}'))
    app_svc.submit_application({'first_name': 'Ana', 'last_name': 'Cruz', 'dob': '1950-02-02',
                                'address': 'Paluan', 'photo': IMG, 'signature': IMG})
    user_svc.create_user('staff', 'pw', 'Staff')
    settings_svc.save_settings({'title': 'Registry Test', 'primary_color': '#4f46e5'})


def snapshot():
    return {key: persistence.load_list(key) for key in backup.BACKUP_COLLECTIONS}


def test_export_import_round_trip(populated):
    before = snapshot()
    exported = backup.export_database()
    doc = json.loads(exported)
    assert doc['schema_version'] == 2
    assert doc['exported_at'].endswith('Z')
    assert doc['settings']['title'] == 'Registry Test'

    persistence.replace_all('seniors', [])
    persistence.replace_all('applications', [])
    settings_svc.save_settings({'title': 'Changed'})

    counts = backup.import_database(exported)
    assert counts == {'seniors': 3, 'applications': 1, 'users': 2}
    assert snapshot() == before
    assert settings_svc.get_settings()['title'] == 'Registry Test'
    assert user_svc.login('staff', 'pw') is not None


@pytest.mark.parametrize('text', [
    'not json at all',
    '[1, 2, 3]',
    '{"title": "no collections"}',
    '{"seniors": []}',
    '{"seniors": [], "applications": []}',
    '{"seniors": "nope", "applications": [], "users": [{"id": "1"}]}',
    '{"seniors": [{"first_name": "missing id"}], "applications": [], "users": [{"id": "1"}]}',
    '{"schema_version": 9, "seniors": [], "applications": [], "users": [{"id": "1"}]}',
    '{"seniors": [], "applications": [], "users": [{"id": "1"}], "settings": []}',
    '{"seniors": [], "applications": [], "users": []}',
])
def test_malformed_backup_is_rejected_without_writing(populated, text):
    before = snapshot()
    with pytest.raises(backup.BackupFormatError):
        backup.import_database(text)
    assert snapshot() == before


def test_backup_error_is_a_storage_error():
    assert issubclass(backup.BackupFormatError, persistence.StorageError)


def test_legacy_browser_export_is_migrated(tmp_path):
    legacy = {
        'senior_citizen_db': [{'id': 'a1', 'seniorId': 'PLN-2023-10001', 'firstName': 'Lito',
                               'lastName': 'Lapid', 'status': 'Active', 'createdAt': 1700000000000}],
        'senior_system_applications': [{'id': 'b1', 'applicationId': 'APP-100001',
                                        'appStatus': 'Pending', 'createdAt': 1700000000000}],
        'senior_system_users': [{'id': '1', 'username': 'Admin', 'password': 'password123', 'role': 'Admin'}],
        'senior_system_settings': {'title': 'Old Title', 'primaryColor': '#e11d48', 'isDarkMode': True},
        'senior_system_session': {'id': '1', 'username': 'admin', 'password': 'password123'},
    }
    path = tmp_path / 'legacy.json'
    path.write_text(json.dumps(legacy), encoding='utf-8')

    counts = migrate_file(str(path))
    assert counts == {'seniors': 1, 'applications': 1, 'users': 1}
    assert senior_svc.get_senior('PLN-2023-10001')['first_name'] == 'Lito'
    assert app_svc.get_application('b1')['app_status'] == 'Pending'
    assert user_svc.login('admin', 'password123') is not None
    settings = settings_svc.get_settings()
    assert settings['primary_color'] == '#e11d48'
    assert settings['dark_mode'] is True


def test_legacy_to_backup_drops_session():
    out = legacy_to_backup({'senior_citizen_db': [], 'senior_system_session': {'id': '1'}})
    assert out == {'seniors': [], 'schema_version': 1}


def test_partial_backup_keeps_accounts(populated):
    with pytest.raises(backup.BackupFormatError, match='applications, users'):
        backup.import_database('{"seniors": []}')
    assert len(senior_svc.list_seniors()) == 3
    assert user_svc.login('staff', 'pw') is not None
