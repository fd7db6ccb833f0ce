import json

from domain.models import RESULT_INVALID, RESULT_NOT_FOUND
from services import users as user_svc, persistence


def test_first_access_seeds_default_admin(data_dir):
    users = user_svc.list_users()
    assert len(users) == 1
    assert users[0]['id'] == '1'
    assert users[0]['username'] == 'admin'
    assert users[0]['role'] == 'Admin'
    # seeded account is persisted, not just returned
    assert (data_dir / 'users.json').exists()


def test_login_is_case_insensitive_on_username():
    session = user_svc.login('Admin', 'password123')
    assert session is not None
    assert session['username'] == 'admin'
    assert 'logged_in_at' in session
    assert user_svc.login('ADMIN', 'password123') is not None


def test_wrong_password_or_user_fails():
    assert user_svc.login('admin', 'wrong') is None
    assert user_svc.login('nobody', 'password123') is None
    assert user_svc.get_current_session() is None


def test_session_has_no_credentials_and_logout_clears_it():
    user_svc.login('admin', 'password123')
    session = user_svc.get_current_session()
    assert session['id'] == '1'
    assert 'password_hash' not in session and 'salt' not in session
    user_svc.logout()
    assert user_svc.get_current_session() is None


def test_passwords_are_never_stored_in_plaintext(data_dir):
    assert user_svc.create_user('Maria', 's3cret!', 'Staff').ok
    raw = (data_dir / 'users.json').read_text(encoding='utf-8')
    assert 's3cret!' not in raw
    assert 'password123' not in raw
    assert user_svc.login('maria', 's3cret!')['role'] == 'Staff'


def test_save_user_lowercases_username():
    result = user_svc.create_user('  JoseRizal ', 'pw', 'QR Checker Staff')
    assert result.ok
    assert result.record['username'] == 'joserizal'
    assert 'password_hash' not in result.record


def test_save_user_rejects_bad_input():
    assert user_svc.create_user('', 'pw', 'Staff').status == RESULT_INVALID
    assert user_svc.create_user('x', 'pw', 'Mayor').status == RESULT_INVALID
    assert user_svc.create_user('ADMIN', 'pw', 'Staff').status == RESULT_INVALID
    assert user_svc.create_user('nopass', '', 'Staff').status == RESULT_INVALID
    assert len(user_svc.list_users()) == 1


def test_profile_update_keeps_password():
    user = user_svc.create_user('ana', 'first', 'Staff').record
    assert user_svc.save_user({**user, 'role': 'Admin'}).ok
    assert user_svc.login('ana', 'first')['role'] == 'Admin'


def test_password_reset():
    user = user_svc.create_user('ana', 'first', 'Staff').record
    user_svc.save_user({**user, 'password': 'second'})
    assert user_svc.login('ana', 'first') is None
    assert user_svc.login('ana', 'second') is not None


def test_delete_user():
    user = user_svc.create_user('temp', 'pw', 'Staff').record
    assert user_svc.delete_user(user['id']).ok
    assert user_svc.delete_user(user['id']).status == RESULT_NOT_FOUND
    assert [u['username'] for u in user_svc.list_users()] == ['admin']


def test_deletion_blocker():
    admin = user_svc.list_users()[0]
    staff = user_svc.create_user('staff1', 'pw', 'Staff').record
    assert user_svc.deletion_blocker(staff['id'], admin) is None
    assert 'own account' in user_svc.deletion_blocker(staff['id'], staff)
    assert 'Admin' in user_svc.deletion_blocker(admin['id'], staff)

    user_svc.create_user('admin2', 'pw', 'Admin')
    assert user_svc.deletion_blocker(admin['id'], staff) is None


def test_legacy_plaintext_users_are_migrated(data_dir):
    legacy = [{'id': '7', 'username': 'OldStaff', 'password': 'legacy-pw', 'role': 'Staff',
               'createdAt': 1700000000000}]
    (data_dir / 'users.json').write_text(json.dumps(legacy), encoding='utf-8')

    stored = persistence.load_list('users')[0]
    assert stored['username'] == 'oldstaff'
    assert 'password' not in stored
    assert stored['password_hash'] and stored['salt']
    assert user_svc.login('OldStaff', 'legacy-pw')['id'] == '7'


def test_empty_user_list_is_not_reseeded():
    admin = user_svc.list_users()[0]
    other = user_svc.create_user('admin2', 'pw', 'Admin').record
    user_svc.delete_user(admin['id'])
    user_svc.delete_user(other['id'])
    assert user_svc.list_users() == []
    assert user_svc.login('admin', 'password123') is None
    assert persistence.load_list('users') == []


def test_get_user():
    assert user_svc.get_user('1')['username'] == 'admin'
    assert user_svc.get_user('missing') is None
