import csv
import io

from demo import sample_data
from services import admin, seniors as senior_svc, applications as app_svc, users as user_svc, persistence


def test_dashboard_stats():
    records = sample_data.make_seniors(6, seed=3)
    records[0]['status'] = 'Inactive'
    records[1]['status'] = 'Suspended'
    for r in records[2:]:
        r['status'] = 'Active'
    for r in records:
        senior_svc.save_senior(r)
    for fields in sample_data.make_application_fields(2, seed=3):
        app_svc.submit_application(fields)
    user_svc.create_user('staff', 'pw', 'Staff')

    stats = admin.get_dashboard_stats()
    assert stats['total_seniors'] == 6
    assert stats['active_seniors'] == 4
    assert stats['inactive_seniors'] == 1
    assert stats['suspended_seniors'] == 1
    assert stats['pending_applications'] == 2
    assert stats['total_applications'] == 2
    assert stats['total_users'] == 2


def test_export_to_csv_omits_images_and_credentials():
    for fields in sample_data.make_application_fields(2, seed=1):
        app_svc.submit_application(fields)
    rows = list(csv.DictReader(io.StringIO(admin.export_to_csv('applications'))))
    assert len(rows) == 2
    assert 'photo' not in rows[0] and 'signature' not in rows[0]
    assert rows[0]['app_status'] == 'Pending'

    user_svc.list_users()
    user_rows = list(csv.DictReader(io.StringIO(admin.export_to_csv('users'))))
    assert set(user_rows[0]) == {'id', 'username', 'role', 'created_at'}


def test_export_empty_collection():
    assert admin.export_to_csv('seniors') == ""


def test_reset_all_data():
    sample_data.seed(n_seniors=3, n_applications=2)
    user_svc.create_user('staff', 'pw', 'Staff')
    user_svc.login('staff', 'pw')

    admin.reset_all_data()
    assert senior_svc.list_seniors() == []
    assert app_svc.list_applications() == []
    assert persistence.load_record('session') is None
    assert [u['username'] for u in user_svc.list_users()] == ['admin']
