"""
This service module contains the business logic for the admin-facing pages.
It is responsible for dashboard figures, CSV export and data reset,
keeping the view layer clean and focused on UI rendering.
"""
import csv
import io
import logging

from domain.constants import SENIOR_STATUSES, APP_PENDING
from services import persistence, seniors as senior_svc, applications as app_svc, users as user_svc

logger = logging.getLogger(__name__)

# Never leave the store through a spreadsheet
CSV_EXCLUDED_FIELDS = {'photo', 'signature', 'password', 'password_hash', 'salt'}


def get_dashboard_stats():
    """Gathers the headline figures for the dashboard."""
    seniors = senior_svc.list_seniors()
    apps = app_svc.list_applications()
    stats = {
        "total_seniors": len(seniors),
        "pending_applications": sum(1 for a in apps if a.get('app_status') == APP_PENDING),
        "total_applications": len(apps),
        "total_users": len(user_svc.list_users()),
    }
    for status in SENIOR_STATUSES:
        stats[f"{status.lower()}_seniors"] = sum(1 for s in seniors if s.get('status') == status)
    return stats


def export_to_csv(data_key: str):
    """Exports data for a given key to a CSV string."""
    data = persistence.load_list(data_key)
    if not data:
        return ""

    output = io.StringIO()
    # Ensure all dicts have the same keys for the header
    fieldnames = sorted({key for item in data for key in item.keys()} - CSV_EXCLUDED_FIELDS)
    writer = csv.DictWriter(output, fieldnames=fieldnames, extrasaction='ignore')
    writer.writeheader()
    writer.writerows(data)
    return output.getvalue()


def reset_all_data():
    """Deletes seniors, applications and the session; users fall back to the seeded admin."""
    for key in ['seniors', 'applications']:
        persistence.replace_all(key, [])
    persistence.clear('session')
    persistence.clear('users')
    user_svc.list_users()  # seeds the default admin
    logger.warning("All registry data was reset")
