"""Load a legacy browser export into the data directory.

The browser edition kept five localStorage keys. Dump them into one JSON file
shaped like {"senior_citizen_db": [...], "senior_system_applications": [...],
"senior_system_users": [...], "senior_system_settings": {...}} (or a backup
file written by this app) and run:

    python scripts/migration.py legacy.json
"""
import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from services import backup
from utils.log import setup_logging

LEGACY_STORAGE_KEYS = {
    'senior_citizen_db': 'seniors',
    'senior_system_applications': 'applications',
    'senior_system_users': 'users',
    'senior_system_settings': 'settings',
}


def legacy_to_backup(doc: dict) -> dict:
    """Rename browser storage keys to backup keys; bare documents count as schema v1."""
    out = {LEGACY_STORAGE_KEYS.get(k, k): v for k, v in doc.items() if k != 'senior_system_session'}
    out.setdefault('schema_version', 1)
    return out


def migrate_file(path: str) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        doc = json.load(f)
    return backup.import_database(json.dumps(legacy_to_backup(doc)))


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    setup_logging()
    counts = migrate_file(sys.argv[1])
    print("Migration complete: " + ", ".join(f"{k}={v}" for k, v in counts.items()))
