"""Full-database export and import-and-overwrite.

The export file is the only way to move data between machines. Import checks
the whole document before touching the store; a bad file raises
BackupFormatError and the current data stays as it was.
"""
import datetime as dt
import json
import logging
from typing import Dict, Any

from domain.constants import SCHEMA_VERSION
from services import persistence, settings as settings_svc
from services.migrations import migrate_payload

logger = logging.getLogger(__name__)

BACKUP_COLLECTIONS = ('seniors', 'applications', 'users')


class BackupFormatError(persistence.StorageError):
    """The uploaded backup does not have the expected shape."""


def export_database() -> str:
    doc = {
        'schema_version': SCHEMA_VERSION,
        'exported_at': dt.datetime.now(dt.timezone.utc).replace(microsecond=0).isoformat().replace('+00:00', 'Z'),
        'settings': settings_svc.get_settings(),
    }
    for key in BACKUP_COLLECTIONS:
        doc[key] = persistence.load_list(key)
    logger.info("Exported database (%s)", ", ".join(f"{k}={len(doc[k])}" for k in BACKUP_COLLECTIONS))
    return json.dumps(doc, ensure_ascii=False, indent=2)


def parse_backup(text) -> Dict[str, Any]:
    """Validate and migrate a backup document without writing anything."""
    if isinstance(text, bytes):
        text = text.decode('utf-8')
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise BackupFormatError(f"Backup is not valid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise BackupFormatError("Backup must be a JSON object")

    version = doc.get('schema_version', 1)
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        raise BackupFormatError(f"Unsupported backup schema_version {version!r}")
    missing = [k for k in BACKUP_COLLECTIONS if k not in doc]
    if missing:
        raise BackupFormatError("Backup is missing: " + ", ".join(missing))

    parsed: Dict[str, Any] = {}
    for key in BACKUP_COLLECTIONS:
        items = doc[key]
        if not isinstance(items, list) or not all(isinstance(i, dict) and i.get('id') for i in items):
            raise BackupFormatError(f"'{key}' must be a list of records with an id")
        parsed[key] = migrate_payload(key, items, collection=True) if version < SCHEMA_VERSION else items
    if not parsed['users']:
        raise BackupFormatError("Backup has no user accounts; restoring it would lock everyone out")
    settings = doc.get('settings')
    if settings is not None and not isinstance(settings, dict):
        raise BackupFormatError("'settings' must be an object")
    if settings is not None and version < SCHEMA_VERSION:
        settings = migrate_payload('settings', settings, collection=False)
    parsed['settings'] = settings
    return parsed


def import_database(text) -> Dict[str, int]:
    """Overwrite the store with a backup. Returns record counts per collection."""
    parsed = parse_backup(text)
    for key in BACKUP_COLLECTIONS:
        persistence.replace_all(key, parsed[key])
    if parsed['settings'] is not None:
        result = settings_svc.save_settings(parsed['settings'])
        if not result.ok:
            logger.warning("Backup settings ignored: %s", result.message)
    counts = {k: len(parsed[k]) for k in BACKUP_COLLECTIONS}
    logger.info("Imported backup %s", counts)
    return counts
