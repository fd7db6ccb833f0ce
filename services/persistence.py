import json
import logging
import os
import tempfile
import time
from collections import OrderedDict
from contextlib import contextmanager
from typing import List, Dict, Any, Optional, Tuple

from domain.constants import SCHEMA_VERSION
from services.migrations import migrate_payload
from utils.paths import default_data_dir

logger = logging.getLogger(__name__)

DATA_DIR = default_data_dir()

FILES = {
    'seniors': 'seniors.json',
    'applications': 'applications.json',
    'users': 'users.json',
    'session': 'session.json',
    'settings': 'settings.json',
}
COLLECTIONS = ('seniors', 'applications', 'users')

LOCK_TIMEOUT = 5.0
LOCK_STALE_SECONDS = 30.0


class StorageError(Exception):
    """Base class for store failures."""


class CorruptDataError(StorageError):
    """A storage file exists but cannot be read as the expected shape."""


class SchemaVersionError(StorageError):
    """A storage file was written by a newer schema than this code knows."""


class ConcurrentWriteError(StorageError):
    """The file changed since it was read; the write was refused."""


def _path(key: str) -> str:
    return os.path.join(DATA_DIR, FILES[key])


def exists(key: str) -> bool:
    return os.path.exists(_path(key))


@contextmanager
def _write_lock(key: str):
    """Hold <file>.lock while reading the revision and replacing the file.

    A lock older than LOCK_STALE_SECONDS is taken to be left over from a crashed
    writer and is removed.
    """
    lock_path = _path(key) + '.lock'
    os.makedirs(os.path.dirname(lock_path), exist_ok=True)
    deadline = time.monotonic() + LOCK_TIMEOUT
    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            break
        except FileExistsError:
            try:
                if time.time() - os.path.getmtime(lock_path) > LOCK_STALE_SECONDS:
                    logger.warning("Removing stale lock %s", lock_path)
                    os.remove(lock_path)
                    continue
            except FileNotFoundError:
                continue
            if time.monotonic() >= deadline:
                raise ConcurrentWriteError(f"{FILES[key]} is locked by another writer")
            time.sleep(0.05)
    try:
        os.close(fd)
        yield
    finally:
        os.remove(lock_path)


def _read_raw(key: str) -> Any:
    file_path = _path(key)
    if not os.path.exists(file_path):
        return None
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CorruptDataError(f"{FILES[key]} is not valid JSON: {e}") from e


def _read_envelope(key: str) -> Tuple[Any, int]:
    """Return (data, revision), migrating legacy files in memory."""
    raw = _read_raw(key)
    collection = key in COLLECTIONS
    if raw is None:
        return ([] if collection else None), 0
    if isinstance(raw, dict) and 'schema_version' in raw:
        version = raw.get('schema_version')
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise SchemaVersionError(
                f"{FILES[key]} has schema_version {version!r}; this build reads up to {SCHEMA_VERSION}")
        data = raw.get('data')
        revision = raw.get('revision', 0)
        if version < SCHEMA_VERSION:
            data = migrate_payload(key, data, collection)
    else:
        logger.info("Migrating legacy %s to schema v%d", FILES[key], SCHEMA_VERSION)
        data = migrate_payload(key, raw, collection)
        revision = 0
    if collection:
        _check_collection(key, data)
    elif data is not None and not isinstance(data, dict):
        raise CorruptDataError(f"{FILES[key]} must hold an object")
    return data, revision


def _check_collection(key: str, data: Any):
    if not isinstance(data, list):
        raise CorruptDataError(f"{FILES[key]} must hold a list of records")
    for item in data:
        if not isinstance(item, dict) or not item.get('id'):
            raise CorruptDataError(f"{FILES[key]} contains a record without an id")


def index_by_id(key: str, items: List[Dict[str, Any]]) -> 'OrderedDict[str, Dict[str, Any]]':
    """Key records by id, keeping the first of any duplicated ids."""
    mapping: 'OrderedDict[str, Dict[str, Any]]' = OrderedDict()
    for item in items:
        if item['id'] in mapping:
            logger.warning("Dropping duplicate id %s in %s", item['id'], key)
            continue
        mapping[item['id']] = item
    return mapping


def atomic_write(key: str, data: Any, revision: int):
    file_path = _path(key)
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    envelope = {'schema_version': SCHEMA_VERSION, 'revision': revision, 'data': data}
    tmp_fd, tmp_path = tempfile.mkstemp(prefix='tmp_', suffix='.json', dir=os.path.dirname(file_path))
    try:
        with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
            json.dump(envelope, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, file_path)
    except Exception:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def current_revision(key: str) -> int:
    return _read_envelope(key)[1]


def load_map(key: str) -> Tuple['OrderedDict[str, Dict[str, Any]]', int]:
    """Read a collection as an id-keyed mapping (insertion order) plus its revision."""
    items, revision = _read_envelope(key)
    return index_by_id(key, items), revision


def save_map(key: str, mapping: Dict[str, Dict[str, Any]], expected_revision: Optional[int] = None) -> int:
    """Persist a whole collection. Returns the new revision.

    When expected_revision is given and the file moved on since it was read,
    ConcurrentWriteError is raised and nothing is written. The revision check
    and the write happen under the file's lock, so two writers that read the
    same revision cannot both succeed.
    """
    with _write_lock(key):
        on_disk = current_revision(key)
        if expected_revision is not None and on_disk != expected_revision:
            logger.warning("Refusing stale write to %s (read rev %s, disk rev %s)", key, expected_revision, on_disk)
            raise ConcurrentWriteError(
                f"{FILES[key]} changed since it was read (revision {expected_revision} -> {on_disk})")
        new_revision = on_disk + 1
        atomic_write(key, list(mapping.values()), new_revision)
    return new_revision


def load_list(key: str) -> List[Dict[str, Any]]:
    return list(load_map(key)[0].values())


def replace_all(key: str, items: List[Dict[str, Any]]) -> int:
    _check_collection(key, items)
    return save_map(key, index_by_id(key, items))


def load_record(key: str) -> Optional[Dict[str, Any]]:
    return _read_envelope(key)[0]


def save_record(key: str, record: Dict[str, Any]) -> int:
    with _write_lock(key):
        new_revision = current_revision(key) + 1
        atomic_write(key, record, new_revision)
    return new_revision


def clear(key: str):
    file_path = _path(key)
    if os.path.exists(file_path):
        os.remove(file_path)
