"""User accounts, login and the single-slot session.

Usernames are stored lowercase and compared case-insensitively. Passwords are
kept as bcrypt hashes; a plaintext ``password`` handed to save_user is
hashed before anything is written.
"""
from __future__ import annotations
import logging
from dataclasses import asdict
from typing import List, Dict, Any, Optional

from domain.constants import DEFAULT_ADMIN, ROLES, ROLE_ADMIN
from domain.models import UserAccount, OpResult, _now_iso
from services import persistence
from utils.ids import create_id_with_prefix
from utils.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

KEY = 'users'
SESSION_KEY = 'session'
_PUBLIC_FIELDS = ('id', 'username', 'role', 'created_at')


def _seed_admin() -> Dict[str, Any]:
    password_hash, salt = hash_password(DEFAULT_ADMIN['password'])
    return asdict(UserAccount(
        id=DEFAULT_ADMIN['id'],
        username=DEFAULT_ADMIN['username'],
        password_hash=password_hash,
        salt=salt,
        role=DEFAULT_ADMIN['role'],
    ))


def _load_users():
    """Seed the default admin only when no users file was ever written.

    A stored empty list stays empty.
    """
    first_access = not persistence.exists(KEY)
    users, revision = persistence.load_map(KEY)
    if first_access:
        admin = _seed_admin()
        users[admin['id']] = admin
        revision = persistence.save_map(KEY, users, expected_revision=revision)
        logger.warning("No user accounts found; seeded default admin account '%s'", admin['username'])
    return users, revision


def list_users() -> List[Dict[str, Any]]:
    return list(_load_users()[0].values())


def get_user(user_id: str) -> Optional[Dict[str, Any]]:
    return _load_users()[0].get(user_id)


def public_view(user: Dict[str, Any]) -> Dict[str, Any]:
    """Account without credential fields (what the session and UI see)."""
    return {k: user.get(k) for k in _PUBLIC_FIELDS}


def save_user(user: Dict[str, Any]) -> OpResult:
    """Normalize username to lowercase, hash any plaintext password, upsert by id."""
    username = (user.get('username') or '').strip().lower()
    if not user.get('id'):
        return OpResult.invalid("User needs an id")
    if not username:
        return OpResult.invalid("Username is required")
    if user.get('role') not in ROLES:
        return OpResult.invalid(f"Unknown role: {user.get('role')}")

    users, revision = _load_users()
    if any(u['username'] == username and uid != user['id'] for uid, u in users.items()):
        return OpResult.invalid(f"Username '{username}' is already taken")

    record = {k: v for k, v in user.items() if k != 'password'}
    record['username'] = username
    if user.get('password'):
        record['password_hash'], record['salt'] = hash_password(user['password'])
    elif user['id'] in users and not record.get('password_hash'):
        # keep the existing credentials when only profile fields change
        record['password_hash'] = users[user['id']]['password_hash']
        record['salt'] = users[user['id']]['salt']
    if not record.get('password_hash'):
        return OpResult.invalid("Password is required")
    record.setdefault('created_at', _now_iso())

    users[user['id']] = record
    persistence.save_map(KEY, users, expected_revision=revision)
    logger.info("Saved user %s (%s)", username, record['role'])
    return OpResult.success(public_view(record))


def create_user(username: str, password: str, role: str) -> OpResult:
    return save_user({'id': create_id_with_prefix('usr'), 'username': username,
                      'password': password, 'role': role})


def delete_user(user_id: str) -> OpResult:
    """Unconditional removal; see deletion_blocker for the UI guard."""
    users, revision = _load_users()
    removed = users.pop(user_id, None)
    if removed is None:
        return OpResult.not_found(f"No user with id {user_id}")
    persistence.save_map(KEY, users, expected_revision=revision)
    logger.info("Deleted user %s", removed['username'])
    return OpResult.success(public_view(removed))


def deletion_blocker(user_id: str, current_user: Optional[Dict[str, Any]]) -> Optional[str]:
    """Reason the UI should refuse deleting user_id, or None."""
    if current_user and current_user.get('id') == user_id:
        return "You cannot delete your own account."
    users = list_users()
    target = next((u for u in users if u['id'] == user_id), None)
    if target and target.get('role') == ROLE_ADMIN:
        if sum(1 for u in users if u.get('role') == ROLE_ADMIN) <= 1:
            return "At least one Admin account must remain."
    return None


def login(username: str, password: str) -> Optional[Dict[str, Any]]:
    """Authenticate and open the session. None on any failure."""
    wanted = (username or '').strip().lower()
    for user in list_users():
        if user.get('username', '').lower() == wanted and verify_password(
                password or '', user.get('password_hash'), user.get('salt')):
            session = {**public_view(user), 'logged_in_at': _now_iso()}
            persistence.save_record(SESSION_KEY, session)
            logger.info("User %s logged in", wanted)
            return session
    logger.warning("Failed login attempt for '%s'", wanted)
    return None


def logout():
    persistence.clear(SESSION_KEY)
    logger.info("Session cleared")


def get_current_session() -> Optional[Dict[str, Any]]:
    return persistence.load_record(SESSION_KEY)
