from typing import Tuple

import bcrypt

BCRYPT_ROUNDS = 12


def _encode(password: str) -> bytes:
    # Bcrypt has a 72 byte limit - truncate password if necessary
    return (password or '').encode('utf-8')[:72]


def hash_password(password: str, salt: str = None) -> Tuple[str, str]:
    """Return (password_hash, salt). A fresh bcrypt salt is made when none is given."""
    salt = salt or bcrypt.gensalt(rounds=BCRYPT_ROUNDS).decode('utf-8')
    password_hash = bcrypt.hashpw(_encode(password), salt.encode('utf-8'))
    return password_hash.decode('utf-8'), salt


def verify_password(password: str, password_hash: str, salt: str = None) -> bool:
    """The salt is embedded in a bcrypt hash; the stored copy is informational."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode('utf-8'))
    except ValueError:
        # not a bcrypt hash
        return False
