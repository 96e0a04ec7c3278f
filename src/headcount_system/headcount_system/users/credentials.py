"""Password salting, hashing and temporary password generation.

Stored hashes are hex SHA-256 of ``password + salt``, the format used by
earlier installs, so imported backups keep working.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

from werkzeug.security import gen_salt

from ..core.constants import SALT_BYTES, TEMP_PASSWORD_ALPHABET, TEMP_PASSWORD_LENGTH

# gen_salt picks from 62 characters with SystemRandom: 32 chars is about 190 bits, over 16 bytes.
SALT_LENGTH = SALT_BYTES * 2


def generate_salt() -> str:
    return gen_salt(SALT_LENGTH)


def hash_password(password: str, salt: str) -> str:
    return hashlib.sha256(f"{password}{salt}".encode("utf-8")).hexdigest()


def check_password(password_hash: str, salt: str, password: str) -> bool:
    return hmac.compare_digest(hash_password(password, salt), password_hash)


def generate_temporary_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
