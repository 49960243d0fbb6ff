"""Password hashing with a per-account stored salt.

Accounts are stored as ``(id, salt, password)`` rows, so the salt lives
in its own column rather than inside a PHC string. Hashing uses argon2id
through ``argon2-cffi``'s low-level API with that explicit salt.

Usage::

    from wordchain.security.passwords import hash_password, new_salt, verify_password

    salt = new_salt()
    hashed = hash_password("my-password", salt)
    ok = verify_password("my-password", salt, hashed)
"""

import hmac
import secrets
import string

from argon2.low_level import Type, hash_secret_raw

SALT_LENGTH = 32
_SALT_ALPHABET = string.ascii_letters + string.digits

# argon2id parameters (OWASP minimum: 19 MiB, 2 passes, 1 lane)
_TIME_COST = 2
_MEMORY_COST = 19 * 1024  # KiB
_PARALLELISM = 1
_HASH_LEN = 32


def new_salt() -> str:
    """Return 32 random alphanumeric characters."""
    return "".join(secrets.choice(_SALT_ALPHABET) for _ in range(SALT_LENGTH))


def hash_password(password: str, salt: str) -> str:
    """Hash *password* with *salt*, returning lowercase hex.

    Raises:
        ValueError: *password* is empty.
    """
    if not password:
        msg = "Password must not be empty."
        raise ValueError(msg)
    digest = hash_secret_raw(
        password.encode("utf-8"),
        salt.encode("utf-8"),
        time_cost=_TIME_COST,
        memory_cost=_MEMORY_COST,
        parallelism=_PARALLELISM,
        hash_len=_HASH_LEN,
        type=Type.ID,
    )
    return digest.hex()


def verify_password(password: str, salt: str, expected: str) -> bool:
    """Constant-time check of *password* against a stored hash."""
    if not password or not expected:
        return False
    return hmac.compare_digest(hash_password(password, salt), expected)
