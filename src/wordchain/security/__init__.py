"""Security primitives: token encryption, password hashing, audit events.

Token encryption::

    from wordchain.security import TokenCodec, new_payload

    codec = TokenCodec("s3cret")
    token = codec.encode(new_payload("alice", now=1_700_000_000))
    payload = codec.decode(token)

Password hashing::

    from wordchain.security import hash_password, new_salt, verify_password

    salt = new_salt()
    ok = verify_password("pw", salt, hash_password("pw", salt))
"""

from wordchain.security.audit import SecurityEvent, emit_security_event, set_security_event_sink
from wordchain.security.cipher import AuthenticationFailed, Cipher, CryptoError, MalformedEncoding
from wordchain.security.passwords import hash_password, new_salt, verify_password
from wordchain.security.tokens import (
    DecryptFailed,
    MalformedPayload,
    TokenCodec,
    TokenError,
    TokenPayload,
    new_payload,
)

__all__ = [
    "AuthenticationFailed",
    "Cipher",
    "CryptoError",
    "DecryptFailed",
    "MalformedEncoding",
    "MalformedPayload",
    "SecurityEvent",
    "TokenCodec",
    "TokenError",
    "TokenPayload",
    "emit_security_event",
    "hash_password",
    "new_payload",
    "new_salt",
    "set_security_event_sink",
    "verify_password",
]
