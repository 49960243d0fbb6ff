"""Authenticated symmetric encryption for session tokens.

AES-256-GCM under a key derived as SHA3-256 of the shared secret. Each
call draws a fresh 96-bit nonce; no associated data is used. The wire
form is ``hex(nonce || ciphertext || tag)``.

Usage::

    from wordchain.security.cipher import Cipher

    cipher = Cipher("s3cret")
    blob = cipher.encrypt("hello")
    assert cipher.decrypt(blob) == "hello"
"""

import hashlib
import os
import re

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_SIZE = 12
TAG_SIZE = 16

# The wire form is lowercase hex only; bytes.fromhex alone also takes A-F.
_HEX = re.compile(r"[0-9a-f]*")


class CryptoError(Exception):
    """Base for encryption and decryption failures.

    Messages never echo the offending input.
    """


class MalformedEncoding(CryptoError):  # noqa: N818
    """The blob is not lowercase hex, or too short to hold a nonce."""


class AuthenticationFailed(CryptoError):  # noqa: N818
    """The tag did not verify (tampered or wrong key), or the plaintext is not UTF-8."""


def derive_key(secret: str) -> bytes:
    """Return the 32-byte AES key for *secret* (SHA3-256 of its UTF-8 bytes)."""
    return hashlib.sha3_256(secret.encode("utf-8")).digest()


class Cipher:
    """AES-256-GCM bound to one secret.

    The key is derived once at construction. Instances hold no other
    state and are safe to share between tasks.
    """

    __slots__ = ("_aead",)

    def __init__(self, secret: str) -> None:
        self._aead = AESGCM(derive_key(secret))

    def encrypt(self, plaintext: str) -> str:
        nonce = os.urandom(NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return (nonce + sealed).hex()

    def decrypt(self, blob: str) -> str:
        if not isinstance(blob, str) or _HEX.fullmatch(blob) is None or len(blob) % 2:
            raise MalformedEncoding("token is not valid lowercase hex")
        raw = bytes.fromhex(blob)
        if len(raw) < NONCE_SIZE:
            raise MalformedEncoding("token is too short")

        nonce, sealed = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
        try:
            plaintext = self._aead.decrypt(nonce, sealed, None)
        except InvalidTag:
            raise AuthenticationFailed("token failed authentication") from None
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            raise AuthenticationFailed("token failed authentication") from None


def encrypt(secret: str, plaintext: str) -> str:
    """Encrypt *plaintext* under *secret*. Convenience over ``Cipher``."""
    return Cipher(secret).encrypt(plaintext)


def decrypt(secret: str, blob: str) -> str:
    """Decrypt a hex *blob* under *secret*. Convenience over ``Cipher``.

    Raises:
        MalformedEncoding: *blob* is not lowercase hex or shorter than the nonce.
        AuthenticationFailed: the tag did not verify or the plaintext is not UTF-8.
    """
    return Cipher(secret).decrypt(blob)


__all__ = [
    "NONCE_SIZE",
    "TAG_SIZE",
    "AuthenticationFailed",
    "Cipher",
    "CryptoError",
    "MalformedEncoding",
    "decrypt",
    "derive_key",
    "encrypt",
]
