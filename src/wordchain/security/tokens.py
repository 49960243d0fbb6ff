"""Session token payloads and their encrypted wire form.

A token is ``Cipher.encrypt`` over the canonical JSON of a
``TokenPayload``: keys sorted, no insignificant whitespace, so encoding
the same payload twice yields the same plaintext.

Wire keys are ``account_id``, ``timestamp`` and ``nonce``. The legacy
bearer payload carries no nonce.
"""

from __future__ import annotations

import json
import secrets
import string
from dataclasses import dataclass
from typing import Any

from wordchain.security.cipher import Cipher, CryptoError

NONCE_LENGTH = 32
_NONCE_ALPHABET = string.ascii_letters + string.digits

# Accepted spellings on decode; encode always uses the first of each.
_SUBJECT_KEYS = ("account_id", "subject")
_ISSUED_AT_KEYS = ("timestamp", "issuedAt")


class TokenError(Exception):
    """Base for token decoding failures."""


class DecryptFailed(TokenError):  # noqa: N818
    """The token did not decrypt (bad encoding, tampering, or wrong secret)."""


class MalformedPayload(TokenError):  # noqa: N818
    """The token decrypted but its content is not a valid payload."""


def new_nonce() -> str:
    """Return 32 random alphanumeric characters from a CSPRNG."""
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(NONCE_LENGTH))


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Who the token is for, when it was minted, and a uniqueness nonce.

    ``nonce`` is empty for legacy bearer tokens.
    """

    subject: str
    issued_at: int
    nonce: str = ""

    def age(self, now: int) -> int:
        """Seconds elapsed since issue at *now* (epoch seconds)."""
        return now - self.issued_at

    def to_json(self) -> str:
        data: dict[str, Any] = {"account_id": self.subject, "timestamp": self.issued_at}
        if self.nonce:
            data["nonce"] = self.nonce
        return json.dumps(data, sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str, *, require_nonce: bool = True) -> TokenPayload:
        try:
            data = json.loads(raw)
        except ValueError:
            raise MalformedPayload("token payload is not JSON") from None
        if not isinstance(data, dict):
            raise MalformedPayload("token payload is not an object")

        subject = _first(data, _SUBJECT_KEYS)
        issued_at = _first(data, _ISSUED_AT_KEYS)
        nonce = data.get("nonce", "")

        if not isinstance(subject, str) or not subject:
            raise MalformedPayload("token payload has no subject")
        # bool is an int subclass; reject it explicitly
        if not isinstance(issued_at, int) or isinstance(issued_at, bool):
            raise MalformedPayload("token payload has no integer timestamp")
        if not isinstance(nonce, str) or (require_nonce and not nonce):
            raise MalformedPayload("token payload has no nonce")
        return cls(subject=subject, issued_at=issued_at, nonce=nonce)


def _first(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def new_payload(subject: str, now: int) -> TokenPayload:
    """A fresh payload for *subject* issued at *now* with a random nonce."""
    return TokenPayload(subject=subject, issued_at=now, nonce=new_nonce())


class TokenCodec:
    """Encode and decode token payloads under one secret."""

    __slots__ = ("_cipher",)

    def __init__(self, secret: str) -> None:
        self._cipher = Cipher(secret)

    def encode(self, payload: TokenPayload) -> str:
        """Encrypt *payload*.

        Raises:
            MalformedPayload: *payload* has no subject or no nonce, so
                ``decode`` would refuse the token.
        """
        if not payload.subject:
            raise MalformedPayload("token payload has no subject")
        if not payload.nonce:
            raise MalformedPayload("token payload has no nonce")
        return self._cipher.encrypt(payload.to_json())

    def decode(self, token: str) -> TokenPayload:
        """Decrypt and parse *token*.

        Raises:
            DecryptFailed: any ``CryptoError`` from the cipher.
            MalformedPayload: the plaintext is not a valid payload.
        """
        return TokenPayload.from_json(self._decrypt(token))

    def encode_legacy(self, subject: str, now: int) -> str:
        """Mint a bearer token (no nonce) for the deprecated header flow."""
        if not subject:
            raise MalformedPayload("token payload has no subject")
        return self._cipher.encrypt(TokenPayload(subject=subject, issued_at=now).to_json())

    def decode_legacy(self, token: str) -> TokenPayload:
        """Decode a bearer token; a nonce is tolerated but not required."""
        return TokenPayload.from_json(self._decrypt(token), require_nonce=False)

    def _decrypt(self, token: str) -> str:
        try:
            return self._cipher.decrypt(token)
        except CryptoError as exc:
            raise DecryptFailed(str(exc)) from exc


def encode(secret: str, payload: TokenPayload) -> str:
    """Encode *payload* under *secret*. Convenience over ``TokenCodec``."""
    return TokenCodec(secret).encode(payload)


def decode(secret: str, token: str) -> TokenPayload:
    """Decode *token* under *secret*. Convenience over ``TokenCodec``."""
    return TokenCodec(secret).decode(token)
