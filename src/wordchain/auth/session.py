"""Stateless encrypted cookie sessions with refresh-driven rotation.

A login mints two tokens for the same subject: a short-lived access
token and a long-lived refresh token, both carried as HttpOnly cookies.
``SessionAuthenticator.validate`` walks the state machine::

    NoCredential -> Fresh -> NeedsRefresh -> Rotated
                  (any branch may end in Rejected)

There is no server-side session record and no revocation list: a token
stays valid until its window elapses. A consumed refresh token is not
invalidated by rotation.

``authorize`` implements the older single-token bearer flow
(``Authorization: Bearer <token>``) and is kept for compatibility.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from wordchain.config import AppConfig
from wordchain.errors import ConfigurationError
from wordchain.http.cookies import SetCookie
from wordchain.http.request import Request
from wordchain.http.response import Response
from wordchain.security.audit import emit_security_event
from wordchain.security.tokens import TokenCodec, TokenError, TokenPayload, new_payload

logger = logging.getLogger("wordchain.auth")

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

ACCESS_WINDOW = 15 * 60
REFRESH_WINDOW = 90 * 24 * 60 * 60


# ---------------------------------------------------------------------------
# Account lookup port
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Account:
    """A stored account as the session layer sees it."""

    id: str
    salt: str
    password_hash: str


@runtime_checkable
class AccountLookup(Protocol):
    """Anything that can find an account by id."""

    async def lookup(self, account_id: str) -> Account | None: ...


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class SessionState(Enum):
    FRESH = "fresh"
    ROTATED = "rotated"
    REJECTED = "rejected"


class RejectReason(Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    SUBJECT_MISMATCH = "subject-mismatch"
    UNKNOWN_ACCOUNT = "unknown-account"
    UNSUPPORTED = "unsupported"
    UNPARSABLE = "unparsable"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True, slots=True)
class Rejection:
    """Why a credential was refused, and how to say so over HTTP.

    The body names the reason only; decryption details never leave the
    process.
    """

    reason: RejectReason
    status: int = 401
    challenge: str | None = "Cookie"

    def to_response(self) -> Response:
        response = Response(body=self.reason.value, status=self.status)
        if self.challenge is not None:
            response = response.with_header("WWW-Authenticate", self.challenge)
        return response


@dataclass(frozen=True, slots=True)
class SessionCheck:
    """Outcome of ``SessionAuthenticator.validate``.

    ``cookies`` is non-empty only for ``ROTATED``; merge it onto whatever
    response the handler produces with ``apply``.
    """

    state: SessionState
    subject: str | None = None
    cookies: tuple[SetCookie, ...] = ()
    rejection: Rejection | None = None

    def __post_init__(self) -> None:
        if (self.state is SessionState.REJECTED) != (self.rejection is not None):
            msg = "A SessionCheck carries a rejection exactly when its state is REJECTED."
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        return self.state is not SessionState.REJECTED

    def apply(self, response: Response) -> Response:
        if not self.cookies:
            return response
        return response.with_cookies(self.cookies)

    def to_response(self) -> Response:
        """The 401 response for a rejected check."""
        if self.rejection is None:
            msg = "Only a rejected SessionCheck has a rejection response."
            raise ValueError(msg)
        return self.rejection.to_response()


@dataclass(frozen=True, slots=True)
class SessionTokenPair:
    """An access token and a refresh token sharing one subject."""

    access: str
    refresh: str


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Session cookie configuration.

    Attributes:
        secret_key: Shared secret the token key is derived from.
        cookie_secure: Set the ``Secure`` flag on session cookies.
        access_window: Seconds an access token stays fresh.
        refresh_window: Seconds a refresh token can rotate a session.
    """

    secret_key: str
    cookie_secure: bool = True
    access_window: int = ACCESS_WINDOW
    refresh_window: int = REFRESH_WINDOW

    @classmethod
    def from_app_config(cls, config: AppConfig) -> SessionConfig:
        return cls(
            secret_key=config.secret_key,
            cookie_secure=config.cookie_secure,
            access_window=config.access_window_seconds,
            refresh_window=config.refresh_window_seconds,
        )


def _rejected(reason: RejectReason) -> SessionCheck:
    return SessionCheck(state=SessionState.REJECTED, rejection=Rejection(reason))


def _bearer_rejection(reason: RejectReason) -> Rejection:
    return Rejection(reason, challenge=f'Bearer error="{reason.value}"')


# ---------------------------------------------------------------------------
# Authenticator
# ---------------------------------------------------------------------------


class SessionAuthenticator:
    """Issues, validates, and rotates session token pairs.

    Usage::

        auth = SessionAuthenticator(SessionConfig(secret_key="s3cret"), accounts)

        response = Response("welcome").with_cookies(auth.issue_cookies("alice"))

        check = await auth.validate(request)
        if not check.ok:
            return check.to_response()
        return check.apply(Response(f"hello {check.subject}"))
    """

    __slots__ = ("_accounts", "_clock", "_codec", "_config")

    def __init__(
        self,
        config: SessionConfig,
        accounts: AccountLookup,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not config.secret_key:
            msg = "SessionConfig.secret_key must not be empty."
            raise ConfigurationError(msg)
        self._config = config
        self._accounts = accounts
        self._codec = TokenCodec(config.secret_key)
        self._clock = clock

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def codec(self) -> TokenCodec:
        return self._codec

    def now(self) -> int:
        return int(self._clock())

    # -- Issue --

    def issue(self, subject: str) -> SessionTokenPair:
        """Mint a fresh access/refresh pair for *subject*."""
        now = self.now()
        return SessionTokenPair(
            access=self._codec.encode(new_payload(subject, now)),
            refresh=self._codec.encode(new_payload(subject, now)),
        )

    def issue_cookies(self, subject: str) -> tuple[SetCookie, SetCookie]:
        """Mint a pair and wrap it as ``(refresh_token, access_token)`` cookies."""
        pair = self.issue(subject)
        return (
            self._cookie(REFRESH_COOKIE, pair.refresh),
            self._cookie(ACCESS_COOKIE, pair.access),
        )

    def _cookie(self, name: str, value: str) -> SetCookie:
        return SetCookie(name=name, value=value, secure=self._config.cookie_secure)

    # -- Validate --

    async def validate(self, request: Request) -> SessionCheck:
        """Check the session cookies on *request*.

        Returns a ``SessionCheck`` in state ``FRESH`` (identity resolved,
        nothing to send back), ``ROTATED`` (identity resolved, new cookies
        to attach), or ``REJECTED`` (answer with ``check.to_response()``).
        """
        check = await self._validate(request)
        if check.rejection is not None:
            reason = check.rejection.reason.value
            logger.info("session rejected: %s %s %s", request.method, request.path, reason)
            emit_security_event("session.rejected", request=request, details={"reason": reason})
        elif check.state is SessionState.ROTATED:
            logger.debug("session rotated for %s", check.subject)
            emit_security_event("session.rotated", request=request, user_id=check.subject)
        return check

    async def _validate(self, request: Request) -> SessionCheck:
        raw_access = request.cookies.get(ACCESS_COOKIE)
        if not raw_access:
            return _rejected(RejectReason.MISSING)
        access = self._decode(raw_access)
        if access is None:
            return _rejected(RejectReason.MALFORMED)

        now = self.now()
        raw_refresh = request.cookies.get(REFRESH_COOKIE)

        if access.age(now) <= self._config.access_window:
            # A refresh cookie riding along must agree on the subject.
            if raw_refresh:
                refresh = self._decode(raw_refresh)
                if refresh is not None and refresh.subject != access.subject:
                    return _rejected(RejectReason.SUBJECT_MISMATCH)
            return SessionCheck(state=SessionState.FRESH, subject=access.subject)

        if not raw_refresh:
            return _rejected(RejectReason.MISSING)
        refresh = self._decode(raw_refresh)
        if refresh is None:
            return _rejected(RejectReason.MALFORMED)
        if refresh.age(now) > self._config.refresh_window:
            return _rejected(RejectReason.EXPIRED)
        if refresh.subject != access.subject:
            return _rejected(RejectReason.SUBJECT_MISMATCH)

        account = await self._accounts.lookup(access.subject)
        if account is None or account.id != access.subject:
            return _rejected(RejectReason.UNKNOWN_ACCOUNT)

        # TODO: single-use refresh tokens need a server-side record of consumed nonces.
        return SessionCheck(
            state=SessionState.ROTATED,
            subject=account.id,
            cookies=self.issue_cookies(account.id),
        )

    def _decode(self, token: str) -> TokenPayload | None:
        try:
            return self._codec.decode(token)
        except TokenError:
            return None

    # -- Legacy bearer flow --

    def issue_legacy(self, subject: str) -> str:
        """Mint a single bearer token for *subject* (deprecated flow)."""
        return self._codec.encode_legacy(subject, self.now())

    def authorize(self, expected_id: str, request: Request) -> Rejection | None:
        """Check ``Authorization: Bearer <token>`` against *expected_id*.

        Returns ``None`` when the bearer may act as *expected_id*, else a
        ``Rejection``: 401 with a ``Bearer error=...`` challenge for
        missing, malformed, unsupported, unparsable or expired
        credentials, and 403 without a challenge for a subject mismatch.
        """
        rejection = self._authorize(expected_id, request)
        if rejection is not None:
            emit_security_event(
                "bearer.rejected",
                request=request,
                details={"reason": rejection.reason.value},
            )
        return rejection

    def _authorize(self, expected_id: str, request: Request) -> Rejection | None:
        header = request.headers.get("authorization")
        if header is None:
            return _bearer_rejection(RejectReason.MISSING)

        terms = header.split(" ")
        if len(terms) != 2 or not all(terms):
            return _bearer_rejection(RejectReason.MALFORMED)
        scheme, token = terms
        if scheme != "Bearer":
            return _bearer_rejection(RejectReason.UNSUPPORTED)

        try:
            payload = self._codec.decode_legacy(token)
        except TokenError:
            return _bearer_rejection(RejectReason.UNPARSABLE)

        if payload.age(self.now()) > self._config.access_window:
            return _bearer_rejection(RejectReason.EXPIRED)
        if payload.subject != expected_id:
            return Rejection(RejectReason.FORBIDDEN, status=403, challenge=None)
        return None
