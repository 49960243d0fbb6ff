"""Session authentication: encrypted cookie pairs with silent rotation.

Usage::

    from wordchain.auth import SessionAuthenticator, SessionConfig

    auth = SessionAuthenticator(SessionConfig(secret_key="s3cret"), accounts)
    check = await auth.validate(request)
"""

from wordchain.auth.session import (
    ACCESS_COOKIE,
    ACCESS_WINDOW,
    REFRESH_COOKIE,
    REFRESH_WINDOW,
    Account,
    AccountLookup,
    RejectReason,
    Rejection,
    SessionAuthenticator,
    SessionCheck,
    SessionConfig,
    SessionState,
    SessionTokenPair,
)

__all__ = [
    "ACCESS_COOKIE",
    "ACCESS_WINDOW",
    "REFRESH_COOKIE",
    "REFRESH_WINDOW",
    "Account",
    "AccountLookup",
    "RejectReason",
    "Rejection",
    "SessionAuthenticator",
    "SessionCheck",
    "SessionConfig",
    "SessionState",
    "SessionTokenPair",
]
