"""Shared fixtures: a controllable clock and an in-memory account lookup."""

import pytest

from wordchain.auth.session import Account, SessionAuthenticator, SessionConfig
from wordchain.security.audit import SecurityEvent, set_security_event_sink

SECRET = "s3cret"
START = 1_700_000_000


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MemoryAccounts:
    """``AccountLookup`` backed by a dict."""

    def __init__(self, *ids: str) -> None:
        self.accounts = {i: Account(id=i, salt="salt", password_hash="hash") for i in ids}
        self.lookups: list[str] = []

    async def lookup(self, account_id: str) -> Account | None:
        self.lookups.append(account_id)
        return self.accounts.get(account_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def accounts() -> MemoryAccounts:
    return MemoryAccounts("alice", "bob")


@pytest.fixture
def authenticator(clock: FakeClock, accounts: MemoryAccounts) -> SessionAuthenticator:
    return SessionAuthenticator(
        SessionConfig(secret_key=SECRET, cookie_secure=True), accounts, clock=clock
    )


@pytest.fixture
def security_events() -> list[SecurityEvent]:
    events: list[SecurityEvent] = []
    set_security_event_sink(events.append)
    yield events
    set_security_event_sink(None)


def make_request(
    method: str = "GET",
    path: str = "/",
    *,
    headers: dict[str, str] | None = None,
    cookies: dict[str, str] | None = None,
    body: bytes = b"",
    max_content_length: int | None = None,
):
    """Build a ``Request`` the way the ASGI handler does."""
    from wordchain.http.request import Request

    raw = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    if cookies:
        raw.append((b"cookie", "; ".join(f"{k}={v}" for k, v in cookies.items()).encode()))
    sent = False

    async def receive() -> dict:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {"type": "http", "method": method, "path": path, "headers": raw}
    return Request.from_asgi(scope, receive, max_content_length=max_content_length)
