"""End-to-end session lifecycle: login, fresh use, rotation after the access window."""

import base64

from conftest import SECRET, START, FakeClock
from wordchain.config import AppConfig
from wordchain.security.tokens import TokenCodec
from wordchain.service import create_app
from wordchain.testing import TestClient, cookie_values


async def test_login_then_fresh_then_rotated() -> None:
    clock = FakeClock()
    codec = TokenCodec(SECRET)
    app = create_app(AppConfig(secret_key=SECRET), clock=clock)

    async with TestClient(app) as client:
        created = await client.post("/account", form={"id": "alice", "password": "pw"})
        assert created.status == 201

        credentials = base64.b64encode(b"alice:pw").decode()
        login = await client.post("/login", headers={"Authorization": f"Basic {credentials}"})
        assert login.status == 200
        cookies = cookie_values(login)
        access = codec.decode(cookies["access_token"])
        refresh = codec.decode(cookies["refresh_token"])
        assert access.subject == refresh.subject == "alice"
        assert access.issued_at == refresh.issued_at == START
        assert access.nonce != refresh.nonce
        assert all(c.secure and c.httponly for c in login.cookies)

        # Within the access window: no new cookies.
        clock.advance(600)
        fresh = await client.get("/session", cookies=cookies)
        assert fresh.status == 200
        assert fresh.cookies == ()

        # Past the access window: both cookies are replaced.
        clock.advance(600)
        rotated = await client.get("/session", cookies=cookies)
        assert rotated.status == 200
        new_cookies = cookie_values(rotated)
        assert set(new_cookies) == {"access_token", "refresh_token"}
        new_access = codec.decode(new_cookies["access_token"])
        new_refresh = codec.decode(new_cookies["refresh_token"])
        assert new_access.subject == new_refresh.subject == "alice"
        assert new_access.issued_at > access.issued_at
        assert new_refresh.issued_at > refresh.issued_at

        # The rotated pair is fresh again.
        again = await client.get("/session", cookies=new_cookies)
        assert again.json()["state"] == "fresh"
        assert again.cookies == ()
