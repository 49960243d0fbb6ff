"""Password login: Basic credentials in, session cookies out."""

from __future__ import annotations

import anyio

from wordchain.auth.basic import parse_basic
from wordchain.auth.session import SessionAuthenticator
from wordchain.errors import BadRequest, NotFound
from wordchain.http.request import Request
from wordchain.http.response import Response
from wordchain.routing.node import RouteNode
from wordchain.security.audit import emit_security_event
from wordchain.security.passwords import verify_password
from wordchain.store.accounts import AccountStore


class LoginRoute(RouteNode):
    """``/login``.

    ``POST`` with ``Authorization: Basic``. On success the response sets
    the ``refresh_token`` and ``access_token`` cookies, and the body is a
    bearer token for clients still on the header flow.
    """

    name = "login"

    def __init__(self, store: AccountStore, authenticator: SessionAuthenticator) -> None:
        super().__init__()
        self._store = store
        self._auth = authenticator

    async def post(self, request: Request, segment: str | None) -> Response:
        header = request.headers.get("authorization")
        if header is None:
            raise BadRequest("Missing Authorization header")

        credentials = parse_basic(header)
        if credentials is None:
            return Response(status=401).with_header("WWW-Authenticate", 'Basic realm="malformed"')

        account = await self._store.lookup(credentials.account_id)
        if account is None:
            emit_security_event(
                "login.failed",
                request=request,
                user_id=credentials.account_id,
                details={"reason": "unknown-account"},
            )
            raise NotFound()

        matches = await anyio.to_thread.run_sync(
            verify_password, credentials.password, account.salt, account.password_hash
        )
        if not matches:
            emit_security_event(
                "login.failed",
                request=request,
                user_id=account.id,
                details={"reason": "password-mismatch"},
            )
            return Response(status=401).with_header(
                "WWW-Authenticate", 'Basic realm="password-mismatch"'
            )

        emit_security_event("login.succeeded", request=request, user_id=account.id)
        return Response(self._auth.issue_legacy(account.id)).with_cookies(
            self._auth.issue_cookies(account.id)
        )
