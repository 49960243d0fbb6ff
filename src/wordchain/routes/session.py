"""``/session``: report who the session cookies belong to."""

from __future__ import annotations

from wordchain.auth.session import SessionAuthenticator
from wordchain.http.request import Request
from wordchain.http.response import Response, json_response
from wordchain.routing.node import RouteNode


class SessionRoute(RouteNode):
    name = "session"

    def __init__(self, authenticator: SessionAuthenticator) -> None:
        super().__init__()
        self._auth = authenticator

    async def get(self, request: Request, segment: str | None) -> Response:
        check = await self._auth.validate(request)
        if not check.ok:
            return check.to_response()
        return check.apply(json_response({"id": check.subject, "state": check.state.value}))
