"""HTTP response with a chainable ``.with_*()`` transformation API.

Each transformation returns a new Response.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from wordchain.http.cookies import SetCookie


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_cookies(self, cookies: Iterable[SetCookie]) -> Response:
        """Return a new Response with every cookie in *cookies* appended."""
        return replace(self, cookies=(*self.cookies, *cookies))

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        return json_module.loads(self.body_bytes)


def json_response(data: Any, status: int = 200) -> Response:
    """A compact JSON body with ``application/json``."""
    return Response(
        body=json_module.dumps(data, separators=(",", ":")),
        status=status,
        content_type="application/json",
    )


@dataclass(frozen=True, slots=True)
class ResponseOptions:
    """Process-wide response decorations applied by the sender."""

    allow_cors: bool = False

    def extra_headers(self) -> tuple[tuple[str, str], ...]:
        if not self.allow_cors:
            return ()
        return (
            ("Access-Control-Allow-Origin", "*"),
            ("Access-Control-Allow-Methods", "*"),
            ("Access-Control-Allow-Headers", "*"),
        )
