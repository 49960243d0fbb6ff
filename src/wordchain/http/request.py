"""Immutable HTTP request.

Frozen metadata with async body access. Cookies are parsed once at
creation; the body is read once, bounded by ``max_content_length``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from wordchain._internal.asgi import Receive, Scope
from wordchain.errors import BadRequest, PayloadTooLarge
from wordchain.http.cookies import parse_cookies
from wordchain.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, cookies) is frozen at creation.
    The body is accessed asynchronously via ``.body()``, ``.text()``,
    and ``.form()``.
    """

    method: str
    path: str
    headers: Headers
    client: tuple[str, int] | None
    cookies: Mapping[str, str]
    max_content_length: int | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body and parsed form
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    async def body(self) -> bytes:
        """Read the full request body.

        Cached after the first call. Raises ``PayloadTooLarge`` when the
        declared or streamed size exceeds ``max_content_length``.
        """
        if "_body" in self._cache:
            return self._cache["_body"]

        limit = self.max_content_length
        declared = self.content_length
        if limit is not None and declared is not None and declared > limit:
            raise PayloadTooLarge(limit)

        chunks: list[bytes] = []
        size = 0
        async for chunk in self.stream():
            size += len(chunk)
            if limit is not None and size > limit:
                raise PayloadTooLarge(limit)
            chunks.append(chunk)

        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        raw = await self.body()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise BadRequest("Request body is not valid UTF-8") from None

    async def form(self) -> dict[str, str]:
        """Parse an ``application/x-www-form-urlencoded`` body.

        Returns the first value for each field. Cached after the first call.
        """
        if "_form" in self._cache:
            return self._cache["_form"]
        parsed = parse_qs(await self.text(), keep_blank_values=True)
        result = {key: values[0] for key, values in parsed.items()}
        self._cache["_form"] = result
        return result

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        *,
        max_content_length: int | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        headers = Headers(scope.get("headers", ()))
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            client=tuple(client) if client else None,
            cookies=parse_cookies(headers.get("cookie", "")),
            max_content_length=max_content_length,
            _receive=receive,
        )
