"""Route tree nodes.

A ``RouteNode`` names one path segment, owns its children, and carries
an ``up``/``down`` lifecycle pair plus a request handler. Subclasses
answer HTTP methods by defining ``get``, ``post``, ``delete`` and so on::

    class Health(RouteNode):
        name = "health"

        async def get(self, request: Request, segment: str | None) -> Response:
            return Response("ok")
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TypeAlias

from wordchain.errors import MethodNotAllowed, NotFound
from wordchain.http.request import Request
from wordchain.http.response import Response

WILDCARD = "*"

HTTP_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")

MethodHandler: TypeAlias = Callable[[Request, str | None], Awaitable[Response]]


class RouteNode:
    """One node of the route tree.

    ``name`` is the literal segment this node answers to, or ``"*"`` to
    capture any segment not claimed by a sibling. The root's name is
    never matched against.
    """

    name: str = ""

    def __init__(self, children: Iterable[RouteNode] = (), *, name: str | None = None) -> None:
        if name is not None:
            self.name = name
        self.children: tuple[RouteNode, ...] = tuple(children)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, children={len(self.children)})"

    @property
    def is_wildcard(self) -> bool:
        return self.name == WILDCARD

    async def up(self) -> None:
        """Provision resources this node needs. Runs once at startup."""

    async def down(self) -> None:
        """Release what ``up`` provisioned. Runs once at shutdown."""

    def allowed_methods(self) -> frozenset[str]:
        return frozenset(m for m in HTTP_METHODS if callable(getattr(self, m.lower(), None)))

    async def handle(self, request: Request, segment: str | None) -> Response:
        """Answer *request*; *segment* is the path piece this node consumed.

        Dispatches to the method named after the HTTP verb. A node with
        no method handlers answers 404; one without the requested verb
        answers 405.
        """
        handler: MethodHandler | None = getattr(self, request.method.lower(), None)
        if request.method in HTTP_METHODS and callable(handler):
            return await handler(request, segment)
        allowed = self.allowed_methods()
        if not allowed:
            raise NotFound()
        raise MethodNotAllowed(allowed)
