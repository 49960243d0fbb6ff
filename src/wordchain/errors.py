"""Wordchain exception hierarchy.

Shared across the dispatcher, app, request handler, and routes so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WordchainError(Exception):
    """Base for all wordchain-specific errors."""


class ConfigurationError(WordchainError):
    """Raised when app configuration is invalid.

    Typically caught during ``App`` construction at startup.
    """


class RouteConfigurationError(ConfigurationError):
    """Raised when the route tree breaks its shape rules.

    At most one child per exact name and one wildcard child per parent.
    """


class LifecycleError(WordchainError):
    """A node's ``up`` hook failed during bootstrap.

    Fatal: the server refuses to start.
    """

    def __init__(self, node: str, cause: BaseException) -> None:
        self.node = node
        self.cause = cause
        super().__init__(f"up hook of route {node!r} failed: {cause}")


@dataclass(frozen=True, slots=True)
class HTTPError(WordchainError):
    """An error that maps directly to an HTTP status code.

    Raised by the request boundary or route handlers. The ASGI handler
    catches these and turns them into plain responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400: the request is missing or garbles a required part."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path, or the resource is gone."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or "Method Not Allowed",
            headers=(("Allow", allow_value),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: request body exceeded ``max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Payload Too Large (limit {limit} bytes)")
