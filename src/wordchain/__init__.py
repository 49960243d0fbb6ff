"""Wordchain: account service with stateless encrypted session cookies.

Requests are routed through a tree of ``RouteNode`` objects, each with
its own ``up``/``down`` lifecycle. Logins mint an access/refresh token
pair (AES-256-GCM under a key derived from the shared secret) that is
rotated silently once the access token goes stale.

Basic usage::

    from wordchain import AppConfig, create_app

    app = create_app(AppConfig(secret_key="s3cret", database_url="sqlite:///words.db"))
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "NotFound",
    "Request",
    "Response",
    "RouteNode",
    "SessionAuthenticator",
    "SessionConfig",
    "WordchainError",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import wordchain`` fast while providing a flat top-level API.
    """
    if name == "App":
        from wordchain.app import App

        return App

    if name == "AppConfig":
        from wordchain.config import AppConfig

        return AppConfig

    if name == "create_app":
        from wordchain.service import create_app

        return create_app

    if name == "Request":
        from wordchain.http.request import Request

        return Request

    if name == "Response":
        from wordchain.http.response import Response

        return Response

    if name == "RouteNode":
        from wordchain.routing.node import RouteNode

        return RouteNode

    if name in ("SessionAuthenticator", "SessionConfig"):
        from wordchain.auth import session

        return getattr(session, name)

    if name in ("WordchainError", "ConfigurationError", "HTTPError", "NotFound"):
        from wordchain import errors

        return getattr(errors, name)

    msg = f"module 'wordchain' has no attribute {name!r}"
    raise AttributeError(msg)
