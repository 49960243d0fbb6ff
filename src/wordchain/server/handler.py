"""ASGI handler: translates ASGI scope/messages to wordchain types.

The only request-path component that touches raw ASGI. Builds a typed
Request, resolves it against the route tree, runs the node's handler,
and sends the Response back through ASGI ``send()``.
"""

import logging
from dataclasses import dataclass, replace

from wordchain._internal.asgi import Receive, Scope, Send
from wordchain.errors import HTTPError, NotFound
from wordchain.http.request import Request
from wordchain.http.response import Response, ResponseOptions
from wordchain.routing.dispatch import match
from wordchain.routing.node import RouteNode
from wordchain.server.errors import handle_http_error, handle_internal_error
from wordchain.server.sender import send_response

logger = logging.getLogger("wordchain.server")


@dataclass(frozen=True, slots=True)
class HandlerSettings:
    """Per-app request settings, fixed at startup."""

    max_content_length: int | None = None
    options: ResponseOptions = ResponseOptions()
    debug: bool = False


async def dispatch(root: RouteNode, request: Request) -> Response:
    """Resolve *request* against the tree and run the matched node.

    Raises:
        NotFound: no node matches the path.
    """
    found = match(request.path, root)
    if found is None:
        raise NotFound()
    if request.method == "HEAD" and "HEAD" not in found.node.allowed_methods():
        request = replace(request, method="GET")
    return await found.node.handle(request, found.segment)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    root: RouteNode,
    settings: HandlerSettings,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(
        scope, receive, max_content_length=settings.max_content_length
    )

    try:
        response = await dispatch(root, request)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=settings.debug)

    logger.debug("%s %s -> %d", request.method, request.path, response.status)
    await send_response(
        response, send, settings.options, head=request.method == "HEAD"
    )
