"""Error handling for wordchain requests.

Maps ``HTTPError`` exceptions to their status and headers, and turns any
other exception into a logged 500 whose body never carries the error text.
"""

import logging

from wordchain.errors import HTTPError
from wordchain.http.request import Request
from wordchain.http.response import Response

logger = logging.getLogger("wordchain.server")

INTERNAL_ERROR_BODY = "Internal Server Error"


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool = False) -> Response:
    """Log an unexpected exception with its traceback and answer 500.

    With *debug* the exception type (never its message) is appended.
    """
    logger.exception("500 %s %s", request.method, request.path)
    body = INTERNAL_ERROR_BODY
    if debug:
        body = f"{INTERNAL_ERROR_BODY} ({type(exc).__name__})"
    return Response(body=body, status=500)
