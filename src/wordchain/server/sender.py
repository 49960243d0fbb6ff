"""ASGI response sending: translates a Response into ASGI messages."""

from wordchain._internal.asgi import Send
from wordchain.http.response import Response, ResponseOptions

_DEFAULT_OPTIONS = ResponseOptions()


def _body_allowed(status: int) -> bool:
    # 1xx, 204, and 304 responses carry no message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(
    response: Response,
    send: Send,
    options: ResponseOptions = _DEFAULT_OPTIONS,
    *,
    head: bool = False,
) -> None:
    """Send *response* as ``http.response.start`` + ``http.response.body``.

    *options* contributes process-wide headers (CORS). With *head* the
    body is measured for ``content-length`` but not sent.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in (*response.headers, *options.extra_headers()):
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw_headers.extend(
        (b"set-cookie", cookie.to_header_value().encode("latin-1")) for cookie in response.cookies
    )

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
