"""ASGI response sending — translates a finch Response into ASGI messages."""

from finch._internal.asgi import Send
from finch.http.response import Response


def _body_allowed(status: int) -> bool:
    # RFC 9110: 1xx, 204, and 304 responses carry no body.
    return not (100 <= status < 200 or status in {204, 304})


def encode_headers(response: Response, body_length: int) -> list[tuple[bytes, bytes]]:
    """Raw header pairs for *response*, Set-Cookie lines included."""
    raw: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    raw.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    raw.extend(
        (b"set-cookie", cookie.to_header_value().encode("latin-1"))
        for cookie in response.cookies
    )
    raw.append((b"content-length", str(body_length).encode("latin-1")))
    return raw


async def send_response(response: Response, send: Send) -> None:
    """Send *response* as one start message and one body message."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
