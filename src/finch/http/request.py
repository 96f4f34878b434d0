"""Immutable HTTP request.

Frozen metadata with async body access. Cookies are parsed once when
the request is built from the ASGI scope.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field
from typing import Any

from finch._internal.asgi import Receive
from finch.errors import HTTPError
from finch.http.cookies import parse_cookies
from finch.http.forms import FormData, parse_form_data
from finch.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, cookies) is frozen at creation.
    The body is read lazily through ``body()`` / ``form()`` and cached.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    scheme: str
    http_version: str
    client: tuple[str, int] | None
    cookies: Mapping[str, str]

    _receive: Receive
    max_body_size: int | None = None
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def is_secure(self) -> bool:
        """True if the request arrived over TLS."""
        return self.scheme == "https"

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def body(self) -> bytes:
        """Read the full request body.

        Raises ``HTTPError(413)`` once the body exceeds ``max_body_size``.
        """
        if "body" in self._cache:
            return self._cache["body"]
        buffer = bytearray()
        async for chunk in self.stream():
            buffer.extend(chunk)
            if self.max_body_size is not None and len(buffer) > self.max_body_size:
                raise HTTPError(413, "Request body too large")
        result = bytes(buffer)
        self._cache["body"] = result
        return result

    async def form(self) -> FormData:
        """Parse the body as form data (URL-encoded or multipart).

        Raises ``HTTPError(400)`` when the body is not a form encoding.
        """
        if "form" in self._cache:
            return self._cache["form"]
        raw = await self.body()
        if not raw:
            result = FormData()
        else:
            try:
                result = parse_form_data(
                    raw, self.content_type or "application/x-www-form-urlencoded"
                )
            except ValueError as exc:
                raise HTTPError(400, str(exc)) from exc
        self._cache["form"] = result
        return result

    @classmethod
    def from_asgi(
        cls,
        scope: Mapping[str, Any],
        receive: Receive,
        *,
        max_body_size: int | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        headers = Headers(tuple(scope.get("headers", ())))
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=headers,
            query_string=scope.get("query_string", b""),
            scheme=scope.get("scheme", "http"),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            cookies=parse_cookies(headers.get("cookie", "")),
            _receive=receive,
            max_body_size=max_body_size,
        )
