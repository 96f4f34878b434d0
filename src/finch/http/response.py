"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Handlers never build these
directly; ``Context`` produces exactly one per request.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from finch.http.cookies import SetCookie


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

    def with_cookies(self, cookies: tuple[SetCookie, ...]) -> Response:
        """Return a new Response carrying additional Set-Cookie directives."""
        return replace(self, cookies=(*self.cookies, *cookies))

    def get_header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
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
