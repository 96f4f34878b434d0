"""Finch exception hierarchy.

Shared across Router, App, handler, and middleware so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class FinchError(Exception):
    """Base for all finch-specific errors."""


class ConfigurationError(FinchError):
    """Raised when app configuration is invalid.

    Typically caught during ``App._freeze()`` at startup.
    """


class RouteConflict(ConfigurationError):  # noqa: N818 — reads better at the call site
    """A route was registered twice, or two patterns collide ambiguously."""


class ResponseAlreadyCommitted(FinchError):  # noqa: N818
    """A second render was attempted on a Context that already responded."""


@dataclass(frozen=True, slots=True)
class HTTPError(FinchError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The request handler
    catches these at the per-request boundary and turns them into a
    safe error response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the client sent something the handler cannot accept."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class InternalServerError(HTTPError):  # noqa: N818
    """500 — a handler hit a condition it cannot recover from.

    The detail is logged, never sent to the client outside debug mode.
    """

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)


class ServiceUnavailable(HTTPError):  # noqa: N818
    """503 — the request deadline expired or the server is draining."""

    def __init__(self, detail: str = "Service Unavailable") -> None:
        super().__init__(status=503, detail=detail, headers=(("Connection", "close"),))
