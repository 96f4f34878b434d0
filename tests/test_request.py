"""Tests for finch.http.request — frozen Request with async body access."""

import pytest

from finch.errors import HTTPError
from finch.http.headers import Headers
from finch.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [],
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = [
        {"type": "http.request", "body": body, "more_body": i < len(bodies) - 1}
        for i, body in enumerate(bodies)
    ] or [{"type": "http.request", "body": b"", "more_body": False}]
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"text/plain"),))
        assert headers["content-type"] == "text/plain"
        assert headers["CONTENT-TYPE"] == "text/plain"
        assert "Content-Type" in headers

    def test_repeated_values(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"accept", b"b")))
        assert headers["accept"] == "a"
        assert headers.get_list("accept") == ["a", "b"]


class TestFromASGI:
    def test_metadata(self) -> None:
        request = Request.from_asgi(
            _make_scope(method="post", path="/users", scheme="https"), _make_receive()
        )
        assert request.method == "POST"
        assert request.path == "/users"
        assert request.is_secure is True
        assert request.client == ("127.0.0.1", 54321)

    def test_defaults_to_http(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive())
        assert request.scheme == "http"
        assert request.is_secure is False

    def test_cookies_parsed(self) -> None:
        scope = _make_scope(headers=[(b"cookie", b"X_AUTH=abc; other=1")])
        request = Request.from_asgi(scope, _make_receive())
        assert request.cookies == {"X_AUTH": "abc", "other": "1"}

    def test_frozen(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]


class TestBody:
    async def test_chunks_joined(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive(b"ab", b"cd"))
        assert await request.body() == b"abcd"

    async def test_cached(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive(b"once"))
        assert await request.body() == b"once"
        assert await request.body() == b"once"

    async def test_size_limit(self) -> None:
        request = Request.from_asgi(
            _make_scope(), _make_receive(b"12345", b"678"), max_body_size=6
        )
        with pytest.raises(HTTPError) as exc_info:
            await request.body()
        assert exc_info.value.status == 413

    async def test_unsupported_form_is_400(self) -> None:
        scope = _make_scope(method="POST", headers=[(b"content-type", b"text/csv")])
        request = Request.from_asgi(scope, _make_receive(b"a,b"))
        with pytest.raises(HTTPError) as exc_info:
            await request.form()
        assert exc_info.value.status == 400
