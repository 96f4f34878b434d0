"""Per-request Context — the handler's view of one request/response pair.

A Context wraps the immutable ``Request``, the ``Params`` bound by the
router, and a response slot that can be filled exactly once. Every
``render_*`` method and ``redirect`` commits the slot; a second commit
raises ``ResponseAlreadyCommitted``.

Handlers and middleware receive the same Context::

    def show_user(ctx: Context) -> None:
        ctx.render_json({"id": ctx.params.require("id")})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from kida import Environment

from finch.errors import ConfigurationError, ResponseAlreadyCommitted
from finch.http.cookies import SetCookie
from finch.http.forms import FormData
from finch.http.formats import Format, serialize
from finch.http.request import Request
from finch.http.response import Response
from finch.routing.params import Params
from finch.server.errors import error_response
from finch.templating.integration import render_template

logger = logging.getLogger("finch.server")


class Context:
    """One request lifecycle. Never shared, never reused."""

    __slots__ = ("_cookies", "_debug", "_kida_env", "_response", "params", "request")

    def __init__(
        self,
        request: Request,
        params: Params | None = None,
        *,
        kida_env: Environment | None = None,
        debug: bool = False,
    ) -> None:
        self.request = request
        self.params = params if params is not None else Params()
        self._kida_env = kida_env
        self._debug = debug
        self._cookies: list[SetCookie] = []
        self._response: Response | None = None

    def __repr__(self) -> str:
        state = "committed" if self.committed else "pending"
        return f"<Context {self.request.method} {self.request.path} {state}>"

    # -- State --

    @property
    def committed(self) -> bool:
        """True once a response has been rendered."""
        return self._response is not None

    @property
    def response(self) -> Response | None:
        """The committed response, or ``None`` while pending."""
        return self._response

    def _commit(self, response: Response) -> None:
        if self._response is not None:
            msg = (
                f"{self.request.method} {self.request.path} already responded with "
                f"{self._response.status}; a handler may render only once."
            )
            raise ResponseAlreadyCommitted(msg)
        self._response = response.with_cookies(tuple(self._cookies))

    # -- Request helpers --

    async def form(self) -> FormData:
        """Parsed form body of the request."""
        return await self.request.form()

    def set_cookie(
        self,
        name: str,
        value: str,
        *,
        path: str = "/",
        max_age: int | None = None,
        secure: bool | None = None,
        httponly: bool = True,
        samesite: str | None = "lax",
    ) -> None:
        """Attach a ``Set-Cookie`` to the response this Context will commit.

        ``secure=None`` sets the Secure flag when the request came in
        over https.
        """
        if self.committed:
            msg = "Cannot set a cookie after the response was committed."
            raise ResponseAlreadyCommitted(msg)
        self._cookies.append(
            SetCookie(
                name=name,
                value=value,
                path=path,
                max_age=max_age,
                secure=self.request.is_secure if secure is None else secure,
                httponly=httponly,
                samesite=samesite,
            )
        )

    # -- Terminal renders --

    def render(self, fmt: Format, value: Any, *, status: int = 200) -> None:
        """Serialize *value* as *fmt* and commit it."""
        body, content_type = serialize(fmt, value)
        self._commit(Response(body=body, status=status, content_type=content_type))

    def render_text(self, *values: Any, status: int = 200) -> None:
        """Plain text: values joined by spaces, newline-terminated."""
        self.render(Format.TEXT, " ".join(str(v) for v in values) + "\n", status=status)

    def render_json(self, value: Any, *, status: int = 200) -> None:
        self.render(Format.JSON, value, status=status)

    def render_xml(self, value: Any, *, status: int = 200) -> None:
        self.render(Format.XML, value, status=status)

    def render_template(
        self,
        name: str,
        data: Mapping[str, Any] | None = None,
        *,
        status: int = 200,
    ) -> None:
        """Render kida template *name* with *data* as HTML."""
        if self._kida_env is None:
            msg = (
                "render_template() requires a kida environment. "
                "Ensure a template_dir is configured in AppConfig."
            )
            raise ConfigurationError(msg)
        html = render_template(self._kida_env, name, data)
        self.render(Format.HTML, html, status=status)

    def redirect(self, location: str, *, status: int = 302) -> None:
        """Commit a redirect to *location*."""
        self._commit(Response(body="", status=status).with_header("Location", location))

    def render_error(self, status: int, err: BaseException | str | None = None) -> None:
        """Commit an error status with a generic body.

        *err* is logged on ``finch.server``; it reaches the client only
        in debug mode.
        """
        detail = "" if err is None else str(err)
        if err is not None:
            logger.warning(
                "%d %s %s — %s", status, self.request.method, self.request.path, detail
            )
        self._commit(error_response(status, detail, debug=self._debug))
