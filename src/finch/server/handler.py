"""ASGI handler — one request through routing, middleware, and the handler.

The only component that touches raw ASGI scopes. Builds the Request,
resolves the route, runs the middleware chain around the handler, and
is the single recovery boundary: every failure inside a request turns
into a response here and never escapes to the server.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from finch._internal.asgi import Receive, Scope, Send
from finch._internal.invoke import invoke
from finch.context import Context
from finch.errors import HTTPError, ServiceUnavailable
from finch.http.request import Request
from finch.http.response import Response
from finch.middleware.protocol import Middleware, Next, compose
from finch.routing.router import Router
from finch.server.errors import handle_http_error, handle_internal_error
from finch.server.sender import send_response

logger = logging.getLogger("finch.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Middleware, ...],
    kida_env: Environment | None = None,
    debug: bool = False,
    request_timeout: float | None = None,
    max_body_size: int | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive, max_body_size=max_body_size)

    try:
        async with asyncio.timeout(request_timeout) as deadline:
            response = await dispatch(
                request,
                router=router,
                middleware=middleware,
                kida_env=kida_env,
                debug=debug,
            )
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=debug)
    except TimeoutError as exc:
        if not deadline.expired():
            response = handle_internal_error(exc, request, debug=debug)
        else:
            logger.warning(
                "%s %s exceeded the %.1fs deadline",
                request.method,
                request.path,
                request_timeout,
            )
            response = handle_http_error(
                ServiceUnavailable("Request timed out"), request, debug=debug
            )
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    await send_response(response, send)


async def dispatch(
    request: Request,
    *,
    router: Router,
    middleware: tuple[Middleware, ...],
    kida_env: Environment | None = None,
    debug: bool = False,
) -> Response:
    """Resolve the route, build the Context, and run the chain.

    Raises ``NotFound`` when no route matches; the middleware chain does
    not run for unroutable requests.
    """
    match = router.match(request.method, request.path)
    ctx = Context(request, match.params, kida_env=kida_env, debug=debug)

    chain = compose(_terminal(match.route.handler), middleware)
    await chain(ctx)

    if ctx.response is None:
        logger.debug("%s %s rendered nothing", request.method, request.path)
        return Response(status=204)
    return ctx.response


def _terminal(handler: Callable[..., Any]) -> Next:
    """Adapt a sync or async route handler to the chain's ``Next`` shape."""

    async def call(ctx: Context) -> None:
        await invoke(handler, ctx)

    return call
