"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(ctx: Context, next: Next) -> None: ...

No base class required. The framework checks the shape, not the lineage.
Calling ``next(ctx)`` hands the request to the rest of the chain; not
calling it, after rendering on ``ctx``, short-circuits the request.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from finch.context import Context

# The next link in the chain (ultimately the route handler)
type Next = Callable[[Context], Awaitable[None]]


class Middleware(Protocol):
    """Protocol for finch middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: Context, next: Next) -> None:
            start = time.monotonic()
            await next(ctx)
            logger.info("%s took %.3fs", ctx.request.path, time.monotonic() - start)

        # Class middleware
        class RequireHTTPS:
            async def __call__(self, ctx: Context, next: Next) -> None:
                ...
    """

    async def __call__(self, ctx: Context, next: Next) -> None: ...


def compose(handler: Next, middleware: tuple[Middleware, ...]) -> Next:
    """Wrap *handler* in *middleware*, last registered outermost.

    For ``(a, b, c)`` the call order is ``c -> b -> a -> handler``.
    """
    wrapped = handler
    for mw in middleware:
        wrapped = _link(mw, wrapped)
    return wrapped


def _link(mw: Middleware, inner: Next) -> Next:
    async def call(ctx: Context) -> None:
        await mw(ctx, inner)

    return call
