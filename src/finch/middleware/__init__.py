"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: Context, next: Next) -> None

Built-in middleware:
    CookieAuthMiddleware -- signed-cookie authentication gate
"""

from finch.middleware.auth import AuthConfig, CookieAuthMiddleware
from finch.middleware.protocol import Middleware, Next, compose

__all__ = ["AuthConfig", "CookieAuthMiddleware", "Middleware", "Next", "compose"]
