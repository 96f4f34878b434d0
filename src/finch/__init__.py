"""Finch — a small ASGI router with path parameters, middleware, and cookie auth.

Routes bind ``:name`` path segments, handlers render through a
per-request ``Context``, and middleware wraps every handler with the
last registered running outermost.

Basic usage::

    from finch import App, AppConfig, Context

    app = App(AppConfig(secret_key="s3cr3t"))

    @app.route("/users/:id")
    def show_user(ctx: Context) -> None:
        ctx.render_json({"id": ctx.params["id"]})

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "AuthConfig",
    "BadRequest",
    "ConfigurationError",
    "Context",
    "CookieAuthMiddleware",
    "FinchError",
    "Format",
    "HTTPError",
    "InternalServerError",
    "Middleware",
    "Next",
    "NotFound",
    "Params",
    "Request",
    "Response",
    "ResponseAlreadyCommitted",
    "RouteConflict",
    "Router",
    "ServiceUnavailable",
    "Signer",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import finch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from finch.app import App

        return App

    if name == "AppConfig":
        from finch.config import AppConfig

        return AppConfig

    if name == "Context":
        from finch.context import Context

        return Context

    if name == "Request":
        from finch.http.request import Request

        return Request

    if name == "Response":
        from finch.http.response import Response

        return Response

    if name == "Format":
        from finch.http.formats import Format

        return Format

    if name in ("Params", "Router"):
        from finch import routing as _routing

        return getattr(_routing, name)

    if name in ("Middleware", "Next"):
        from finch.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("AuthConfig", "CookieAuthMiddleware"):
        from finch.middleware import auth as _auth

        return getattr(_auth, name)

    if name == "Signer":
        from finch.security.signer import Signer

        return Signer

    if name in (
        "BadRequest",
        "ConfigurationError",
        "FinchError",
        "HTTPError",
        "InternalServerError",
        "NotFound",
        "ResponseAlreadyCommitted",
        "RouteConflict",
        "ServiceUnavailable",
    ):
        from finch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
