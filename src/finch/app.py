"""Finch application class.

Mutable during setup (route registration, middleware, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from kida import Environment

from finch._internal.asgi import Receive, Scope, Send
from finch._internal.invoke import invoke
from finch.config import AppConfig
from finch.errors import ServiceUnavailable
from finch.http.response import Response
from finch.middleware.protocol import Middleware
from finch.routing.route import Route
from finch.routing.router import Router
from finch.security.signer import Signer
from finch.server.errors import error_response
from finch.server.handler import handle_request
from finch.server.lifecycle import RequestTracker
from finch.server.sender import send_response
from finch.templating.integration import create_environment

logger = logging.getLogger("finch.app")

type Handler = Callable[..., Any]


class App:
    """The finch application.

    Mutable during setup (register routes, middleware, hooks).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app, even when several pounce workers call
        ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_custom_kida_env",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_middleware",
        "_middleware_list",
        "_router",
        "_shutdown_hooks",
        "_signer",
        "_startup_hooks",
        "_tracker",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._custom_kida_env = kida_env

        # Mutable setup state
        self._router = Router()
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._signer = Signer(self.config.secret_key, self.config.signature_digest)

        # Compiled state (set during _freeze)
        self._middleware: tuple[Middleware, ...] = ()
        self._kida_env: Environment | None = None
        self._tracker = RequestTracker()

        # Freeze control
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Setup API --

    def handle(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for one method and pattern.

        Raises ``RouteConflict`` immediately on a duplicate registration.
        """
        self._check_not_frozen()
        return self._router.add(method, pattern, handler, name=name)

    def route(
        self,
        pattern: str,
        *,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a handler for a URL pattern.

        Usage::

            @app.route("/users/:id")
            def show_user(ctx: Context) -> None:
                ctx.render_text(ctx.params["id"])
        """
        if isinstance(methods, str):
            methods = (methods,)

        def decorator(func: Handler) -> Handler:
            for method in methods or ("GET",):
                self.handle(method, pattern, func, name=name)
            return func

        return decorator

    def use(self, middleware: Middleware) -> None:
        """Add middleware. The most recently added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async hook run on ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run after in-flight requests have drained."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    @property
    def signer(self) -> Signer:
        """Signer keyed with ``config.secret_key``."""
        return self._signer

    @property
    def router(self) -> Router:
        return self._router

    @property
    def tracker(self) -> RequestTracker:
        return self._tracker

    # -- Server entry point --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Compile the app and serve it with pounce.

        Debug mode runs a single worker with auto-reload.
        """
        self._ensure_frozen()

        from finch.server.run import run_server

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("Serving on http://%s:%d", _host, _port)
        run_server(
            self,
            _host,
            _port,
            workers=1 if self.config.debug else self.config.workers,
            reload=self.config.debug,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        if not self._tracker.try_enter():
            await send_response(self._draining_response(), send)
            return
        try:
            await handle_request(
                scope,
                receive,
                send,
                router=self._router,
                middleware=self._middleware,
                kida_env=self._kida_env,
                debug=self.config.debug,
                request_timeout=self.config.request_timeout,
                max_body_size=self.config.max_content_length,
            )
        finally:
            self._tracker.leave()

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, runs startup hooks, and on shutdown
        drains in-flight requests before running shutdown hooks. A failure
        to freeze is reported as a startup failure.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Lifespan startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                drained = await self._tracker.drain(self.config.shutdown_timeout)
                if not drained:
                    logger.warning(
                        "Shutdown grace period of %.1fs expired with %d request(s) in flight",
                        self.config.shutdown_timeout,
                        self._tracker.active,
                    )
                try:
                    for hook in self._shutdown_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Shutdown hook failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _draining_response(self) -> Response:
        exc = ServiceUnavailable("Server is shutting down")
        response = error_response(exc.status, exc.detail, debug=self.config.debug)
        for name, value in exc.headers:
            response = response.with_header(name, value)
        return response

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        self._router.compile()
        self._middleware = tuple(self._middleware_list)

        if self._custom_kida_env is not None:
            self._kida_env = self._custom_kida_env
        else:
            self._kida_env = create_environment(self.config)

        if not self._signer.configured:
            logger.warning(
                "secret_key is empty: authentication cookies will never verify. "
                "Set FINCH_SECRET_KEY or AppConfig(secret_key=...)."
            )

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
