"""Tests for finch.middleware.protocol — chain composition and ordering."""

from finch.app import App
from finch.context import Context
from finch.middleware.protocol import Next, compose
from finch.testing import TestClient


def _recorder(log: list[str], name: str):
    async def mw(ctx: Context, next: Next) -> None:
        log.append(f"{name}:before")
        await next(ctx)
        log.append(f"{name}:after")

    return mw


class TestCompose:
    async def test_no_middleware_calls_handler(self) -> None:
        calls: list[str] = []

        async def handler(ctx: Context) -> None:
            calls.append("handler")

        await compose(handler, ())(None)  # type: ignore[arg-type]
        assert calls == ["handler"]

    async def test_last_registered_is_outermost(self) -> None:
        log: list[str] = []

        async def handler(ctx: Context) -> None:
            log.append("handler")

        chain = compose(handler, (_recorder(log, "a"), _recorder(log, "b"), _recorder(log, "c")))
        await chain(None)  # type: ignore[arg-type]
        assert log == [
            "c:before",
            "b:before",
            "a:before",
            "handler",
            "a:after",
            "b:after",
            "c:after",
        ]


class TestAppMiddleware:
    async def test_order_through_app(self) -> None:
        log: list[str] = []
        app = App()

        @app.route("/")
        def index(ctx: Context) -> None:
            log.append("handler")
            ctx.render_text("ok")

        app.use(_recorder(log, "first"))
        app.use(_recorder(log, "second"))

        async with TestClient(app) as client:
            response = await client.get("/")

        assert response.status == 200
        assert log == [
            "second:before",
            "first:before",
            "handler",
            "first:after",
            "second:after",
        ]

    async def test_short_circuit_skips_handler(self) -> None:
        called = False
        app = App()

        @app.route("/")
        def index(ctx: Context) -> None:
            nonlocal called
            called = True
            ctx.render_text("handler")

        async def deny(ctx: Context, next: Next) -> None:
            ctx.render_error(403)

        app.use(deny)

        async with TestClient(app) as client:
            response = await client.get("/")

        assert response.status == 403
        assert called is False

    async def test_class_middleware(self) -> None:
        class Stamp:
            async def __call__(self, ctx: Context, next: Next) -> None:
                ctx.set_cookie("seen", "1")
                await next(ctx)

        app = App()

        @app.route("/")
        def index(ctx: Context) -> None:
            ctx.render_text("ok")

        app.use(Stamp())

        async with TestClient(app) as client:
            response = await client.get("/")

        assert ("set-cookie", "seen=1; Path=/; HttpOnly; SameSite=lax") in response.headers

    async def test_middleware_skipped_for_unrouted_paths(self) -> None:
        ran = False
        app = App()

        async def spy(ctx: Context, next: Next) -> None:
            nonlocal ran
            ran = True
            await next(ctx)

        app.use(spy)

        async with TestClient(app) as client:
            response = await client.get("/nowhere")

        assert response.status == 404
        assert ran is False
