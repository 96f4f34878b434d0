"""Demo application wiring every finch feature together.

Routes::

    GET  /                                       index page (authenticated)
    GET  /about                                  plain text
    GET  /users/:id                              XML user record
    GET  /users/:user_id/addresses/:address_id   JSON user record
    POST /users                                  echo form as JSON
    POST /users/:user_id/addresses               echo path + form as JSON
    GET  /login                                  login form
    POST /login                                  verify, set X_AUTH, redirect
    GET  /public/:page                           public pages, no login

Run with ``python -m finch``.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from finch._internal.invoke import invoke
from finch.app import App
from finch.config import AppConfig
from finch.context import Context
from finch.errors import BadRequest, InternalServerError, NotFound
from finch.middleware.auth import AuthConfig, CookieAuthMiddleware, issue_auth_cookie
from finch.security.audit import emit_security_event
from finch.security.credentials import CredentialVerifier, PasswordCredentials

TEMPLATES_DIR = Path(__file__).parent / "templates"

DEMO_USERS = {"tester": "12345"}

LOGIN_REQUIRED = "required login"
LOGIN_FAILED = "The username or password is incorrect."

PUBLIC_PAGES = frozenset({"index.html", "login.html"})


@dataclass(frozen=True, slots=True)
class User:
    id: str = field(metadata={"name": "Id"})
    address_id: str = field(default="", metadata={"name": "AddressId"})


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


def create_app(
    config: AppConfig | None = None,
    *,
    verifier: CredentialVerifier | None = None,
) -> App:
    """Build the demo App.

    Args:
        config: App configuration. Templates default to the bundled
            ``templates`` directory.
        verifier: ``(username, password) -> bool``; defaults to the single
            ``tester`` account with an argon2-hashed password.
    """
    if config is None:
        config = AppConfig(template_dir=TEMPLATES_DIR)
    check_login = verifier or PasswordCredentials.from_plaintext(DEMO_USERS)

    app = App(config)
    auth = AuthConfig.from_app_config(app.config, app.signer)

    @app.route("/")
    def index(ctx: Context) -> None:
        ctx.render_template("index.html", {"time": _now()})

    @app.route("/about")
    def about(ctx: Context) -> None:
        ctx.render_text("about")

    @app.route("/users/:id")
    def show_user(ctx: Context) -> None:
        user_id = ctx.params.require("id")
        if user_id == "0":
            raise InternalServerError("id is zero")
        if ctx.params.get_int("id") is None:
            raise BadRequest(f"user id must be numeric, got {user_id!r}")
        ctx.render_xml(User(id=user_id))

    @app.route("/users/:user_id/addresses/:address_id")
    def show_address(ctx: Context) -> None:
        ctx.render_json(
            User(
                id=ctx.params.require("user_id"),
                address_id=ctx.params.require("address_id"),
            )
        )

    @app.route("/users", methods=["POST"])
    async def create_user(ctx: Context) -> None:
        form = await ctx.form()
        ctx.render_json(dict(form))

    @app.route("/users/:user_id/addresses", methods=["POST"])
    async def create_address(ctx: Context) -> None:
        form = await ctx.form()
        ctx.render_json({**form, **ctx.params})

    @app.route("/login")
    def login_form(ctx: Context) -> None:
        ctx.render_template("login.html", {"message": LOGIN_REQUIRED})

    @app.route("/login", methods=["POST"])
    async def login(ctx: Context) -> None:
        form = await ctx.form()
        username = form.get("username", "")
        password = form.get("password", "")

        if await invoke(check_login, username, password):
            emit_security_event(
                "auth.login.success", request=ctx.request, details={"username": username}
            )
            issue_auth_cookie(ctx, auth)
            ctx.redirect("/")
            return

        emit_security_event(
            "auth.login.failure", request=ctx.request, details={"username": username}
        )
        ctx.render_template("login.html", {"message": LOGIN_FAILED})

    @app.route("/public/:page")
    def public_page(ctx: Context) -> None:
        page = ctx.params.require("page")
        if page not in PUBLIC_PAGES:
            raise NotFound(f"no public page {page!r}")
        ctx.render_template(page, {"time": _now(), "message": LOGIN_REQUIRED})

    app.use(CookieAuthMiddleware(auth))
    return app
