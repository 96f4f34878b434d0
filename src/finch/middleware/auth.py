"""Cookie authentication middleware.

The only proof of login is a cookie holding the HMAC of a fixed
message. There is no server-side session: a request is authenticated
exactly when its cookie verifies under the app's secret key.

Per request::

    exempt prefix            -> next
    no cookie                -> redirect to login
    verification raised      -> 500
    cookie does not verify   -> redirect to login
    cookie verifies          -> next

Usage::

    from finch.middleware.auth import AuthConfig, CookieAuthMiddleware

    app.use(CookieAuthMiddleware(AuthConfig(
        signer=app.signer,
        exempt_prefixes=app.config.auth_exempt_prefixes,
    )))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from finch.config import AppConfig
from finch.context import Context
from finch.errors import ConfigurationError
from finch.middleware.protocol import Next
from finch.security.audit import emit_security_event
from finch.security.signer import Signer

logger = logging.getLogger("finch.security")


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Cookie authentication configuration.

    Attributes:
        signer: Verifies the cookie value.
        cookie_name: Name of the authentication cookie.
        verify_message: The message whose signature the cookie must hold.
        login_url: Where unauthenticated requests are redirected.
        exempt_prefixes: Path prefixes that skip the check entirely.
        cookie_secure: Force the Secure flag; ``None`` follows the request scheme.
    """

    signer: Signer
    cookie_name: str = "X_AUTH"
    verify_message: str = "verified"
    login_url: str = "/login"
    exempt_prefixes: tuple[str, ...] = ()
    cookie_secure: bool | None = None

    @classmethod
    def from_app_config(cls, config: AppConfig, signer: Signer) -> AuthConfig:
        """Take cookie name, message, login URL and exemptions from *config*."""
        return cls(
            signer=signer,
            cookie_name=config.auth_cookie_name,
            verify_message=config.auth_verify_message,
            login_url=config.auth_login_url,
            exempt_prefixes=config.auth_exempt_prefixes,
            cookie_secure=config.auth_cookie_secure,
        )


def is_exempt(path: str, prefixes: tuple[str, ...]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


def issue_auth_cookie(ctx: Context, config: AuthConfig) -> None:
    """Set the signed authentication cookie on *ctx*'s response.

    Always HttpOnly; Secure per ``config.cookie_secure`` or the request
    scheme. Raises ``ConfigurationError`` when the signer has no key,
    since the cookie could never verify.
    """
    if not config.signer.configured:
        msg = "Cannot issue an auth cookie: secret_key is empty."
        raise ConfigurationError(msg)
    ctx.set_cookie(
        config.cookie_name,
        config.signer.sign(config.verify_message),
        path="/",
        secure=config.cookie_secure,
        httponly=True,
    )


class CookieAuthMiddleware:
    """Gate every non-exempt request on a valid signed cookie."""

    __slots__ = ("_config",)

    def __init__(self, config: AuthConfig) -> None:
        self._config = config

    @property
    def config(self) -> AuthConfig:
        return self._config

    async def __call__(self, ctx: Context, next: Next) -> None:
        cfg = self._config
        request = ctx.request

        if is_exempt(request.path, cfg.exempt_prefixes):
            await next(ctx)
            return

        cookie = request.cookies.get(cfg.cookie_name)
        if cookie is None:
            emit_security_event("auth.cookie.missing", request=request)
            ctx.redirect(cfg.login_url)
            return

        try:
            valid = cfg.signer.verify(cfg.verify_message, cookie)
        except Exception as exc:
            logger.exception("auth cookie verification failed for %s", request.path)
            ctx.render_error(500, exc)
            return

        if not valid:
            emit_security_event("auth.cookie.invalid", request=request)
            ctx.redirect(cfg.login_url)
            return

        await next(ctx)
