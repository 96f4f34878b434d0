"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, secret_key="s3cr3t")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    workers: int = 1

    # Security
    secret_key: str = ""
    signature_digest: str = "sha256"
    auth_cookie_name: str = "X_AUTH"
    auth_verify_message: str = "verified"
    auth_login_url: str = "/login"
    auth_exempt_prefixes: tuple[str, ...] = ("/login", "/public/")
    # None = Secure only when the request arrived over https
    auth_cookie_secure: bool | None = None

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Limits
    max_content_length: int = 1024 * 1024  # 1 MB
    request_timeout: float | None = 30.0
    shutdown_timeout: float = 10.0

    @classmethod
    def from_env(cls, prefix: str = "FINCH_", **overrides: object) -> AppConfig:
        """Build a config from ``FINCH_*`` environment variables.

        Recognized: ``HOST``, ``PORT``, ``DEBUG``, ``SECRET_KEY``,
        ``TEMPLATE_DIR``, ``REQUEST_TIMEOUT``, ``SHUTDOWN_TIMEOUT``.
        Keyword *overrides* win over the environment.
        """
        env = os.environ
        values: dict[str, object] = {}

        if (host := env.get(f"{prefix}HOST")) is not None:
            values["host"] = host
        if (port := env.get(f"{prefix}PORT")) is not None:
            values["port"] = int(port)
        if (debug := env.get(f"{prefix}DEBUG")) is not None:
            values["debug"] = debug.lower() in _TRUTHY
        if (secret := env.get(f"{prefix}SECRET_KEY")) is not None:
            values["secret_key"] = secret
        if (template_dir := env.get(f"{prefix}TEMPLATE_DIR")) is not None:
            values["template_dir"] = template_dir
        if (timeout := env.get(f"{prefix}REQUEST_TIMEOUT")) is not None:
            values["request_timeout"] = float(timeout) if timeout else None
        if (grace := env.get(f"{prefix}SHUTDOWN_TIMEOUT")) is not None:
            values["shutdown_timeout"] = float(grace)

        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
