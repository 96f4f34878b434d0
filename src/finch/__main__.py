"""``python -m finch`` — serve the demo application.

Settings come from ``FINCH_*`` environment variables; command-line
flags win. Without ``FINCH_SECRET_KEY`` a random key is generated, so
login cookies stop verifying when the process restarts.
"""

import argparse
import logging
import secrets

from finch.config import AppConfig
from finch.demo.app import TEMPLATES_DIR, create_app

logger = logging.getLogger("finch.app")


def build_config(args: argparse.Namespace) -> AppConfig:
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.debug:
        overrides["debug"] = True

    config = AppConfig.from_env(template_dir=TEMPLATES_DIR, **overrides)
    if not config.secret_key:
        logger.warning("FINCH_SECRET_KEY is not set; using a per-process random key")
        config = AppConfig.from_env(
            template_dir=TEMPLATES_DIR, secret_key=secrets.token_hex(32), **overrides
        )
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``finch`` command."""
    parser = argparse.ArgumentParser(
        prog="finch",
        description="Serve the finch demo application.",
    )
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Bind port number")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Single worker with auto-reload and error details in responses",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)
    create_app(config).run()


if __name__ == "__main__":
    main()
