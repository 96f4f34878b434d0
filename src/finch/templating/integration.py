"""Kida environment setup.

The environment is created once during ``App._freeze()`` and shared,
read-only, by every request.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, FileSystemLoader

from finch.config import AppConfig


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment rooted at ``config.template_dir``."""
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def render_template(env: Environment, name: str, data: Mapping[str, Any] | None = None) -> str:
    """Render template *name* with *data* to a string."""
    template = env.get_template(name)
    return template.render(dict(data or {}))
