"""Testing utilities for finch applications.

Usage::

    from finch.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/")
"""

from finch.testing.client import TestClient, cookie_value, set_cookies

__all__ = ["TestClient", "cookie_value", "set_cookies"]
