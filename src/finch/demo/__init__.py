"""Demo application: users, addresses, and a cookie-protected login."""

from finch.demo.app import DEMO_USERS, User, create_app

__all__ = ["DEMO_USERS", "User", "create_app"]
