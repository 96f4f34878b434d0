"""Credential verification for the login handler.

A verifier is any callable ``(username, password) -> bool``, sync or
async. ``PasswordCredentials`` is the built-in one: a fixed mapping of
usernames to argon2 hashes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping

from finch.security.passwords import hash_password, verify_password

type CredentialVerifier = Callable[[str, str], bool | Awaitable[bool]]


class PasswordCredentials:
    """Verify usernames against stored argon2 password hashes.

    Unknown usernames are checked against a throwaway hash so a miss
    costs the same as a wrong password.

    Usage::

        verify = PasswordCredentials({"tester": hash_password("12345")})
        verify("tester", "12345")  # True
    """

    __slots__ = ("_decoy", "_hashes")

    def __init__(self, hashes: Mapping[str, str]) -> None:
        self._hashes = dict(hashes)
        self._decoy = hash_password("finch-decoy-password")

    @classmethod
    def from_plaintext(cls, users: Mapping[str, str]) -> PasswordCredentials:
        """Hash each plaintext password once at construction."""
        return cls({name: hash_password(pw) for name, pw in users.items()})

    def __call__(self, username: str, password: str) -> bool:
        stored = self._hashes.get(username)
        if stored is None:
            verify_password(password, self._decoy)
            return False
        return verify_password(password, stored)
