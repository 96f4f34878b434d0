"""HMAC signer for the authentication cookie.

Signs a fixed message with the app's secret key and verifies the
result in constant time. The MAC is computed with ``itsdangerous``'s
HMAC algorithm and hex-encoded so the cookie value stays plain ASCII.

An empty secret key fails closed: ``sign()`` returns an empty string
and ``verify()`` rejects everything, including that empty string.

Usage::

    signer = Signer("s3cr3t")
    token = signer.sign("verified")
    signer.verify("verified", token)  # True
"""

import hashlib
import hmac

from itsdangerous.signer import HMACAlgorithm

from finch.errors import ConfigurationError


class Signer:
    """Deterministic keyed MAC over short messages.

    Defaults to SHA-256. Any fixed-length digest ``hashlib`` knows is
    accepted (not the SHAKE family, whose output length is variable);
    legacy SHA-1 cookies can be verified with ``digest="sha1"``.
    """

    __slots__ = ("_algorithm", "_key")

    def __init__(self, secret_key: str | bytes, digest: str = "sha256") -> None:
        if digest not in hashlib.algorithms_available:
            msg = f"Unknown signature digest {digest!r}."
            raise ConfigurationError(msg)
        self._key = secret_key.encode("utf-8") if isinstance(secret_key, str) else secret_key
        self._algorithm = HMACAlgorithm(digest)
        try:
            self._algorithm.get_signature(b"key", b"")
        except (TypeError, ValueError) as exc:
            msg = f"Signature digest {digest!r} cannot be used with HMAC."
            raise ConfigurationError(msg) from exc

    @property
    def configured(self) -> bool:
        """False when the secret key is empty; nothing will ever verify."""
        return bool(self._key)

    def sign(self, message: str) -> str:
        """Return the lowercase hex MAC of *message*, or ``""`` without a key."""
        if not self._key:
            return ""
        mac = self._algorithm.get_signature(self._key, message.encode("utf-8"))
        return mac.hex()

    def verify(self, message: str, signature: str) -> bool:
        """Check *signature* against ``sign(message)`` in constant time."""
        if not self._key or not signature:
            return False
        expected = self.sign(message).encode("ascii")
        return hmac.compare_digest(expected, signature.encode("utf-8", errors="replace"))
