"""Security — cookie signing, credential checks, and audit events.

    from finch.security import Signer

    signer = Signer("s3cr3t")
    cookie_value = signer.sign("verified")
"""

from finch.security.audit import SecurityEvent, emit_security_event, set_security_event_sink
from finch.security.credentials import CredentialVerifier, PasswordCredentials
from finch.security.passwords import hash_password, verify_password
from finch.security.signer import Signer

__all__ = [
    "CredentialVerifier",
    "PasswordCredentials",
    "SecurityEvent",
    "Signer",
    "emit_security_event",
    "hash_password",
    "set_security_event_sink",
    "verify_password",
]
