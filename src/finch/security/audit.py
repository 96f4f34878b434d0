"""Security events for the authentication flow.

Every event is logged on the ``finch.security`` logger. Applications
can also register a sink to forward events to metrics or a SIEM.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any

logger = logging.getLogger("finch.security")


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """A structured security event."""

    name: str
    timestamp: float = field(default_factory=time)
    method: str | None = None
    path: str | None = None
    client: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


type SecurityEventSink = Callable[[SecurityEvent], None]

_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Set the process-wide event sink. ``None`` disables delivery."""
    global _sink
    with _sink_lock:
        _sink = sink


def emit_security_event(
    name: str,
    *,
    request: Any | None = None,
    details: dict[str, Any] | None = None,
) -> SecurityEvent:
    """Log *name* and hand it to the configured sink, if any."""
    method = path = client = None
    if request is not None:
        method = request.method
        path = request.path
        if request.client:
            client = request.client[0]

    event = SecurityEvent(
        name=name,
        method=method,
        path=path,
        client=client,
        details=details or {},
    )
    logger.info("%s %s %s client=%s", name, method or "-", path or "-", client or "-")

    with _sink_lock:
        sink = _sink
    if sink is not None:
        sink(event)
    return event
