"""In-flight request accounting for graceful shutdown.

The App enters the tracker at the start of each request and leaves it
when the response is sent. On shutdown it stops admitting new requests
and waits for the in-flight count to reach zero, up to a grace period.

Counters are guarded by a ``threading.Lock`` because pounce may run
several worker threads against one App.
"""

import asyncio
import threading
import time


class RequestTracker:
    """Counts active requests and gates admission during a drain."""

    __slots__ = ("_active", "_draining", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active = 0
        self._draining = False

    @property
    def active(self) -> int:
        with self._lock:
            return self._active

    @property
    def draining(self) -> bool:
        with self._lock:
            return self._draining

    def try_enter(self) -> bool:
        """Admit a request. False once draining has started."""
        with self._lock:
            if self._draining:
                return False
            self._active += 1
            return True

    def leave(self) -> None:
        with self._lock:
            self._active -= 1

    async def drain(self, timeout: float, *, poll_interval: float = 0.01) -> bool:
        """Stop admitting requests and wait for active ones to finish.

        Returns True if everything finished within *timeout* seconds.
        """
        with self._lock:
            self._draining = True
        deadline = time.monotonic() + timeout
        while self.active > 0:
            if time.monotonic() >= deadline:
                return False
            await asyncio.sleep(poll_interval)
        return True
