"""
sampras.session
~~~~~~~~~~~~~~~
Per-client job context: run state, event log and latest result.

The submission and polling controllers receive a ``JobSession`` and only
touch it through the methods below.  ``begin_job()`` is where the
one-job-in-flight rule is enforced.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from .event_log import EventLog
from .exceptions import JobInFlightError, MissingImageError


class JobSession:
    """
    Shared mutable state of a single client.

    Args:
        clock: Passed through to the ``EventLog``.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.log = EventLog(clock=clock)
        self._running = False
        self._result: Optional[dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Run state
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    def begin_job(self) -> None:
        """Claim the session for a new job; fails if one is already running."""
        if self._running:
            raise JobInFlightError("A job is already in flight; wait for it to finish.")
        self._running = True

    def mark_running(self) -> None:
        self._running = True

    def finish(self) -> None:
        self._running = False

    def can_submit(self, receipt: Optional[str], slip: Optional[str]) -> bool:
        """True when both payloads are present and no job is in flight."""
        return bool(receipt) and bool(slip) and not self._running

    @staticmethod
    def require_images(receipt: Optional[str], slip: Optional[str]) -> None:
        missing = [name for name, p in (("receipt", receipt), ("slip", slip)) if not p]
        if missing:
            raise MissingImageError(f"Missing image payload: {', '.join(missing)}")

    # ------------------------------------------------------------------
    # Result (latest wins)
    # ------------------------------------------------------------------

    @property
    def result(self) -> Optional[dict[str, Any]]:
        return self._result

    def store_result(self, data: dict[str, Any]) -> None:
        self._result = data

    def clear_result(self) -> None:
        self._result = None

    # ------------------------------------------------------------------
    # Log
    # ------------------------------------------------------------------

    def record(self, message: str) -> None:
        self.log.append(message)

    def clear(self) -> None:
        """Empty the event log and the stored result, whatever the run state."""
        self.log.clear()
        self._result = None
