"""
sampras.models
~~~~~~~~~~~~~~
Data models shared by the controllers.

Key design decisions
--------------------
* Image payloads and tokens stay plain strings: the service treats both
  as opaque, so wrapping them would only add ceremony.

* Every controller call returns a ``JobOutcome``.  The session still
  carries the run state, log and result, but callers no longer have to
  inspect shared state to learn how a job ended.

* ``OutcomeStatus.SUBMITTED`` is the only non-terminal status: it is what
  the submission step returns when it hands a token over to polling.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# LogEntry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LogEntry:
    """A single timestamped event log line."""

    timestamp: datetime
    message:   str

    @property
    def time_text(self) -> str:
        """Timestamp rendered with centisecond precision, e.g. ``2024-03-15 10:04:05.27``."""
        centis = self.timestamp.microsecond // 10_000
        return f"{self.timestamp.strftime(TIMESTAMP_FORMAT)}.{centis:02d}"

    def formatted(self) -> str:
        return f"{self.time_text} {self.message}"

    def to_dict(self) -> dict:
        return {
            "time": self.time_text,
            "msg":  self.message,
        }


# ---------------------------------------------------------------------------
# OutcomeStatus
# ---------------------------------------------------------------------------

class OutcomeStatus(str, Enum):
    """How a controller call ended."""

    SUBMITTED          = "submitted"
    SUCCEEDED          = "succeeded"
    UPLOAD_REJECTED    = "upload_rejected"
    UPLOAD_ERROR       = "upload_error"
    MALFORMED_RESPONSE = "malformed_response"
    RESULT_FAILED      = "result_failed"
    RESULT_ERROR       = "result_error"
    RETRY_EXHAUSTED    = "retry_exhausted"

    @property
    def terminal(self) -> bool:
        return self is not OutcomeStatus.SUBMITTED


# ---------------------------------------------------------------------------
# JobOutcome
# ---------------------------------------------------------------------------

@dataclass
class JobOutcome:
    """
    Result of ``submit()``, ``poll()`` or ``ReceiptJob.run()``.

    Always check ``success`` before reading ``result``.  ``attempts`` counts
    the result requests issued for ``token`` (0 when polling never ran).
    """

    status:   OutcomeStatus
    token:    Optional[str] = None
    result:   Optional[dict[str, Any]] = None
    attempts: int = 0
    message:  Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED

    @property
    def terminal(self) -> bool:
        return self.status.terminal

    def to_dict(self) -> dict:
        return {
            "status":   self.status.value,
            "success":  self.success,
            "token":    self.token,
            "attempts": self.attempts,
            "message":  self.message,
            "result":   self.result,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
