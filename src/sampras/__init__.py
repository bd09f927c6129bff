"""
sampras
~~~~~~~
Client for the Sampras receipt + payment slip recognition service.

Typical usage::

    from sampras import ReceiptJob

    job = ReceiptJob()
    outcome = job.run(receipt_b64, slip_b64)

    if outcome.success:
        print(outcome.result["data"])
    else:
        print(outcome.status, outcome.message)
"""

from .client import ApiClient
from .config import ClientConfig, Config, cfg
from .event_log import EventLog
from .exceptions import (
    ImageLoadError,
    JobInFlightError,
    MissingImageError,
    SamprasError,
    TransportError,
)
from .job import ReceiptJob
from .models import JobOutcome, LogEntry, OutcomeStatus
from .polling import PollingController
from .session import JobSession
from .status import RESULT_PENDING_CODE, RESULT_READY_CODE, ResultStatus, classify_result
from .submission import SubmissionController

__all__ = [
    # Orchestration
    "ReceiptJob",
    "SubmissionController",
    "PollingController",
    "ApiClient",
    # State
    "JobSession",
    "EventLog",
    # Configuration
    "Config",
    "ClientConfig",
    "cfg",
    # Models
    "JobOutcome",
    "OutcomeStatus",
    "LogEntry",
    # Status table
    "ResultStatus",
    "classify_result",
    "RESULT_READY_CODE",
    "RESULT_PENDING_CODE",
    # Exceptions
    "SamprasError",
    "MissingImageError",
    "JobInFlightError",
    "TransportError",
    "ImageLoadError",
]
