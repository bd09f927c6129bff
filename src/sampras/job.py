"""
sampras.job
~~~~~~~~~~~
Main entry point: one receipt + slip job from upload to result.

Typical usage::

    from sampras import ReceiptJob

    job = ReceiptJob()
    outcome = job.run(receipt_b64, slip_b64)

    for line in job.session.log.display():
        print(line)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

import requests

from .client import ApiClient
from .config import Config
from .models import JobOutcome, OutcomeStatus
from .polling import PollingController
from .session import JobSession
from .submission import SubmissionController

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class ReceiptJob:
    """
    Compose the upload and polling steps around one ``JobSession``.

    Args:
        config:       Optional Config instance (reads .env by default).
        session:      Optional JobSession to share with a caller.
        http_session: Optional ``requests.Session`` for the API client.
        sleep:        Delay function used between result requests.
        clock:        Clock for event log timestamps (new sessions only).
    """

    def __init__(
        self,
        config:       Optional[Config] = None,
        session:      Optional[JobSession] = None,
        http_session: Optional[requests.Session] = None,
        sleep:        Optional[Callable[[float], None]] = None,
        clock:        Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.config  = config or Config()
        client_cfg   = self.config.get_client_config()
        self.session = session or JobSession(clock=clock)
        self.client  = ApiClient(client_cfg, session=http_session)

        self.submission = SubmissionController(self.client, self.session)
        self.polling    = PollingController(
            self.client,
            self.session,
            poll_interval=client_cfg.poll_interval,
            max_attempts=client_cfg.max_retries,
            sleep=sleep,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        receipt:      Optional[str],
        slip:         Optional[str],
        max_attempts: Optional[int] = None,
    ) -> JobOutcome:
        """
        Upload, then poll until a terminal outcome.

        Raises ``MissingImageError`` / ``JobInFlightError`` before anything
        is sent; every other failure is returned as an outcome.
        """
        submitted = self.submission.submit(receipt, slip)
        if submitted.status is not OutcomeStatus.SUBMITTED:
            logger.info("Job ended at upload: %s", submitted.status.value)
            return submitted

        outcome = self.polling.poll(submitted.token, max_attempts=max_attempts)
        logger.info(
            "Job %s ended: %s after %d request(s)",
            outcome.token, outcome.status.value, outcome.attempts,
        )
        return outcome

    def clear(self) -> None:
        """Empty the event log and the stored result."""
        self.session.clear()

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ReceiptJob":
        return self

    def __exit__(self, *_) -> None:
        self.close()
