"""
sampras.polling
~~~~~~~~~~~~~~~
Result step of a job: query ``/result/{token}`` until it is ready.

Only a pending response (``meta.code == 5031``) is retried, after a fixed
delay.  A network error, any other code, or running out of retries ends
the job.  ``max_attempts`` counts retries, so the default of 3 allows four
requests in total.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Callable, Optional

from .client import ApiClient
from .exceptions import TransportError
from .models import JobOutcome, OutcomeStatus
from .session import JobSession
from .status import ResultStatus, classify_result

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class PollingController:
    """
    Run the polling step against a ``JobSession``.

    Args:
        client:        API client used for the result requests.
        session:       Job context shared with the submission step.
        poll_interval: Seconds to wait before each retry.
        max_attempts:  Default retry limit for ``poll()``.
        sleep:         Delay function; tests pass a no-op.
    """

    def __init__(
        self,
        client:        ApiClient,
        session:       JobSession,
        poll_interval: float = 1.0,
        max_attempts:  int = 3,
        sleep:         Optional[Callable[[float], None]] = None,
    ) -> None:
        self.client        = client
        self.session       = session
        self.poll_interval = poll_interval
        self.max_attempts  = max_attempts
        self._sleep        = sleep or time.sleep

    def poll(
        self,
        token:        str,
        attempt:      int = 0,
        max_attempts: Optional[int] = None,
    ) -> JobOutcome:
        """
        Poll for the result of ``token`` until a terminal outcome.

        The session is idle again when this returns or raises.  Polling
        does not claim the session the way ``submit()`` does: it continues
        the job that handed over ``token``, so calling it for an unrelated
        token while another job is in flight ends that job's run state.

        Args:
            token:        Token returned by the upload.
            attempt:      Number of the first attempt (0 = initial request).
            max_attempts: Retry limit; defaults to the controller's.
        """
        if max_attempts is None:
            max_attempts = self.max_attempts
        if attempt < 0 or max_attempts < 0:
            raise ValueError("attempt and max_attempts must be >= 0")

        try:
            return self._poll_until_terminal(token, attempt, max_attempts)
        finally:
            self.session.finish()

    def _poll_until_terminal(self, token: str, attempt: int, max_attempts: int) -> JobOutcome:
        requests_sent = 0
        while True:
            self.session.clear_result()
            self.session.mark_running()
            if attempt > 0:
                self.session.record(f"retry get result: {attempt}")
            else:
                self.session.record("start get result")

            requests_sent += 1
            try:
                response = self.client.fetch_result(token)
            except TransportError as exc:
                logger.warning("Result request for %s failed: %s", token, exc)
                self.session.record("result error")
                return JobOutcome(
                    status=OutcomeStatus.RESULT_ERROR,
                    token=token,
                    attempts=requests_sent,
                    message=str(exc),
                )

            status = classify_result(response)

            if status is ResultStatus.READY:
                self.session.record("result available")
                self.session.store_result(response)
                return JobOutcome(
                    status=OutcomeStatus.SUCCEEDED,
                    token=token,
                    result=response,
                    attempts=requests_sent,
                )

            if status is ResultStatus.PENDING:
                self.session.record("result pending")
                if attempt < max_attempts:
                    attempt += 1
                    self._sleep(self.poll_interval)
                    continue
                self.session.record("retry limit exceeded")
                return JobOutcome(
                    status=OutcomeStatus.RETRY_EXHAUSTED,
                    token=token,
                    attempts=requests_sent,
                    message="retry limit exceeded",
                )

            text = f"result fail: {json.dumps(response)}"
            self.session.record(text)
            self.session.store_result(response)
            return JobOutcome(
                status=OutcomeStatus.RESULT_FAILED,
                token=token,
                result=response,
                attempts=requests_sent,
                message=text,
            )
