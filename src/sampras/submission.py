"""
sampras.submission
~~~~~~~~~~~~~~~~~~
Upload step of a job: send receipt + slip, get a token back.

Every failure here is terminal; only the polling step retries.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .client import ApiClient
from .exceptions import TransportError
from .models import JobOutcome, OutcomeStatus
from .session import JobSession

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def _extract_token(response: Any) -> Optional[str]:
    if not isinstance(response, dict):
        return None
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    token = data.get("token")
    return token if isinstance(token, str) and token else None


def _extract_error(response: Any) -> Optional[tuple[Any, str]]:
    if not isinstance(response, dict):
        return None
    meta = response.get("meta")
    if not isinstance(meta, dict) or not meta.get("message"):
        return None
    return meta.get("code"), str(meta["message"])


class SubmissionController:
    """Run the upload step against a ``JobSession``."""

    def __init__(self, client: ApiClient, session: JobSession) -> None:
        self.client  = client
        self.session = session

    def submit(self, receipt: Optional[str], slip: Optional[str]) -> JobOutcome:
        """
        Upload both payloads.

        Returns a ``SUBMITTED`` outcome carrying the token on success (the
        session stays in flight for polling), or a terminal outcome with the
        session back to idle.  Unexpected exceptions propagate with the
        session back to idle as well.

        Raises:
            MissingImageError: receipt or slip is absent.
            JobInFlightError:  another job has not finished yet.
        """
        self.session.require_images(receipt, slip)
        self.session.begin_job()
        try:
            return self._upload(receipt, slip)
        except BaseException:
            self.session.finish()
            raise

    def _upload(self, receipt: str, slip: str) -> JobOutcome:
        self.session.record("start upload")

        try:
            response = self.client.upload(receipt, slip)
        except TransportError as exc:
            logger.warning("Upload failed: %s", exc)
            self.session.record("upload error")
            self.session.finish()
            return JobOutcome(status=OutcomeStatus.UPLOAD_ERROR, message=str(exc))

        token = _extract_token(response)
        if token is not None:
            self.session.record("upload success")
            return JobOutcome(status=OutcomeStatus.SUBMITTED, token=token)

        self.session.store_result(response)
        error = _extract_error(response)
        if error is not None:
            code, message = error
            # no code in meta: log the message alone
            text = f"upload fail: {message}" if code is None else f"upload fail: {code} - {message}"
            status = OutcomeStatus.UPLOAD_REJECTED
        else:
            text = f"upload fail: {json.dumps(response)}"
            status = OutcomeStatus.MALFORMED_RESPONSE

        self.session.record(text)
        self.session.finish()
        return JobOutcome(status=status, result=response, message=text)
