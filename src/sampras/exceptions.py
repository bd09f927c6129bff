"""
sampras.exceptions
~~~~~~~~~~~~~~~~~~
Exception hierarchy for the sampras client.

Only precondition violations are raised to the caller.  Failures that
happen while a job runs (rejected uploads, network errors, exhausted
retries) are reported through the event log and the returned outcome.
"""

from __future__ import annotations


class SamprasError(Exception):
    """Base exception for all sampras errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.message = message

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
        return self.message


class MissingImageError(SamprasError):
    """Raised when a job is submitted without both the receipt and the slip."""


class JobInFlightError(SamprasError):
    """Raised when a job is submitted while another one is still running."""


class TransportError(SamprasError):
    """Raised by the API client on network failures, timeouts or non-JSON bodies."""


class ImageLoadError(SamprasError):
    """
    Raised when an image file cannot be turned into an upload payload.

    Attributes:
        path: The file that failed to load.
    """

    def __init__(self, message: str, *, path: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause=cause)
        self.path = path
