"""
sampras.client
~~~~~~~~~~~~~~
Thin HTTP wrapper around the recognition service.

  POST {api_url}/process          upload receipt + slip, returns a token
  GET  {api_url}/result/{token}   poll for the recognition result

The HTTP status line is not interpreted: the service reports outcomes in
the JSON ``meta`` block, so any response with a JSON body is handed back
to the caller.  Network errors, timeouts and non-JSON bodies are raised
as ``TransportError``.
"""

from __future__ import annotations

import gzip
import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from .config import ClientConfig
from .exceptions import TransportError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

API_KEY_HEADER = "sampras-api-key"
RECEIPT_TYPES  = ("shop", "slip")


class ApiClient:
    """
    Send upload and result requests.

    Args:
        config:  Client settings snapshot.
        session: Optional ``requests.Session`` (a fresh one by default).
    """

    def __init__(
        self,
        config:  ClientConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config  = config
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Accept":       "application/json",
            "Content-Type": "application/json",
            API_KEY_HEADER: self.config.api_key,
        }

    def build_upload_body(self, receipt: str, slip: str) -> dict[str, Any]:
        return {
            "receiptType": list(RECEIPT_TYPES),
            "imageFile":   [receipt, slip],
            "customId":    self.config.custom_id,
        }

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def upload(self, receipt: str, slip: str) -> Any:
        """POST both payloads to ``/process`` and return the decoded JSON body."""
        headers = self._headers()
        body = json.dumps(self.build_upload_body(receipt, slip)).encode("utf-8")
        if self.config.compress_upload:
            body = gzip.compress(body)
            headers["Content-Encoding"] = "gzip"

        url = f"{self.config.api_url}/process"
        logger.debug("POST %s (%d bytes)", url, len(body))
        return self._send(
            "POST", url, headers=headers, data=body, timeout=self.config.upload_timeout
        )

    def fetch_result(self, token: str) -> Any:
        """GET ``/result/{token}`` and return the decoded JSON body."""
        url = f"{self.config.api_url}/result/{quote(token, safe='')}"
        logger.debug("GET %s", url)
        return self._send(
            "GET", url, headers=self._headers(), timeout=self.config.result_timeout
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise TransportError(f"{method} {url} timed out", cause=exc) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"{method} {url} failed", cause=exc) from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {url} returned a non-JSON body (HTTP {resp.status_code})",
                cause=exc,
            ) from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *_) -> None:
        self.close()
