"""
sampras.config
~~~~~~~~~~~~~~
Central configuration for the sampras client.

The service URL and API key are resolved once at startup.  Override any
field via a ``.env`` file or environment variables; pydantic-settings
picks them up automatically.

Usage::

    from sampras.config import cfg

    print(cfg.api_url)                  # "http://localhost:8080"
    print(cfg.get_client_config())      # typed ClientConfig dataclass
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------------------------------------------------------------------------
# Typed snapshot handed to the API client and controllers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClientConfig:
    """Immutable snapshot of the settings a job needs."""

    api_url:         str
    api_key:         str
    custom_id:       str
    upload_timeout:  float
    result_timeout:  float
    poll_interval:   float
    max_retries:     int
    compress_upload: bool


# ---------------------------------------------------------------------------
# Main settings class
# ---------------------------------------------------------------------------

class Config(BaseSettings):
    """
    Runtime configuration for sampras.

    Reads from (in priority order):
      1. Environment variables (prefixed with ``SAMPRAS_``)
      2. A ``.env`` file in the working directory
      3. The defaults defined below
    """

    model_config = SettingsConfigDict(
        env_prefix="SAMPRAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Recognition service
    # ------------------------------------------------------------------

    api_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the recognition service (no trailing slash).",
    )
    api_key: str = Field(
        default="",
        description="Value sent in the sampras-api-key header.",
    )
    custom_id: str = Field(
        default="tester",
        min_length=1,
        description="Fixed customId attached to every upload.",
    )

    # ------------------------------------------------------------------
    # HTTP / polling
    # ------------------------------------------------------------------

    upload_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for the /process upload.",
    )
    result_timeout: float = Field(
        default=3.0,
        gt=0,
        description="Timeout in seconds for each /result request.",
    )
    poll_interval: float = Field(
        default=1.0,
        ge=0,
        description="Fixed delay in seconds between two result requests.",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Retries after the first result request while the result is pending.",
    )
    compress_upload: bool = Field(
        default=True,
        description="Gzip the upload body and send Content-Encoding: gzip.",
    )

    # ------------------------------------------------------------------
    # Image payloads
    # ------------------------------------------------------------------

    image_max_width: int = Field(
        default=720,
        ge=16,
        description="Images wider than this are downscaled before upload.",
    )
    image_max_height: int = Field(
        default=1280,
        ge=16,
        description="Images taller than this are downscaled before upload.",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_url must start with http:// or https://")
        return v

    @model_validator(mode="after")
    def _warn_on_missing_key(self) -> "Config":
        if not self.api_key:
            warnings.warn(
                "api_key is empty; the recognition service will most likely "
                "reject every request. Set SAMPRAS_API_KEY.",
                UserWarning,
                stacklevel=2,
            )
        return self

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def get_client_config(self) -> ClientConfig:
        """Return an immutable, typed snapshot of the client settings."""
        return ClientConfig(
            api_url=self.api_url,
            api_key=self.api_key,
            custom_id=self.custom_id,
            upload_timeout=self.upload_timeout,
            result_timeout=self.result_timeout,
            poll_interval=self.poll_interval,
            max_retries=self.max_retries,
            compress_upload=self.compress_upload,
        )


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

with warnings.catch_warnings():
    warnings.simplefilter("ignore", UserWarning)
    cfg = Config()

__all__ = ["Config", "ClientConfig", "cfg"]
