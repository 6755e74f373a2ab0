"""CloudAPI and wait configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr, field_validator


class CloudApiSettings(BaseModel):
    """CloudAPI endpoint configuration.

    The token is kept as a SecretStr so it never shows up in reprs or logs.
    """

    url: str | None = Field(default=None, description="CloudAPI base URL")
    account: str = Field(default="my", description="Account login, or 'my' for the caller")
    token: SecretStr | None = Field(default=None, description="Bearer token")
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    verify_tls: bool = Field(default=True, description="Verify the server certificate")
    max_retries: int = Field(default=3, ge=0, description="Retries for idempotent requests")

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None


class WaitSettings(BaseModel):
    """Polling behaviour of ``--wait``."""

    poll_interval: float = Field(default=1.0, gt=0, description="Seconds between state queries")
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Give up waiting after this many seconds (unset = wait forever)",
    )


__all__ = [
    "CloudApiSettings",
    "WaitSettings",
]
