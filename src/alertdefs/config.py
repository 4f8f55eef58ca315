"""
Run configuration (cloud selection and credentials).

A single `RunConfig` is built at CLI startup and passed to every component; nothing
else reads the process environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from alertdefs.api.exceptions import InputValidationError

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0


class Cloud(str, Enum):
    """Deployment regions of the alerting service."""

    US = "us"
    EU = "eu"
    AP = "ap"

    @property
    def base_url(self) -> str:
        """Alert definition API base URL."""
        return f"https://api.{self.value}.alerting-service.net/api/v1"

    @property
    def query_url(self) -> str:
        """Query API base URL (domain aggregation lookups)."""
        return f"https://query.{self.value}.alerting-service.net/api/v1"


def parse_cloud(value: str) -> Cloud:
    """Parse a cloud name, raising `InputValidationError` for unknown values."""
    try:
        return Cloud(value.strip().lower())
    except ValueError:
        choices = ", ".join(c.value for c in Cloud)
        raise InputValidationError(
            f"Invalid cloud '{value}'. Expected one of: {choices}.",
            example="alertdefs --cloud eu list --all",
        ) from None


def _clean_token(value: str | None, *, option: str) -> str | None:
    if value is None:
        return None
    token = value.strip()
    if not token:
        raise InputValidationError(
            f"{option} must not be empty.",
            example=f"alertdefs {option} <token> list --all",
        )
    return token


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration for a single CLI invocation."""

    cloud: Cloud = Cloud.US
    source_token: str | None = None
    source_domain: str | None = None
    target_token: str | None = None
    target_domain: str | None = None
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    base_url_override: str | None = None
    query_url_override: str | None = None

    @property
    def base_url(self) -> str:
        return (self.base_url_override or self.cloud.base_url).rstrip("/")

    @property
    def query_url(self) -> str:
        return (self.query_url_override or self.cloud.query_url).rstrip("/")

    @classmethod
    def from_env(
        cls,
        *,
        cloud: str | None = None,
        source_token: str | None = None,
        source_domain: str | None = None,
        target_token: str | None = None,
        target_domain: str | None = None,
    ) -> RunConfig:
        """Build configuration from explicit values, falling back to environment variables.

        Explicit arguments win over the environment:
            ALERTDEFS_CLOUD: Cloud region (default: us)
            ALERTDEFS_TOKEN: Source credential
            ALERTDEFS_DOMAIN: Source domain label (skips domain resolution)
            ALERTDEFS_TARGET_TOKEN: Target credential (copy only)
            ALERTDEFS_TARGET_DOMAIN: Target domain label
            ALERTDEFS_CONNECT_TIMEOUT: Connect timeout in seconds (default: 10)
            ALERTDEFS_BASE_URL / ALERTDEFS_QUERY_URL: Override the cloud's base URLs

        Raises:
            InputValidationError: For an unknown cloud, an empty token or a bad timeout.
        """
        raw_timeout = os.environ.get("ALERTDEFS_CONNECT_TIMEOUT")
        try:
            timeout = (
                float(raw_timeout) if raw_timeout else DEFAULT_CONNECT_TIMEOUT_SECONDS
            )
        except ValueError:
            raise InputValidationError(
                f"ALERTDEFS_CONNECT_TIMEOUT must be a number of seconds, got '{raw_timeout}'."
            ) from None

        return cls(
            cloud=parse_cloud(cloud or os.environ.get("ALERTDEFS_CLOUD") or Cloud.US.value),
            source_token=_clean_token(
                source_token if source_token is not None else os.environ.get("ALERTDEFS_TOKEN"),
                option="--token",
            ),
            source_domain=source_domain or os.environ.get("ALERTDEFS_DOMAIN") or None,
            target_token=_clean_token(
                target_token
                if target_token is not None
                else os.environ.get("ALERTDEFS_TARGET_TOKEN"),
                option="--target-token",
            ),
            target_domain=target_domain or os.environ.get("ALERTDEFS_TARGET_DOMAIN") or None,
            connect_timeout_seconds=timeout,
            base_url_override=os.environ.get("ALERTDEFS_BASE_URL") or None,
            query_url_override=os.environ.get("ALERTDEFS_QUERY_URL") or None,
        )

    def require_source(self) -> str:
        """Return the source credential or raise `InputValidationError`."""
        if not self.source_token:
            raise InputValidationError(
                "A source token is required (--token or ALERTDEFS_TOKEN).",
                example="alertdefs --token <token> list --all",
            )
        return self.source_token

    def require_target(self) -> str:
        """Return the target credential or raise `InputValidationError`."""
        if not self.target_token:
            raise InputValidationError(
                "A target token is required (--target-token or ALERTDEFS_TARGET_TOKEN).",
                example="alertdefs --token <src> --target-token <dst> copy --all",
            )
        return self.target_token
