"""Logging configuration helpers (structlog)."""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping

DEFAULT_LEVEL = "WARNING"

# Event keys that may carry a credential; their values never reach the log output.
REDACTED_KEYS = frozenset({"token", "source_token", "target_token", "standalonetoken"})


def redact_credentials(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor that masks credential-bearing keys."""
    for key in event_dict:
        if key.lower() in REDACTED_KEYS:
            event_dict[key] = "***"
    return event_dict


def _resolve_level(level_name: str | None) -> int:
    name = (level_name or os.getenv("ALERTDEFS_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    print(
        f"Invalid ALERTDEFS_LOG_LEVEL {name!r}; falling back to {DEFAULT_LEVEL}.",
        file=sys.__stderr__,
    )
    return logging.WARNING


def configure_structlog(level_name: str | None = None) -> None:
    """
    Configure structlog for alertdefs.

    - Logs go to stderr so tables and `--json` output on stdout stay parseable.
    - The level comes from `level_name`, then `ALERTDEFS_LOG_LEVEL`, then WARNING.
    - `ALERTDEFS_LOG_FORMAT=json` switches to one JSON object per line.
    - Credential fields are masked before rendering.
    """
    renderer: Any
    if os.getenv("ALERTDEFS_LOG_FORMAT", "").lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_credentials,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level_name)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.__stderr__),
        cache_logger_on_first_use=True,
    )
