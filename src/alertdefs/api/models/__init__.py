"""Pydantic models for the alerting service API."""

from alertdefs.api.models.alert_definition import (
    LIBRARY_PREFIX,
    AlertCorrelationContext,
    AlertDefinition,
    MutationResult,
)

__all__ = [
    "LIBRARY_PREFIX",
    "AlertCorrelationContext",
    "AlertDefinition",
    "MutationResult",
]
