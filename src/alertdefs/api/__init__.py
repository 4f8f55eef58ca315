"""Alerting service API client module."""

from alertdefs.api.client import PAGE_SIZE, AlertDefinitionClient
from alertdefs.api.exceptions import (
    AlertAPIError,
    AlertDefsError,
    AlertServiceConnectionError,
    InputValidationError,
    UserAbortError,
)
from alertdefs.api.models import AlertCorrelationContext, AlertDefinition, MutationResult

__all__ = [
    "PAGE_SIZE",
    # Client
    "AlertDefinitionClient",
    # Exceptions
    "AlertAPIError",
    "AlertDefsError",
    "AlertServiceConnectionError",
    "InputValidationError",
    "UserAbortError",
    # Models
    "AlertCorrelationContext",
    "AlertDefinition",
    "MutationResult",
]
