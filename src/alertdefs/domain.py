"""Domain resolution: which human-readable domain a credential belongs to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from alertdefs.api.client import error_message
from alertdefs.api.exceptions import AlertAPIError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.api.models import AlertDefinition

logger = structlog.get_logger()

UNKNOWN_DOMAIN = "unknown"

# `alertCorrelationContext.nameId` looks like `<a>.<b>.<domain>.<...>`.
_NAME_ID_DOMAIN_SEGMENT = 2


def domain_from_library(definitions: Sequence[AlertDefinition]) -> str | None:
    """Read the domain from the first `lib.my.` definition's correlation name id."""
    library = [d for d in definitions if d.is_library]
    if not library:
        return None

    context = library[0].alert_correlation_context
    name_id = context.name_id if context is not None else None
    if not name_id:
        return None
    segments = name_id.split(".")
    if len(segments) <= _NAME_ID_DOMAIN_SEGMENT or not segments[_NAME_ID_DOMAIN_SEGMENT]:
        return None
    return segments[_NAME_ID_DOMAIN_SEGMENT]


class DomainResolver:
    """
    Resolve (once, lazily) the domain label of the credential behind `client`.

    Order, first success wins:
    1. Domain segment of the first `lib.my.` definition's correlation name id.
    2. The `domain` field of the query API's domain aggregation.
    3. `"unknown"`.

    The result is informational only (display and copy confirmation). Transport
    failures propagate; an `error` in the query response falls back to `"unknown"`.
    """

    def __init__(self, client: AlertDefinitionClient, *, override: str | None = None) -> None:
        self._client = client
        self._domain: str | None = override

    @property
    def cached(self) -> str | None:
        """The resolved domain, or None if `resolve()` has not run yet."""
        return self._domain

    async def resolve(self, definitions: Sequence[AlertDefinition] | None = None) -> str:
        """Return the domain, resolving it on first use.

        Args:
            definitions: An already fetched full collection for this credential.
                Saves a request when the caller has one; never pass a filtered subset.
        """
        if self._domain is None:
            self._domain = await self._resolve(definitions)
        return self._domain

    async def _resolve(self, definitions: Sequence[AlertDefinition] | None) -> str:
        if definitions is None:
            try:
                definitions = await self._client.fetch_all()
            except AlertAPIError as exc:
                logger.info("domain_library_lookup_failed", error=exc.message)
                definitions = []

        domain = domain_from_library(definitions)
        if domain is not None:
            logger.debug("domain_resolved", source="library", domain=domain)
            return domain

        response = await self._client.query_domain()
        message = error_message(response)
        if message is None:
            domain = response.get("domain")
            if isinstance(domain, str) and domain:
                logger.debug("domain_resolved", source="query", domain=domain)
                return domain

        logger.info("domain_unresolved", error=message)
        return UNKNOWN_DOMAIN
