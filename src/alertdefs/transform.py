"""Portable form: alert definitions stripped of server- and domain-owned fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from alertdefs.api.models import LIBRARY_PREFIX, AlertDefinition

if TYPE_CHECKING:
    from collections.abc import Sequence

EXCLUDED_FIELDS = frozenset(
    {
        "id",
        "creationDate",
        "categoryId",
        "subcategoryId",
        "isActive",
        "isFavorite",
        "isAlertChain",
    }
)

EXCLUDED_CONTEXT_FIELDS = frozenset({"id", "nameId", "ownerEmail"})


def strip_domain_prefix(subcategory: str, source_domain: str) -> str:
    """Remove a leading `lib.my.<source_domain>.` from `subcategory`, if present."""
    prefix = f"{LIBRARY_PREFIX}{source_domain}."
    if subcategory.startswith(prefix):
        return subcategory[len(prefix) :]
    return subcategory


def portable_payload(definition: AlertDefinition, source_domain: str) -> dict[str, Any]:
    """Build the create-ready JSON payload for one definition."""
    payload = {
        key: value
        for key, value in definition.to_payload().items()
        if key not in EXCLUDED_FIELDS
    }

    context = payload.pop("alertCorrelationContext", None)
    if isinstance(context, dict):
        remaining = {k: v for k, v in context.items() if k not in EXCLUDED_CONTEXT_FIELDS}
        if remaining:
            payload["alertCorrelationContext"] = remaining

    payload["actionPolicyId"] = []

    subcategory = payload.get("subcategory")
    if isinstance(subcategory, str):
        payload["subcategory"] = strip_domain_prefix(subcategory, source_domain)

    return payload


def portable(
    definitions: Sequence[AlertDefinition], source_domain: str
) -> list[AlertDefinition]:
    """Return copies of `definitions` that can be created in another domain.

    Output never carries an id, so it is always eligible for `create`.
    """
    return [
        AlertDefinition.model_validate(portable_payload(d, source_domain)) for d in definitions
    ]
