"""Selecting a working set of alert definitions by a single criterion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, assert_never, cast

import structlog

from alertdefs.api.client import PAGE_SIZE
from alertdefs.api.exceptions import InputValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.api.models import AlertDefinition

logger = structlog.get_logger()


class CriterionKind(str, Enum):
    """Kinds of selection criteria. Exactly one applies per invocation."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    FAVORITE = "favorite"
    NAME = "name"
    SUBCATEGORY = "subcategory"
    ID = "id"


# Filters the service applies itself (nameFilter / idFilter).
SERVER_FILTERED = frozenset({CriterionKind.NAME, CriterionKind.ID})


def parse_id(raw: str) -> int:
    """Parse an alert id made of decimal digits only.

    Raises:
        InputValidationError: If `raw` contains anything other than 0-9.
    """
    # str.isdigit() also accepts superscripts and other non-ASCII digits
    if not raw or not all("0" <= ch <= "9" for ch in raw):
        raise InputValidationError(
            f"Alert id must contain only digits, got '{raw}'.",
            example="alertdefs list --id 12345",
        )
    return int(raw)


def _require_text(value: str, *, option: str) -> str:
    if not value.strip():
        raise InputValidationError(
            f"{option} must not be empty.",
            example=f"alertdefs list {option} cpu",
        )
    return value


@dataclass(frozen=True)
class Criterion:
    """A selection criterion: a kind plus its payload (for name/subcategory/id)."""

    kind: CriterionKind
    value: str | int | None = None

    @classmethod
    def all(cls) -> Criterion:
        return cls(CriterionKind.ALL)

    @classmethod
    def active(cls) -> Criterion:
        return cls(CriterionKind.ACTIVE)

    @classmethod
    def inactive(cls) -> Criterion:
        return cls(CriterionKind.INACTIVE)

    @classmethod
    def favorite(cls) -> Criterion:
        return cls(CriterionKind.FAVORITE)

    @classmethod
    def name_contains(cls, text: str) -> Criterion:
        return cls(CriterionKind.NAME, _require_text(text, option="--name"))

    @classmethod
    def subcategory_contains(cls, text: str) -> Criterion:
        return cls(CriterionKind.SUBCATEGORY, _require_text(text, option="--subcategory"))

    @classmethod
    def id_equals(cls, raw: str | int) -> Criterion:
        alert_id = raw if isinstance(raw, int) else parse_id(raw)
        return cls(CriterionKind.ID, alert_id)

    def describe(self) -> str:
        """Short human-readable description for messages."""
        if self.value is None:
            return self.kind.value
        if self.kind == CriterionKind.ID:
            return f"id {self.value}"
        return f"{self.kind.value} containing '{self.value}'"


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.casefold() in (haystack or "").casefold()


def matches(definition: AlertDefinition, criterion: Criterion) -> bool:
    """Return whether a single definition satisfies `criterion`."""
    match criterion.kind:
        case CriterionKind.ALL:
            return True
        case CriterionKind.ACTIVE:
            return definition.is_active is True
        case CriterionKind.INACTIVE:
            return definition.is_active is False
        case CriterionKind.FAVORITE:
            return definition.is_favorite is True
        case CriterionKind.NAME:
            return _contains(definition.name, str(criterion.value))
        case CriterionKind.SUBCATEGORY:
            return _contains(definition.subcategory, str(criterion.value))
        case CriterionKind.ID:
            return definition.id == criterion.value
        case _:
            assert_never(criterion.kind)


def select(
    definitions: Sequence[AlertDefinition], criterion: Criterion
) -> list[AlertDefinition]:
    """Narrow an already fetched collection to the definitions matching `criterion`.

    Collection order is preserved. An empty result is a normal outcome.
    """
    return [d for d in definitions if matches(d, criterion)]


def warn_if_truncated(definitions: Sequence[AlertDefinition]) -> bool:
    """Log a warning when a full fetch filled the whole page (results may be cut off)."""
    if len(definitions) < PAGE_SIZE:
        return False
    logger.warning("alertdefs_page_full", page_size=PAGE_SIZE, fetched=len(definitions))
    return True


async def fetch_selection(
    client: AlertDefinitionClient,
    criterion: Criterion,
    *,
    full: Sequence[AlertDefinition] | None = None,
) -> list[AlertDefinition]:
    """Fetch and select in one step.

    Criteria in `SERVER_FILTERED` are filtered by the service (an id is matched
    locally when `full` is given); every other criterion selects locally from a full
    fetch, or from `full` when the caller already fetched it.
    """
    match criterion.kind:
        case CriterionKind.NAME:
            return await client.fetch_by_name(str(criterion.value))
        case CriterionKind.ID:
            if full is not None:
                return select(full, criterion)
            return await client.fetch_by_id(cast(int, criterion.value))
        case (
            CriterionKind.ALL
            | CriterionKind.ACTIVE
            | CriterionKind.INACTIVE
            | CriterionKind.FAVORITE
            | CriterionKind.SUBCATEGORY
        ):
            if full is None:
                full = await client.fetch_all()
                warn_if_truncated(full)
            return select(full, criterion)
        case _:
            assert_never(criterion.kind)
