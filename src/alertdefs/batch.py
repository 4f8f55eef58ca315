"""Applying one mutation across a selected set of alert definitions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, assert_never

import structlog

from alertdefs.api.exceptions import UserAbortError

if TYPE_CHECKING:
    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.api.models import AlertDefinition, MutationResult

logger = structlog.get_logger()

# (summary line, affected definition names) -> operator affirmed?
ConfirmCallback = Callable[[str, Sequence[str]], bool]
# (position starting at 1, batch length, definition, outcome)
ProgressCallback = Callable[[int, int, "AlertDefinition", "MutationResult"], None]


class BatchOperation(str, Enum):
    """Mutations that can be applied to a selection."""

    CREATE = "create"
    DELETE = "delete"
    ENABLE = "enable"
    DISABLE = "disable"


@dataclass(frozen=True)
class BatchResult:
    """Aggregate outcome of a batch."""

    operation: BatchOperation
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.failed == 0


class BatchMutator:
    """
    Apply a `BatchOperation` to a list of definitions through one client.

    - An empty list is a no-op: no confirmation, no request.
    - Every operation is gated by `confirm`; a decline raises `UserAbortError`
      before any mutating request is sent.
    - `create` issues one request per definition, in order, and keeps going after
      application-level failures (each is counted).
    - `delete`/`enable`/`disable` send all ids in a single request; the outcome of
      that request applies to the whole batch.

    Transport failures (`AlertServiceConnectionError`) propagate immediately.
    """

    def __init__(
        self,
        client: AlertDefinitionClient,
        *,
        confirm: ConfirmCallback,
        progress: ProgressCallback | None = None,
    ) -> None:
        self._client = client
        self._confirm = confirm
        self._progress = progress

    async def apply(
        self,
        definitions: Sequence[AlertDefinition],
        operation: BatchOperation,
        *,
        summary: str | None = None,
    ) -> BatchResult:
        """Confirm and run `operation` over `definitions`.

        Args:
            definitions: The selected set, in display order.
            operation: Which mutation to apply.
            summary: Confirmation headline; defaults to "<Op> N alert definition(s)?".

        Raises:
            UserAbortError: If the operator declines the confirmation.
            ValueError: If a batched operation is given definitions without ids.
        """
        items = list(definitions)
        if not items:
            return BatchResult(operation=operation)

        ids: list[int] = []
        if operation != BatchOperation.CREATE:
            missing = [d.name for d in items if d.id is None]
            if missing:
                raise ValueError(f"Cannot {operation.value} definitions without an id: {missing}")
            ids = [d.id for d in items if d.id is not None]

        headline = summary or f"{operation.value.capitalize()} {len(items)} alert definition(s)?"
        if not self._confirm(headline, [d.name for d in items]):
            logger.info("batch_aborted", operation=operation.value, count=len(items))
            raise UserAbortError()

        logger.info("batch_started", operation=operation.value, count=len(items))
        match operation:
            case BatchOperation.CREATE:
                result = await self._create_each(items)
            case BatchOperation.DELETE:
                outcome = await self._client.delete_by_ids(ids)
                result = self._whole_batch(operation, len(items), outcome)
            case BatchOperation.ENABLE | BatchOperation.DISABLE:
                outcome = await self._client.set_enabled(
                    ids, enabled=operation == BatchOperation.ENABLE
                )
                result = self._whole_batch(operation, len(items), outcome)
            case _:
                assert_never(operation)

        logger.info(
            "batch_finished",
            operation=operation.value,
            processed=result.processed,
            succeeded=result.succeeded,
            failed=result.failed,
        )
        return result

    async def _create_each(self, items: list[AlertDefinition]) -> BatchResult:
        failed = 0
        errors: list[str] = []
        # Sequential: progress lines and counts follow collection order.
        for position, definition in enumerate(items, start=1):
            outcome = await self._client.create(definition)
            if not outcome.ok:
                failed += 1
                errors.append(f"{definition.name}: {outcome.error}")
            if self._progress is not None:
                self._progress(position, len(items), definition, outcome)

        return BatchResult(
            operation=BatchOperation.CREATE,
            processed=len(items),
            succeeded=len(items) - failed,
            failed=failed,
            errors=tuple(errors),
        )

    @staticmethod
    def _whole_batch(operation: BatchOperation, count: int, outcome: MutationResult) -> BatchResult:
        if outcome.ok:
            return BatchResult(operation=operation, processed=count, succeeded=count)
        return BatchResult(
            operation=operation,
            processed=count,
            failed=count,
            errors=(outcome.error or "unknown error",),
        )
