from __future__ import annotations

import json
from collections.abc import Sequence

import httpx
import pytest
import respx
from httpx import Response

from alertdefs.api.client import AlertDefinitionClient
from alertdefs.api.exceptions import AlertServiceConnectionError, UserAbortError
from alertdefs.api.models import AlertDefinition, MutationResult
from alertdefs.batch import BatchMutator, BatchOperation, BatchResult
from tests.alert_fixtures import (
    BASE_URL,
    DEFINITIONS_URL,
    QUERY_URL,
    STATUS_URL,
    build_definition,
)


def _client() -> AlertDefinitionClient:
    return AlertDefinitionClient(token="tok", base_url=BASE_URL, query_url=QUERY_URL)


def _approve(summary: str, names: Sequence[str]) -> bool:
    return True


def _decline(summary: str, names: Sequence[str]) -> bool:
    return False


def _never(summary: str, names: Sequence[str]) -> bool:
    raise AssertionError("confirmation must not be requested")


def _defs(*names: str, with_ids: bool = True) -> list[AlertDefinition]:
    return [
        AlertDefinition.model_validate(
            {"id": i, "name": name} if with_ids else {"name": name}
        )
        for i, name in enumerate(names, start=1)
    ]


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize("operation", list(BatchOperation))
async def test_empty_selection_is_a_no_op(operation: BatchOperation) -> None:
    async with _client() as client:
        result = await BatchMutator(client, confirm=_never).apply([], operation)

    assert result == BatchResult(operation=operation)
    assert len(respx.calls) == 0


@pytest.mark.asyncio
@respx.mock
async def test_create_batch_counts_application_failures() -> None:
    route = respx.post(DEFINITIONS_URL)
    route.side_effect = [
        Response(200, json={"id": 11}),
        Response(200, json={"error": "name already exists"}),
        Response(200, json={"id": 13}),
    ]
    progress: list[tuple[int, int, str, bool]] = []

    def _record(position: int, total: int, d: AlertDefinition, outcome: MutationResult) -> None:
        progress.append((position, total, d.name, outcome.ok))

    async with _client() as client:
        mutator = BatchMutator(client, confirm=_approve, progress=_record)
        result = await mutator.apply(
            _defs("a", "b", "c", with_ids=False), BatchOperation.CREATE
        )

    assert (result.processed, result.succeeded, result.failed) == (3, 2, 1)
    assert result.errors == ("b: name already exists",)
    assert not result.ok
    assert progress == [(1, 3, "a", True), (2, 3, "b", False), (3, 3, "c", True)]
    sent = [json.loads(call.request.content)["name"] for call in route.calls]
    assert sent == ["a", "b", "c"]


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize("operation", list(BatchOperation))
async def test_declined_confirmation_sends_nothing(operation: BatchOperation) -> None:
    async with _client() as client:
        mutator = BatchMutator(client, confirm=_decline)
        with pytest.raises(UserAbortError):
            await mutator.apply(_defs("a", "b"), operation)

    assert len(respx.calls) == 0


@pytest.mark.asyncio
@respx.mock
async def test_confirmation_receives_every_name() -> None:
    respx.delete(DEFINITIONS_URL).mock(return_value=Response(200))
    seen: dict[str, object] = {}

    def _capture(summary: str, names: Sequence[str]) -> bool:
        seen["summary"] = summary
        seen["names"] = list(names)
        return True

    async with _client() as client:
        await BatchMutator(client, confirm=_capture).apply(
            _defs("x", "y"), BatchOperation.DELETE
        )

    assert seen == {"summary": "Delete 2 alert definition(s)?", "names": ["x", "y"]}


@pytest.mark.asyncio
@respx.mock
async def test_enable_inactive_selection_issues_one_status_request() -> None:
    route = respx.put(STATUS_URL).mock(return_value=Response(200, json={}))
    selection = [AlertDefinition.model_validate({"id": 2, "name": "B", "isActive": False})]

    async with _client() as client:
        result = await BatchMutator(client, confirm=_approve).apply(
            selection, BatchOperation.ENABLE
        )

    assert route.call_count == 1
    params = route.calls[0].request.url.params
    assert params.get_list("alertIds") == ["2"]
    assert params["enable"] == "true"
    assert (result.processed, result.succeeded, result.failed) == (1, 1, 0)


@pytest.mark.asyncio
@respx.mock
async def test_disable_sets_state_false() -> None:
    route = respx.put(STATUS_URL).mock(return_value=Response(200))

    async with _client() as client:
        await BatchMutator(client, confirm=_approve).apply(
            _defs("a", "b", "c"), BatchOperation.DISABLE
        )

    params = route.calls[0].request.url.params
    assert params.get_list("alertIds") == ["1", "2", "3"]
    assert params["enable"] == "false"


@pytest.mark.asyncio
@respx.mock
async def test_failed_delete_fails_whole_batch() -> None:
    route = respx.delete(DEFINITIONS_URL).mock(
        return_value=Response(200, json={"error": "permission denied"})
    )

    async with _client() as client:
        result = await BatchMutator(client, confirm=_approve).apply(
            _defs("a", "b"), BatchOperation.DELETE
        )

    assert route.call_count == 1
    assert (result.processed, result.succeeded, result.failed) == (2, 0, 2)
    assert result.errors == ("permission denied",)


@pytest.mark.asyncio
@respx.mock
async def test_batched_operation_requires_ids() -> None:
    async with _client() as client:
        mutator = BatchMutator(client, confirm=_never)
        with pytest.raises(ValueError, match="without an id"):
            await mutator.apply(_defs("a", with_ids=False), BatchOperation.DELETE)

    assert len(respx.calls) == 0


@pytest.mark.asyncio
@respx.mock
async def test_transport_failure_stops_create_batch() -> None:
    route = respx.post(DEFINITIONS_URL)
    route.side_effect = [Response(200, json={}), httpx.ConnectError("connection reset")]

    async with _client() as client:
        mutator = BatchMutator(client, confirm=_approve)
        with pytest.raises(AlertServiceConnectionError):
            await mutator.apply(_defs("a", "b", "c", with_ids=False), BatchOperation.CREATE)

    assert route.call_count == 2
