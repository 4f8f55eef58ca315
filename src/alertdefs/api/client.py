"""Async client for the alert definition API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from alertdefs.api.exceptions import AlertAPIError, AlertServiceConnectionError
from alertdefs.api.models.alert_definition import AlertDefinition, MutationResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from alertdefs.config import RunConfig

logger = structlog.get_logger()

# Largest page the service returns; there is no pagination beyond the first page.
PAGE_SIZE = 1000

AUTH_HEADER = "standAloneToken"

# Aggregates internal consumption records by domain; the service answers with
# {"domain": "<name>"} or {"error": ...}.
DOMAIN_QUERY: dict[str, Any] = {
    "query": "source internal.consumption | groupby domain | limit 1",
    "size": 1,
}


def error_message(body: Any) -> str | None:
    """Return the application-level error carried by a response body, if any."""
    if not isinstance(body, dict) or "error" not in body:
        return None
    error = body["error"]
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)


class AlertDefinitionClient:
    """
    Async client for the `alertDefinitions` collection and the query endpoint.

    One client is bound to one credential. Use as an async context manager:

        async with AlertDefinitionClient.for_source(config) as client:
            definitions = await client.fetch_all()

    Transport failures raise `AlertServiceConnectionError` and are never retried.
    Read calls raise `AlertAPIError` when the body carries `error`; mutating calls
    return a `MutationResult` instead so batch code can count failures.
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str,
        query_url: str,
        connect_timeout: float = 10.0,
    ) -> None:
        self._token = token
        self._base_url = base_url
        self._query_url = query_url
        self._connect_timeout = connect_timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def for_source(cls, config: RunConfig) -> AlertDefinitionClient:
        """Create a client for the source credential.

        Raises:
            InputValidationError: If no source token is configured.
        """
        return cls(
            token=config.require_source(),
            base_url=config.base_url,
            query_url=config.query_url,
            connect_timeout=config.connect_timeout_seconds,
        )

    @classmethod
    def for_target(cls, config: RunConfig) -> AlertDefinitionClient:
        """Create a client for the target credential.

        Raises:
            InputValidationError: If no target token is configured.
        """
        return cls(
            token=config.require_target(),
            base_url=config.base_url,
            query_url=config.query_url,
            connect_timeout=config.connect_timeout_seconds,
        )

    async def open(self) -> None:
        """Initialize the underlying `httpx.AsyncClient` if needed."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            # Connect timeout only; response bodies may take as long as they take.
            timeout=httpx.Timeout(None, connect=self._connect_timeout),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                AUTH_HEADER: self._token,
            },
        )

    async def close(self) -> None:
        """Close the underlying `httpx.AsyncClient` if it is open."""
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> AlertDefinitionClient:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the initialized `httpx.AsyncClient`.

        Raises:
            RuntimeError: If `open()` has not been called yet.
        """
        if self._client is None:
            raise RuntimeError(
                "AlertDefinitionClient not initialized. "
                "Use 'async with AlertDefinitionClient(...)' or call open()."
            )
        return self._client

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> tuple[httpx.Response, Any]:
        """Send one request and decode its JSON body (None for an empty body)."""
        logger.debug("alertdefs_request", method=method, url=url, params=params)
        try:
            response = await self.client.request(method, url, params=params, json=json_body)
        except httpx.TransportError as exc:
            target = url if url.startswith("http") else f"{self._base_url}{url}"
            raise AlertServiceConnectionError(target, str(exc) or type(exc).__name__) from exc

        if not response.content:
            return response, None
        try:
            return response, response.json()
        except ValueError:
            return response, response.text

    async def _read(self, path: str, params: dict[str, Any]) -> list[AlertDefinition]:
        response, body = await self._send("GET", path, params=params)

        message = error_message(body)
        if message is not None:
            logger.warning("alertdefs_read_failed", path=path, error=message)
            raise AlertAPIError(message, status_code=response.status_code)
        if response.status_code >= 400:
            raise AlertAPIError(
                str(body or response.reason_phrase), status_code=response.status_code
            )

        if isinstance(body, dict):
            body = body.get("content", [])
        if body is None:
            return []
        if not isinstance(body, list):
            raise AlertAPIError(f"Unexpected response from {path}: {body!r}")
        return [AlertDefinition.model_validate(item) for item in body]

    async def _mutate(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> MutationResult:
        response, body = await self._send(method, path, params=params, json_body=json_body)

        message = error_message(body)
        if message is None and response.status_code >= 400:
            message = str(body or response.reason_phrase)
        if message is not None:
            logger.warning(
                "alertdefs_mutation_failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            return MutationResult(
                ok=False, error=message, status_code=response.status_code, body=body
            )
        return MutationResult(ok=True, status_code=response.status_code, body=body)

    # ==================== Reads ====================

    async def fetch_all(self) -> list[AlertDefinition]:
        """Fetch the first (and only) page of alert definitions."""
        return await self._read("/alertDefinitions", {"page": 0, "size": PAGE_SIZE})

    async def fetch_by_name(self, substring: str) -> list[AlertDefinition]:
        """Fetch definitions whose name contains `substring` (filtered server-side)."""
        return await self._read("/alertDefinitions", {"nameFilter": substring})

    async def fetch_by_id(self, alert_id: int) -> list[AlertDefinition]:
        """Fetch the definition with `alert_id`; returns a singleton or an empty list."""
        return await self._read("/alertDefinitions", {"idFilter": alert_id})

    # ==================== Writes ====================

    async def create(self, definition: AlertDefinition) -> MutationResult:
        """Create a new alert definition."""
        return await self._mutate("POST", "/alertDefinitions", json_body=definition.to_payload())

    async def update(self, definition: AlertDefinition) -> MutationResult:
        """Update an existing alert definition (the body must carry `id`)."""
        if definition.id is None:
            raise ValueError("update() requires a definition with an id")
        return await self._mutate("PUT", "/alertDefinitions", json_body=definition.to_payload())

    async def save(self, definition: AlertDefinition) -> MutationResult:
        """Update when the definition has an `id`, create otherwise."""
        if definition.id is None:
            return await self.create(definition)
        return await self.update(definition)

    async def delete_by_ids(self, alert_ids: Iterable[int]) -> MutationResult:
        """Delete all listed definitions in a single request."""
        return await self._mutate(
            "DELETE", "/alertDefinitions", params={"alertIds": list(alert_ids)}
        )

    async def set_enabled(self, alert_ids: Iterable[int], enabled: bool) -> MutationResult:
        """Set the active state of all listed definitions in a single request."""
        return await self._mutate(
            "PUT",
            "/alertDefinitions/status",
            params={"alertIds": list(alert_ids), "enable": "true" if enabled else "false"},
        )

    # ==================== Query API ====================

    async def query_domain(self) -> dict[str, Any]:
        """Run the domain-aggregation query and return the raw response object."""
        response, body = await self._send(
            "POST", f"{self._query_url}/search/query", json_body=DOMAIN_QUERY
        )
        if isinstance(body, dict):
            return body
        return {"error": f"Unexpected query response ({response.status_code}): {body!r}"}
