"""Alert definition models for the alerting service API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

LIBRARY_PREFIX = "lib.my."


class AlertCorrelationContext(BaseModel):
    """Server-owned correlation metadata attached to a definition."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int | str | None = None
    name_id: str | None = Field(default=None, alias="nameId")
    owner_email: str | None = Field(default=None, alias="ownerEmail")


class AlertDefinition(BaseModel):
    """
    An alert definition as returned by `GET /alertDefinitions`.

    Only the fields the CLI reasons about are declared; everything else the service
    sends (conditions, thresholds, notification settings, ...) is kept as extra data
    so a definition can be re-submitted without loss.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: int | None = Field(default=None, description="Server-assigned; absent on create")
    name: str = ""
    subcategory: str | None = None
    is_active: bool | None = Field(default=None, alias="isActive")
    is_favorite: bool | None = Field(default=None, alias="isFavorite")
    is_alert_chain: bool | None = Field(default=None, alias="isAlertChain")
    creation_date: Any = Field(default=None, alias="creationDate")
    category_id: int | str | None = Field(default=None, alias="categoryId")
    subcategory_id: int | str | None = Field(default=None, alias="subcategoryId")
    alert_correlation_context: AlertCorrelationContext | None = Field(
        default=None, alias="alertCorrelationContext"
    )
    action_policy_id: list[Any] | None = Field(default=None, alias="actionPolicyId")

    @property
    def is_library(self) -> bool:
        """Whether this definition lives under the domain-owned `lib.my.` subcategory."""
        return (self.subcategory or "").startswith(LIBRARY_PREFIX)

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the API's JSON shape, keeping only fields that were set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class MutationResult(BaseModel):
    """Outcome of a single mutating request."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    error: str | None = None
    status_code: int | None = None
    body: Any = None
