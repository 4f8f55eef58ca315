"""Selection options shared by every command that works on a set of definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer

from alertdefs.api.exceptions import InputValidationError
from alertdefs.cli.utils import print_truncation_warning
from alertdefs.selection import (
    SERVER_FILTERED,
    Criterion,
    fetch_selection,
    warn_if_truncated,
)

if TYPE_CHECKING:
    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.api.models import AlertDefinition

AllOpt = Annotated[bool, typer.Option("--all", help="Select every alert definition.")]
ActiveOpt = Annotated[bool, typer.Option("--active", help="Select active definitions.")]
InactiveOpt = Annotated[bool, typer.Option("--inactive", help="Select inactive definitions.")]
FavoriteOpt = Annotated[bool, typer.Option("--favorite", help="Select favorite definitions.")]
NameOpt = Annotated[
    str | None,
    typer.Option("--name", help="Select definitions whose name contains TEXT."),
]
SubcategoryOpt = Annotated[
    str | None,
    typer.Option("--subcategory", help="Select definitions whose subcategory contains TEXT."),
]
IdOpt = Annotated[str | None, typer.Option("--id", help="Select the definition with this id.")]

_SELECTION_FLAGS = "--all, --active, --inactive, --favorite, --name, --subcategory, --id"


def criterion_from_options(
    *,
    all_: bool = False,
    active: bool = False,
    inactive: bool = False,
    favorite: bool = False,
    name: str | None = None,
    subcategory: str | None = None,
    id_: str | None = None,
    command: str = "list",
) -> Criterion:
    """Turn the mutually exclusive selection options into a single `Criterion`.

    Raises:
        InputValidationError: If zero or several options are given, a text option is
            empty, or the id is not made of digits.
    """
    given = sum(
        [
            all_,
            active,
            inactive,
            favorite,
            name is not None,
            subcategory is not None,
            id_ is not None,
        ]
    )
    if given != 1:
        raise InputValidationError(
            f"Specify exactly one of {_SELECTION_FLAGS}.",
            example=f"alertdefs {command} --inactive",
        )

    if active:
        return Criterion.active()
    if inactive:
        return Criterion.inactive()
    if favorite:
        return Criterion.favorite()
    if name is not None:
        return Criterion.name_contains(name)
    if subcategory is not None:
        return Criterion.subcategory_contains(subcategory)
    if id_ is not None:
        return Criterion.id_equals(id_)
    return Criterion.all()


async def load_selection(
    client: AlertDefinitionClient,
    criterion: Criterion,
) -> tuple[list[AlertDefinition], list[AlertDefinition] | None]:
    """Fetch the selected definitions.

    Returns the selection and, when one was fetched, the full collection, so a
    `DomainResolver` can reuse it if the command ends up displaying the domain.
    """
    full: list[AlertDefinition] | None = None
    if criterion.kind not in SERVER_FILTERED:
        full = await client.fetch_all()
        if warn_if_truncated(full):
            print_truncation_warning(len(full))

    selected = await fetch_selection(client, criterion, full=full)
    return selected, full
