"""Delete, enable and disable commands (one batched request per invocation)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from alertdefs.batch import BatchMutator, BatchOperation, BatchResult
from alertdefs.cli._selection import (
    ActiveOpt,
    AllOpt,
    FavoriteOpt,
    IdOpt,
    InactiveOpt,
    NameOpt,
    SubcategoryOpt,
    criterion_from_options,
    load_selection,
)
from alertdefs.cli.utils import (
    cli_errors,
    confirm_names,
    console,
    get_config,
    print_batch_result,
    run_async,
)

if TYPE_CHECKING:
    from alertdefs.selection import Criterion


def _run_batch(ctx: typer.Context, criterion: Criterion, operation: BatchOperation) -> None:
    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.domain import DomainResolver

    config = get_config(ctx)

    async def _apply() -> BatchResult | None:
        async with AlertDefinitionClient.for_source(config) as client:
            definitions, full = await load_selection(client, criterion)
            if not definitions:
                return None
            domain = await DomainResolver(client, override=config.source_domain).resolve(full)
            mutator = BatchMutator(client, confirm=confirm_names)
            return await mutator.apply(
                definitions,
                operation,
                summary=(
                    f"{operation.value.capitalize()} {len(definitions)} alert definition(s) "
                    f"in domain '{escape(domain)}'?"
                ),
            )

    with cli_errors():
        result = run_async(_apply())

    if result is None:
        console.print(f"[yellow]No alert definitions found ({criterion.describe()}).[/yellow]")
        return

    print_batch_result(result)
    if not result.ok:
        raise typer.Exit(1)


def alerts_delete(
    ctx: typer.Context,
    all_: AllOpt = False,
    active: ActiveOpt = False,
    inactive: InactiveOpt = False,
    favorite: FavoriteOpt = False,
    name: NameOpt = None,
    subcategory: SubcategoryOpt = None,
    id_: IdOpt = None,
) -> None:
    """Delete the selected alert definitions (asks for confirmation)."""
    with cli_errors():
        criterion = criterion_from_options(
            all_=all_,
            active=active,
            inactive=inactive,
            favorite=favorite,
            name=name,
            subcategory=subcategory,
            id_=id_,
            command="delete",
        )
    _run_batch(ctx, criterion, BatchOperation.DELETE)


def alerts_enable(
    ctx: typer.Context,
    all_: AllOpt = False,
    active: ActiveOpt = False,
    inactive: InactiveOpt = False,
    favorite: FavoriteOpt = False,
    name: NameOpt = None,
    subcategory: SubcategoryOpt = None,
    id_: IdOpt = None,
) -> None:
    """Enable the selected alert definitions (asks for confirmation)."""
    with cli_errors():
        criterion = criterion_from_options(
            all_=all_,
            active=active,
            inactive=inactive,
            favorite=favorite,
            name=name,
            subcategory=subcategory,
            id_=id_,
            command="enable",
        )
    _run_batch(ctx, criterion, BatchOperation.ENABLE)


def alerts_disable(
    ctx: typer.Context,
    all_: AllOpt = False,
    active: ActiveOpt = False,
    inactive: InactiveOpt = False,
    favorite: FavoriteOpt = False,
    name: NameOpt = None,
    subcategory: SubcategoryOpt = None,
    id_: IdOpt = None,
) -> None:
    """Disable the selected alert definitions (asks for confirmation)."""
    with cli_errors():
        criterion = criterion_from_options(
            all_=all_,
            active=active,
            inactive=inactive,
            favorite=favorite,
            name=name,
            subcategory=subcategory,
            id_=id_,
            command="disable",
        )
    _run_batch(ctx, criterion, BatchOperation.DISABLE)
