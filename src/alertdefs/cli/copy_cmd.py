"""Copy alert definitions from the source domain into the target domain."""

from __future__ import annotations

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
    print_progress,
    run_async,
)


def alerts_copy(
    ctx: typer.Context,
    all_: AllOpt = False,
    active: ActiveOpt = False,
    inactive: InactiveOpt = False,
    favorite: FavoriteOpt = False,
    name: NameOpt = None,
    subcategory: SubcategoryOpt = None,
    id_: IdOpt = None,
) -> None:
    """Copy the selected alert definitions into the target domain (asks for confirmation).

    Copies are created fresh: ids, activation state, favorites and other server-owned
    fields are dropped, and a `lib.my.<source-domain>.` subcategory prefix is removed.
    """
    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.domain import DomainResolver
    from alertdefs.transform import portable

    config = get_config(ctx)

    with cli_errors():
        criterion = criterion_from_options(
            all_=all_,
            active=active,
            inactive=inactive,
            favorite=favorite,
            name=name,
            subcategory=subcategory,
            id_=id_,
            command="copy",
        )
        source_client = AlertDefinitionClient.for_source(config)
        target_client = AlertDefinitionClient.for_target(config)

    async def _copy() -> BatchResult | None:
        async with source_client:
            definitions, full = await load_selection(source_client, criterion)
            if not definitions:
                return None
            source_domain = await DomainResolver(
                source_client, override=config.source_domain
            ).resolve(full)

        copies = portable(definitions, source_domain)
        async with target_client:
            target_domain = await DomainResolver(
                target_client, override=config.target_domain
            ).resolve()
            mutator = BatchMutator(target_client, confirm=confirm_names, progress=print_progress)
            return await mutator.apply(
                copies,
                BatchOperation.CREATE,
                summary=(
                    f"Copy {len(copies)} alert definition(s) from domain "
                    f"'{escape(source_domain)}' to domain '{escape(target_domain)}'?"
                ),
            )

    with cli_errors():
        result = run_async(_copy())

    if result is None:
        console.print(f"[yellow]No alert definitions found ({criterion.describe()}).[/yellow]")
        return

    print_batch_result(result)
    if not result.ok:
        raise typer.Exit(1)
