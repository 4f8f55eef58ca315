"""Export alert definitions to a JSON file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

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
from alertdefs.cli.utils import atomic_write_json, cli_errors, console, get_config, run_async

if TYPE_CHECKING:
    from alertdefs.api.models import AlertDefinition


def alerts_export(
    ctx: typer.Context,
    output: Annotated[Path, typer.Option("--output", "-o", help="File to write.")],
    all_: AllOpt = False,
    active: ActiveOpt = False,
    inactive: InactiveOpt = False,
    favorite: FavoriteOpt = False,
    name: NameOpt = None,
    subcategory: SubcategoryOpt = None,
    id_: IdOpt = None,
    portable_form: Annotated[
        bool,
        typer.Option(
            "--portable",
            help="Strip server-owned and domain-specific fields (ready for `apply`).",
        ),
    ] = False,
) -> None:
    """Write the selected alert definitions to a JSON file."""
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
            command="export",
        )

        async def _fetch() -> list[AlertDefinition]:
            async with AlertDefinitionClient.for_source(config) as client:
                definitions, full = await load_selection(client, criterion)
                if not portable_form or not definitions:
                    return definitions
                resolver = DomainResolver(client, override=config.source_domain)
                return portable(definitions, await resolver.resolve(full))

        definitions = run_async(_fetch())

    if not definitions:
        console.print(f"[yellow]No alert definitions found ({criterion.describe()}).[/yellow]")
        return

    payload: list[dict[str, Any]] = [d.to_payload() for d in definitions]
    atomic_write_json(output, payload)
    console.print(f"[green]✓[/green] Exported {len(payload)} alert definitions to {output}")
