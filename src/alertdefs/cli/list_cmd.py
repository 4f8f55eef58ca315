"""List alert definitions command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Annotated

import typer
from rich.markup import escape
from rich.table import Table

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
from alertdefs.cli.utils import cli_errors, console, get_config, run_async

if TYPE_CHECKING:
    from alertdefs.api.models import AlertDefinition


def _flag(value: bool | None) -> str:
    if value is None:
        return "-"
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def alerts_list(
    ctx: typer.Context,
    all_: AllOpt = False,
    active: ActiveOpt = False,
    inactive: InactiveOpt = False,
    favorite: FavoriteOpt = False,
    name: NameOpt = None,
    subcategory: SubcategoryOpt = None,
    id_: IdOpt = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List alert definitions matching one selection option."""
    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.domain import DomainResolver

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
            command="list",
        )

        async def _list() -> tuple[list[AlertDefinition], str | None]:
            async with AlertDefinitionClient.for_source(config) as client:
                definitions, full = await load_selection(client, criterion)
                # the domain only appears in the table title
                if output_json or not definitions:
                    return definitions, None
                resolver = DomainResolver(client, override=config.source_domain)
                return definitions, await resolver.resolve(full)

        definitions, domain = run_async(_list())

    if output_json:
        console.print_json(json.dumps([d.to_payload() for d in definitions]))
        return

    if not definitions:
        console.print(f"[yellow]No alert definitions found ({criterion.describe()}).[/yellow]")
        return

    title = "Alert Definitions"
    if domain is not None:
        title = f"{title} ({escape(domain)})"
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Subcategory", style="dim")
    table.add_column("Active")
    table.add_column("Favorite")

    for definition in definitions:
        table.add_row(
            str(definition.id) if definition.id is not None else "-",
            escape(definition.name),
            escape(definition.subcategory or ""),
            _flag(definition.is_active),
            _flag(definition.is_favorite),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(definitions)} alert definitions[/dim]")
