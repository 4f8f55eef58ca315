"""Show which domain the configured credentials belong to."""

from __future__ import annotations

import typer
from rich.markup import escape

from alertdefs.cli.utils import cli_errors, console, get_config, run_async


def alerts_domain(ctx: typer.Context) -> None:
    """Show the domain of the source (and target) credential."""
    from alertdefs.api.client import AlertDefinitionClient
    from alertdefs.domain import DomainResolver

    config = get_config(ctx)

    async def _resolve() -> tuple[str, str | None]:
        async with AlertDefinitionClient.for_source(config) as client:
            source = await DomainResolver(client, override=config.source_domain).resolve()
        if not config.target_token:
            return source, None
        async with AlertDefinitionClient.for_target(config) as client:
            target = await DomainResolver(client, override=config.target_domain).resolve()
        return source, target

    with cli_errors():
        source_domain, target_domain = run_async(_resolve())

    console.print(f"Source domain: [cyan]{escape(source_domain)}[/cyan]")
    if target_domain is not None:
        console.print(f"Target domain: [cyan]{escape(target_domain)}[/cyan]")
