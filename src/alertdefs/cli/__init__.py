"""
CLI application for managing alert definitions.

Provides commands to list, export, apply, delete, enable/disable and copy alert
definitions across domains.
"""

from __future__ import annotations

from typing import Annotated

import typer
from dotenv import find_dotenv, load_dotenv

from alertdefs.cli.apply_cmd import alerts_apply
from alertdefs.cli.copy_cmd import alerts_copy
from alertdefs.cli.domain_cmd import alerts_domain
from alertdefs.cli.export_cmd import alerts_export
from alertdefs.cli.list_cmd import alerts_list
from alertdefs.cli.mutate import alerts_delete, alerts_disable, alerts_enable
from alertdefs.cli.utils import cli_errors, console

app = typer.Typer(
    name="alertdefs",
    help="Manage alert definitions: list, filter, enable/disable, delete and copy.",
    add_completion=False,
)

app.command("list")(alerts_list)
app.command("domain")(alerts_domain)
app.command("export")(alerts_export)
app.command("apply")(alerts_apply)
app.command("delete")(alerts_delete)
app.command("enable")(alerts_enable)
app.command("disable")(alerts_disable)
app.command("copy")(alerts_copy)


@app.callback()
def main(
    ctx: typer.Context,
    cloud: Annotated[
        str | None,
        typer.Option(
            "--cloud",
            "-c",
            help="Cloud region (us/eu/ap). Defaults to ALERTDEFS_CLOUD or us.",
            show_default=False,
        ),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option("--token", help="Source credential. Defaults to ALERTDEFS_TOKEN."),
    ] = None,
    domain: Annotated[
        str | None,
        typer.Option("--domain", help="Source domain label (skips domain lookup)."),
    ] = None,
    target_token: Annotated[
        str | None,
        typer.Option(
            "--target-token",
            help="Target credential for copy. Defaults to ALERTDEFS_TARGET_TOKEN.",
        ),
    ] = None,
    target_domain: Annotated[
        str | None,
        typer.Option("--target-domain", help="Target domain label (skips domain lookup)."),
    ] = None,
) -> None:
    """Alert definition management CLI."""
    from alertdefs.config import RunConfig

    load_dotenv(find_dotenv(usecwd=True))

    with cli_errors():
        ctx.obj = RunConfig.from_env(
            cloud=cloud,
            source_token=token,
            source_domain=domain,
            target_token=target_token,
            target_domain=target_domain,
        )


@app.command()
def version() -> None:
    """Show version information."""
    from alertdefs import __version__

    console.print(f"alertdefs v{__version__}")


__all__ = ["app"]
