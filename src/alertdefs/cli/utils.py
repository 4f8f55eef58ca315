"""Shared utilities for CLI commands (console output, errors, prompts, async helpers)."""

from __future__ import annotations

import asyncio
import json
import os
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from alertdefs.api.exceptions import (
    AlertAPIError,
    AlertDefsError,
    AlertServiceConnectionError,
    InputValidationError,
    UserAbortError,
)

if TYPE_CHECKING:
    from collections.abc import Coroutine, Iterator, Sequence
    from pathlib import Path

    from alertdefs.api.models import AlertDefinition, MutationResult
    from alertdefs.batch import BatchResult
    from alertdefs.config import RunConfig

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def exit_with_error(error: AlertDefsError) -> NoReturn:
    """Print a diagnostic for `error` and exit with the matching status code."""
    if isinstance(error, InputValidationError):
        console.print(f"[red]Error:[/red] {error.message}")
        if error.example:
            console.print(f"[dim]Example: {error.example}[/dim]")
        raise typer.Exit(2)
    if isinstance(error, AlertServiceConnectionError):
        console.print(f"[red]Connection failed:[/red] {error}")
        raise typer.Exit(1)
    if isinstance(error, AlertAPIError):
        console.print(f"[red]Operation failed:[/red] {error}")
        raise typer.Exit(1)
    if isinstance(error, UserAbortError):
        console.print("[yellow]Aborted.[/yellow] No changes were made.")
        raise typer.Exit(1)
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Translate `AlertDefsError`s raised inside the block into CLI exits."""
    try:
        yield
    except AlertDefsError as e:
        exit_with_error(e)


def get_config(ctx: typer.Context) -> RunConfig:
    """Return the `RunConfig` built by the app callback."""
    from alertdefs.config import RunConfig

    config = ctx.obj
    if not isinstance(config, RunConfig):
        raise RuntimeError("RunConfig missing from CLI context")
    return config


def confirm_names(summary: str, names: Sequence[str]) -> bool:
    """Show every affected name and ask for an explicit `y`."""
    console.print(f"\n[bold]{summary}[/bold]")
    for name in names:
        console.print(f"  - {escape(name)}")
    answer = typer.prompt("Proceed? [y/N]", default="", show_default=False)
    return answer.strip().lower() == "y"


def print_progress(
    position: int, total: int, definition: AlertDefinition, outcome: MutationResult
) -> None:
    """Print one `[count/length]` line for a per-item mutation."""
    if outcome.ok:
        console.print(f"[{position}/{total}] [green]✓[/green] {escape(definition.name)}")
    else:
        console.print(
            f"[{position}/{total}] [red]✗[/red] {escape(definition.name)}: "
            f"{escape(str(outcome.error))}"
        )


def print_batch_result(result: BatchResult) -> None:
    """Print the processed/succeeded/failed summary of a batch."""
    style = "green" if result.ok else "red"
    console.print(
        f"\n[{style}]{result.operation.value.capitalize()}:[/{style}] "
        f"processed {result.processed}, succeeded {result.succeeded}, failed {result.failed}"
    )
    for error in result.errors:
        console.print(f"  [red]-[/red] {escape(error)}")


def print_truncation_warning(count: int) -> None:
    console.print(
        f"[yellow]Warning:[/yellow] fetched {count} alert definitions, the maximum page size; "
        "results may be incomplete."
    )


def atomic_write_json(path: Path, data: Any) -> None:
    """Write JSON atomically (temp file + fsync + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp.{uuid.uuid4().hex}")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)
