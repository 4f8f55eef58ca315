"""Create or update alert definitions from a JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from pydantic import ValidationError

from alertdefs.api.exceptions import AlertAPIError, InputValidationError
from alertdefs.api.models import AlertDefinition
from alertdefs.cli.utils import cli_errors, console, get_config, print_progress, run_async

if TYPE_CHECKING:
    from alertdefs.api.models import MutationResult


def load_definitions_file(path: Path) -> tuple[list[AlertDefinition], bool]:
    """Load one definition (object) or several (array) from `path`.

    Returns:
        The definitions and whether the file held a single object.

    Raises:
        InputValidationError: If the file is missing, not JSON, or not definitions.
    """
    example = "alertdefs apply alerts.json"
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InputValidationError(f"File not found: {path}", example=example) from None
    except json.JSONDecodeError as e:
        raise InputValidationError(f"{path} is not valid JSON: {e}", example=example) from None

    single = isinstance(raw, dict)
    items = [raw] if single else raw
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise InputValidationError(
            f"{path} must contain an alert definition object or an array of them.",
            example=example,
        )
    try:
        definitions = [AlertDefinition.model_validate(item) for item in items]
    except ValidationError as e:
        raise InputValidationError(f"{path} has an invalid alert definition: {e}") from None
    return definitions, single


def alerts_apply(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="JSON file with one definition or a list.")],
) -> None:
    """Create or update alert definitions from a file (update when an id is present)."""
    from alertdefs.api.client import AlertDefinitionClient

    config = get_config(ctx)

    with cli_errors():
        definitions, single = load_definitions_file(path)

        async def _apply() -> list[MutationResult]:
            outcomes: list[MutationResult] = []
            async with AlertDefinitionClient.for_source(config) as client:
                for position, definition in enumerate(definitions, start=1):
                    outcome = await client.save(definition)
                    outcomes.append(outcome)
                    if not single:
                        print_progress(position, len(definitions), definition, outcome)
            return outcomes

        outcomes = run_async(_apply())

        if single:
            if not outcomes[0].ok:
                raise AlertAPIError(
                    outcomes[0].error or "unknown error", status_code=outcomes[0].status_code
                )
            verb = "Updated" if definitions[0].id is not None else "Created"
            console.print(f"[green]✓[/green] {verb} alert definition")
            return

    failed = sum(1 for outcome in outcomes if not outcome.ok)
    style = "green" if failed == 0 else "red"
    console.print(
        f"\n[{style}]Apply:[/{style}] processed {len(outcomes)}, "
        f"succeeded {len(outcomes) - failed}, failed {failed}"
    )
    if failed:
        raise typer.Exit(1)
