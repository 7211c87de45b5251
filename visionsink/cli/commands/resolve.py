"""``visionsink resolve`` — dry-run destination resolution.

Prints, per routing key, the table spec, description, schema suffix and
whether the suffix has its own schema.  No pipeline is started and nothing
is written.
"""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table

from visionsink.cli.commands._options import build_destination_config
from visionsink.errors import VisionSinkError
from visionsink.routing.destinations import DestinationRouter
from visionsink.schemas import schema_field_names

console = Console()


def resolve_cmd(
    routing_keys: list[str] = typer.Argument(..., help="Routing keys to resolve."),
    project_id: str | None = typer.Option(None, "--project", "-p", help="BigQuery project ID."),
    dataset_id: str | None = typer.Option(None, "--dataset", "-d", help="BigQuery dataset ID."),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on suffixes without a schema instead of falling back."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """Resolve routing keys to their BigQuery destination and schema."""
    config = build_destination_config(console, project_id, dataset_id, strict)
    router = DestinationRouter(config)

    resolved = []
    for key in routing_keys:
        try:
            resolved.append(router.resolve(key))
        except VisionSinkError as exc:
            console.print(f"[red]{key!r}:[/red] {exc}")
            raise typer.Exit(code=1) from exc

    if as_json:
        payload = [r.model_dump(mode="json") for r in resolved]
        console.print_json(json.dumps(payload))
        return

    table = Table(title="Resolved Destinations")
    table.add_column("Routing Key", style="cyan")
    table.add_column("Table Spec", style="green")
    table.add_column("Description")
    table.add_column("Schema")
    for r in resolved:
        label = r.suffix if r.schema_known else "[yellow]LABEL_ANNOTATION (fallback)[/yellow]"
        table.add_row(
            r.routing_key,
            r.table_spec,
            r.destination.description,
            f"{label} ({len(schema_field_names(r.table_schema))} columns)",
        )
    console.print(table)
