"""``visionsink schemas`` — list the registered annotation schemas."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from visionsink.schemas import DEFAULT_SCHEMA_KEY, SCHEMAS, schema_field_names

console = Console()


def schemas_cmd(
    show_fields: bool = typer.Option(
        False, "--fields", "-f", help="Also list each schema's top-level columns."
    ),
) -> None:
    """List every routing-key suffix with a dedicated schema."""
    table = Table(title="Annotation Schemas")
    table.add_column("Suffix", style="cyan")
    table.add_column("Columns", justify="right")
    table.add_column("Default", justify="center")
    if show_fields:
        table.add_column("Fields")

    for suffix, schema in SCHEMAS.items():
        names = schema_field_names(schema)
        row = [suffix, str(len(names)), "[green]Yes[/green]" if suffix == DEFAULT_SCHEMA_KEY else ""]
        if show_fields:
            row.append(", ".join(names))
        table.add_row(*row)

    console.print(table)
