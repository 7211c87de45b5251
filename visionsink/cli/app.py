"""Main Typer application — registers all CLI commands.

Entry point: ``visionsink`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from visionsink.cli.commands.load import load_cmd
from visionsink.cli.commands.resolve import resolve_cmd
from visionsink.cli.commands.schemas import schemas_cmd

app = typer.Typer(
    name="visionsink",
    help="visionsink: route Vision API annotation rows into per-kind BigQuery tables.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="schemas", help="List the annotation kinds that have a schema.")(schemas_cmd)
app.command(name="resolve", help="Show the table and schema chosen for routing keys.")(resolve_cmd)
app.command(
    name="load",
    help="Run a Beam pipeline writing keyed JSON rows to BigQuery.",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(load_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
