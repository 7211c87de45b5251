"""Option helpers shared by the resolve and load commands."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console

from visionsink.config import settings
from visionsink.models.destinations import DestinationConfig, UnknownSchemaPolicy


def build_destination_config(
    console: Console,
    project_id: str | None,
    dataset_id: str | None,
    strict: bool,
) -> DestinationConfig:
    """Merge CLI options over settings; exit with code 1 on invalid config."""
    policy = UnknownSchemaPolicy.FAIL if strict else None
    try:
        return settings.destination_config(
            project_id=project_id,
            dataset_id=dataset_id,
            unknown_schema_policy=policy,
        )
    except ValidationError as exc:
        console.print("[red]Invalid destination configuration:[/red]")
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"  {field}: {error['msg']}")
        raise typer.Exit(code=1) from exc
