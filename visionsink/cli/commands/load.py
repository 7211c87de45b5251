"""``visionsink load`` — write keyed JSON rows to BigQuery via Beam.

Input is newline-delimited JSON, one object per line::

    {"key": "LABEL_ANNOTATION", "row": {"gcs_uri": "gs://b/cat.jpg", ...}}

Any arguments not recognised by this command are passed to Beam as
pipeline options (``--runner``, ``--temp_location`` and so on).
"""

from __future__ import annotations

import json
import logging

import apache_beam as beam
import typer
from apache_beam.options.pipeline_options import PipelineOptions
from rich.console import Console

from visionsink.cli.commands._options import build_destination_config
from visionsink.config import settings
from visionsink.log import configure_logging
from visionsink.routing.partition import SplitBySchema
from visionsink.transforms import BigQueryDynamicWrite

console = Console()
logger = logging.getLogger(__name__)


def parse_keyed_row(line: str) -> tuple[str, dict]:
    """Parse one input line into a ``(routing_key, row)`` pair."""
    record = json.loads(line)
    return record["key"], record["row"]


def load_cmd(
    ctx: typer.Context,
    input_path: str = typer.Argument(..., help="File pattern of newline-delimited JSON input."),
    project_id: str | None = typer.Option(None, "--project", "-p", help="BigQuery project ID."),
    dataset_id: str | None = typer.Option(None, "--dataset", "-d", help="BigQuery dataset ID."),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on suffixes without a schema instead of falling back."
    ),
    dead_letter: str | None = typer.Option(
        None,
        "--dead-letter",
        help="Write rows with unknown suffixes to this path prefix instead of BigQuery.",
    ),
) -> None:
    """Read keyed rows and write each to its routed BigQuery table."""
    configure_logging(settings.log_level)
    config = build_destination_config(console, project_id, dataset_id, strict)
    options = PipelineOptions(ctx.args)

    console.print(
        f"[bold]Loading[/bold] {input_path} -> [green]{config.project_id}:{config.dataset_id}.*[/green]"
    )
    with beam.Pipeline(options=options) as pipeline:
        pairs = (
            pipeline
            | "Read" >> beam.io.ReadFromText(input_path)
            | "Parse" >> beam.Map(parse_keyed_row)
        )
        if dead_letter:
            outputs = pairs | "Split" >> SplitBySchema()
            pairs = outputs.known
            (
                outputs.unknown
                | "Encode unknown" >> beam.MapTuple(lambda key, row: json.dumps({"key": key, "row": row}))
                | "Write unknown" >> beam.io.WriteToText(dead_letter, file_name_suffix=".json")
            )
        pairs | "Write" >> BigQueryDynamicWrite(config)

    logger.info("Pipeline finished for %s", input_path)
    console.print("[bold green]Done.[/bold green]")
