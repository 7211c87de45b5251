"""The pipeline stage that writes routed rows to BigQuery.

Consumes ``PCollection[tuple[str, Mapping]]`` of ``(routing_key, row)``
pairs and returns whatever ``WriteToBigQuery`` returns (its ``WriteResult``
with failed-row outputs).  Write policy: append, create tables on demand,
no up-front validation, no insert-id deduplication.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import apache_beam as beam
from apache_beam.io.gcp.bigquery import BigQueryDisposition

from visionsink.models.destinations import DestinationConfig
from visionsink.routing.destinations import DestinationRouter

if TYPE_CHECKING:
    from visionsink.config import Settings

logger = logging.getLogger(__name__)


class BigQueryDynamicWrite(beam.PTransform):
    """Route each ``(routing_key, row)`` pair to its own BigQuery table.

    Parameters
    ----------
    config:
        Project, dataset, table description and unknown-suffix policy.
    """

    def __init__(self, config: DestinationConfig, label: str | None = None) -> None:
        super().__init__(label)
        self.config = config
        self.router = DestinationRouter(config)

    @classmethod
    def from_settings(cls, settings: Settings) -> BigQueryDynamicWrite:
        """Build from environment settings; fails if project or dataset is unset."""
        return cls(settings.destination_config())

    def write_parameters(self) -> dict[str, Any]:
        """Keyword arguments handed to ``WriteToBigQuery``.

        ``additional_bq_parameters`` is a plain mapping: the streaming-insert
        path passes it unevaluated into every table it creates.
        """
        return {
            "table": self.router.table_for,
            "schema": self.router.schema_for,
            "additional_bq_parameters": self.router.table_properties(),
            "write_disposition": BigQueryDisposition.WRITE_APPEND,
            "create_disposition": BigQueryDisposition.CREATE_IF_NEEDED,
            "method": beam.io.WriteToBigQuery.Method.STREAMING_INSERTS,
            "ignore_insert_ids": True,
            "validate": False,
        }

    def expand(self, pcoll):
        logger.info(
            "Writing routed rows to %s:%s.* (unknown suffix policy: %s)",
            self.config.project_id,
            self.config.dataset_id,
            self.config.unknown_schema_policy.value,
        )
        return (
            pcoll
            | "Route" >> beam.MapTuple(self.router.route)
            | "BQ Write" >> beam.io.WriteToBigQuery(**self.write_parameters())
        )
