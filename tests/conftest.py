"""Shared test fixtures for visionsink."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import apache_beam as beam
import pytest
from apache_beam.io.gcp.bigquery import WriteToBigQuery

from visionsink.models.destinations import DestinationConfig, UnknownSchemaPolicy
from visionsink.routing.destinations import DestinationRouter


@pytest.fixture
def config() -> DestinationConfig:
    """Provide the proj1/ds1 destination config with default policy."""
    return DestinationConfig(project_id="proj1", dataset_id="ds1")


@pytest.fixture
def strict_config() -> DestinationConfig:
    """Provide a config that fails on unknown suffixes."""
    return DestinationConfig(
        project_id="proj1",
        dataset_id="ds1",
        unknown_schema_policy=UnknownSchemaPolicy.FAIL,
    )


@pytest.fixture
def router(config: DestinationConfig) -> DestinationRouter:
    return DestinationRouter(config)


@pytest.fixture
def make_row() -> Callable[..., dict[str, Any]]:
    """Factory fixture: build an annotation row with sensible defaults."""

    def _factory(feature_type: str = "LABEL_DETECTION", **overrides: Any) -> dict[str, Any]:
        defaults: dict[str, Any] = {
            "gcs_uri": "gs://vision-bucket/images/cat.jpg",
            "feature_type": feature_type,
            "transaction_timestamp": "2026-10-19T12:00:00Z",
            "mid": "/m/01yrx",
            "description": "Cat",
            "score": 0.98,
            "topicality": 0.98,
        }
        defaults.update(overrides)
        return defaults

    return _factory


# ---------------------------------------------------------------------------
# BigQuery sink stand-in
# ---------------------------------------------------------------------------


class CapturingBigQueryWrite(beam.PTransform):
    """Records WriteToBigQuery arguments and emits what would be written.

    Each output element is ``(table_spec, column_count, description, row)``.
    The real sink contract is covered by ``test_bigquery_sink.py``.
    """

    Method = WriteToBigQuery.Method
    captured: list[dict[str, Any]] = []

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__()
        self.kwargs = kwargs
        CapturingBigQueryWrite.captured.append(kwargs)

    def expand(self, pcoll):
        table_fn = self.kwargs["table"]
        schema_fn = self.kwargs["schema"]
        table_properties = self.kwargs["additional_bq_parameters"]

        def _describe(row):
            table_spec = table_fn(row)
            return (
                table_spec,
                len(schema_fn(table_spec)["fields"]),
                table_properties["description"],
                dict(row),
            )

        return pcoll | "Capture" >> beam.Map(_describe)


@pytest.fixture
def fake_bigquery(monkeypatch: pytest.MonkeyPatch) -> type[CapturingBigQueryWrite]:
    """Replace ``beam.io.WriteToBigQuery`` with ``CapturingBigQueryWrite``."""
    CapturingBigQueryWrite.captured = []
    monkeypatch.setattr(beam.io, "WriteToBigQuery", CapturingBigQueryWrite)
    return CapturingBigQueryWrite


@pytest.fixture(autouse=True)
def _reset_visionsink_logging():
    """Drop handlers installed by ``configure_logging`` during a test."""
    logger = logging.getLogger("visionsink")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
