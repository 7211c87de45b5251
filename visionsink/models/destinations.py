"""Destination configuration and descriptor models.

``DestinationConfig`` is built once per pipeline and validated on
construction; every routing decision is a pure function of it and the
routing key.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TABLE_DESCRIPTION = "vision api data from dataflow"


class UnknownSchemaPolicy(str, Enum):
    """What to do when a routing key's suffix has no registered schema."""

    FALLBACK = "fallback"  # label-annotation schema, logged as a warning
    FAIL = "fail"


class DestinationConfig(BaseModel):
    """Project and dataset that every routed table lives under.

    Both identifiers are required and must be non-blank.  The dataset is
    restricted to BigQuery's dataset alphabet so that the first ``.`` in a
    qualified table name always separates dataset from routing key.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    project_id: str = Field(min_length=1)
    dataset_id: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_]+$")
    table_description: str = DEFAULT_TABLE_DESCRIPTION
    unknown_schema_policy: UnknownSchemaPolicy = UnknownSchemaPolicy.FALLBACK

    @field_validator("project_id")
    @classmethod
    def _project_has_no_dataset_separator(cls, value: str) -> str:
        # "example.com:my-project" is fine; a trailing ".x" after the last ':' is not
        if "." in value.rsplit(":", 1)[-1]:
            raise ValueError(f"project_id {value!r} must not end in a dotted segment")
        return value


class TableDestination(BaseModel):
    """A write target: fully qualified table spec plus table description."""

    model_config = ConfigDict(frozen=True)

    table_spec: str
    description: str


class ResolvedDestination(BaseModel):
    """Everything the router decides for one routing key."""

    model_config = ConfigDict(frozen=True)

    routing_key: str
    destination: TableDestination
    suffix: str
    table_schema: dict[str, Any]
    schema_known: bool

    @property
    def table_spec(self) -> str:
        return self.destination.table_spec
