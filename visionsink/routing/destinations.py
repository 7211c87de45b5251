"""DestinationRouter — maps routing keys to BigQuery tables and schemas.

For a pair ``(routing_key, row)`` the router computes:

- the table spec ``{project}:{dataset}.{routing_key}``;
- a ``TableDestination`` carrying the configured table description;
- the table schema, chosen by the suffix after the dataset separator.

All functions here are pure: they depend only on their arguments and the
frozen ``DestinationConfig``, so Beam workers may call them concurrently
and as often as they like.  ``WriteToBigQuery`` caches created tables per
destination on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from visionsink.errors import MalformedRoutingKeyError, UnknownSchemaError
from visionsink.models.destinations import (
    DestinationConfig,
    ResolvedDestination,
    TableDestination,
    UnknownSchemaPolicy,
)
from visionsink.schemas import DEFAULT_SCHEMA_KEY, get_schema, is_known_suffix

logger = logging.getLogger(__name__)


class RoutedRow(dict):
    """A record bound for a specific table.

    The mapping holds exactly the input record's items; the destination is
    carried on the ``table_spec`` attribute and is never written as a column.
    """

    def __init__(self, row: Mapping[str, Any], table_spec: str) -> None:
        super().__init__(row)
        self.table_spec = table_spec

    def __reduce__(self):
        return (RoutedRow, (dict(self), self.table_spec))


# ----------------------------------------------------------------------
# Pure resolution functions
# ----------------------------------------------------------------------


def table_spec_for(config: DestinationConfig, routing_key: str) -> str:
    """Return ``"{project}:{dataset}.{routing_key}"``."""
    if not routing_key:
        raise MalformedRoutingKeyError("Routing key must be a non-empty string")
    table_spec = f"{config.project_id}:{config.dataset_id}.{routing_key}"
    logger.debug("Table Name %s", table_spec)
    return table_spec


def table_destination_for(config: DestinationConfig, table_spec: str) -> TableDestination:
    dest = TableDestination(table_spec=table_spec, description=config.table_description)
    logger.debug("Table Destination %s", dest.table_spec)
    return dest


def schema_suffix(table_spec: str) -> str:
    """Extract the schema suffix from a qualified table spec.

    The project part (up to the last ``:``) is dropped first, since
    domain-scoped projects such as ``example.com:proj`` contain dots.  The
    suffix is everything after the first ``.`` of what remains.

    Raises
    ------
    MalformedRoutingKeyError
        If there is no ``.`` or nothing follows it.
    """
    qualified_name = table_spec.rsplit(":", 1)[-1]
    _, sep, suffix = qualified_name.partition(".")
    if not sep or not suffix:
        raise MalformedRoutingKeyError(
            f"Table spec {table_spec!r} has no schema suffix after a '.' separator"
        )
    logger.debug("Table Key %s", suffix)
    return suffix


def schema_for(config: DestinationConfig, table_spec: str) -> dict[str, Any]:
    """Return the schema for *table_spec*, applying the unknown-suffix policy."""
    suffix = schema_suffix(table_spec)
    if is_known_suffix(suffix):
        schema = get_schema(suffix)
    elif config.unknown_schema_policy is UnknownSchemaPolicy.FAIL:
        raise UnknownSchemaError(suffix, table_spec)
    else:
        logger.warning(
            "No schema for suffix %s; creating %s with the %s schema",
            suffix,
            table_spec,
            DEFAULT_SCHEMA_KEY,
        )
        schema = get_schema(DEFAULT_SCHEMA_KEY)
    logger.debug("Schema %s", schema)
    return schema


# ----------------------------------------------------------------------
# Stage-facing router
# ----------------------------------------------------------------------


class DestinationRouter:
    """Callables handed to ``WriteToBigQuery`` for dynamic destinations.

    Usage
    -----
    >>> router = DestinationRouter(DestinationConfig(project_id="p", dataset_id="d"))
    >>> router.resolve("LOGO_ANNOTATION").table_spec
    'p:d.LOGO_ANNOTATION'
    """

    def __init__(self, config: DestinationConfig) -> None:
        self._config = config

    @property
    def config(self) -> DestinationConfig:
        return self._config

    def route(self, routing_key: str, row: Mapping[str, Any]) -> RoutedRow:
        """Bind *row* to the table for *routing_key* without changing it."""
        return RoutedRow(row, table_spec_for(self._config, routing_key))

    def table_for(self, element: RoutedRow) -> str:
        return element.table_spec

    def description_for(self, table_spec: str) -> str:
        return table_destination_for(self._config, table_spec).description

    def schema_for(self, table_spec: str) -> dict[str, Any]:
        return schema_for(self._config, table_spec)

    def table_properties(self) -> dict[str, Any]:
        """Extra table properties applied to every table the sink creates.

        The description does not vary by destination, so this is a plain
        mapping rather than a per-table callable.
        """
        return {"description": self._config.table_description}

    def resolve(self, routing_key: str) -> ResolvedDestination:
        """Resolve everything for *routing_key* in one go."""
        table_spec = table_spec_for(self._config, routing_key)
        suffix = schema_suffix(table_spec)
        return ResolvedDestination(
            routing_key=routing_key,
            destination=table_destination_for(self._config, table_spec),
            suffix=suffix,
            table_schema=self.schema_for(table_spec),
            schema_known=is_known_suffix(suffix),
        )
