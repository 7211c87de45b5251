"""Dynamic destination routing: routing key to BigQuery table and schema.

``DestinationRouter`` supplies the table, schema and table-property
callables that ``WriteToBigQuery`` consults per destination.
``SplitBySchema`` optionally peels off records whose annotation kind has
no registered schema.
"""

from visionsink.routing.destinations import (
    DestinationRouter,
    RoutedRow,
    schema_for,
    schema_suffix,
    table_destination_for,
    table_spec_for,
)
from visionsink.routing.partition import KNOWN_TAG, UNKNOWN_TAG, SplitBySchema

__all__ = [
    "DestinationRouter",
    "KNOWN_TAG",
    "RoutedRow",
    "SplitBySchema",
    "UNKNOWN_TAG",
    "schema_for",
    "schema_suffix",
    "table_destination_for",
    "table_spec_for",
]
