"""visionsink data models — all Pydantic v2, all frozen (immutable)."""

from visionsink.models.destinations import (
    DEFAULT_TABLE_DESCRIPTION,
    DestinationConfig,
    ResolvedDestination,
    TableDestination,
    UnknownSchemaPolicy,
)

__all__ = [
    "DEFAULT_TABLE_DESCRIPTION",
    "DestinationConfig",
    "ResolvedDestination",
    "TableDestination",
    "UnknownSchemaPolicy",
]
