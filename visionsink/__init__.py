"""visionsink: routes keyed Vision API annotation rows into per-key BigQuery tables.

Each ``(routing_key, row)`` pair is written to ``{project}:{dataset}.{routing_key}``
with a schema chosen from a fixed set of annotation schemas.  Table creation,
streaming inserts, retries and distributed execution are delegated to
Apache Beam's ``WriteToBigQuery``.
"""

import logging

__version__ = "0.2.0"
__description__ = "Dynamic BigQuery destination routing for Vision API annotations"

from visionsink.models.destinations import DestinationConfig, UnknownSchemaPolicy
from visionsink.routing.destinations import DestinationRouter
from visionsink.transforms import BigQueryDynamicWrite

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BigQueryDynamicWrite",
    "DestinationConfig",
    "DestinationRouter",
    "UnknownSchemaPolicy",
    "__version__",
]
