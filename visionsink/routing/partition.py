"""Dead-letter split for routing keys without a registered schema.

Apply ``SplitBySchema`` ahead of ``BigQueryDynamicWrite`` when records with
unrecognised annotation kinds should go to a separate sink instead of a
table built on the fallback schema::

    outputs = pairs | SplitBySchema()
    outputs.known | BigQueryDynamicWrite(config)
    outputs.unknown | beam.io.WriteToText("gs://bucket/unrouted")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import apache_beam as beam
from apache_beam import pvalue

from visionsink.errors import MalformedRoutingKeyError
from visionsink.schemas import is_known_suffix

logger = logging.getLogger(__name__)

KNOWN_TAG = "known"
UNKNOWN_TAG = "unknown"


class _TagBySchemaFn(beam.DoFn):
    def process(self, element: tuple[str, Mapping[str, Any]]):
        routing_key, _row = element
        if not routing_key:
            raise MalformedRoutingKeyError("Routing key must be a non-empty string")
        if is_known_suffix(routing_key):
            yield element
        else:
            logger.debug("Routing key %s has no schema; sending to %s", routing_key, UNKNOWN_TAG)
            yield pvalue.TaggedOutput(UNKNOWN_TAG, element)


class SplitBySchema(beam.PTransform):
    """Split ``(routing_key, row)`` pairs into ``known`` and ``unknown`` outputs."""

    def expand(self, pcoll):
        return pcoll | "Tag by schema" >> beam.ParDo(_TagBySchemaFn()).with_outputs(
            UNKNOWN_TAG, main=KNOWN_TAG
        )
