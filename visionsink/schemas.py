"""BigQuery table schemas for each Vision API annotation kind.

Schemas are expressed in the JSON form that ``apache_beam.io.WriteToBigQuery``
accepts for its ``schema`` argument::

    {"fields": [{"name": "...", "type": "STRING", "mode": "NULLABLE"}, ...]}

``SCHEMAS`` is read-only and keyed by the exact, case-sensitive table
suffix (the routing key).  ``get_schema`` hands out deep copies.
"""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any


def _field(name: str, type_: str, mode: str = "NULLABLE", fields: list | None = None) -> dict[str, Any]:
    field: dict[str, Any] = {"name": name, "type": type_, "mode": mode}
    if fields is not None:
        field["fields"] = fields
    return field


def _common_fields() -> list[dict[str, Any]]:
    """Columns every annotation row carries."""
    return [
        _field("gcs_uri", "STRING", "REQUIRED"),
        _field("feature_type", "STRING", "REQUIRED"),
        _field("transaction_timestamp", "TIMESTAMP", "REQUIRED"),
    ]


def _bounding_poly(name: str = "bounding_poly") -> dict[str, Any]:
    vertex = [_field("x", "INT64"), _field("y", "INT64")]
    return _field(name, "RECORD", fields=[_field("vertices", "RECORD", "REPEATED", vertex)])


def _entity_fields() -> list[dict[str, Any]]:
    return [
        _field("mid", "STRING"),
        _field("description", "STRING"),
        _field("score", "FLOAT64"),
    ]


LABEL_ANNOTATION_SCHEMA: dict[str, Any] = {
    "fields": _common_fields() + _entity_fields() + [_field("topicality", "FLOAT64")]
}

LANDMARK_ANNOTATION_SCHEMA: dict[str, Any] = {
    "fields": _common_fields()
    + _entity_fields()
    + [
        _bounding_poly(),
        _field(
            "locations",
            "RECORD",
            "REPEATED",
            [_field("latitude", "FLOAT64"), _field("longitude", "FLOAT64")],
        ),
    ]
}

LOGO_ANNOTATION_SCHEMA: dict[str, Any] = {
    "fields": _common_fields() + _entity_fields() + [_bounding_poly()]
}

FACE_ANNOTATION_SCHEMA: dict[str, Any] = {
    "fields": _common_fields()
    + [
        _bounding_poly(),
        _bounding_poly("fd_bounding_poly"),
        _field(
            "landmarks",
            "RECORD",
            "REPEATED",
            [
                _field("type", "STRING"),
                _field(
                    "position",
                    "RECORD",
                    fields=[_field("x", "FLOAT64"), _field("y", "FLOAT64"), _field("z", "FLOAT64")],
                ),
            ],
        ),
        _field("roll_angle", "FLOAT64"),
        _field("pan_angle", "FLOAT64"),
        _field("tilt_angle", "FLOAT64"),
        _field("detection_confidence", "FLOAT64"),
        _field("landmarking_confidence", "FLOAT64"),
        _field("joy_likelihood", "STRING"),
        _field("sorrow_likelihood", "STRING"),
        _field("anger_likelihood", "STRING"),
        _field("surprise_likelihood", "STRING"),
        _field("under_exposed_likelihood", "STRING"),
        _field("blurred_likelihood", "STRING"),
        _field("headwear_likelihood", "STRING"),
    ]
}

CROP_HINTS_ANNOTATION_SCHEMA: dict[str, Any] = {
    "fields": _common_fields()
    + [
        _bounding_poly(),
        _field("confidence", "FLOAT64"),
        _field("importance_fraction", "FLOAT64"),
    ]
}

IMAGE_PROPERTIES_SCHEMA: dict[str, Any] = {
    "fields": _common_fields()
    + [
        _field(
            "dominant_colors",
            "RECORD",
            "REPEATED",
            [
                _field(
                    "color",
                    "RECORD",
                    fields=[
                        _field("red", "FLOAT64"),
                        _field("green", "FLOAT64"),
                        _field("blue", "FLOAT64"),
                        _field("alpha", "FLOAT64"),
                    ],
                ),
                _field("score", "FLOAT64"),
                _field("pixel_fraction", "FLOAT64"),
            ],
        ),
    ]
}

DEFAULT_SCHEMA_KEY = "LABEL_ANNOTATION"

SCHEMAS: MappingProxyType[str, dict[str, Any]] = MappingProxyType(
    {
        "LABEL_ANNOTATION": LABEL_ANNOTATION_SCHEMA,
        "LANDMARK_ANNOTATION": LANDMARK_ANNOTATION_SCHEMA,
        "LOGO_ANNOTATION": LOGO_ANNOTATION_SCHEMA,
        "FACE_ANNOTATION": FACE_ANNOTATION_SCHEMA,
        "CROP_HINTS_ANNOTATION": CROP_HINTS_ANNOTATION_SCHEMA,
        "IMAGE_PROPERTIES": IMAGE_PROPERTIES_SCHEMA,
    }
)


def is_known_suffix(suffix: str) -> bool:
    """Whether *suffix* has its own schema (exact, case-sensitive match)."""
    return suffix in SCHEMAS


def get_schema(suffix: str) -> dict[str, Any]:
    """Return a copy of the schema registered for *suffix*.

    Raises
    ------
    KeyError
        If *suffix* is not one of the known annotation kinds.
    """
    return copy.deepcopy(SCHEMAS[suffix])


def default_schema() -> dict[str, Any]:
    """Return a copy of the label-annotation schema."""
    return get_schema(DEFAULT_SCHEMA_KEY)


def schema_field_names(schema: dict[str, Any]) -> list[str]:
    """Top-level column names of *schema*, in declaration order."""
    return [field["name"] for field in schema["fields"]]
