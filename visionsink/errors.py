"""Exceptions raised while resolving BigQuery destinations.

Configuration problems surface as ``pydantic.ValidationError`` at
construction time.  Write-path failures (quota, transient network errors,
schema mismatches at insert time) belong to Apache Beam and are not
classified here.
"""

from __future__ import annotations


class VisionSinkError(RuntimeError):
    """Base class for visionsink errors."""


class MalformedRoutingKeyError(VisionSinkError, ValueError):
    """Raised when a routing key or table spec has no parsable schema suffix.

    This is a caller contract violation and is never defaulted.
    """


class UnknownSchemaError(VisionSinkError, KeyError):
    """Raised under the ``fail`` policy when a suffix has no known schema."""

    def __init__(self, suffix: str, table_spec: str) -> None:
        self.suffix = suffix
        self.table_spec = table_spec
        super().__init__(f"No schema registered for suffix {suffix!r} (table {table_spec})")

    def __str__(self) -> str:
        return self.args[0]
