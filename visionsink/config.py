"""Environment-driven settings.

Reads ``VISIONSINK_*`` environment variables and an optional ``.env`` file.
Project and dataset have no usable defaults: ``destination_config()`` fails
fast when either is unset.

Examples
--------
::

    export VISIONSINK_PROJECT_ID=my-project
    export VISIONSINK_DATASET_ID=vision_analytics
    export VISIONSINK_UNKNOWN_SCHEMA_POLICY=fail
    export VISIONSINK_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from visionsink.models.destinations import (
    DEFAULT_TABLE_DESCRIPTION,
    DestinationConfig,
    UnknownSchemaPolicy,
)


class Settings(BaseSettings):
    """Runtime settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VISIONSINK_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Destination
    project_id: str = ""
    dataset_id: str = ""
    table_description: str = DEFAULT_TABLE_DESCRIPTION
    unknown_schema_policy: UnknownSchemaPolicy = UnknownSchemaPolicy.FALLBACK

    def destination_config(self, **overrides: object) -> DestinationConfig:
        """Build a validated ``DestinationConfig``; *overrides* win over settings.

        ``None`` overrides are ignored so CLI options can pass through unset.
        """
        values = {
            "project_id": self.project_id,
            "dataset_id": self.dataset_id,
            "table_description": self.table_description,
            "unknown_schema_policy": self.unknown_schema_policy,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return DestinationConfig(**values)


# Module-level singleton; import as `from visionsink.config import settings`
settings = Settings()
