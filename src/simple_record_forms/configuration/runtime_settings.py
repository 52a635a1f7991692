"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from simple_record_forms.schema_management.schema_models import RecordSchema


@dataclass(frozen=True)
class StoreSettings:
    """Connection settings for the remote document store."""

    endpoint: str
    project_id: str
    database_id: str
    collection_id: str
    api_key: str | None = None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    store: StoreSettings
    schema: RecordSchema


DEFAULT_STORE_SETTINGS = StoreSettings(
    endpoint="https://fra.cloud.appwrite.io/v1",
    project_id="698223300022ead0aec7",
    database_id="698226cc00165f415310",
    collection_id="events",
)

# Setting attribute -> environment variable overriding it.
ENVIRONMENT_VARIABLES = {
    "endpoint": "APPWRITE_ENDPOINT",
    "project_id": "APPWRITE_PROJECT_ID",
    "database_id": "APPWRITE_DATABASE_ID",
    "collection_id": "APPWRITE_COLLECTION_ID",
    "api_key": "APPWRITE_API_KEY",
}
