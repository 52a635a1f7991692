"""Remote store exports."""

from .document_store_client import DocumentStoreClient, RecordStore
from .store_errors import (
    BackendError,
    NotFoundError,
    StoreError,
    TransportError,
    ValidationError,
)
from .store_models import ListQuery, Record

__all__ = [
    "DocumentStoreClient",
    "RecordStore",
    "ListQuery",
    "Record",
    "StoreError",
    "TransportError",
    "BackendError",
    "NotFoundError",
    "ValidationError",
]
