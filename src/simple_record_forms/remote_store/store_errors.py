"""Remote store error taxonomy."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

DOCUMENT_INVALID_STRUCTURE = "document_invalid_structure"


class StoreError(Exception):
    """Base class for failed store calls.

    Carries the backend's structured fields so callers can classify the failure
    without parsing ``str(error)``.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        error_type: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.error_type = error_type
        self.details = details


class TransportError(StoreError):
    """Raised when the store cannot be reached."""


class BackendError(StoreError):
    """Raised when the store rejects a request for a generic reason."""


class NotFoundError(StoreError):
    """Raised when the addressed record or collection does not exist."""


class ValidationError(StoreError):
    """Raised when the store rejects a record's shape or attribute types."""


def error_from_response(status_code: int, body: Any) -> StoreError:
    """Translate a non-2xx store response into the matching ``StoreError``."""
    payload: Mapping[str, Any] = body if isinstance(body, Mapping) else {}
    message = payload.get("message")
    if not isinstance(message, str) or not message:
        message = f"Store request failed with HTTP {status_code}."
    error_type = payload.get("type")
    if not isinstance(error_type, str):
        error_type = None
    kwargs = {"code": status_code, "error_type": error_type, "details": body}

    if status_code == 404:
        return NotFoundError(message, **kwargs)
    if error_type and error_type.startswith(("document_invalid", "attribute_")):
        return ValidationError(message, **kwargs)
    return BackendError(message, **kwargs)
