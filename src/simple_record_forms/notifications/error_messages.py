"""Translation of store failures into short user-facing messages."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from simple_record_forms.remote_store.store_errors import DOCUMENT_INVALID_STRUCTURE

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
UNKNOWN_FIELD = "Unknown field"

_QUOTED_TOKEN = re.compile(r'"([^"]+)"')
_INVALID_TYPE_PREFIX = re.compile(r'Attribute "[^"]+" has invalid type\. ')


def extract_attribute_name(message: str) -> str | None:
    """Return the first double-quoted token of a backend message.

    Best effort: backend wording is not a stable contract, so a message that
    quotes something other than the attribute name yields that token instead.
    """
    match = _QUOTED_TOKEN.search(message or "")
    return match.group(1) if match else None


def classify(error: Any) -> str:
    """Map a store error, error mapping, or string onto a message for the user."""
    error_type = _read(error, "error_type", "type")
    message = _read(error, "message")

    if error_type == DOCUMENT_INVALID_STRUCTURE:
        attribute = extract_attribute_name(message or "") or UNKNOWN_FIELD
        return f"{attribute}: {_INVALID_TYPE_PREFIX.sub('', message or '', count=1)}"
    if message:
        return message
    if isinstance(error, str) and error.strip():
        return error
    return GENERIC_ERROR_MESSAGE


def _read(error: Any, *names: str) -> str | None:
    for name in names:
        if isinstance(error, Mapping):
            value = error.get(name)
        else:
            value = getattr(error, name, None)
        if isinstance(value, str) and value:
            return value
    if "message" in names and isinstance(error, BaseException):
        text = str(error)
        return text or None
    return None
