"""Schema declaration and validation service."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .schema_models import FieldSpec, FieldType, RecordSchema


class SchemaError(Exception):
    """Raised for invalid field declarations."""


def build_schema(entries: Iterable[FieldSpec]) -> RecordSchema:
    """Validate field declarations and freeze them into a schema."""
    fields: list[FieldSpec] = []
    seen_keys: set[str] = set()
    for entry in entries:
        if not entry.key or not entry.key.strip():
            raise SchemaError("Field key must not be empty.")
        if not entry.label or not entry.label.strip():
            raise SchemaError(f"Field '{entry.key}' requires a label.")
        if not isinstance(entry.type, FieldType):
            raise SchemaError(f"Field '{entry.key}' has unsupported type: {entry.type!r}")
        if entry.key in seen_keys:
            raise SchemaError(f"Duplicate field key detected: {entry.key}")
        seen_keys.add(entry.key)
        fields.append(entry)
    if not fields:
        raise SchemaError("Schema must declare at least one field.")
    return RecordSchema(fields=tuple(fields))


def parse_field_entries(raw_entries: Any) -> RecordSchema:
    """Build a schema from configuration mappings of ``key/label/type/required``."""
    if isinstance(raw_entries, (str, bytes)) or not isinstance(raw_entries, Sequence):
        raise SchemaError("schema.fields must be a list of field mappings.")
    return build_schema(
        _parse_field_entry(entry, index) for index, entry in enumerate(raw_entries)
    )


def _parse_field_entry(entry: Any, index: int) -> FieldSpec:
    if not isinstance(entry, Mapping):
        raise SchemaError(f"schema.fields[{index}] must be a mapping.")
    key = entry.get("key")
    if not isinstance(key, str) or not key.strip():
        raise SchemaError(f"schema.fields[{index}].key must be a non-empty string.")
    label = entry.get("label", key)
    if not isinstance(label, str):
        raise SchemaError(f"schema.fields[{index}].label must be a string.")
    raw_type = entry.get("type", FieldType.STRING.value)
    try:
        field_type = FieldType(raw_type)
    except ValueError as exc:
        supported = ", ".join(member.value for member in FieldType)
        raise SchemaError(
            f"schema.fields[{index}].type '{raw_type}' is not one of: {supported}"
        ) from exc
    required = entry.get("required", False)
    if not isinstance(required, bool):
        raise SchemaError(f"schema.fields[{index}].required must be true or false.")
    return FieldSpec(key=key.strip(), label=label.strip(), type=field_type, required=required)


DEFAULT_SCHEMA = build_schema(
    (
        FieldSpec(key="EventName", label="Event Name", type=FieldType.STRING, required=True),
        FieldSpec(key="location", label="Location", type=FieldType.STRING, required=True),
        FieldSpec(key="time", label="Time", type=FieldType.DATETIME, required=True),
        FieldSpec(key="host", label="Host", type=FieldType.STRING, required=True),
    )
)
