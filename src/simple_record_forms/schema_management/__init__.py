"""Schema management exports."""

from .schema_definition import (
    DEFAULT_SCHEMA,
    SchemaError,
    build_schema,
    parse_field_entries,
)
from .schema_models import FieldSpec, FieldType, RecordSchema

__all__ = [
    "DEFAULT_SCHEMA",
    "FieldSpec",
    "FieldType",
    "RecordSchema",
    "SchemaError",
    "build_schema",
    "parse_field_entries",
]
