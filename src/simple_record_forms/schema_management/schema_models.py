"""Schema management entities."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class FieldType(str, Enum):
    """Scalar attribute kinds supported by the record store."""

    STRING = "string"
    DATETIME = "datetime"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    EMAIL = "email"
    URL = "url"


@dataclass(frozen=True)
class FieldSpec:
    """One record attribute as shown in forms and list cards."""

    key: str
    label: str
    type: FieldType = FieldType.STRING
    required: bool = False


@dataclass(frozen=True)
class RecordSchema:
    """Ordered, immutable field declaration shared by every screen."""

    fields: tuple[FieldSpec, ...]

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def keys(self) -> tuple[str, ...]:
        return tuple(field.key for field in self.fields)

    def required_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(field for field in self.fields if field.required)

    def field(self, key: str) -> FieldSpec:
        """Return the field declared under ``key``.

        Raises:
          KeyError: If the schema does not declare ``key``.
        """
        for candidate in self.fields:
            if candidate.key == key:
                return candidate
        raise KeyError(key)
