"""Remote store entities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

CREATED_AT_ATTRIBUTE = "$createdAt"


@dataclass(frozen=True)
class Record:
    """Client-side copy of one stored document."""

    record_id: str
    values: Mapping[str, Any]
    created_at: str | None = None
    updated_at: str | None = None
    collection_id: str | None = None

    @staticmethod
    def from_document(document: Mapping[str, Any]) -> Record:
        """Split a store document into system metadata and user attributes."""
        record_id = document.get("$id")
        if not isinstance(record_id, str) or not record_id:
            raise ValueError("Store document is missing its '$id'.")
        values = {key: value for key, value in document.items() if not key.startswith("$")}
        return Record(
            record_id=record_id,
            values=MappingProxyType(values),
            created_at=document.get("$createdAt"),
            updated_at=document.get("$updatedAt"),
            collection_id=document.get("$collectionId"),
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


@dataclass(frozen=True)
class ListQuery:
    """Ordering and filtering applied to a collection listing."""

    order_attribute: str = CREATED_AT_ATTRIBUTE
    descending: bool = True
    equals: Mapping[str, Any] = field(default_factory=dict)
    limit: int | None = None

    def to_query_strings(self) -> list[str]:
        """Serialise into the store's JSON query syntax."""
        queries: list[str] = []
        for attribute, expected in self.equals.items():
            values = list(expected) if isinstance(expected, (list, tuple)) else [expected]
            queries.append(_query("equal", attribute, values))
        method = "orderDesc" if self.descending else "orderAsc"
        queries.append(_query(method, self.order_attribute))
        if self.limit is not None:
            if self.limit <= 0:
                raise ValueError("limit must be greater than zero.")
            queries.append(_query("limit", None, [self.limit]))
        return queries


def _query(method: str, attribute: str | None, values: list[Any] | None = None) -> str:
    payload: dict[str, Any] = {"method": method}
    if attribute is not None:
        payload["attribute"] = attribute
    if values is not None:
        payload["values"] = values
    return json.dumps(payload, separators=(",", ":"))
