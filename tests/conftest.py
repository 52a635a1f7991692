"""Shared fakes for screen and CLI tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest
from simple_record_forms.notifications import NotificationKind, Notifier
from simple_record_forms.remote_store import ListQuery, NotFoundError, Record, StoreError


class FakeRecordStore:
    """In-memory stand-in for the document store client."""

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, ...]] = []
        self.failures: dict[str, StoreError] = {}
        self.closed = False
        self._sequence = 0

    def seed(self, **fields: Any) -> Record:
        return self._insert("events", fields)

    async def list(self, collection_id: str, query: ListQuery | None = None) -> list[Record]:
        self._enter("list", collection_id)
        documents = sorted(
            self.documents.values(), key=lambda doc: doc["$createdAt"], reverse=True
        )
        return [Record.from_document(document) for document in documents]

    async def get(self, collection_id: str, record_id: str) -> Record:
        self._enter("get", collection_id, record_id)
        return Record.from_document(self._existing(record_id))

    async def create(self, collection_id: str, fields: Mapping[str, Any]) -> Record:
        self._enter("create", collection_id)
        return self._insert(collection_id, dict(fields))

    async def update(
        self, collection_id: str, record_id: str, fields: Mapping[str, Any]
    ) -> Record:
        self._enter("update", collection_id, record_id)
        document = self._existing(record_id)
        document.update(fields)
        document["$updatedAt"] = "2024-06-01T12:00:00.000+00:00"
        return Record.from_document(document)

    async def delete(self, collection_id: str, record_id: str) -> None:
        self._enter("delete", collection_id, record_id)
        self._existing(record_id)
        del self.documents[record_id]

    async def aclose(self) -> None:
        self.closed = True

    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _enter(self, operation: str, *args: str) -> None:
        self.calls.append((operation, *args))
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure

    def _existing(self, record_id: str) -> dict[str, Any]:
        if record_id not in self.documents:
            raise NotFoundError(
                "Document with the requested ID could not be found.",
                code=404,
                error_type="document_not_found",
            )
        return self.documents[record_id]

    def _insert(self, collection_id: str, fields: dict[str, Any]) -> Record:
        self._sequence += 1
        record_id = f"rec-{self._sequence}"
        timestamp = f"2024-01-01T00:00:{self._sequence:02d}.000+00:00"
        document = {
            "$id": record_id,
            "$collectionId": collection_id,
            "$createdAt": timestamp,
            "$updatedAt": timestamp,
            **fields,
        }
        self.documents[record_id] = document
        return Record.from_document(document)


class RecordingNavigator:
    def __init__(self) -> None:
        self.back_calls = 0

    def back(self) -> None:
        self.back_calls += 1


@pytest.fixture
def fake_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def notifications() -> list[tuple[NotificationKind, str, str]]:
    return []


@pytest.fixture
def notifier(notifications: list[tuple[NotificationKind, str, str]]) -> Notifier:
    def record(kind: NotificationKind, title: str, message: str) -> None:
        notifications.append((kind, title, message))

    return Notifier(presenter=record)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()
