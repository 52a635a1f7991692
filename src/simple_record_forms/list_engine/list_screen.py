"""Schema-driven record list service."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from simple_record_forms.notifications import (
    Notifier,
    classify,
    log_operation_complete,
    log_operation_start,
    log_store_error,
)
from simple_record_forms.remote_store import ListQuery, Record, RecordStore, StoreError
from simple_record_forms.schema_management import FieldType, RecordSchema

from .list_models import ListState, RecordSummary, SummaryLine

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
EMPTY_STATE_MESSAGE = "No records yet"
EMPTY_STATE_HINT = 'Use "create" to add your first record'
DELETE_TITLE = "Delete"
DELETE_PROMPT = "Are you sure you want to delete this item?"

# (title, prompt) -> True when the user picked the destructive choice.
ConfirmPrompt = Callable[[str, str], bool]


def format_field_value(value: Any, field_type: FieldType) -> str:
    """Render one attribute for a list card."""
    if value is None:
        return NOT_AVAILABLE
    if field_type is FieldType.DATETIME and isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return value
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
        return parsed.strftime("%c")
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def summarize_record(schema: RecordSchema, record: Record) -> RecordSummary:
    return RecordSummary(
        record_id=record.record_id,
        lines=tuple(
            SummaryLine(
                label=field.label,
                text=format_field_value(record.get(field.key), field.type),
            )
            for field in schema
        ),
    )


class ListScreen:
    """Fetches the collection, renders cards and deletes with confirmation.

    Mutations never patch the local list; they are followed by a full re-fetch.
    """

    def __init__(
        self,
        schema: RecordSchema,
        store: RecordStore,
        notifier: Notifier,
        collection_id: str,
        confirm: ConfirmPrompt,
        *,
        query: ListQuery | None = None,
    ) -> None:
        self._schema = schema
        self._store = store
        self._notifier = notifier
        self._collection_id = collection_id
        self._confirm = confirm
        self._query = query or ListQuery()
        self.state = ListState()

    @property
    def is_empty(self) -> bool:
        return not self.state.loading and not self.state.records

    async def mount(self) -> bool:
        self.state = dataclasses.replace(self.state, loading=True)
        return await self._fetch()

    async def refresh(self) -> bool:
        self.state = dataclasses.replace(self.state, refreshing=True)
        return await self._fetch()

    def summaries(self) -> tuple[RecordSummary, ...]:
        return tuple(summarize_record(self._schema, record) for record in self.state.records)

    async def request_delete(self, record_id: str) -> bool:
        """Ask for confirmation, delete, then re-fetch. Returns ``True`` if deleted."""
        if not self._confirm(DELETE_TITLE, DELETE_PROMPT):
            logger.debug("Delete of %s cancelled by user", record_id)
            return False

        log_operation_start("DELETE_RECORD", record_id)
        try:
            await self._store.delete(self._collection_id, record_id)
        except StoreError as exc:
            log_store_error("DELETE_RECORD", exc)
            self._notifier.error("Error", f"Failed to delete record. {classify(exc)}")
            return False
        log_operation_complete("DELETE_RECORD", record_id)
        await self._fetch()
        return True

    async def _fetch(self) -> bool:
        log_operation_start("FETCH_RECORDS", self._collection_id)
        try:
            records = await self._store.list(self._collection_id, self._query)
        except StoreError as exc:
            log_store_error("FETCH_RECORDS", exc)
            message = classify(exc)
            self.state = dataclasses.replace(
                self.state, loading=False, refreshing=False, last_error=message
            )
            self._notifier.error("Error", f"Failed to fetch records. {message}")
            return False
        self.state = ListState(records=tuple(records), loading=False, refreshing=False)
        log_operation_complete("FETCH_RECORDS", f"{len(records)} record(s)")
        return True
