"""Schema-driven create/edit form service."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from simple_record_forms.notifications import (
    Notifier,
    classify,
    log_operation_complete,
    log_operation_start,
    log_store_error,
)
from simple_record_forms.remote_store import Record, RecordStore, StoreError
from simple_record_forms.schema_management import FieldSpec, FieldType, RecordSchema

from .form_models import FormMode, FormPhase, FormState, Navigator

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"true", "yes", "y", "1", "on"})
_FALSE_WORDS = frozenset({"false", "no", "n", "0", "off"})


class FieldValueError(Exception):
    """Raised when a form value cannot be converted to its field type."""

    def __init__(self, field: FieldSpec, message: str) -> None:
        super().__init__(f"{field.label} {message}")
        self.field = field


def empty_form_state(schema: RecordSchema) -> FormState:
    return {field.key: "" for field in schema}


def form_state_from_record(schema: RecordSchema, record: Record) -> FormState:
    """Seed editable text for every schema field from a fetched record."""
    return {field.key: _to_input_text(record.get(field.key)) for field in schema}


def find_missing_required(schema: RecordSchema, values: Mapping[str, str]) -> FieldSpec | None:
    """Return the first required field, in schema order, whose trimmed value is empty."""
    for field in schema.required_fields():
        if not (values.get(field.key) or "").strip():
            return field
    return None


def build_payload(schema: RecordSchema, values: Mapping[str, str]) -> dict[str, Any]:
    """Trim inputs and convert them into the store's attribute types.

    Empty optional fields are sent as ``None`` so an update clears them.

    Raises:
      FieldValueError: If a value does not parse as its field type.
    """
    payload: dict[str, Any] = {}
    for field in schema:
        text = (values.get(field.key) or "").strip()
        payload[field.key] = _convert(field, text) if text else None
    return payload


def _convert(field: FieldSpec, text: str) -> Any:
    if field.type is FieldType.INTEGER:
        try:
            return int(text)
        except ValueError as exc:
            raise FieldValueError(field, "must be a whole number.") from exc
    if field.type is FieldType.FLOAT:
        try:
            return float(text)
        except ValueError as exc:
            raise FieldValueError(field, "must be a number.") from exc
    if field.type is FieldType.BOOLEAN:
        lowered = text.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise FieldValueError(field, "must be yes or no.")
    return text


def _to_input_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FormScreen:  # pylint: disable=too-many-instance-attributes
    """One create or edit screen bound to a single collection.

    The screen owns its ``FormState``; nothing is shared with other screens.
    A failed submit keeps every value the user typed.
    """

    def __init__(
        self,
        schema: RecordSchema,
        store: RecordStore,
        notifier: Notifier,
        navigator: Navigator,
        collection_id: str,
        *,
        record_id: str | None = None,
        confirmation_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._schema = schema
        self._store = store
        self._notifier = notifier
        self._navigator = navigator
        self._collection_id = collection_id
        self._record_id = record_id
        self._confirmation_delay = confirmation_delay
        self._sleep = sleep
        self._values: FormState = {}
        self.mode = FormMode.EDIT if record_id is not None else FormMode.CREATE
        self.phase = FormPhase.LOADING if record_id is not None else FormPhase.READY
        self.record: Record | None = None
        if self.mode is FormMode.CREATE:
            self._values = empty_form_state(schema)

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    @property
    def values(self) -> FormState:
        return dict(self._values)

    def set_value(self, key: str, value: str) -> None:
        self._schema.field(key)
        self._values[key] = value

    async def open(self) -> None:
        """Load the record being edited; create screens are ready immediately."""
        if self.mode is FormMode.CREATE or self.phase is not FormPhase.LOADING:
            return
        record_id = self._record_id or ""
        log_operation_start("FETCH_RECORD", record_id)
        try:
            record = await self._store.get(self._collection_id, record_id)
        except StoreError as exc:
            log_store_error("FETCH_RECORD", exc)
            self._notifier.error("Error", f"Failed to fetch record. {classify(exc)}")
            self._close()
            return
        log_operation_complete("FETCH_RECORD", record.record_id)
        self.record = record
        self._values = form_state_from_record(self._schema, record)
        self.phase = FormPhase.READY

    async def submit(self) -> bool:
        """Validate, then create or update the record. Returns ``True`` once saved."""
        if self.phase is not FormPhase.READY:
            logger.warning("Ignoring submit while form is %s", self.phase.value)
            return False

        missing = find_missing_required(self._schema, self._values)
        if missing is not None:
            self._notifier.error(
                "Validation Error",
                f"{missing.label} is required.",
                log_message=f"required field '{missing.key}' is empty",
            )
            return False
        try:
            payload = build_payload(self._schema, self._values)
        except FieldValueError as exc:
            self._notifier.error("Validation Error", str(exc))
            return False

        self.phase = FormPhase.SUBMITTING
        operation = "CREATE_RECORD" if self.mode is FormMode.CREATE else "UPDATE_RECORD"
        log_operation_start(operation, self._record_id)
        try:
            if self.mode is FormMode.CREATE:
                record = await self._store.create(self._collection_id, payload)
            else:
                record = await self._store.update(
                    self._collection_id, self._record_id or "", payload
                )
        except StoreError as exc:
            log_store_error(operation, exc)
            failure = "create" if self.mode is FormMode.CREATE else "update"
            self._notifier.error(f"Failed to {failure} record", classify(exc))
            self.phase = FormPhase.READY
            return False

        log_operation_complete(operation, record.record_id)
        self.record = record
        if self.mode is FormMode.EDIT:
            self._notifier.success("Success", "Record updated successfully.")
            await self._sleep(self._confirmation_delay)
        self.phase = FormPhase.DONE
        self._navigator.back()
        return True

    def cancel(self) -> None:
        """Discard the form state and leave the screen."""
        self._close()

    def _close(self) -> None:
        self.phase = FormPhase.CLOSED
        self._values = {}
        self._navigator.back()
