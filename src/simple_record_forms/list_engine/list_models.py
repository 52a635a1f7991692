"""List engine entities."""

from __future__ import annotations

from dataclasses import dataclass

from simple_record_forms.remote_store.store_models import Record


@dataclass(frozen=True)
class ListState:
    """Snapshot of the list screen; replaced wholesale on every fetch."""

    records: tuple[Record, ...] = ()
    loading: bool = True
    refreshing: bool = False
    last_error: str | None = None


@dataclass(frozen=True)
class SummaryLine:
    label: str
    text: str


@dataclass(frozen=True)
class RecordSummary:
    """One rendered card: a line per schema field, in schema order."""

    record_id: str
    lines: tuple[SummaryLine, ...]
