"""List engine exports."""

from .list_models import ListState, RecordSummary, SummaryLine
from .list_screen import (
    DELETE_PROMPT,
    DELETE_TITLE,
    EMPTY_STATE_HINT,
    EMPTY_STATE_MESSAGE,
    NOT_AVAILABLE,
    ListScreen,
    format_field_value,
    summarize_record,
)

__all__ = [
    "ListState",
    "RecordSummary",
    "SummaryLine",
    "ListScreen",
    "format_field_value",
    "summarize_record",
    "NOT_AVAILABLE",
    "EMPTY_STATE_MESSAGE",
    "EMPTY_STATE_HINT",
    "DELETE_TITLE",
    "DELETE_PROMPT",
]
