"""Notification exports."""

from .error_messages import GENERIC_ERROR_MESSAGE, classify, extract_attribute_name
from .notifier import (
    NotificationKind,
    Notifier,
    click_presenter,
    log_operation_complete,
    log_operation_start,
    log_store_error,
)

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "classify",
    "extract_attribute_name",
    "NotificationKind",
    "Notifier",
    "click_presenter",
    "log_operation_start",
    "log_operation_complete",
    "log_store_error",
]
