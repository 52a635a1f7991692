"""User notification sink and operation logging."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import click

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Outcome category shown to the user."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


Presenter = Callable[[NotificationKind, str, str], None]

_LOG_LEVELS = {
    NotificationKind.SUCCESS: logging.INFO,
    NotificationKind.ERROR: logging.ERROR,
    NotificationKind.WARNING: logging.WARNING,
}

_STYLES = {
    NotificationKind.SUCCESS: ("green", "✅"),
    NotificationKind.ERROR: ("red", "❌"),
    NotificationKind.WARNING: ("yellow", "⚠️"),
}


def click_presenter(kind: NotificationKind, title: str, message: str) -> None:
    """Render a notification on the terminal and wait for acknowledgement."""
    color, icon = _STYLES[kind]
    is_error = kind is NotificationKind.ERROR
    click.echo(click.style(f"{icon} {title}", fg=color, bold=True), err=is_error)
    click.echo(message, err=is_error)
    click.pause()


class Notifier:
    """Blocking acknowledgement sink that also writes a tagged log line.

    ``notify`` never raises; a failing presenter is logged and ignored.
    """

    def __init__(
        self,
        presenter: Presenter | None = None,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self._presenter = presenter or click_presenter
        self._log = log or logger

    def notify(
        self,
        kind: NotificationKind,
        title: str,
        message: str,
        log_message: str | None = None,
    ) -> None:
        self._log.log(
            _LOG_LEVELS[kind],
            "[%s] %s: %s",
            kind.value.upper(),
            title,
            log_message or message,
            extra={"notification_kind": kind.value},
        )
        try:
            self._presenter(kind, title, message)
        except Exception:  # pylint: disable=broad-exception-caught
            self._log.exception("Failed to present %s notification '%s'", kind.value, title)

    def success(self, title: str, message: str, log_message: str | None = None) -> None:
        self.notify(NotificationKind.SUCCESS, title, message, log_message)

    def error(self, title: str, message: str, log_message: str | None = None) -> None:
        self.notify(NotificationKind.ERROR, title, message, log_message)

    def warning(self, title: str, message: str, log_message: str | None = None) -> None:
        self.notify(NotificationKind.WARNING, title, message, log_message)


def log_operation_start(operation: str, details: str | None = None) -> None:
    if details:
        logger.info("[%s] Started: %s", operation, details)
    else:
        logger.info("[%s] Started", operation)


def log_operation_complete(operation: str, result: Any = None) -> None:
    if result is not None:
        logger.info("[%s] Completed: %r", operation, result)
    else:
        logger.info("[%s] Completed", operation)


def log_store_error(operation: str, error: BaseException) -> None:
    """Log a failed store call with every structured field it carries."""
    logger.error(
        "[%s] Store error: message=%s code=%s type=%s details=%r",
        operation,
        getattr(error, "message", None) or str(error) or "Unknown error",
        getattr(error, "code", None) or "N/A",
        getattr(error, "error_type", None) or type(error).__name__,
        getattr(error, "details", None),
    )
