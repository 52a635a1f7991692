"""Form engine entities."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

# Field key -> raw text typed by the user.
FormState = dict[str, str]


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class FormPhase(str, Enum):
    """Lifecycle of one form screen instance."""

    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    DONE = "done"
    CLOSED = "closed"


class Navigator(Protocol):  # pylint: disable=too-few-public-methods
    """Leaves the current screen."""

    def back(self) -> None: ...
