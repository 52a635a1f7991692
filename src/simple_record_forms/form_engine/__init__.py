"""Form engine exports."""

from .form_models import FormMode, FormPhase, FormState, Navigator
from .form_screen import (
    FieldValueError,
    FormScreen,
    build_payload,
    empty_form_state,
    find_missing_required,
    form_state_from_record,
)

__all__ = [
    "FormMode",
    "FormPhase",
    "FormState",
    "Navigator",
    "FieldValueError",
    "FormScreen",
    "build_payload",
    "empty_form_state",
    "find_missing_required",
    "form_state_from_record",
]
