"""Form handling: parsed submissions, field binding, and rendering."""

from connectz.forms.binding import (
    Control,
    FieldBinding,
    FieldState,
    FormBinder,
    FormValid,
    SubmitOutcome,
)
from connectz.forms.data import FormData, UploadFile, collect_values, parse_form_data
from connectz.forms.render import FieldRenderer, FieldView

__all__ = [
    "Control",
    "FieldBinding",
    "FieldRenderer",
    "FieldState",
    "FieldView",
    "FormBinder",
    "FormData",
    "FormValid",
    "SubmitOutcome",
    "UploadFile",
    "collect_values",
    "parse_form_data",
]
