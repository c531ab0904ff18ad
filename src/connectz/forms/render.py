"""Field rendering — visual state and error annotations.

The renderer turns a ``FieldState`` into a ``FieldView``: CSS classes,
the ``aria-invalid`` value, and at most one error annotation. Views are
replaced wholesale on every render, so a field never carries two
annotations::

    renderer = FieldRenderer()
    view = renderer.render("email", state, value, config)
    view.attrs()       # ' class="invalid touched" aria-invalid="true"'
    view.annotation    # '<div class="error-message" role="alert">...</div>'
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from connectz.config import FormConfig

if TYPE_CHECKING:
    from connectz.forms.binding import FieldState


@dataclass(frozen=True, slots=True)
class FieldView:
    """What a field looks like after its last evaluation."""

    field_id: str
    classes: tuple[str, ...]
    aria_invalid: str
    annotation: str | None = None

    def attrs(self) -> str:
        """Attribute string for the field's ``<input>`` element."""
        class_attr = html.escape(" ".join(self.classes), quote=True)
        return f' class="{class_attr}" aria-invalid="{self.aria_invalid}"'


def annotation_html(message: str) -> str:
    """The error element placed after an invalid field."""
    return f'<div class="error-message" role="alert">{html.escape(message)}</div>'


class FieldRenderer:
    """Keeps the current view of every rendered field.

    ``render`` replaces a field's previous view rather than adding to it.
    Nothing here is read back to decide validity. ``FieldState`` owned by
    the binder is the only source of truth.
    """

    __slots__ = ("_views",)

    def __init__(self) -> None:
        self._views: dict[str, FieldView] = {}

    @property
    def views(self) -> Mapping[str, FieldView]:
        return self._views

    def view(self, field_id: str) -> FieldView | None:
        return self._views.get(field_id)

    def render(
        self,
        field_id: str,
        state: FieldState,
        value: str,
        config: FormConfig,
    ) -> FieldView:
        """Build and store the view for *field_id*, dropping any prior one."""
        self._views.pop(field_id, None)

        classes: list[str] = []
        if state.valid:
            classes.append("valid")
            if config.show_success_indicator and value:
                classes.append("has-success-icon")
            view = FieldView(field_id, (*classes, *_touched(state)), "false")
        else:
            classes.append("invalid")
            view = FieldView(
                field_id,
                (*classes, *_touched(state)),
                "true",
                annotation=annotation_html(state.last_message),
            )

        self._views[field_id] = view
        return view

    def clear(self, field_id: str | None = None) -> None:
        """Forget one field's view, or all of them."""
        if field_id is None:
            self._views.clear()
        else:
            self._views.pop(field_id, None)


def _touched(state: FieldState) -> tuple[str, ...]:
    return ("touched",) if state.touched else ()
