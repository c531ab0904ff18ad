"""Form binding — wire field events to rule chains and the renderer.

A ``FormBinder`` owns the live values of a form's controls and one
``FieldState`` per validated control. UI glue forwards events to it::

    binder = FormBinder("signup", [
        Control("email", rules="required:Email|email"),
        Control("password", rules="required|password:medium"),
        Control("confirm", rules="required|match:password"),
    ])

    @binder.on_valid
    def save(event: FormValid) -> None:
        ...  # event.data == {"email": ..., "password": ..., "confirm": ...}

    binder.input("email", "ada@example.com")
    binder.blur("email")
    outcome = binder.submit()
    if not outcome:
        focus(outcome.focus)

Rules are bound once, at construction, and never change afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import TypeAlias

from connectz.config import FormConfig
from connectz.errors import ConfigurationError
from connectz.forms.data import FormData, FormValue, UploadFile, collect_values
from connectz.forms.render import FieldRenderer
from connectz.validation.chain import RuleChain
from connectz.validation.files import DEFAULT_FILE_RULES, FileRules, validate_file
from connectz.validation.result import ValidationResult

logger = logging.getLogger("connectz.forms")

# File controls never show the success indicator
_FILE_RENDER_CONFIG = FormConfig(show_success_indicator=False)


@dataclass(frozen=True, slots=True)
class Control:
    """One form control: identifier, submitted name, initial value, rules.

    ``name`` defaults to ``id``. Controls without ``rules`` are not
    validated but still submit their value and can be ``match`` targets.
    """

    id: str
    rules: str | None = None
    name: str = ""
    value: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)


@dataclass(frozen=True, slots=True)
class FieldBinding:
    """A control bound to its rule chain."""

    field_id: str
    chain: RuleChain


@dataclass(frozen=True, slots=True)
class FieldState:
    """Validity of one field as of its last evaluation.

    ``touched`` turns True on the field's first blur and stays True until
    the form is reset.
    """

    touched: bool = False
    valid: bool = True
    last_message: str = ""


@dataclass(frozen=True, slots=True)
class FormValid:
    """Emitted when a submission passes: the form and its flattened values."""

    form_id: str
    data: dict[str, FormValue]


@dataclass(frozen=True, slots=True)
class SubmitOutcome:
    """Result of a submission. Falsy when blocked."""

    valid: bool
    data: dict[str, FormValue] | None = None
    focus: str | None = None
    invalid: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.valid


FormValidListener: TypeAlias = Callable[[FormValid], None]


class FormBinder:
    """Validation state machine for one form."""

    __slots__ = (
        "_bindings",
        "_controls",
        "_file_rules",
        "_files",
        "_listeners",
        "_states",
        "_values",
        "config",
        "form_id",
        "renderer",
    )

    def __init__(
        self,
        form_id: str,
        controls: Iterable[Control],
        config: FormConfig | None = None,
        renderer: FieldRenderer | None = None,
    ) -> None:
        self.form_id = form_id
        self.config = config or FormConfig()
        self.renderer = renderer or FieldRenderer()

        self._controls: dict[str, Control] = {}
        for control in controls:
            if control.id in self._controls:
                msg = f"Duplicate control id {control.id!r} in form #{form_id}"
                raise ConfigurationError(msg)
            self._controls[control.id] = control

        self._bindings: dict[str, FieldBinding] = {
            control.id: FieldBinding(control.id, RuleChain.parse(control.rules))
            for control in self._controls.values()
            if control.rules is not None
        }
        self._values: dict[str, str] = {c.id: c.value for c in self._controls.values()}
        self._states: dict[str, FieldState] = {}
        self._files: dict[str, UploadFile] = {}
        self._file_rules: dict[str, FileRules] = {}
        self._listeners: list[FormValidListener] = []

    # -- Introspection ----------------------------------------------------

    @property
    def bindings(self) -> Mapping[str, FieldBinding]:
        return self._bindings

    def value(self, field_id: str) -> str:
        self._control(field_id)
        return self._values[field_id]

    def state(self, field_id: str) -> FieldState:
        """The field's current state; a fresh one if it was never evaluated."""
        self._control(field_id)
        return self._states.get(field_id, FieldState())

    def lookup(self, field_id: str) -> str | None:
        """Live value of any control, for ``match`` rules."""
        return self._values.get(field_id)

    def on_valid(self, listener: FormValidListener) -> FormValidListener:
        """Register *listener* for ``FormValid``. Usable as a decorator."""
        self._listeners.append(listener)
        return listener

    # -- Events -----------------------------------------------------------

    def blur(self, field_id: str) -> None:
        """Focus left the field: mark it touched and validate if configured."""
        self._control(field_id)
        if field_id not in self._bindings:
            return
        self._states[field_id] = replace(self.state(field_id), touched=True)
        if self.config.validate_on_blur:
            self.validate_field(field_id)

    def input(self, field_id: str, value: str) -> None:
        """The field's value changed. Re-validates touched fields if configured."""
        self._control(field_id)
        self._values[field_id] = value
        if (
            self.config.validate_on_input
            and field_id in self._bindings
            and self.state(field_id).touched
        ):
            self.validate_field(field_id)

    def submit(self) -> SubmitOutcome:
        """Validate every bound field, then allow or block the submission.

        All fields are evaluated before deciding. On success every
        ``on_valid`` listener receives a ``FormValid`` event. On failure
        ``focus`` names the first invalid field in declaration order.
        """
        checked = {field_id: self.validate_field(field_id) for field_id in self._bindings}
        invalid = tuple(field_id for field_id, ok in checked.items() if not ok)

        if invalid:
            logger.debug("Form #%s blocked: %d invalid field(s)", self.form_id, len(invalid))
            if not self.config.preserve_data_on_error:
                for field_id in invalid:
                    self._values[field_id] = ""
            return SubmitOutcome(valid=False, focus=invalid[0], invalid=invalid)

        data = self.form_data()
        event = FormValid(self.form_id, data)
        for listener in self._listeners:
            listener(event)
        return SubmitOutcome(valid=True, data=data)

    def reset(self) -> None:
        """Restore initial values and forget all validation state."""
        self._values = {c.id: c.value for c in self._controls.values()}
        self._states.clear()
        self._files.clear()
        self.renderer.clear()

    # -- Validation -------------------------------------------------------

    def validate_field(self, field_id: str) -> bool:
        """Evaluate one bound field, store its state, and render it."""
        binding = self._bindings.get(field_id)
        if binding is None:
            msg = f"Field #{field_id} has no validation rules in form #{self.form_id}"
            raise ConfigurationError(msg)

        raw = self._values[field_id]
        result = binding.chain.evaluate(raw.strip(), self.lookup)
        state = FieldState(
            touched=self.state(field_id).touched,
            valid=result.valid,
            last_message=result.message,
        )
        self._states[field_id] = state
        self.renderer.render(field_id, state, raw, self.config)
        return result.valid

    # -- Files ------------------------------------------------------------

    def attach_file_rules(self, field_id: str, rules: FileRules = DEFAULT_FILE_RULES) -> None:
        """Treat *field_id* as a file control checked against *rules*."""
        self._control(field_id)
        self._file_rules[field_id] = rules

    def select_file(self, field_id: str, upload: UploadFile) -> ValidationResult:
        """A file was chosen. Invalid files are discarded."""
        rules = self._file_rules.get(field_id)
        if rules is None:
            msg = f"Field #{field_id} is not a file control in form #{self.form_id}"
            raise ConfigurationError(msg)

        result = validate_file(upload, rules)
        if result.valid:
            self._files[field_id] = upload
        else:
            self._files.pop(field_id, None)

        state = FieldState(
            touched=self.state(field_id).touched,
            valid=result.valid,
            last_message=result.message,
        )
        self._states[field_id] = state
        self.renderer.render(field_id, state, upload.filename, _FILE_RENDER_CONFIG)
        return result

    # -- Data -------------------------------------------------------------

    def load(self, form: FormData) -> None:
        """Take values from a parsed submission, matched by control name.

        Controls sharing a name receive that name's values in order.
        """
        remaining = {name: form.get_list(name) for name in form}
        for control in self._controls.values():
            if control.id in self._file_rules:
                upload = form.files.get(control.name)
                if upload is not None:
                    self.select_file(control.id, upload)
                continue
            values = remaining.get(control.name)
            if values is not None:
                self._values[control.id] = values.pop(0) if values else ""

    def form_data(self) -> dict[str, FormValue]:
        """Current values flattened by name; repeated names become lists."""
        pairs: list[tuple[str, str | UploadFile]] = []
        for control in self._controls.values():
            if control.id in self._file_rules:
                upload = self._files.get(control.id)
                if upload is not None:
                    pairs.append((control.name, upload))
                continue
            pairs.append((control.name, self._values[control.id]))
        return collect_values(pairs)

    def _control(self, field_id: str) -> Control:
        control = self._controls.get(field_id)
        if control is None:
            msg = f"Form #{self.form_id} has no control #{field_id}"
            raise ConfigurationError(msg)
        return control
