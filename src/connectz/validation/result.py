"""Validation results — immutable containers for one rule or a whole form."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of checking one value.

    ``message`` is only meaningful when ``valid`` is False. The result is
    falsy when invalid, so you can write::

        result = chain.evaluate(value)
        if not result:
            show(result.message)
    """

    valid: bool
    message: str = ""

    @classmethod
    def ok(cls) -> ValidationResult:
        return _OK

    @classmethod
    def fail(cls, message: str) -> ValidationResult:
        return cls(valid=False, message=message)

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.valid


_OK = ValidationResult(valid=True)


@dataclass(frozen=True, slots=True)
class FormResult:
    """The outcome of validating a mapping of fields.

    ``data`` holds the trimmed values of the fields that passed.
    ``errors`` maps each failing field to its single message (a chain
    stops at its first failing rule)::

        {"email": "Please enter a valid email address"}
    """

    data: dict[str, str]
    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid
