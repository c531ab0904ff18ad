"""Rule registry — the closed set of validator names.

``ValidatorKind`` enumerates every built-in rule by its declaration name.
``FACTORIES`` maps each kind to the factory that builds its validator.
The table is checked against the enum when this module is imported, so
adding a kind without a factory fails immediately.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TypeAlias

from connectz.errors import ConfigurationError
from connectz.validation import rules
from connectz.validation.rules import Param, Validator

ValidatorFactory: TypeAlias = Callable[..., Validator]


class ValidatorKind(Enum):
    """Name of a built-in validator, as written in a rule declaration."""

    REQUIRED = "required"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    NUMBER = "number"
    DATE = "date"
    PASSWORD = "password"
    MATCH = "match"

    @classmethod
    def lookup(cls, name: str) -> ValidatorKind | None:
        """Return the kind declared as *name*, or None if there is none."""
        try:
            return cls(name)
        except ValueError:
            return None

    def build(self, *params: Param) -> Validator:
        """Build this kind's validator from declared parameters."""
        return FACTORIES[self](*params)


FACTORIES: dict[ValidatorKind, ValidatorFactory] = {
    ValidatorKind.REQUIRED: rules.required,
    ValidatorKind.EMAIL: rules.email,
    ValidatorKind.PHONE: rules.phone,
    ValidatorKind.URL: rules.url,
    ValidatorKind.MIN_LENGTH: rules.min_length,
    ValidatorKind.MAX_LENGTH: rules.max_length,
    ValidatorKind.NUMBER: rules.number,
    ValidatorKind.DATE: rules.date,
    ValidatorKind.PASSWORD: rules.password,
    ValidatorKind.MATCH: rules.match,
}


def _check_exhaustive() -> None:
    missing = [kind.value for kind in ValidatorKind if kind not in FACTORIES]
    if missing:
        msg = f"Validator kinds without a factory: {', '.join(missing)}"
        raise ConfigurationError(msg)


_check_exhaustive()
