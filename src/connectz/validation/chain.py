"""Rule chains — parse a declaration once, evaluate it many times.

A declaration is a pipe-separated list of rules; each rule is a name
followed by colon-separated parameters::

    chain = RuleChain.parse("required:Password|password:strong")
    result = chain.evaluate("hunter2")
    # ValidationResult(valid=False, message="Password must be 12+ ...")

Evaluation runs the rules left to right and stops at the first failure.
Names the registry does not know are logged and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from connectz.validation.registry import ValidatorKind
from connectz.validation.result import ValidationResult
from connectz.validation.rules import FieldLookup, Validator, no_fields

logger = logging.getLogger("connectz.validation")


@dataclass(frozen=True, slots=True)
class Rule:
    """One named rule with its declared parameters."""

    name: str
    params: tuple[str, ...] = ()

    @classmethod
    def parse(cls, token: str) -> Rule:
        """Parse ``name:param1:param2``."""
        name, *params = token.split(":")
        return cls(name=name, params=tuple(params))

    @property
    def kind(self) -> ValidatorKind | None:
        return ValidatorKind.lookup(self.name)

    def __str__(self) -> str:
        return ":".join((self.name, *self.params))


def parse_rules(declaration: str) -> tuple[Rule, ...]:
    """Split a ``rule1:p1|rule2|rule3:p1:p2`` declaration into rules.

    Empty tokens (a leading or trailing ``|``) are dropped.
    """
    return tuple(Rule.parse(token) for token in declaration.split("|") if token)


@dataclass(frozen=True, slots=True)
class RuleChain:
    """An ordered, immutable sequence of rules bound to one field."""

    rules: tuple[Rule, ...] = ()
    _validators: tuple[Validator | None, ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        compiled = tuple(
            kind.build(*rule.params) if (kind := rule.kind) is not None else None
            for rule in self.rules
        )
        object.__setattr__(self, "_validators", compiled)

    @classmethod
    def parse(cls, declaration: str) -> RuleChain:
        return cls(parse_rules(declaration))

    def __len__(self) -> int:
        return len(self.rules)

    def __str__(self) -> str:
        return "|".join(str(rule) for rule in self.rules)

    def evaluate(self, value: str, lookup: FieldLookup = no_fields) -> ValidationResult:
        """Return the first failing result, or a valid one.

        Args:
            value: The field value, already trimmed.
            lookup: Resolves another field's current value by identifier.
                Only ``match`` rules consult it.
        """
        for rule, validator in zip(self.rules, self._validators, strict=True):
            if validator is None:
                logger.warning("Unknown validator: %s", rule.name)
                continue
            result = validator(value, lookup)
            if not result.valid:
                return result
        return ValidationResult.ok()


def evaluate(
    value: str,
    chain: RuleChain | str,
    lookup: FieldLookup = no_fields,
) -> ValidationResult:
    """Trim *value* and evaluate it against *chain* (a chain or a declaration)."""
    if isinstance(chain, str):
        chain = RuleChain.parse(chain)
    return chain.evaluate(value.strip(), lookup)
