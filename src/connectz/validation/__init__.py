"""Field validation — declarative rule chains, clean results.

Usage::

    from connectz.validation import validate

    result = validate(form, {
        "email": "required:Email|email",
        "password": "required|password:strong",
        "confirm": "required|match:password",
    })
    if not result:
        return {"errors": result.errors}
    # result.data has trimmed values

Each field's chain stops at its first failing rule; every field is
checked regardless of the others.
"""

from collections.abc import Mapping

from connectz.validation.chain import Rule, RuleChain, evaluate, parse_rules
from connectz.validation.files import DEFAULT_FILE_RULES, FileRules, validate_file
from connectz.validation.registry import ValidatorKind
from connectz.validation.result import FormResult, ValidationResult
from connectz.validation.rules import FieldLookup, Validator

__all__ = [
    "DEFAULT_FILE_RULES",
    "FieldLookup",
    "FileRules",
    "FormResult",
    "Rule",
    "RuleChain",
    "ValidationResult",
    "Validator",
    "ValidatorKind",
    "evaluate",
    "parse_rules",
    "validate",
    "validate_file",
]


def validate(
    data: Mapping[str, str],
    declarations: Mapping[str, RuleChain | str],
) -> FormResult:
    """Validate every declared field of *data*.

    Args:
        data: Any mapping of field names to string values — ``FormData``
            or a plain ``dict``. Missing fields count as empty.
        declarations: Field name to a ``RuleChain`` or a declaration
            string. ``match`` rules resolve their target against *data*.

    Returns:
        A ``FormResult`` with ``.data`` (trimmed values of passing fields)
        and ``.errors`` (field → message).

    Example::

        result = validate({"name": ""}, {"name": "required:Name"})
        # result.errors == {"name": "Name is required"}
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, str] = {}

    def lookup(field_id: str) -> str | None:
        return data.get(field_id)

    for field_name, declaration in declarations.items():
        value = (data.get(field_name) or "").strip()
        result = evaluate(value, declaration, lookup)
        if result.valid:
            cleaned[field_name] = value
        else:
            errors[field_name] = result.message

    return FormResult(data=cleaned, errors=errors)
