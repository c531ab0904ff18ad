"""Built-in validation rules for connectz forms.

Every rule is a factory. It receives the rule's declared parameters (the
colon-separated strings after the rule name) and returns a validator::

    def min_length(*params) -> Validator:
        limit = _parse_int(_arg(params, 0))

        def check(value: str, lookup: FieldLookup) -> ValidationResult:
            ...

        return check

A validator gets the trimmed field value and a lookup that resolves
another field's live value by identifier (only ``match`` uses it).

Empty values pass every rule except ``required``. Pair a rule with
``required`` to make the field mandatory::

    required|email
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from datetime import UTC, datetime
from urllib.parse import urlsplit
from typing import TypeAlias

from dateutil import parser as dateparser

from connectz.validation.result import ValidationResult

logger = logging.getLogger("connectz.validation")

# Resolves a field identifier to its current value, or None if no such field
FieldLookup: TypeAlias = Callable[[str], str | None]

Validator: TypeAlias = Callable[[str, FieldLookup], ValidationResult]

Param: TypeAlias = str | int | float


def no_fields(field_id: str) -> str | None:
    """A lookup for values evaluated outside any form."""
    return None


# ---------------------------------------------------------------------------
# Parameter parsing (browser parseInt / parseFloat semantics)
# ---------------------------------------------------------------------------

_INT_PREFIX = re.compile(r"\s*[+-]?[0-9]+")
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:Infinity|[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?)"
)


def _arg(params: tuple[Param, ...], index: int) -> str | None:
    if index < len(params):
        return str(params[index])
    return None


def _parse_int(raw: str | None) -> float:
    """Leading integer of *raw*, or NaN when there is none."""
    found = _INT_PREFIX.match(raw or "")
    return float(int(found.group())) if found else math.nan


def _parse_float(raw: str | None) -> float:
    """Leading decimal number of *raw*, or NaN when there is none."""
    found = _FLOAT_PREFIX.match(raw or "")
    return float(found.group()) if found else math.nan


def _format_number(n: float) -> str:
    """Print a number the way a browser does: ``100``, ``0.5``, ``NaN``."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n.is_integer() and abs(n) < 1e21:
        return str(int(n))
    return repr(n)


def _parse_date(raw: str | None) -> datetime | None:
    """Any date a user might type (``2024-01-15``, ``1/15/2024``, ``Jan 15, 2024``).

    Aware values become naive UTC so they compare with naive ones.
    """
    if not raw or not raw.strip():
        return None
    try:
        parsed = dateparser.parse(raw)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def _format_date(d: datetime) -> str:
    return f"{d.month}/{d.day}/{d.year}"


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(*params: Param) -> Validator:
    """Field must be non-empty. The optional parameter labels the message."""
    label = _arg(params, 0) or "This field"
    message = f"{label} is required"

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        if not value:
            return ValidationResult.fail(message)
        return ValidationResult.ok()

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only: something@something.something, no whitespace
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_NON_DIGITS = re.compile(r"[^0-9]")

# Schemes that are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")


def _email(value: str, lookup: FieldLookup) -> ValidationResult:
    if value and not _EMAIL_RE.match(value):
        return ValidationResult.fail("Please enter a valid email address")
    return ValidationResult.ok()


def _phone(value: str, lookup: FieldLookup) -> ValidationResult:
    if not value:
        return ValidationResult.ok()
    digits = _NON_DIGITS.sub("", value)
    if not 10 <= len(digits) <= 15:
        return ValidationResult.fail("Please enter a valid phone number")
    return ValidationResult.ok()


def _is_url(value: str) -> bool:
    if any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname)
    return bool(parts.netloc or parts.path)


def _url(value: str, lookup: FieldLookup) -> ValidationResult:
    if value and not _is_url(value):
        return ValidationResult.fail("Please enter a valid URL (e.g., https://example.com)")
    return ValidationResult.ok()


def email(*params: Param) -> Validator:
    """Value must look like ``local@domain.tld``."""
    return _email


def phone(*params: Param) -> Validator:
    """Value must contain 10 to 15 digits once punctuation is stripped."""
    return _phone


def url(*params: Param) -> Validator:
    """Value must be an absolute URL with a scheme."""
    return _url


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(*params: Param) -> Validator:
    """String must be at least *N* characters."""
    limit = _parse_int(_arg(params, 0))
    message = f"Must be at least {_format_number(limit)} characters"

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        # A NaN limit compares False, so a malformed parameter never passes
        if value and not len(value) >= limit:
            return ValidationResult.fail(message)
        return ValidationResult.ok()

    return check


def max_length(*params: Param) -> Validator:
    """String must be at most *N* characters."""
    limit = _parse_int(_arg(params, 0))
    message = f"Must not exceed {_format_number(limit)} characters"

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        if value and not len(value) <= limit:
            return ValidationResult.fail(message)
        return ValidationResult.ok()

    return check


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------


def number(*params: Param) -> Validator:
    """Value must be numeric, optionally within ``[min, max]``."""
    raw_min, raw_max = _arg(params, 0), _arg(params, 1)
    low = _parse_float(raw_min) if raw_min is not None else None
    high = _parse_float(raw_max) if raw_max is not None else None

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        if not value:
            return ValidationResult.ok()
        num = _parse_float(value)
        if math.isnan(num):
            return ValidationResult.fail("Please enter a valid number")
        if low is not None and num < low:
            return ValidationResult.fail(f"Must be at least {_format_number(low)}")
        if high is not None and num > high:
            return ValidationResult.fail(f"Must not exceed {_format_number(high)}")
        return ValidationResult.ok()

    return check


def date(*params: Param) -> Validator:
    """Value must be a date, optionally within ``[minDate, maxDate]``."""
    earliest = _parse_date(_arg(params, 0))
    latest = _parse_date(_arg(params, 1))

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        if not value:
            return ValidationResult.ok()
        parsed = _parse_date(value)
        if parsed is None:
            return ValidationResult.fail("Please enter a valid date")
        if earliest is not None and parsed < earliest:
            return ValidationResult.fail(f"Date must be after {_format_date(earliest)}")
        if latest is not None and parsed > latest:
            return ValidationResult.fail(f"Date must be before {_format_date(latest)}")
        return ValidationResult.ok()

    return check


# ---------------------------------------------------------------------------
# Password strength
# ---------------------------------------------------------------------------

_PASSWORD_TIERS: dict[str, tuple[re.Pattern[str], str]] = {
    "weak": (
        re.compile(r".{6,}"),
        "Password must be at least 6 characters",
    ),
    "medium": (
        re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9]).{8,}$"),
        "Password must be 8+ characters with uppercase, lowercase, and number",
    ),
    "strong": (
        re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&]).{12,}$"),
        "Password must be 12+ characters with uppercase, lowercase, number, "
        "and special character",
    ),
}


def password(*params: Param) -> Validator:
    """Value must meet a strength tier: ``weak``, ``medium`` (default), ``strong``."""
    tier = _arg(params, 0) or "medium"
    pattern, message = _PASSWORD_TIERS.get(tier, _PASSWORD_TIERS["medium"])

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        if value and not pattern.search(value):
            return ValidationResult.fail(message)
        return ValidationResult.ok()

    return check


# ---------------------------------------------------------------------------
# Cross-field
# ---------------------------------------------------------------------------


def match(*params: Param) -> Validator:
    """Value must equal the live value of another field, looked up by id.

    A target that does not exist is a form configuration mistake. It fails
    the field with ``"Configuration error"`` instead of raising.
    """
    target = _arg(params, 0) or ""

    def check(value: str, lookup: FieldLookup) -> ValidationResult:
        other = lookup(target)
        if other is None:
            logger.error("Target field #%s not found", target)
            return ValidationResult.fail("Configuration error")
        if value != other:
            return ValidationResult.fail("Fields do not match")
        return ValidationResult.ok()

    return check
