"""Input sanitizing — HTML-escape submitted strings.

Two flavours:

- ``escape`` neutralizes every character that is special in HTML
  attributes or text, for values echoed back anywhere.
- ``escape_text`` escapes only ``&``, ``<`` and ``>``, matching what a
  browser does when text is assigned to a node and read back as markup.

Usage::

    from connectz.security import sanitize_fields

    body = sanitize_fields(json_body)  # non-string values pass through
"""

from collections.abc import Mapping
from typing import Any

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)

_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})


def escape(value: str) -> str:
    """Escape HTML-significant characters, including ``/``, backslash and backtick."""
    return value.translate(_ESCAPES)


def escape_text(value: str) -> str:
    """Escape ``&``, ``<`` and ``>`` only."""
    return value.translate(_TEXT_ESCAPES)


def sanitize_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *data* with every top-level string value escaped."""
    return {key: escape(value) if isinstance(value, str) else value for key, value in data.items()}
