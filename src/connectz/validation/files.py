"""Upload validation — size, MIME type, and extension checks.

Independent of rule chains: a file control is checked once per selection::

    result = validate_file(form.files["avatar"])
    if not result:
        ...  # result.message explains why

Anything with ``filename``, ``content_type`` and ``size`` attributes can
be validated, including :class:`connectz.forms.data.UploadFile`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from connectz.validation.result import ValidationResult

MIB = 1024 * 1024


class FileLike(Protocol):
    """The metadata a file check needs."""

    @property
    def filename(self) -> str: ...

    @property
    def content_type(self) -> str: ...

    @property
    def size(self) -> int: ...


@dataclass(frozen=True, slots=True)
class FileRules:
    """Limits for an upload. ``None`` disables the type or extension check."""

    max_size: int = 10 * MIB
    allowed_types: tuple[str, ...] | None = (
        "image/jpeg",
        "image/png",
        "image/gif",
        "audio/mpeg",
        "audio/wav",
        "video/mp4",
    )
    allowed_extensions: tuple[str, ...] | None = (
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".mp3",
        ".wav",
        ".mp4",
    )


DEFAULT_FILE_RULES = FileRules()


def file_extension(filename: str) -> str:
    """Lower-cased text after the last dot, with a leading dot.

    A name without a dot is treated as all extension: ``"README"`` gives
    ``".readme"``.
    """
    return "." + filename.rsplit(".", 1)[-1].lower()


def validate_file(file: FileLike, rules: FileRules = DEFAULT_FILE_RULES) -> ValidationResult:
    """Check *file* against *rules*: size first, then type, then extension."""
    if file.size > rules.max_size:
        megabytes = f"{rules.max_size / MIB:.0f}"
        return ValidationResult.fail(f"File size must not exceed {megabytes}MB")

    if rules.allowed_types is not None and file.content_type not in rules.allowed_types:
        return ValidationResult.fail("File type not allowed")

    if (
        rules.allowed_extensions is not None
        and file_extension(file.filename) not in rules.allowed_extensions
    ):
        allowed = ", ".join(rules.allowed_extensions)
        return ValidationResult.fail(f"Only {allowed} files are allowed")

    return ValidationResult.ok()
