"""Form data parsing — URL-encoded and multipart.

``FormData`` is an immutable ``Mapping[str, str]`` over the submitted
fields, with uploads available through ``.files``. ``collect_values``
flattens submitted pairs into the shape the "form valid" signal carries:
one value per name, or a list when a name repeats.

Multipart bodies are parsed with ``python-multipart``; URL-encoded bodies
use stdlib ``urllib.parse``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import parse_qsl
from typing import TypeAlias

from python_multipart.multipart import MultipartParser, parse_options_header

from connectz.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    Immutable metadata with the content held in memory.
    """

    filename: str
    content_type: str
    size: int
    _content: bytes = b""

    @classmethod
    def from_bytes(
        cls, filename: str, content: bytes, content_type: str = "application/octet-stream"
    ) -> UploadFile:
        return cls(filename=filename, content_type=content_type, size=len(content), _content=content)

    def read(self) -> bytes:
        """Return the file content as bytes."""
        return self._content

    def save(self, path: Path) -> None:
        """Write the file content to disk. Parent directories must exist."""
        path.write_bytes(self._content)

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


FormValue: TypeAlias = str | UploadFile | list[str | UploadFile]


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key (string fields only).
    ``get_list`` returns all values for a key.
    ``files`` provides access to uploaded files by field name.
    ``items_multi`` yields every submitted pair in order.
    """

    __slots__ = ("_data", "_files", "_pairs")

    def __init__(
        self,
        pairs: Iterable[tuple[str, str]] = (),
        files: Mapping[str, UploadFile] | None = None,
    ) -> None:
        pairs = tuple(pairs)
        data: dict[str, list[str]] = {}
        for key, value in pairs:
            data.setdefault(key, []).append(value)
        object.__setattr__(self, "_pairs", pairs)
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", dict(files or {}))

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))

    def items_multi(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def flatten(self) -> dict[str, FormValue]:
        """Fields then files, flattened with :func:`collect_values`."""
        return collect_values([*self._pairs, *self._files.items()])


def collect_values(pairs: Iterable[tuple[str, str | UploadFile]]) -> dict[str, FormValue]:
    """Flatten submitted pairs: a repeated name collects into a list.

    ::

        collect_values([("genre", "jazz"), ("genre", "funk"), ("city", "LA")])
        # {"genre": ["jazz", "funk"], "city": "LA"}
    """
    data: dict[str, FormValue] = {}
    for key, value in pairs:
        if key not in data:
            data[key] = value
            continue
        existing = data[key]
        if isinstance(existing, list):
            existing.append(value)
        else:
            data[key] = [existing, value]
    return data


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into FormData.

    Supports ``application/x-www-form-urlencoded`` and
    ``multipart/form-data``.

    Raises:
        ConfigurationError: If a multipart content type has no boundary.
        ValueError: If the content type is not a form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return FormData(parse_qsl(body.decode("utf-8"), keep_blank_values=True))

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ConfigurationError(msg)

    pairs: list[tuple[str, str]] = []
    files: dict[str, UploadFile] = {}

    # Per-part state, reset on each part
    headers: dict[str, str] = {}
    header_field = bytearray()
    header_value = bytearray()
    content = bytearray()

    def on_part_begin() -> None:
        headers.clear()
        content.clear()

    def on_header_field(data: bytes, start: int, end: int) -> None:
        header_field.extend(data[start:end])

    def on_header_value(data: bytes, start: int, end: int) -> None:
        header_value.extend(data[start:end])

    def on_header_end() -> None:
        headers[header_field.decode("latin-1").lower()] = header_value.decode("latin-1")
        header_field.clear()
        header_value.clear()

    def on_part_data(data: bytes, start: int, end: int) -> None:
        content.extend(data[start:end])

    def on_part_end() -> None:
        disposition = headers.get("content-disposition")
        if disposition is None:
            return
        _, params = parse_options_header(disposition.encode("latin-1"))
        name = params.get(b"name")
        if name is None:
            return
        field_name = name.decode("utf-8")
        filename = params.get(b"filename")
        if filename is not None:
            files[field_name] = UploadFile(
                filename=filename.decode("utf-8"),
                content_type=headers.get("content-type", "application/octet-stream"),
                size=len(content),
                _content=bytes(content),
            )
        else:
            pairs.append((field_name, content.decode("utf-8", errors="replace")))

    parser = MultipartParser(
        boundary,
        {
            "on_part_begin": on_part_begin,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
            "on_header_end": on_header_end,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
        },
    )
    parser.write(body)
    parser.finalize()

    return FormData(pairs, files)
