"""Form body parsing — URL-encoded and multipart.

URL-encoded bodies use stdlib ``urllib.parse``. Multipart bodies go
through ``python-multipart``; only text fields are kept, file parts
are skipped because no finch handler accepts uploads.
"""

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import parse_qs

from python_multipart.multipart import MultipartParser, parse_options_header


class FormData(Mapping[str, str]):
    """Immutable parsed form fields.

    ``__getitem__`` returns the first value for a field.
    ``get_list`` returns all values (checkboxes, multi-selects).
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, list[str]] | None = None) -> None:
        self._data = data or {}

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FormData({dict(self)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, ()))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a request body into ``FormData``.

    Raises:
        ValueError: If *content_type* is not a form encoding, or a
            multipart body has no boundary.
    """
    media_type = content_type.lower().split(";")[0].strip()

    if media_type == "application/x-www-form-urlencoded":
        return FormData(parse_qs(body.decode("utf-8"), keep_blank_values=True))

    if media_type == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    chunk = bytearray()
    header_name = ""
    field_name: str | None = None
    is_file = False

    def on_part_begin() -> None:
        nonlocal field_name, is_file
        chunk.clear()
        field_name = None
        is_file = False

    def on_part_data(buf: bytes, start: int, end: int) -> None:
        chunk.extend(buf[start:end])

    def on_part_end() -> None:
        if field_name is not None and not is_file:
            data.setdefault(field_name, []).append(chunk.decode("utf-8", errors="replace"))

    def on_header_field(buf: bytes, start: int, end: int) -> None:
        nonlocal header_name
        header_name = buf[start:end].decode("latin-1").lower()

    def on_header_value(buf: bytes, start: int, end: int) -> None:
        nonlocal field_name, is_file
        if header_name != "content-disposition":
            return
        _, params = parse_options_header(buf[start:end])
        if (name := params.get(b"name")) is not None:
            field_name = name.decode("utf-8")
        is_file = b"filename" in params

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }
    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()
    return FormData(data)
