"""Output formats — the closed set of body encodings a Context can emit.

Every render goes through ``serialize(fmt, value)``. Templates are
rendered by kida before they get here, so ``Format.HTML`` only
carries an already-rendered string.

Dataclass fields can rename their serialized key through field
metadata::

    @dataclass(frozen=True, slots=True)
    class User:
        id: str = field(metadata={"name": "Id"})
"""

import dataclasses
import json as json_module
from collections.abc import Mapping
from enum import Enum
from typing import Any
from xml.etree import ElementTree


class Format(Enum):
    """Supported response body encodings and their content types."""

    TEXT = "text/plain; charset=utf-8"
    HTML = "text/html; charset=utf-8"
    JSON = "application/json; charset=utf-8"
    XML = "application/xml; charset=utf-8"

    @property
    def content_type(self) -> str:
        return self.value


def to_mapping(value: Any) -> dict[str, Any]:
    """Flatten a dataclass or mapping into a plain dict of serialized keys."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.metadata.get("name", f.name): getattr(value, f.name)
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(k): v for k, v in value.items()}
    msg = f"Cannot serialize {type(value).__name__} as a record"
    raise TypeError(msg)


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_mapping(value)
    return str(value)


def _xml_root_name(value: Any) -> str:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return type(value).__name__
    return "response"


def _xml_fill(element: ElementTree.Element, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, Mapping) or (
        dataclasses.is_dataclass(value) and not isinstance(value, type)
    ):
        for key, child in to_mapping(value).items():
            _xml_fill(ElementTree.SubElement(element, key), child)
    elif isinstance(value, list | tuple):
        for item in value:
            _xml_fill(ElementTree.SubElement(element, "item"), item)
    else:
        element.text = str(value)


def serialize(fmt: Format, value: Any) -> tuple[str, str]:
    """Encode *value* for *fmt*. Returns ``(body, content_type)``."""
    match fmt:
        case Format.TEXT | Format.HTML:
            body = value if isinstance(value, str) else str(value)
        case Format.JSON:
            body = json_module.dumps(value, default=_json_default)
        case Format.XML:
            root = ElementTree.Element(_xml_root_name(value))
            _xml_fill(root, value)
            body = ElementTree.tostring(root, encoding="unicode")
    return body, fmt.content_type
