"""Tests for finch.http.formats — the closed set of output encodings."""

import json
from dataclasses import dataclass, field
from xml.etree import ElementTree

import pytest

from finch.http.formats import Format, serialize, to_mapping


@dataclass(frozen=True, slots=True)
class User:
    id: str = field(metadata={"name": "Id"})
    address_id: str = field(default="", metadata={"name": "AddressId"})


@dataclass(frozen=True, slots=True)
class Plain:
    name: str


class TestToMapping:
    def test_dataclass_uses_metadata_names(self) -> None:
        assert to_mapping(User(id="1", address_id="2")) == {"Id": "1", "AddressId": "2"}

    def test_dataclass_without_metadata(self) -> None:
        assert to_mapping(Plain(name="x")) == {"name": "x"}

    def test_mapping(self) -> None:
        assert to_mapping({"a": 1}) == {"a": 1}

    def test_rejects_scalars(self) -> None:
        with pytest.raises(TypeError, match="int"):
            to_mapping(3)


class TestSerialize:
    def test_content_types(self) -> None:
        assert Format.TEXT.content_type == "text/plain; charset=utf-8"
        assert Format.HTML.content_type == "text/html; charset=utf-8"
        assert Format.JSON.content_type == "application/json; charset=utf-8"
        assert Format.XML.content_type == "application/xml; charset=utf-8"

    def test_text_passthrough(self) -> None:
        assert serialize(Format.TEXT, "about\n") == ("about\n", Format.TEXT.content_type)

    def test_json_dataclass(self) -> None:
        body, _ = serialize(Format.JSON, User(id="5", address_id="6"))
        assert json.loads(body) == {"Id": "5", "AddressId": "6"}

    def test_json_mapping(self) -> None:
        body, content_type = serialize(Format.JSON, {"name": "finch"})
        assert json.loads(body) == {"name": "finch"}
        assert content_type.startswith("application/json")

    def test_xml_dataclass_root_and_children(self) -> None:
        body, content_type = serialize(Format.XML, User(id="42"))
        root = ElementTree.fromstring(body)
        assert root.tag == "User"
        assert root.findtext("Id") == "42"
        assert root.find("AddressId") is not None
        assert root.findtext("AddressId") in ("", None)
        assert content_type.startswith("application/xml")

    def test_xml_mapping_root(self) -> None:
        body, _ = serialize(Format.XML, {"a": "1", "items": ["x", "y"]})
        root = ElementTree.fromstring(body)
        assert root.tag == "response"
        assert root.findtext("a") == "1"
        assert [i.text for i in root.find("items")] == ["x", "y"]

    def test_xml_escapes_text(self) -> None:
        body, _ = serialize(Format.XML, {"a": "<b>&"})
        assert ElementTree.fromstring(body).findtext("a") == "<b>&"
