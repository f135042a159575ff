# tests/test_exporter.py

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal

import pytest

from sdl_parser import parse
from sdl_parser.duration import Duration
from sdl_parser.exporter import (
    export_tags_to_json,
    export_tags_to_xml,
    tag_to_dict,
    tags_to_json,
    tags_to_xml,
)
from sdl_parser.exporter.json_exporter import literal_type
from sdl_parser.tag import Tag
from sdl_parser.types import Char, Float32, Int64

DOCUMENT = 'hr:person "Akiko" 5L private:age=32 {\n    pet "Tama"\n}\nempty'


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, "null"),
        (True, "bool"),
        (1, "int32"),
        (Int64(1), "int64"),
        (Float32(1), "float32"),
        (1.0, "float64"),
        (Decimal("1"), "decimal"),
        (Char("a"), "char"),
        ("a", "string"),
        (b"a", "binary"),
        (datetime(2000, 1, 1), "datetime"),
        (date(2000, 1, 1), "date"),
        (Duration(hours=1), "duration"),
    ],
)
def test_literal_type(value, kind: str) -> None:
    assert literal_type(value) == kind


def test_tag_to_dict() -> None:
    [person, empty] = parse(DOCUMENT)
    data = tag_to_dict(person)

    assert data["name"] == "person"
    assert data["namespace"] == "hr"
    assert data["values"] == [
        {"type": "string", "value": "Akiko"},
        {"type": "int64", "value": 5},
    ]
    assert data["attributes"] == [
        {"namespace": "private", "key": "age", "type": "int32", "value": 32},
    ]
    assert data["children"][0]["name"] == "pet"
    assert tag_to_dict(empty) == {
        "name": "empty",
        "namespace": "",
        "values": [],
        "attributes": [],
        "children": [],
    }


def test_json_payloads_for_text_typed_values() -> None:
    tag = Tag("t")
    tag.values = [Decimal("1.10"), b"hi", date(2005, 12, 31), datetime(2005, 12, 31, 12, 30), Duration(hours=12, minutes=30)]
    payloads = [v["value"] for v in tag_to_dict(tag)["values"]]
    assert payloads == ["1.10", "aGk=", "2005/12/31", "2005/12/31 12:30:00.000", "12:30:00"]


def test_tags_to_json_layouts() -> None:
    tags = parse(DOCUMENT)
    compact = tags_to_json(tags, indent=None)
    pretty = tags_to_json(tags)

    assert "\n" not in compact
    assert "\n" in pretty
    assert json.loads(compact) == json.loads(pretty)
    assert len(json.loads(compact)) == 2


def test_tags_to_xml() -> None:
    assert tags_to_xml(parse(DOCUMENT)) == (
        "<root>\n"
        '    <hr:person _val0="Akiko" _val1="5L" private:age="32">\n'
        '        <pet _val0="Tama"/>\n'
        "    </hr:person>\n"
        "    <empty/>\n"
        "</root>"
    )


def test_xml_escapes_attribute_text() -> None:
    tag = Tag("t")
    tag.add_value("a < b & c")
    assert tag.to_xml_string() == '<t _val0="a &lt; b &amp; c"/>'


def test_export_to_files(tmp_path) -> None:
    tags = parse(DOCUMENT)

    json_path = export_tags_to_json(tags, tmp_path / "json" / "out.json")
    assert json.loads(json_path.read_text(encoding="utf-8")) == json.loads(tags_to_json(tags))

    xml_path = export_tags_to_xml(tags, tmp_path / "out.xml", root_name="people")
    text = xml_path.read_text(encoding="utf-8")
    assert text.startswith("<people>")
    assert text.endswith("</people>\n")
