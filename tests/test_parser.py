# tests/test_parser.py

from __future__ import annotations

import io
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from sdl_parser import parse, parse_file
from sdl_parser.core.exceptions import ParseError
from sdl_parser.duration import Duration
from sdl_parser.parser_core import SDLParser
from sdl_parser.tag import Tag
from sdl_parser.types import Char, Float32, Int64
from sdl_parser.utils import tests_data_path


def value_of(root: Tag, name: str):
    return root.get_child(name).value


# ---------------------------------------------------------------------------
# basic_types.sdl
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "name, expected",
    [
        ("string1", "hello"),
        ("string2", "hi"),
        ("string3", "aloha"),
        ("string4", "hi there"),
        ("string5", "hi there joe"),
        ("string6", "line1\nline2"),
        ("string7", "line1\nline2"),
        ("string8", "line1\nline2\nline3"),
        (
            "string9",
            "Anything should go in this line without escapes \\ \\\\ \\n \\t \" \"\" ' ''",
        ),
        ("string10", 'escapes "\\\n\t'),
        ("japanese", "日本語"),
        ("korean", "여보세요"),
        ("russian", "здравствулте"),
        (
            "xml",
            '\n<root type="widget">\n    <element type="sprocket" />\n'
            "    <text>Hi there!</text>\n</root>\n",
        ),
        ("line_test", "\nnew line above and below\n"),
    ],
)
def test_strings(basic_types: Tag, name: str, expected: str) -> None:
    assert value_of(basic_types, name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("char1", "a"),
        ("char2", "A"),
        ("char3", "\\"),
        ("char4", "\n"),
        ("char5", "\t"),
        ("char6", "'"),
        ("char7", '"'),
        ("char8", "日"),
        ("char9", "여"),
        ("char10", "з"),
    ],
)
def test_characters(basic_types: Tag, name: str, expected: str) -> None:
    value = value_of(basic_types, name)
    assert isinstance(value, Char)
    assert value == expected


@pytest.mark.parametrize(
    "name, expected, kind",
    [
        ("int1", 0, int),
        ("int2", 5, int),
        ("int3", -100, int),
        ("int4", 234253532, int),
        ("long1", 0, Int64),
        ("long2", 5, Int64),
        ("long3", 5, Int64),
        ("long4", 3904857398753453453, Int64),
        ("float1", Float32(1), Float32),
        ("float2", Float32(0.23), Float32),
        ("float3", Float32(-0.34), Float32),
        ("double1", 2.0, float),
        ("double2", -0.234, float),
        ("double3", 2.34, float),
        ("decimal1", Decimal("0"), Decimal),
        ("decimal2", Decimal("11.111111"), Decimal),
        ("decimal3", Decimal("234535.3453453453454345345341242343"), Decimal),
    ],
)
def test_numbers(basic_types: Tag, name: str, expected, kind: type) -> None:
    value = value_of(basic_types, name)
    assert type(value) is kind
    assert value == expected


def test_booleans_and_null(basic_types: Tag) -> None:
    assert value_of(basic_types, "light-on") is True
    assert value_of(basic_types, "light-off") is False
    assert value_of(basic_types, "light1") is True
    assert value_of(basic_types, "light2") is False

    nothing = basic_types.get_child("nothing")
    assert nothing.values == [None]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("date1", date(2005, 12, 31)),
        ("date2", date(1882, 5, 2)),
        ("date3", date(1882, 5, 2)),
        ("_way_back", date(582, 9, 16)),
    ],
)
def test_dates(basic_types: Tag, name: str, expected: date) -> None:
    assert value_of(basic_types, name) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("time1", Duration(0, 12, 30, 0)),
        ("time2", Duration(0, 24, 0, 0)),
        ("time3", Duration(0, 1, 0, 0)),
        ("time4", Duration(0, 1, 0, 0)),
        ("time5", Duration(0, 12, 30, 2)),
        ("time6", Duration(0, 12, 30, 23)),
        ("time7", Duration(0, 12, 30, 23, 100)),
        ("time8", Duration(0, 12, 30, 23, 120)),
        ("time9", Duration(0, 12, 30, 23, 123)),
        ("time10", Duration(34, 12, 30, 23, 100)),
        ("time11", Duration(1, 12, 30, 0)),
        ("time12", Duration(5, 12, 30, 23, 123)),
        ("time13", Duration(0, -12, -30, -23, -123)),
        ("time14", Duration(-5, -12, -30, -23, -123)),
    ],
)
def test_time_spans(basic_types: Tag, name: str, expected: Duration) -> None:
    assert value_of(basic_types, name) == expected


def test_time_span_text(basic_types: Tag) -> None:
    assert str(value_of(basic_types, "time2")) == "1d:00:00:00"
    assert str(value_of(basic_types, "time13")) == "-12:-30:-23.123"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("date_time1", datetime(2005, 12, 31, 12, 30)),
        ("date_time2", datetime(1882, 5, 2, 12, 30)),
        ("date_time3", datetime(2005, 12, 31, 1, 0)),
        ("date_time4", datetime(1882, 5, 2, 1, 0)),
        ("date_time5", datetime(2005, 12, 31, 12, 30, 23, 120000)),
        ("date_time6", datetime(1882, 5, 2, 12, 30, 23, 123000)),
        ("date_time7", datetime(1882, 5, 2, 12, 30, 23, 123000, tzinfo=ZoneInfo("Asia/Tokyo"))),
        ("date_time8", datetime(985, 4, 11, 12, 30, 23, 123000, tzinfo=ZoneInfo("America/Los_Angeles"))),
    ],
)
def test_date_times(basic_types: Tag, name: str, expected: datetime) -> None:
    value = value_of(basic_types, name)
    assert value == expected
    assert (value.tzinfo is None) == (expected.tzinfo is None)


def test_binaries(basic_types: Tag) -> None:
    assert value_of(basic_types, "hi") == b"hi"

    png = value_of(basic_types, "png")
    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    assert len(png) == 375


# ---------------------------------------------------------------------------
# structures.sdl
# ---------------------------------------------------------------------------

def test_empty_tag(structures: Tag) -> None:
    tag = structures.get_child("empty_tag")
    assert tag.values == []
    assert tag.attributes == {}
    assert tag.children == []


@pytest.mark.parametrize(
    "name, expected",
    [
        ("values1", ["hi"]),
        ("values2", ["hi", "ho"]),
        ("values3", [1, "ho"]),
        ("values4", ["hi", 5]),
        ("values5", [1, 2]),
        ("values6", [1, 2, 3]),
        ("values7", [None, "foo", False, date(1980, 12, 5)]),
        (
            "values8",
            [None, "foo", False, datetime(1980, 12, 5, 12, 30), "there", Duration(0, 15, 23, 12, 234)],
        ),
        (
            "values9",
            [
                None,
                "foo",
                False,
                datetime(1980, 12, 5, 12, 30),
                "there",
                datetime(1989, 8, 12, 15, 23, 12, 234000, tzinfo=ZoneInfo("Asia/Tokyo")),
            ],
        ),
        (
            "values10",
            [
                None,
                "foo",
                False,
                datetime(1980, 12, 5, 12, 30),
                "there",
                Duration(0, 15, 23, 12, 234),
                "more stuff",
            ],
        ),
        (
            "values11",
            [
                None,
                "foo",
                False,
                datetime(1980, 12, 5, 12, 30),
                "there",
                Duration(123, 15, 23, 12, 234),
                "more stuff here",
            ],
        ),
        ("values12", [1, 3]),
        ("values13", [1, 3]),
        ("values14", [1, 3]),
        ("values15", [1, 2, 4, 5, 6]),
        ("values16", [1, 2, 5]),
        ("values17", [1, 2, 5]),
        ("values18", [1, 2, 7]),
        ("values19", [1, 3, 5, 7]),
        ("values20", [1, 3, 5]),
        ("values21", [1, 3, 5]),
        ("values22", ["hi", "ho", "ho", 5, "hi"]),
    ],
)
def test_values(structures: Tag, name: str, expected: list) -> None:
    assert structures.get_child(name).values == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("atts1", {"name": "joe"}),
        ("atts2", {"size": 5}),
        ("atts3", {"name": "joe", "size": 5}),
        ("atts4", {"name": "joe", "size": 5, "smoker": False}),
        ("atts5", {"name": "joe", "smoker": False}),
        ("atts6", {"name": "joe", "smoker": False}),
        ("atts7", {"name": "joe"}),
        (
            "atts8",
            {"name": "joe", "size": 5, "smoker": False, "text": "hi", "birthday": date(1972, 5, 23)},
        ),
        ("atts9", {"key": b"mykey"}),
    ],
)
def test_attributes(structures: Tag, name: str, expected: dict) -> None:
    assert structures.get_child(name).attributes == expected


@pytest.mark.parametrize(
    "name, values, attributes",
    [
        ("valatts1", ["joe"], {"size": 5}),
        ("valatts2", ["joe"], {"size": 5}),
        ("valatts3", ["joe"], {"size": 5}),
        ("valatts4", ["joe"], {"size": 5, "weight": 160, "hat": "big"}),
        ("valatts5", ["joe", "is a\n nice guy"], {"size": 5, "smoker": False}),
        ("valatts6", ["joe", "is a\n nice guy"], {"size": 5, "house": "big and\n blue"}),
        ("valatts7", ["joe", "is a\n nice guy"], {"size": 5, "smoker": False}),
        ("valatts8", ["joe", "is a\n nice guy"], {"size": 5, "smoker": False}),
        ("valatts9", ["joe", "is a\n nice guy"], {"size": 5, "smoker": False}),
    ],
)
def test_values_and_attributes(structures: Tag, name: str, values: list, attributes: dict) -> None:
    tag = structures.get_child(name)
    assert tag.values == values
    assert tag.attributes == attributes


def test_children(structures: Tag) -> None:
    parent = structures.get_child("parent")
    assert [c.name for c in parent.children] == ["son", "daughter"]

    grandparent = structures.get_child("grandparent")
    assert len(grandparent.children) == 2
    assert len(grandparent.get_children(recursive=True)) == 6

    grandparent2 = structures.get_child("grandparent2")
    assert len(grandparent2.get_children("child", recursive=True)) == 5
    daughter = grandparent2.get_child("daughter", recursive=True)
    assert daughter.get_attribute("birthday") == date(1976, 4, 18)


def test_content_children(structures: Tag) -> None:
    files = structures.get_child("files")
    assert files.children_values("content") == [
        "c:/file1.txt",
        "c:/file2.txt",
        "c:/folder",
    ]
    folder = files.children[2]
    assert folder.get_child("content").value == "c:/folder/file3.txt"

    matrix = structures.get_child("matrix")
    assert matrix.children_values("content") == [[1, 2, 3], [4, 5, 6]]


def test_namespaces(structures: Tag) -> None:
    parent = structures.get_child("parent", recursive=False)
    person_parent = structures.children_for_namespace("person")
    assert [t.qualified_name for t in person_parent] == ["person:parent"]
    assert parent.namespace == ""
    assert [c.qualified_name for c in person_parent[0].children] == ["person:son", "person:daughter"]

    grandparent3 = structures.get_child("grandparent3")
    assert len(grandparent3.children_for_namespace("person", recursive=True)) == 5

    daughter = grandparent3.get_child("daughter", recursive=True)
    assert daughter.attributes_for_namespace("public") == {
        "name": "Akiko",
        "birthday": date(1976, 4, 18),
    }
    assert daughter.attributes_for_namespace("private") == {"smoker": False}


# ---------------------------------------------------------------------------
# round trips and sources
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("fixture", ["basic_types", "structures"])
def test_written_text_parses_back_to_an_equal_tree(request, fixture: str) -> None:
    root = request.getfixturevalue(fixture)
    again = Tag("test").read(str(root)).get_child("root")
    assert again == root
    assert again.get_child("date_time7" if fixture == "basic_types" else "values9") is not None


def test_parse_accepts_bytes_streams_and_paths() -> None:
    text = 'greeting "こんにちは" 5L'
    expected = parse(text)

    assert parse(text.encode("utf-8")) == expected
    assert parse(io.BytesIO(text.encode("utf-8"))) == expected
    assert parse(io.StringIO(text)) == expected

    path = tests_data_path("structures.sdl")
    assert parse(Path(path)) == parse_file(path)


def test_parsing_closes_the_source() -> None:
    stream = io.StringIO("a 1")
    parse(stream)
    assert stream.closed

    broken = io.StringIO('a "open')
    with pytest.raises(ParseError):
        parse(broken)
    assert broken.closed


def test_crlf_and_cr_line_endings() -> None:
    tags = parse("a 1\r\nb `x\r\ny`\rc")
    assert [t.name for t in tags] == ["a", "b", "c"]
    assert tags[1].value == "x\ny"


def test_unterminated_string_reports_its_start() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse('ok\nname "never closed')
    err = excinfo.value
    assert (err.line, err.position) == (2, 6)
    assert str(err).endswith("Line 2, Position 6")


def test_invalid_utf8_bytes_are_a_parse_error() -> None:
    with pytest.raises(ParseError, match="Invalid utf-8") as excinfo:
        parse(b'a 1\nx "\xff\xfe"')
    assert (excinfo.value.line, excinfo.value.position) == (2, -1)


def test_invalid_utf8_in_a_binary_stream_is_a_parse_error() -> None:
    stream = io.BytesIO(b'x "\xff\xfe"\n')
    with pytest.raises(ParseError, match="Invalid utf-8"):
        parse(stream)
    assert stream.closed


def test_invalid_utf8_file_is_a_parse_error(tmp_path) -> None:
    path = tmp_path / "latin1.sdl"
    path.write_bytes('name "René"'.encode("latin-1"))
    with pytest.raises(ParseError, match="Invalid utf-8"):
        parse_file(path)


def test_overflowing_float_is_a_parse_error() -> None:
    with pytest.raises(ParseError, match="out of range"):
        parse("x " + "9" * 400 + ".0")


def test_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        parse_file("no/such/file.sdl")


def test_unsupported_source_type() -> None:
    with pytest.raises(TypeError):
        SDLParser().parse(42)
