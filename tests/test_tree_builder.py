# tests/test_tree_builder.py

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from sdl_parser.core.exceptions import ParseError
from sdl_parser.duration import Duration
from sdl_parser.loader import Tokenizer, build_tree


def build(text: str):
    return build_tree(Tokenizer.from_string(text))


def test_name_values_attributes() -> None:
    [tag] = build('person "Akiko" 32 smoker=false hr:id=5')
    assert tag.name == "person"
    assert tag.values == ["Akiko", 32]
    assert tag.attributes == {"id": 5, "smoker": False}
    assert tag.get_attribute_namespace("id") == "hr"


def test_namespaced_name() -> None:
    [tag] = build("person:son name=`Ichiro`")
    assert (tag.namespace, tag.name) == ("person", "son")


def test_leading_literal_makes_a_content_tag() -> None:
    [tag] = build('"hello" 5')
    assert tag.name == "content"
    assert tag.values == ["hello", 5]


def test_date_then_time_merges_into_one_datetime() -> None:
    [tag] = build("when 1980/12/5 12:30 15:00:00")
    assert tag.values == [datetime(1980, 12, 5, 12, 30), Duration(0, 15)]


def test_date_then_zoned_time() -> None:
    [tag] = build("when 1980/12/5 12:30-JST")
    assert tag.value == datetime(1980, 12, 5, 12, 30, tzinfo=ZoneInfo("Asia/Tokyo"))


def test_date_alone_stays_a_date() -> None:
    [tag] = build("when 1980/12/5 `later`")
    assert tag.values == [date(1980, 12, 5), "later"]


def test_attribute_values_merge_too() -> None:
    [tag] = build("meeting at=2005/12/31 23:59:59")
    assert tag.get_attribute("at") == datetime(2005, 12, 31, 23, 59, 59)


def test_children_blocks_nest() -> None:
    tags = build("a {\n    b {\n        c 1\n    }\n    d\n}\ne")
    assert [t.name for t in tags] == ["a", "e"]
    a = tags[0]
    assert [c.name for c in a.children] == ["b", "d"]
    assert a.get_child("c", recursive=True).value == 1


@pytest.mark.parametrize(
    "source, message, line, column",
    [
        ("when 1980/12/5 2d:12:30:00", "day component", 1, 16),
        ("span 12:30-JST", "Was expecting TIME SPAN but got TIME", 1, 6),
        ("a 1 b", 'Was expecting ":" or "=" but got END OF LINE', 1, 5),
        ("a b=", "Was expecting LITERAL but got END OF LINE", 1, 4),
        ("a b=c", "Was expecting LITERAL but got IDENTIFIER", 1, 5),
        ("a b:c 1", 'Was expecting "=" but got NUMBER', 1, 7),
        ("a b 1", 'Was expecting ":" or "=" but got NUMBER', 1, 5),
        ("a 1 = 2", "Was expecting LITERAL or IDENTIFIER but got EQUALS", 1, 5),
        ("a: 1", "Colon (:) encountered in unexpected location.", 1, 2),
        ("= 1", "Was expecting IDENTIFIER but got EQUALS", 1, 1),
        ("a {\n  b\n", "No close block", 2, -1),
        ("a\n}", "No opening block", 2, 1),
        ("{", "Block", 1, 1),
        ("a {\n} b\n", "Was expecting END OF LINE but got IDENTIFIER", 2, 3),
    ],
)
def test_grammar_errors(source: str, message: str, line: int, column: int) -> None:
    with pytest.raises(ParseError) as excinfo:
        build(source)
    assert message in str(excinfo.value)
    assert excinfo.value.line == line
    assert excinfo.value.position == column
