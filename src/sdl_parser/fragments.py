# src/sdl_parser/fragments.py

"""
Helpers for parsing SDL fragments rather than whole documents.

    value("5L")                   -> Int64(5)
    list_values("1 true 12:24:01") -> [1, True, Duration(12:24:01)]
    map_attributes("a=1 b=on")     -> {"a": 1, "b": True}

All three raise ValueError on malformed input.
"""

from __future__ import annotations

from typing import Any, Dict, List

from sdl_parser.core.exceptions import ParseError
from sdl_parser.literals import parse_literal
from sdl_parser.tag import Tag


def value(literal: str) -> Any:
    """Parse a single SDL literal such as ``"abc"``, ``2005/12/31`` or ``5L``."""
    if literal is None:
        raise ValueError("literal cannot be None")
    return parse_literal(literal.strip())


def list_values(text: str) -> List[Any]:
    """Parse a space separated list of literals."""
    try:
        root = Tag("root").read(text)
    except ParseError as exc:
        raise ValueError(f"{text!r} is not a valid list of SDL values: {exc}") from exc

    content = root.get_child("content")
    if content is None:
        if root.children:
            raise ValueError(f"{text!r} is not a valid list of SDL values")
        return []
    return content.values


def map_attributes(text: str) -> Dict[str, Any]:
    """Parse an attribute fragment such as ``name="Akiko" age=32``."""
    try:
        root = Tag("root").read("atts " + text)
    except ParseError as exc:
        raise ValueError(f"{text!r} is not a valid set of SDL attributes: {exc}") from exc

    return root.get_child("atts").attributes
