"""
sdl_parser: parser, document model and serializer for SDL
(Simple Declarative Language).

    from sdl_parser import Tag, parse

    tags = parse('person "Akiko" age=32')
    tags[0].get_attribute("age")   # 32
    str(tags[0])                   # 'person "Akiko" age=32'
"""

from sdl_parser.core.exceptions import (
    BinaryCodecError,
    InvalidIdentifierError,
    ParseError,
    SDLError,
    UnsupportedValueError,
)
from sdl_parser.duration import Duration
from sdl_parser.fragments import list_values, map_attributes, value
from sdl_parser.literals import coerce_literal, format_literal, parse_literal
from sdl_parser.parser_core import SDLParser, parse, parse_file
from sdl_parser.tag import Tag
from sdl_parser.types import Char, Float32, Int64

__version__ = "0.1.0"

__all__ = [
    "BinaryCodecError",
    "Char",
    "Duration",
    "Float32",
    "Int64",
    "InvalidIdentifierError",
    "ParseError",
    "SDLError",
    "SDLParser",
    "Tag",
    "UnsupportedValueError",
    "coerce_literal",
    "format_literal",
    "list_values",
    "map_attributes",
    "parse",
    "parse_file",
    "parse_literal",
    "value",
]
