"""
Core building blocks shared by every layer of ``sdl_parser``.
"""

from .exceptions import (
    BinaryCodecError,
    InvalidIdentifierError,
    ParseError,
    SDLError,
    UnsupportedValueError,
)

__all__ = [
    "BinaryCodecError",
    "InvalidIdentifierError",
    "ParseError",
    "SDLError",
    "UnsupportedValueError",
]
