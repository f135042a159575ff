# src/sdl_parser/codec.py

"""
Base64 codec used for SDL binary literals (``[aGVsbG8=]``).

Encoding uses the standard alphabet with ``=`` padding and no line breaks.
Decoding is strict: the text length must be a multiple of four and every
character must belong to the alphabet.
"""

from __future__ import annotations

import base64
import binascii

from sdl_parser.core.exceptions import BinaryCodecError


def encode(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: str) -> bytes:
    if len(text) % 4 != 0:
        raise BinaryCodecError("Input string length is not a multiple of 4.")
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except UnicodeEncodeError:
        raise BinaryCodecError("Illegal character in base64 string.") from None
    except binascii.Error as exc:
        raise BinaryCodecError(f"Illegal character in base64 string: {exc}") from exc
