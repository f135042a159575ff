# src/sdl_parser/types.py

"""
Marker types for SDL literals that Python's built-ins do not distinguish.

SDL literal variants map onto Python values as follows:

    Null        -> None
    Bool        -> bool
    Int32       -> int (within the signed 32-bit range)
    Int64       -> Int64      (int subclass, written with an ``L`` suffix)
    Float32     -> Float32    (float subclass, written with an ``F`` suffix)
    Float64     -> float
    Decimal     -> decimal.Decimal (written with a ``BD`` suffix)
    String      -> str
    Character   -> Char       (str subclass holding exactly one code point)
    ByteBuffer  -> bytes
    Date        -> datetime.date
    DateTime    -> datetime.datetime
    Duration    -> sdl_parser.duration.Duration
"""

from __future__ import annotations

import struct

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Int64(int):
    """A 64-bit integer literal (``5L``)."""

    __slots__ = ()

    def __new__(cls, value=0):
        number = super().__new__(cls, value)
        if not INT64_MIN <= number <= INT64_MAX:
            raise OverflowError(f"{int(number)} does not fit in a 64-bit integer")
        return number

    def __repr__(self) -> str:
        return f"Int64({int(self)})"


class Float32(float):
    """
    A single-precision float literal (``5F``).

    The stored value is rounded to the nearest IEEE-754 binary32 value so
    equality behaves like single-precision arithmetic would.
    """

    __slots__ = ()

    def __new__(cls, value=0.0):
        try:
            rounded = struct.unpack("<f", struct.pack("<f", float(value)))[0]
        except OverflowError:
            raise OverflowError(f"{value!r} does not fit in a 32-bit float") from None
        return super().__new__(cls, rounded)

    def __repr__(self) -> str:
        return f"Float32({float(self)!r})"


class Char(str):
    """A single-character literal (``'a'``)."""

    __slots__ = ()

    def __new__(cls, value):
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"A character literal holds exactly one character, got {value!r}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"
