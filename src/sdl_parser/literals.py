# src/sdl_parser/literals.py

"""
Literal codec: SDL literal text <-> typed Python values.

Parsing helpers raise ``ValueError`` with a descriptive message; the
tokenizer turns those into positioned ParseErrors. Formatting is the
inverse of parsing for every literal type (see sdl_parser.types for the
Python representation of each SDL type).

Examples:
    parse_literal("5")          -> 5
    parse_literal("5L")         -> Int64(5)
    parse_literal("5.5BD")      -> Decimal("5.5")
    parse_literal("2005/12/31") -> date(2005, 12, 31)
    parse_literal("12:30:00")   -> Duration(12:30:00)
    format_literal("a\\tb")     -> '"a\\\\tb"'
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from decimal import Decimal
from typing import Any, Optional, Tuple

from sdl_parser import codec
from sdl_parser.core.exceptions import UnsupportedValueError
from sdl_parser.duration import Duration
from sdl_parser.types import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, Char, Float32, Int64
from sdl_parser.zones import format_zone, parse_zone

NUMBER_START = "0123456789-."
BINARY_WHITESPACE = " \t\r\n"

STRING_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}
CHARACTER_ESCAPES = {**STRING_ESCAPES, "'": "'"}

KEYWORDS = {
    "null": None,
    "true": True,
    "on": True,
    "false": False,
    "off": False,
}

_NUMBER_BODY = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")
_DIGITS = re.compile(r"^\d+$")
_SIGNED_DIGITS = re.compile(r"^-?\d+$")


# ---------------------------------------------------------------------------
# Strings and characters
# ---------------------------------------------------------------------------

def unescape(body: str, escapes=STRING_ESCAPES) -> str:
    """Resolve backslash escapes in the body of a quoted literal."""
    out = []
    chars = iter(body)
    for c in chars:
        if c != "\\":
            out.append(c)
            continue
        nxt = next(chars, None)
        if nxt is None:
            raise ValueError("Escape (\\) at the end of a literal")
        if nxt not in escapes:
            raise ValueError(f'Illegal escape character in string literal: "{nxt}".')
        out.append(escapes[nxt])
    return "".join(out)


def escape_string(s: str) -> str:
    return (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


def escape_char(c: str) -> str:
    return {
        "\\": "\\\\",
        "'": "\\'",
        "\t": "\\t",
        "\r": "\\r",
        "\n": "\\n",
    }.get(c, c)


def parse_string(literal: str) -> str:
    if len(literal) < 2 or literal[0] != literal[-1] or literal[0] not in '"`':
        raise ValueError(
            f"Malformed string <{literal}>. Strings must start and end with \" or `"
        )
    body = literal[1:-1]
    if literal[0] == "`":
        return body
    return unescape(body)


def parse_character(literal: str) -> Char:
    if len(literal) < 3 or literal[0] != "'" or literal[-1] != "'":
        raise ValueError(
            f"Malformed character <{literal}>. Character literals must start "
            "and end with single quotes."
        )
    body = unescape(literal[1:-1], CHARACTER_ESCAPES)
    if len(body) != 1:
        raise ValueError(f"Character literal <{literal}> must hold exactly one character")
    return Char(body)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def _finite(value: float, literal: str) -> float:
    if not math.isfinite(value):
        raise ValueError(f"Number <{literal}> is out of range")
    return value


def parse_number(literal: str):
    """
    Parse a numeric literal.

    No suffix -> int (32-bit) or float when a decimal point is present;
    ``L`` -> Int64, ``F`` -> Float32, ``D`` -> float, ``BD`` -> Decimal.
    Suffixes are case-insensitive.
    """
    has_dot = False
    tail_start = len(literal)

    for i, c in enumerate(literal):
        if c in "-0123456789":
            continue
        if c == ".":
            if has_dot:
                raise ValueError(f"Encountered second decimal point in <{literal}>.")
            if i == len(literal) - 1:
                raise ValueError(
                    f"Encountered decimal point at the end of the number <{literal}>."
                )
            has_dot = True
            continue
        tail_start = i
        break

    number, tail = literal[:tail_start], literal[tail_start:].lower()

    if not _NUMBER_BODY.match(number):
        raise ValueError(f"Could not parse number <{literal}>")

    if tail == "":
        if has_dot:
            return _finite(float(number), literal)
        value = int(number)
        if not INT32_MIN <= value <= INT32_MAX:
            raise ValueError(
                f"Integer literal <{literal}> is out of 32-bit range; use the L suffix"
            )
        return value

    if tail == "bd":
        return Decimal(number)
    if tail == "l":
        if has_dot:
            raise ValueError(f"Long literal with decimal point <{literal}>")
        try:
            return Int64(int(number))
        except OverflowError:
            raise ValueError(f"Long literal <{literal}> is out of 64-bit range") from None
    if tail == "f":
        try:
            return _finite(Float32(float(number)), literal)
        except OverflowError:
            raise ValueError(f"Float literal <{literal}> is out of 32-bit range") from None
    if tail == "d":
        return _finite(float(number), literal)

    raise ValueError(f"Could not parse number <{literal}>")


def _plain_decimal_text(text: str) -> str:
    """Rewrite exponent notation ('1e+20') as plain digits, keeping a decimal point."""
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def format_float(value: float) -> str:
    return _plain_decimal_text(repr(float(value)))


def format_float32(value: Float32) -> str:
    # shortest text that reads back to the same single-precision value
    text = repr(float(value))
    for digits in range(1, 10):
        candidate = f"{float(value):.{digits}g}"
        if Float32(float(candidate)) == value:
            text = candidate
            break
    return _plain_decimal_text(text)


# ---------------------------------------------------------------------------
# Dates, times, durations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimeComponents:
    """
    A parsed ``[Nd:]HH:MM[:SS[.mmm]][-ZONE]`` token.

    The same text shape is either a time span or the time-of-day part of a
    date/time; which one is decided by the tree builder from context.
    """

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    zone: Optional[tzinfo] = None
    zone_text: Optional[str] = None

    @property
    def has_zone(self) -> bool:
        return self.zone_text is not None

    def to_duration(self) -> Duration:
        if self.has_zone:
            raise ValueError("A time span cannot have a time zone")
        return Duration(self.days, self.hours, self.minutes, self.seconds, self.milliseconds)


def split_zone(text: str) -> Tuple[str, Optional[str]]:
    """Split ``12:30-JST`` into ('12:30', 'JST'); the zone starts at the first '-' + letter."""
    for i in range(1, len(text) - 1):
        if text[i] == "-" and text[i + 1].isalpha():
            return text[:i], text[i + 1:]
    return text, None


def _time_fields(segments, literal: str):
    """Return (days, hours, minutes, seconds, millis) applying SDL sign rules."""
    texts = list(segments)
    day_text = None
    if len(texts) == 4:
        day_text = texts.pop(0)
        if not day_text.endswith("d"):
            raise ValueError(
                "The day component of a time span must end with a lower case d "
                f"<{literal}>"
            )
        day_text = day_text[:-1]

    hour_text, minute_text = texts[0], texts[1]
    second_text, milli_text = "0", "0"
    if len(texts) == 3:
        second_text, _, milli_text = texts[2].partition(".")
        if not _DIGITS.match(milli_text or "0") or len(milli_text) > 3:
            raise ValueError(f"Malformed milliseconds in <{literal}>")
        milli_text = (milli_text or "0").ljust(3, "0")

    field_texts = [day_text or "0", hour_text, minute_text, second_text]
    for text in field_texts:
        if not _SIGNED_DIGITS.match(text):
            raise ValueError(f"Time format: malformed component <{text}> in <{literal}>")

    values = []
    negative = False
    seen_positive = False
    for text in field_texts:
        value = int(text)
        if text.startswith("-"):
            if seen_positive:
                raise ValueError(f"Time span components have mixed signs <{literal}>")
            negative = True
        elif negative:
            value = -value
        elif value > 0:
            seen_positive = True
        values.append(value)

    millis = int(milli_text)
    values.append(-millis if negative else millis)
    return tuple(values)


def parse_time_components(literal: str) -> TimeComponents:
    time_text, zone_text = split_zone(literal)
    segments = time_text.split(":")

    if zone_text is not None:
        if not 2 <= len(segments) <= 3:
            raise ValueError(
                "date/time format exception. Must use hh:mm(:ss)(.xxx)(-z)"
            )
    elif not 2 <= len(segments) <= 4:
        raise ValueError(
            "Time format exception. For time spans use (d:)hh:mm:ss(.xxx) and "
            "for the time component of a date/time type use hh:mm(:ss)(.xxx)(-z). "
            "If you use the day component of a time span make sure to prefix "
            "it with a lower case d"
        )

    days, hours, minutes, seconds, millis = _time_fields(segments, literal)
    zone = parse_zone(zone_text) if zone_text is not None else None
    return TimeComponents(days, hours, minutes, seconds, millis, zone, zone_text)


def parse_duration(literal: str) -> Duration:
    """
    Parse a stand-alone time span literal ``(d:)hh:mm(:ss)(.xxx)``.

    Seconds may be omitted, as they may for a time span inside a document.
    """
    if not 2 <= len(literal.split(":")) <= 4:
        raise ValueError(
            f"Malformed time span <{literal}>. Time spans must use the format "
            '(d:)hh:mm(:ss)(.xxx) Note: if the day component is included it must '
            'be suffixed with lower case "d"'
        )
    return parse_time_components(literal).to_duration()


def parse_date(literal: str) -> date:
    comps = literal.split("/")
    if len(comps) != 3 or not all(_DIGITS.match(c) for c in comps):
        raise ValueError(f"Malformed Date <{literal}>")
    try:
        return date(int(comps[0]), int(comps[1]), int(comps[2]))
    except ValueError as exc:
        raise ValueError(f"Malformed Date <{literal}>: {exc}") from None


def combine(day: date, time: TimeComponents) -> datetime:
    """Join a date with the time-of-day reading of a time token."""
    if time.days != 0:
        raise ValueError("The time component of a date/time cannot have a day component")
    if min(time.hours, time.minutes, time.seconds, time.milliseconds) < 0:
        raise ValueError("The time component of a date/time cannot be negative")
    try:
        return datetime(
            day.year,
            day.month,
            day.day,
            time.hours,
            time.minutes,
            time.seconds,
            time.milliseconds * 1000,
            tzinfo=time.zone,
        )
    except ValueError as exc:
        raise ValueError(f"Malformed time component in date/time: {exc}") from None


def parse_date_time(literal: str):
    """Parse ``yyyy/mm/dd`` or ``yyyy/mm/dd hh:mm(:ss)(.xxx)(-z)``."""
    date_text, _, time_text = literal.strip().partition(" ")
    day = parse_date(date_text)
    if not time_text.strip():
        return day
    return combine(day, parse_time_components(time_text.strip()))


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------

def parse_binary(literal: str) -> bytes:
    if len(literal) < 2 or literal[0] != "[" or literal[-1] != "]":
        raise ValueError(f"Malformed binary literal <{literal}>")
    stripped = "".join(c for c in literal[1:-1] if c not in BINARY_WHITESPACE)
    return codec.decode(stripped)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def parse_literal(literal: str):
    """
    Return the value represented by an SDL literal.

    Raises:
        ValueError: if the text is not a well-formed SDL literal.
    """
    if literal is None:
        raise ValueError("literal cannot be None")
    if not literal:
        raise ValueError("An empty string does not represent an SDL type.")

    first = literal[0]
    if first in '"`':
        return parse_string(literal)
    if first == "'":
        return parse_character(literal)
    if literal in KEYWORDS:
        return KEYWORDS[literal]
    if first == "[":
        return parse_binary(literal)
    if first != "/" and "/" in literal:
        return parse_date_time(literal)
    if first != ":" and ":" in literal:
        return parse_duration(literal)
    if first in NUMBER_START:
        return parse_number(literal)

    raise ValueError(f"String {literal} does not represent an SDL type.")


def coerce_literal(value: Any):
    """
    Coerce ``value`` to a legal SDL literal value or raise.

    Bridging conversions: bytearray/memoryview -> bytes, timedelta -> Duration,
    int beyond 32 bits -> Int64, datetime microseconds truncated to
    milliseconds.

    Raises:
        UnsupportedValueError: for any other type, or numbers SDL cannot hold.
    """
    if value is None or isinstance(value, (bool, Int64, Char, Duration, bytes)):
        return value

    if isinstance(value, Float32):
        if value != value or value in (float("inf"), float("-inf")):
            raise UnsupportedValueError(f"{value!r} is not representable as an SDL literal")
        return value

    if isinstance(value, int):
        number = int(value)
        if INT32_MIN <= number <= INT32_MAX:
            return number
        if INT64_MIN <= number <= INT64_MAX:
            return Int64(number)
        raise UnsupportedValueError(f"{number} does not fit in a 64-bit SDL integer")

    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise UnsupportedValueError(f"{value!r} is not representable as an SDL literal")
        return float(value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnsupportedValueError(f"{value!r} is not representable as an SDL literal")
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)

    if isinstance(value, datetime):
        return value.replace(microsecond=(value.microsecond // 1000) * 1000)

    if isinstance(value, date):
        return value

    if isinstance(value, timedelta):
        return Duration.from_timedelta(value)

    raise UnsupportedValueError(f"{type(value).__name__} is not coercible to an SDL type")


def format_date(value: date) -> str:
    return f"{value.year:04d}/{value.month:02d}/{value.day:02d}"


def format_date_time(value: datetime) -> str:
    text = (
        f"{format_date(value)} {value.hour:02d}:{value.minute:02d}:"
        f"{value.second:02d}.{value.microsecond // 1000:03d}"
    )
    zone = format_zone(value)
    if zone is not None:
        text += "-" + zone
    return text


def format_literal(value: Any, quote: bool = True) -> str:
    """
    Render a value as SDL literal text.

    With ``quote=False`` strings and characters are escaped but not wrapped
    in quotes.
    """
    value = coerce_literal(value)

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Char):
        text = escape_char(value)
        return f"'{text}'" if quote else text
    if isinstance(value, str):
        text = escape_string(value)
        return f'"{text}"' if quote else text
    if isinstance(value, Int64):
        return f"{int(value)}L"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Float32):
        return format_float32(value) + "F"
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, Decimal):
        return format(value, "f") + "BD"
    if isinstance(value, bytes):
        return "[" + codec.encode(value) + "]"
    if isinstance(value, datetime):
        return format_date_time(value)
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, Duration):
        return str(value)

    raise UnsupportedValueError(f"{type(value).__name__} is not coercible to an SDL type")
