# src/sdl_parser/zones.py

"""
Time zone designators for SDL date/time literals.

A zone follows the time component after a dash, e.g. ``12:30-JST`` or
``12:30-GMT+09:00``. Three spellings are understood:

* ``GMT``/``UTC`` and fixed offsets ``GMT+HH``, ``GMT-HH:MM``;
* three-letter abbreviations from the table below;
* IANA zone IDs (``Europe/Paris``) resolved with :mod:`zoneinfo`.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Legacy three-letter IDs -> IANA zone. Abbreviations that are themselves
# IANA keys (EST, MST, HST, CET, EET, MET, WET) resolve through zoneinfo.
ABBREVIATIONS: Dict[str, str] = {
    "ACT": "Australia/Darwin",
    "AET": "Australia/Sydney",
    "AGT": "America/Argentina/Buenos_Aires",
    "ART": "Africa/Cairo",
    "AST": "America/Anchorage",
    "BET": "America/Sao_Paulo",
    "BST": "Asia/Dhaka",
    "CAT": "Africa/Harare",
    "CNT": "America/St_Johns",
    "CST": "America/Chicago",
    "CTT": "Asia/Shanghai",
    "EAT": "Africa/Addis_Ababa",
    "ECT": "Europe/Paris",
    "IET": "America/Indiana/Indianapolis",
    "IST": "Asia/Kolkata",
    "JST": "Asia/Tokyo",
    "MIT": "Pacific/Apia",
    "NET": "Asia/Yerevan",
    "NST": "Pacific/Auckland",
    "PLT": "Asia/Karachi",
    "PNT": "America/Phoenix",
    "PRT": "America/Puerto_Rico",
    "PST": "America/Los_Angeles",
    "SST": "Pacific/Guadalcanal",
    "VST": "Asia/Ho_Chi_Minh",
}

_KEY_TO_ABBREVIATION = {key: abbr for abbr, key in ABBREVIATIONS.items()}

_GMT_OFFSET = re.compile(r"^(?:GMT|UTC)([+-])(\d{1,2})(?::?(\d{2}))?$")

# characters the tokenizer keeps inside a single time token
_TOKEN_SAFE = re.compile(r"^[A-Za-z][A-Za-z0-9/+\-:.]*$")


def _fixed_offset(sign: str, hours: int, minutes: int) -> timezone:
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time zone offset out of range: GMT{sign}{hours:02d}:{minutes:02d}")
    offset = timedelta(hours=hours, minutes=minutes)
    if sign == "-":
        offset = -offset
    return timezone(offset, f"GMT{sign}{hours:02d}:{minutes:02d}")


def parse_zone(text: str) -> tzinfo:
    """
    Resolve a zone designator to a tzinfo.

    Raises:
        ValueError: if the designator is empty or unknown.
    """
    if not text:
        raise ValueError("Empty time zone designator")

    if text in ("GMT", "UTC"):
        return timezone(timedelta(0), text)

    match = _GMT_OFFSET.match(text)
    if match:
        sign, hours, minutes = match.groups()
        return _fixed_offset(sign, int(hours), int(minutes or 0))

    key = ABBREVIATIONS.get(text, text)
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone <{text}>") from None


def _offset_designator(offset: Optional[timedelta]) -> str:
    if offset is None:
        offset = timedelta(0)
    total_minutes = int(offset.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


def format_zone(moment: datetime) -> Optional[str]:
    """
    Return the designator to write after a date/time, or None for naive values.

    The result always parses back to an equivalent zone.
    """
    tz = moment.tzinfo
    if tz is None:
        return None

    if isinstance(tz, ZoneInfo):
        key = tz.key
        if key in _KEY_TO_ABBREVIATION:
            return _KEY_TO_ABBREVIATION[key]
        if key and _TOKEN_SAFE.match(key):
            return key
        return _offset_designator(moment.utcoffset())

    if tz is timezone.utc:
        return "UTC"

    # offset-style names ("UTC-05:00") are rewritten in GMT form below
    name = tz.tzname(moment)
    if name and not _GMT_OFFSET.match(name) and _TOKEN_SAFE.match(name):
        try:
            parsed = parse_zone(name)
        except ValueError:
            parsed = None
        if parsed is not None and parsed.utcoffset(moment) == moment.utcoffset():
            return name

    return _offset_designator(moment.utcoffset())
