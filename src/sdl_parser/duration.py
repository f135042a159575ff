# src/sdl_parser/duration.py

"""
Signed, millisecond-resolution time spans.

A Duration stores a single total millisecond count. The day, hour, minute,
second and millisecond components are derived from it by truncating
division, so every component of a negative span is zero or negative.

Text form (also the SDL literal form):

    12:30:00            12 hours 30 minutes
    34d:12:30:23.100    34 days, 12:30:23 and 100 ms
    -12:-30:-23.123     a negative span; each negative field carries its sign
"""

from __future__ import annotations

import functools
from datetime import timedelta

MILLISECONDS_IN_SECOND = 1000
MILLISECONDS_IN_MINUTE = 60 * MILLISECONDS_IN_SECOND
MILLISECONDS_IN_HOUR = 60 * MILLISECONDS_IN_MINUTE
MILLISECONDS_IN_DAY = 24 * MILLISECONDS_IN_HOUR

_MIN_MILLISECONDS = -(2 ** 63)
_MAX_MILLISECONDS = 2 ** 63 - 1


def _truncating_div(value: int, divisor: int) -> int:
    """Integer division rounding toward zero (``//`` floors)."""
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


def _pad(value: int, width: int = 2) -> str:
    return str(abs(value)).zfill(width)


@functools.total_ordering
class Duration:
    """An immutable span of time with millisecond resolution."""

    __slots__ = ("_milliseconds",)

    def __init__(
        self,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
    ):
        components = (days, hours, minutes, seconds, milliseconds)
        if any(c > 0 for c in components) and any(c < 0 for c in components):
            raise ValueError(
                "Duration components must share one sign; got "
                f"days={days}, hours={hours}, minutes={minutes}, "
                f"seconds={seconds}, milliseconds={milliseconds}"
            )

        total = (
            days * MILLISECONDS_IN_DAY
            + hours * MILLISECONDS_IN_HOUR
            + minutes * MILLISECONDS_IN_MINUTE
            + seconds * MILLISECONDS_IN_SECOND
            + milliseconds
        )
        self._set_total(total)

    def _set_total(self, total: int) -> None:
        if not _MIN_MILLISECONDS <= total <= _MAX_MILLISECONDS:
            raise ValueError(f"Duration of {total} ms is out of range")
        object.__setattr__(self, "_milliseconds", int(total))

    def __setattr__(self, name, value):
        raise AttributeError("Duration is immutable")

    # ------------------------------------------------------------------ #
    # Alternate constructors
    # ------------------------------------------------------------------ #

    @classmethod
    def from_milliseconds(cls, total: int) -> "Duration":
        span = cls.__new__(cls)
        span._set_total(total)
        return span

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        # timedelta normalizes to days/seconds/microseconds with only days signed
        total_us = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls.from_milliseconds(_truncating_div(total_us, 1000))

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self._milliseconds)

    # ------------------------------------------------------------------ #
    # Components
    # ------------------------------------------------------------------ #

    @property
    def days(self) -> int:
        return _truncating_div(self._milliseconds, MILLISECONDS_IN_DAY)

    @property
    def hours(self) -> int:
        remainder = self._milliseconds - self.days * MILLISECONDS_IN_DAY
        return _truncating_div(remainder, MILLISECONDS_IN_HOUR)

    @property
    def minutes(self) -> int:
        remainder = self._milliseconds - self.total_hours * MILLISECONDS_IN_HOUR
        return _truncating_div(remainder, MILLISECONDS_IN_MINUTE)

    @property
    def seconds(self) -> int:
        remainder = self._milliseconds - self.total_minutes * MILLISECONDS_IN_MINUTE
        return _truncating_div(remainder, MILLISECONDS_IN_SECOND)

    @property
    def milliseconds(self) -> int:
        return self._milliseconds - self.total_seconds * MILLISECONDS_IN_SECOND

    @property
    def total_hours(self) -> int:
        return _truncating_div(self._milliseconds, MILLISECONDS_IN_HOUR)

    @property
    def total_minutes(self) -> int:
        return _truncating_div(self._milliseconds, MILLISECONDS_IN_MINUTE)

    @property
    def total_seconds(self) -> int:
        return _truncating_div(self._milliseconds, MILLISECONDS_IN_SECOND)

    @property
    def total_milliseconds(self) -> int:
        return self._milliseconds

    # ------------------------------------------------------------------ #
    # Arithmetic (always returns a new Duration)
    # ------------------------------------------------------------------ #

    def negate(self) -> "Duration":
        return Duration.from_milliseconds(-self._milliseconds)

    def roll_days(self, days: int) -> "Duration":
        return Duration.from_milliseconds(self._milliseconds + days * MILLISECONDS_IN_DAY)

    def roll_hours(self, hours: int) -> "Duration":
        return Duration.from_milliseconds(self._milliseconds + hours * MILLISECONDS_IN_HOUR)

    def roll_minutes(self, minutes: int) -> "Duration":
        return Duration.from_milliseconds(
            self._milliseconds + minutes * MILLISECONDS_IN_MINUTE
        )

    def roll_seconds(self, seconds: int) -> "Duration":
        return Duration.from_milliseconds(
            self._milliseconds + seconds * MILLISECONDS_IN_SECOND
        )

    def roll_milliseconds(self, milliseconds: int) -> "Duration":
        return Duration.from_milliseconds(self._milliseconds + milliseconds)

    def __neg__(self) -> "Duration":
        return self.negate()

    # ------------------------------------------------------------------ #
    # Equality, ordering, text form
    # ------------------------------------------------------------------ #

    def __eq__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self._milliseconds == other._milliseconds

    def __lt__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self._milliseconds < other._milliseconds

    def __hash__(self) -> int:
        return hash(self._milliseconds)

    def __reduce__(self):
        return (Duration.from_milliseconds, (self._milliseconds,))

    def __str__(self) -> str:
        days = self.days
        hours = self.hours
        minutes = self.minutes
        seconds = self.seconds
        millis = self.milliseconds

        parts = []
        if days != 0:
            parts.append(f"{days}d")
        parts.append(("-" if hours < 0 else "") + _pad(hours))
        parts.append(("-" if minutes < 0 else "") + _pad(minutes))

        # a negative span whose only non-zero field is the millisecond part
        # still needs a visible sign, so it goes on the seconds field
        seconds_negative = seconds < 0 or (
            millis < 0 and days == 0 and hours == 0 and minutes == 0
        )
        text = ":".join(parts) + ":" + ("-" if seconds_negative else "") + _pad(seconds)

        if millis != 0:
            text += "." + _pad(millis, 3)
        return text

    def __repr__(self) -> str:
        return f"Duration({self})"
