# tests/test_duration.py

from __future__ import annotations

from datetime import timedelta

import pytest

from sdl_parser.duration import Duration


def test_components_are_derived_from_total() -> None:
    span = Duration(34, 12, 30, 23, 100)
    assert span.days == 34
    assert span.hours == 12
    assert span.minutes == 30
    assert span.seconds == 23
    assert span.milliseconds == 100
    assert span.total_milliseconds == ((34 * 24 + 12) * 60 + 30) * 60_000 + 23_100


def test_negative_components_truncate_toward_zero() -> None:
    span = Duration(0, -12, -30, -23, -123)
    assert span.hours == -12
    assert span.minutes == -30
    assert span.seconds == -23
    assert span.milliseconds == -123
    assert span.total_hours == -12
    assert span.total_minutes == -(12 * 60 + 30)


@pytest.mark.parametrize(
    "span, text",
    [
        (Duration(0, 12, 30, 0, 0), "12:30:00"),
        (Duration(34, 12, 30, 23, 100), "34d:12:30:23.100"),
        (Duration(0, -12, -30, -23, -123), "-12:-30:-23.123"),
        (Duration(-5, -12, -30, -23, -123), "-5d:-12:-30:-23.123"),
        (Duration(0, 0, 0, 0, -5), "00:00:-00.005"),
        (Duration(0, 24, 0, 0, 0), "1d:00:00:00"),
        (Duration(), "00:00:00"),
    ],
)
def test_text_form(span: Duration, text: str) -> None:
    assert str(span) == text


def test_mixed_sign_components_are_rejected() -> None:
    with pytest.raises(ValueError):
        Duration(1, -2)


def test_equality_and_hash_use_total_milliseconds() -> None:
    assert Duration(0, 24) == Duration(1)
    assert hash(Duration(0, 24)) == hash(Duration(1))
    assert Duration(0, 0, 1) < Duration(0, 0, 0, 61)
    assert Duration(1) != Duration(0, 23)


def test_duration_is_immutable() -> None:
    span = Duration(1)
    with pytest.raises(AttributeError):
        span.days = 2


def test_arithmetic_returns_new_spans() -> None:
    span = Duration(0, 1)
    assert span.roll_days(1) == Duration(1, 1)
    assert span.roll_hours(-1) == Duration()
    assert span.roll_minutes(30).total_minutes == 90
    assert span.roll_seconds(1).seconds == 1
    assert span.roll_milliseconds(5).milliseconds == 5
    assert span.negate() == -span == Duration(0, -1)
    assert span == Duration(0, 1)


def test_timedelta_bridge() -> None:
    assert Duration.from_timedelta(timedelta(hours=-1, microseconds=1000)) == Duration.from_milliseconds(
        -3_599_999
    )
    # sub-millisecond remainders truncate toward zero
    assert Duration.from_timedelta(timedelta(microseconds=-1500)).total_milliseconds == -1
    assert Duration(1, 2, 3, 4, 5).to_timedelta() == timedelta(
        days=1, hours=2, minutes=3, seconds=4, milliseconds=5
    )
