"""Tests for occurrence exclusions."""

from datetime import date, datetime

import pytest

from cadence import (
    FRIDAY,
    MONDAY,
    DailyPattern,
    apply_exclusions,
    between,
    excluded,
    on_date,
    on_weekday,
)


def test_on_date():
    """Test excluding a single calendar date regardless of time."""
    rule = on_date(date(2025, 1, 8))
    assert rule.apply(datetime(2025, 1, 8, 17, 30))
    assert not rule.apply(datetime(2025, 1, 9, 17, 30))


def test_on_weekday():
    """Test excluding a weekday (0 = Sunday)."""
    rule = on_weekday(FRIDAY)
    assert rule.apply(datetime(2025, 1, 10))
    assert not rule.apply(datetime(2025, 1, 9))


def test_on_weekday_rejects_invalid_day():
    with pytest.raises(ValueError, match="Weekday must be 0-6"):
        on_weekday(7)


def test_between_is_inclusive():
    """Test both range ends are excluded."""
    rule = between(date(2025, 8, 1), date(2025, 8, 14))
    assert rule.apply(date(2025, 8, 1))
    assert rule.apply(datetime(2025, 8, 14, 23, 0))
    assert not rule.apply(date(2025, 8, 15))


def test_between_rejects_inverted_range():
    with pytest.raises(ValueError, match="must be <= end"):
        between(date(2025, 8, 14), date(2025, 8, 1))


def test_composition():
    """Test combining exclusions with | and &."""
    august = between(date(2025, 8, 1), date(2025, 8, 31))
    august_mondays = august & on_weekday(MONDAY)
    either = on_date(date(2025, 12, 25)) | august_mondays

    assert either.apply(date(2025, 12, 25))
    assert either.apply(date(2025, 8, 4))
    assert not either.apply(date(2025, 8, 5))


def test_apply_exclusions_preserves_order():
    """Test filtering a generated sequence."""
    occurrences = DailyPattern().generate(datetime(2025, 1, 6), 7)
    kept = apply_exclusions(occurrences, [on_weekday(FRIDAY), on_date(date(2025, 1, 7))])

    assert [d.day for d in kept] == [6, 8, 9, 11, 12]
    assert excluded(datetime(2025, 1, 10), [on_weekday(FRIDAY)])
    assert not excluded(datetime(2025, 1, 10), [])
