"""Composable exclusions for skipping occurrences of a series.

Exclusions are predicates over a single occurrence and combine with ``|``
(any of) and ``&`` (all of)::

    >>> summer = between(date(2025, 8, 1), date(2025, 8, 14))
    >>> holidays = on_date(date(2025, 12, 25)) | summer
    >>> no_fridays = on_weekday(FRIDAY)
    >>> kept = apply_exclusions(occurrences, [holidays, no_fridays])
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date, datetime
from typing import TypeVar

from typing_extensions import override

from cadence.util import WEEKDAYS, weekday_index

DateT = TypeVar("DateT", bound=date)


class Exclusion(ABC):

    @abstractmethod
    def apply(self, occurrence: date) -> bool:
        """Return True if the occurrence is excluded."""
        pass

    def __or__(self, other: "Exclusion") -> "Exclusion":
        return AnyOf(self, other)

    def __and__(self, other: "Exclusion") -> "Exclusion":
        return AllOf(self, other)


class AnyOf(Exclusion):
    def __init__(self, *exclusions: Exclusion):
        self.exclusions: tuple[Exclusion, ...] = exclusions

    @override
    def apply(self, occurrence: date) -> bool:
        return any(e.apply(occurrence) for e in self.exclusions)


class AllOf(Exclusion):
    def __init__(self, *exclusions: Exclusion):
        self.exclusions: tuple[Exclusion, ...] = exclusions

    @override
    def apply(self, occurrence: date) -> bool:
        return all(e.apply(occurrence) for e in self.exclusions)


def _calendar_day(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


class OnDate(Exclusion):
    def __init__(self, day: date):
        self.day: date = _calendar_day(day)

    @override
    def apply(self, occurrence: date) -> bool:
        return _calendar_day(occurrence) == self.day


class OnWeekday(Exclusion):
    def __init__(self, day: int):
        if day not in WEEKDAYS:
            raise ValueError(
                f"Weekday must be 0-6 (0=Sunday), got {day!r}.\n"
                f"Example: on_weekday(FRIDAY)  # FRIDAY == 5"
            )
        self.day: int = day

    @override
    def apply(self, occurrence: date) -> bool:
        return weekday_index(occurrence) == self.day


class Between(Exclusion):
    """Inclusive calendar date range."""

    def __init__(self, start: date, end: date):
        start, end = _calendar_day(start), _calendar_day(end)
        if start > end:
            raise ValueError(
                f"Exclusion range start ({start}) must be <= end ({end}).\n"
                f"Example: between(date(2025, 8, 1), date(2025, 8, 14))"
            )
        self.start: date = start
        self.end: date = end

    @override
    def apply(self, occurrence: date) -> bool:
        return self.start <= _calendar_day(occurrence) <= self.end


def on_date(day: date) -> Exclusion:
    return OnDate(day)


def on_weekday(day: int) -> Exclusion:
    return OnWeekday(day)


def between(start: date, end: date) -> Exclusion:
    return Between(start, end)


def excluded(occurrence: date, exclusions: Iterable[Exclusion]) -> bool:
    return any(e.apply(occurrence) for e in exclusions)


def apply_exclusions(
    occurrences: Iterable[DateT], exclusions: Iterable[Exclusion]
) -> list[DateT]:
    """Drop excluded occurrences, preserving order."""
    rules = list(exclusions)
    return [o for o in occurrences if not excluded(o, rules)]
