"""Utility constants and helpers for cadence.

Weekday indices follow the booking convention used by hosts: 0 = Sunday
through 6 = Saturday. Python's ``datetime.weekday()`` counts from Monday, so
conversions go through :func:`weekday_index`.
"""

import calendar
from datetime import date

# Weekday indices (Sunday-first)
SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6

WEEKDAYS = (SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY)

# Termination guarantees. generate() never calls get_next more than
# count * MAX_ITERATION_FACTOR times, and a weekday-filtered custom step never
# scans more than MAX_WEEKDAY_SCAN days past the raw step.
MAX_ITERATION_FACTOR = 10
MAX_WEEKDAY_SCAN = 365


def weekday_index(day: date) -> int:
    """Return the Sunday-first weekday index (0-6) of a date or datetime."""
    return (day.weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]
