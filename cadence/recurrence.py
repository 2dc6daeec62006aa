"""The built-in recurrence strategies.

Each strategy turns "the occurrence we are at" plus a :class:`PatternOptions`
into "the next occurrence". Month and year arithmetic is delegated to
python-dateutil's ``relativedelta``, which clamps to the end of shorter months
instead of overflowing into the next one.
"""

import logging
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta
from dateutil.rrule import FR, MO, SA, SU, TH, TU, WE, weekday
from typing_extensions import override

from cadence.core import OptionsIn, Pattern, generate_default
from cadence.labels import ENGLISH, Labels
from cadence.options import (
    MONTHLY_TYPES,
    UNITS,
    WEEK_NUMBERS,
    PatternOptions,
    coerce_options,
)
from cadence.util import (
    MAX_WEEKDAY_SCAN,
    SATURDAY,
    SUNDAY,
    WEEKDAYS,
    days_in_month,
    weekday_index,
)

logger = logging.getLogger(__name__)

# Sunday-first index -> dateutil weekday
_DAY_MAP: tuple[weekday, ...] = (SU, MO, TU, WE, TH, FR, SA)


def _every(count: int, unit: str) -> str:
    return f"Every {unit}" if count == 1 else f"Every {count} {unit}s"


def _valid_interval(value: int, upper: int | None = None) -> bool:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        return False
    return upper is None or value <= upper


def _valid_days(days: tuple[int, ...]) -> bool:
    return all(isinstance(day, int) and day in WEEKDAYS for day in days)


class DailyPattern(Pattern):
    """Every N days, optionally pushing weekend landings to the next Monday."""

    key = "daily"
    label = "Daily"

    @override
    def next_occurrence(
        self, current: datetime, options: PatternOptions
    ) -> datetime | None:
        nxt = current + timedelta(days=options.step)

        if options.skip_weekends:
            day = weekday_index(nxt)
            if day == SATURDAY:
                nxt += timedelta(days=2)
            elif day == SUNDAY:
                nxt += timedelta(days=1)

        return nxt

    @override
    def check_options(self, options: PatternOptions) -> bool:
        return _valid_interval(options.interval)

    @override
    def describe(self, options: PatternOptions) -> str:
        text = _every(options.step, "day")
        if options.skip_weekends:
            text += " (weekdays only)"
        return text


class WeeklyPattern(Pattern):
    """Every N weeks, optionally on a set of weekdays.

    With target weekdays, the pattern walks through the remaining matching
    days of the current week before jumping ``interval`` weeks ahead to the
    first target day of that week (weeks start on Sunday).
    """

    key = "weekly"
    label = "Weekly"

    def __init__(
        self,
        labels: Labels = ENGLISH,
        *,
        key: str | None = None,
        label: str | None = None,
        fixed_interval: int | None = None,
    ):
        super().__init__(labels)
        if key is not None:
            self.key = key
        if label is not None:
            self.label = label
        self.fixed_interval: int | None = fixed_interval

    def interval_for(self, options: PatternOptions) -> int:
        """The week step in effect; a fixed interval overrides the options."""
        if self.fixed_interval is not None:
            return self.fixed_interval
        return options.step

    @override
    def next_occurrence(
        self, current: datetime, options: PatternOptions
    ) -> datetime | None:
        interval = self.interval_for(options)
        days = sorted(set(options.days))

        if not days:
            return current + timedelta(weeks=interval)

        current_day = weekday_index(current)
        for day in days:
            if day > current_day:
                return current + timedelta(days=day - current_day)

        # Roll into the first target day of the next interval's week
        return current + timedelta(days=7 * interval - current_day + days[0])

    @override
    def generate(
        self, start: datetime, count: int, options: OptionsIn = None
    ) -> list[datetime]:
        """Generate occurrences, treating multiple target days as one week-group.

        With zero or one target weekday the shared loop is used and ``start``
        is always the first occurrence. With two or more target weekdays
        ``start`` is only included when it falls on one of them.
        """
        opts = coerce_options(options)
        days = set(opts.days)
        if len(days) <= 1:
            return generate_default(self, start, count, opts)

        return generate_default(
            self, start, count, opts, include_start=weekday_index(start) in days
        )

    @override
    def check_options(self, options: PatternOptions) -> bool:
        if self.fixed_interval is None and not _valid_interval(options.interval):
            return False
        return _valid_days(options.days)

    @override
    def describe(self, options: PatternOptions) -> str:
        text = _every(self.interval_for(options), "week")
        if options.days:
            text += f" on {self.format_days(options.days)}"
        return text


def biweekly(labels: Labels = ENGLISH) -> WeeklyPattern:
    """A weekly pattern pinned to a two-week cadence.

    The ``interval`` option is ignored; every other behaviour is the weekly
    pattern's.
    """
    return WeeklyPattern(
        labels, key="biweekly", label="Every 2 weeks", fixed_interval=2
    )


class MonthlyPattern(Pattern):
    """Every N months, on a fixed day or on the Nth weekday of the month.

    ``day_of_month`` mode clamps to the last day of shorter months on every
    step, so a 31st that became February 29th returns to the 31st in March.

    ``day_of_week`` mode resolves "the Nth <weekday>" (week_number 1-5) or
    "the last <weekday>" (week_number -1). A month with no fifth occurrence of
    the weekday resolves week_number 5 to the last occurrence instead.
    """

    key = "monthly"
    label = "Monthly"

    @override
    def next_occurrence(
        self, current: datetime, options: PatternOptions
    ) -> datetime | None:
        first = current.replace(day=1) + relativedelta(months=options.step)

        if options.type == "day_of_week":
            return self._nth_weekday(first, current, options)

        target_day = options.day_of_month or current.day
        last_day = days_in_month(first.year, first.month)
        return first.replace(day=max(1, min(target_day, last_day)))

    def _nth_weekday(
        self, first: datetime, current: datetime, options: PatternOptions
    ) -> datetime:
        day_of_week = options.day_of_week
        if day_of_week is None:
            day_of_week = weekday_index(current)
        target = _DAY_MAP[day_of_week % 7]

        last = first + relativedelta(day=31, weekday=target(-1))
        if options.week_number == -1:
            return last

        nth = min(max(options.week_number, 1), 5)
        candidate = first + relativedelta(weekday=target(+nth))
        if candidate.month != first.month:
            return last
        return candidate

    @override
    def check_options(self, options: PatternOptions) -> bool:
        if options.type not in MONTHLY_TYPES:
            return False
        if not _valid_interval(options.interval):
            return False

        if options.type == "day_of_month":
            day = options.day_of_month
            return day is None or 1 <= day <= 31

        if options.week_number not in WEEK_NUMBERS:
            return False
        return options.day_of_week is None or 0 <= options.day_of_week <= 6

    @override
    def describe(self, options: PatternOptions) -> str:
        text = _every(options.step, "month")

        if options.type == "day_of_week":
            if options.day_of_week is not None:
                position = self.labels.position(options.week_number)
                name = self.labels.weekday(options.day_of_week)
                text += f" on the {position} {name}"
        elif options.day_of_month is not None:
            text += f" on the {self.format_ordinal(options.day_of_month)}"

        return text


class CustomPattern(Pattern):
    """Every N days, weeks, months or years.

    For day and week units an optional weekday filter moves each raw step
    forward to the next matching weekday, scanning at most
    ``MAX_WEEKDAY_SCAN`` days.
    """

    key = "custom"
    label = "Custom"

    @override
    def next_occurrence(
        self, current: datetime, options: PatternOptions
    ) -> datetime | None:
        unit = options.unit if options.unit in UNITS else "days"
        nxt = current + relativedelta(**{unit: options.step})

        if unit in ("days", "weeks") and options.days:
            wanted = set(options.days)
            attempts = 0
            while weekday_index(nxt) not in wanted:
                if attempts >= MAX_WEEKDAY_SCAN:
                    logger.warning(
                        "custom: no weekday in %s within %d days of %s",
                        sorted(wanted),
                        MAX_WEEKDAY_SCAN,
                        current,
                    )
                    break
                nxt += timedelta(days=1)
                attempts += 1

        return nxt

    @override
    def check_options(self, options: PatternOptions) -> bool:
        if options.unit not in UNITS:
            return False
        if not _valid_interval(options.interval, upper=365):
            return False
        return _valid_days(options.days)

    @override
    def describe(self, options: PatternOptions) -> str:
        unit = options.unit if options.unit in UNITS else "days"
        text = _every(options.step, unit[:-1])
        if options.days:
            text += f" on {self.format_days(options.days)}"
        return text
