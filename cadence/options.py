from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Literal, TypeAlias

from dateutil import parser

Unit: TypeAlias = Literal["days", "weeks", "months", "years"]
MonthlyType: TypeAlias = Literal["day_of_month", "day_of_week"]

UNITS: tuple[Unit, ...] = ("days", "weeks", "months", "years")
MONTHLY_TYPES: tuple[MonthlyType, ...] = ("day_of_month", "day_of_week")
WEEK_NUMBERS = (-1, 1, 2, 3, 4, 5)

_INT_FIELDS = ("interval", "day_of_month", "week_number", "day_of_week")


@dataclass(frozen=True, kw_only=True)
class PatternOptions:
    """Per-call configuration for a recurrence pattern.

    Each strategy reads only the fields it understands:

    - interval: step count in the strategy's unit (clamped to >= 1 on use)
    - days: weekday indices (0 = Sunday) for weekly and custom patterns
    - skip_weekends: daily patterns only
    - type: monthly sub-mode, "day_of_month" or "day_of_week"
    - day_of_month: 1-31, monthly "day_of_month" mode
    - week_number: -1 (last) or 1-5, monthly "day_of_week" mode
    - day_of_week: weekday index, monthly "day_of_week" mode
    - unit: custom patterns only
    - end_date: no occurrence strictly after this bound is produced
    """

    interval: int = 1
    days: tuple[int, ...] = ()
    skip_weekends: bool = False
    type: MonthlyType = "day_of_month"
    day_of_month: int | None = None
    week_number: int = 1
    day_of_week: int | None = None
    unit: Unit = "days"
    end_date: date | datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.days, tuple):
            object.__setattr__(self, "days", tuple(self.days))

    @property
    def step(self) -> int:
        """The interval, clamped to at least 1."""
        return max(1, self.interval)

    def with_end_date(self, end_date: date | datetime | None) -> "PatternOptions":
        return replace(self, end_date=end_date)

    def past_end(self, occurrence: datetime) -> bool:
        """True if the occurrence lies strictly after the end_date bound.

        When exactly one side carries a timezone, the naive side is read as
        wall time in the other side's zone.
        """
        if self.end_date is None:
            return False
        if isinstance(self.end_date, datetime):
            end = self.end_date
            if end.tzinfo is None and occurrence.tzinfo is not None:
                end = end.replace(tzinfo=occurrence.tzinfo)
            elif end.tzinfo is not None and occurrence.tzinfo is None:
                occurrence = occurrence.replace(tzinfo=end.tzinfo)
            return occurrence > end
        return occurrence.date() > self.end_date

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PatternOptions":
        """Build options from an untrusted mapping (e.g. decoded JSON).

        Unknown keys are ignored. Integer fields accept numeric strings.

        Raises:
            ValueError: If a value cannot be coerced to its field's type
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known or raw is None:
                continue
            try:
                if key in _INT_FIELDS:
                    values[key] = int(raw)
                elif key == "days":
                    values[key] = _coerce_days(raw)
                elif key == "skip_weekends":
                    values[key] = _coerce_bool(raw)
                elif key == "end_date":
                    values[key] = _coerce_end_date(raw)
                else:
                    values[key] = str(raw)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ValueError(
                    f"Invalid value for pattern option '{key}': {raw!r}\n"
                    f"Hint: interval, day_of_month, week_number and day_of_week are "
                    f"integers; days is a list of weekday indices (0=Sunday).\n"
                    f"Example: {{'interval': 2, 'days': [1, 3]}}"
                ) from exc
        return cls(**values)


def coerce_options(
    options: "PatternOptions | Mapping[str, Any] | None",
) -> PatternOptions:
    """Accept options as a PatternOptions, a plain mapping, or None."""
    if options is None:
        return PatternOptions()
    if isinstance(options, PatternOptions):
        return options
    if isinstance(options, Mapping):
        return PatternOptions.from_mapping(options)
    raise TypeError(
        f"Pattern options must be PatternOptions, a mapping, or None.\n"
        f"Got {type(options).__name__!r}: {options!r}\n"
        f"Example: PatternOptions(interval=2) or {{'interval': 2}}"
    )


def _coerce_days(raw: Any) -> tuple[int, ...]:
    if isinstance(raw, (int, str)):
        return (int(raw),)
    if isinstance(raw, Iterable):
        return tuple(int(day) for day in raw)
    raise TypeError(f"days must be an iterable of ints, got {type(raw).__name__}")


def _coerce_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return bool(raw)


def _coerce_end_date(raw: Any) -> date | datetime:
    if isinstance(raw, (date, datetime)):
        return raw
    if isinstance(raw, str):
        parsed = parser.parse(raw)
        # Date-only strings bound by calendar day
        return parsed if ":" in raw else parsed.date()
    raise TypeError(f"end_date must be a date, datetime or string, got {raw!r}")
