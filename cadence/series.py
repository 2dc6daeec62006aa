"""Series-level helpers built on the recurrence strategies.

These cover what a booking host does with a pattern besides raw generation:
previewing the first few dates of a pattern before the customer commits, and
topping up an ongoing series with the next batch of occurrences.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from dateutil import parser

from cadence.config import Settings, get_settings
from cadence.core import OptionsIn, Pattern
from cadence.exclusions import Exclusion, apply_exclusions
from cadence.options import coerce_options
from cadence.registry import PatternRegistry, default_registry
from cadence.util import MAX_ITERATION_FACTOR, weekday_index

logger = logging.getLogger(__name__)

# Upper bound on a single first-time generation batch
GENERATE_CAP = 100


@dataclass(frozen=True, kw_only=True)
class PreviewDate:
    date: str
    formatted: str
    day: str


@dataclass(frozen=True, kw_only=True)
class Preview:
    pattern: str
    description: str
    dates: tuple[PreviewDate, ...]
    total_count: int


def _coerce_start(start: datetime | date | str) -> datetime:
    if isinstance(start, datetime):
        return start
    if isinstance(start, date):
        return datetime.combine(start, time.min)
    if isinstance(start, str):
        try:
            return parser.parse(start)
        except (ValueError, OverflowError) as exc:
            raise ValueError(
                f"Invalid start date: {start!r}\n"
                f"Hint: use an ISO date such as '2025-03-04' or '2025-03-04 10:00'"
            ) from exc
    raise TypeError(
        f"start must be a datetime, date or string, got {type(start).__name__!r}"
    )


def preview(
    key: str,
    start: datetime | date | str,
    options: OptionsIn = None,
    count: int | None = None,
    *,
    registry: PatternRegistry | None = None,
    settings: Settings | None = None,
) -> Preview:
    """Render the first few occurrences of a pattern for display.

    Args:
        key: Pattern key, e.g. "weekly"
        start: First occurrence (datetime, date, or parseable string)
        options: Pattern options
        count: Number of dates to show; defaults to ``settings.preview_count``
            and is capped at ``settings.preview_max``

    Raises:
        ValueError: If the key is unknown or the start date cannot be parsed
    """
    settings = settings or get_settings()
    pattern = (registry or default_registry()).require(key)
    first = _coerce_start(start)
    opts = coerce_options(options)

    wanted = settings.preview_count if count is None else count
    wanted = max(1, min(wanted, settings.preview_max))

    occurrences = pattern.generate(first, wanted, opts)
    dates = tuple(
        PreviewDate(
            date=occurrence.date().isoformat(),
            formatted=occurrence.strftime(settings.date_format),
            day=pattern.labels.weekday(weekday_index(occurrence)),
        )
        for occurrence in occurrences
    )

    return Preview(
        pattern=pattern.get_key(),
        description=pattern.get_description(opts),
        dates=dates,
        total_count=len(dates),
    )


def extend_series(
    pattern: Pattern,
    start: datetime,
    options: OptionsIn = None,
    *,
    max_occurrences: int | None = None,
    generated: int = 0,
    last: datetime | None = None,
    end_date: date | None = None,
    exclusions: Iterable[Exclusion] = (),
    now: datetime | None = None,
    settings: Settings | None = None,
) -> list[datetime]:
    """Compute the next batch of occurrences for an ongoing series.

    The master occurrence (``start``) is never part of the result. Generation
    looks no further ahead than ``settings.generate_ahead_days`` from ``now``,
    or ``end_date`` if that comes first.

    Args:
        pattern: Strategy of the series
        start: The series' first (master) occurrence
        options: Pattern options of the series
        max_occurrences: Series length limit; defaults to ``settings.max_occurrences``
        generated: How many occurrences the series already has
        last: The latest occurrence already generated, if any
        end_date: Last calendar date the series may run to
        exclusions: Occurrences matching any of these are dropped
        now: Reference time for the look-ahead window

    Returns:
        New occurrences in chronological order; possibly empty
    """
    settings = settings or get_settings()
    limit = settings.max_occurrences if max_occurrences is None else max_occurrences
    remaining = limit - generated
    if remaining <= 0:
        return []

    now = now or datetime.now(start.tzinfo)
    horizon = (now + timedelta(days=settings.generate_ahead_days)).date()
    if end_date is not None:
        series_end = end_date.date() if isinstance(end_date, datetime) else end_date
        horizon = min(horizon, series_end)

    opts = coerce_options(options).with_end_date(horizon)

    if last is None:
        batch = pattern.generate(start, min(remaining, GENERATE_CAP), opts)
        if batch and batch[0] == start:
            batch = batch[1:]
    else:
        batch = []
        current = last
        calls = 0
        while len(batch) < remaining and calls < remaining * MAX_ITERATION_FACTOR:
            calls += 1
            nxt = pattern.next_occurrence(current, opts)
            if nxt is None or opts.past_end(nxt):
                break
            batch.append(nxt)
            current = nxt

    batch = [o for o in batch if not opts.past_end(o)]
    kept = apply_exclusions(batch, exclusions)
    logger.debug(
        "%s: extended series by %d occurrences (%d excluded, horizon %s)",
        pattern.get_key(),
        len(kept),
        len(batch) - len(kept),
        horizon,
    )
    return kept
