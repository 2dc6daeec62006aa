import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeAlias

from cadence.labels import ENGLISH, Labels, format_weekday_list
from cadence.options import PatternOptions, coerce_options
from cadence.util import MAX_ITERATION_FACTOR

logger = logging.getLogger(__name__)

OptionsIn: TypeAlias = PatternOptions | Mapping[str, Any] | None


class Pattern(ABC):
    """A recurrence strategy.

    Strategies are stateless: ``get_next`` is a pure function of the current
    occurrence and the options, so one instance can serve any number of
    unrelated (or concurrent) generation calls.
    """

    key: str
    label: str

    def __init__(self, labels: Labels = ENGLISH):
        self.labels: Labels = labels

    def get_key(self) -> str:
        return self.key

    def get_label(self) -> str:
        return self.label

    @abstractmethod
    def next_occurrence(
        self, current: datetime, options: PatternOptions
    ) -> datetime | None:
        """Return the occurrence after ``current``, or None if there is none."""
        pass

    @abstractmethod
    def check_options(self, options: PatternOptions) -> bool:
        """Structural validation of already-coerced options."""
        pass

    @abstractmethod
    def describe(self, options: PatternOptions) -> str:
        pass

    def get_next(self, current: datetime, options: OptionsIn = None) -> datetime | None:
        return self.next_occurrence(current, coerce_options(options))

    def generate(
        self, start: datetime, count: int, options: OptionsIn = None
    ) -> list[datetime]:
        """Produce up to ``count`` occurrences beginning with ``start``.

        The result may be shorter than ``count`` when the end date is crossed,
        the strategy reports no further occurrence, or the safety bound is hit.
        """
        return generate_default(self, start, count, coerce_options(options))

    def validate_options(self, options: OptionsIn = None) -> bool:
        try:
            coerced = coerce_options(options)
        except (TypeError, ValueError):
            return False
        return self.check_options(coerced)

    def get_description(self, options: OptionsIn = None) -> str:
        return self.describe(coerce_options(options))

    def format_days(self, days: tuple[int, ...]) -> str:
        return format_weekday_list(days, self.labels)

    def format_ordinal(self, number: int) -> str:
        return self.labels.ordinal(number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"


def generate_default(
    pattern: Pattern,
    start: datetime,
    count: int,
    options: PatternOptions,
    *,
    include_start: bool = True,
) -> list[datetime]:
    """Shared bounded generation loop.

    Seeds the result with ``start`` (unless ``include_start`` is False), then
    repeatedly asks the pattern for the next occurrence. At most
    ``count * MAX_ITERATION_FACTOR`` calls are made to ``next_occurrence``
    regardless of how the pattern behaves.
    """
    if count <= 0:
        return []

    occurrences = [start] if include_start else []
    current = start
    max_iterations = count * MAX_ITERATION_FACTOR
    iteration = 0

    while len(occurrences) < count and iteration < max_iterations:
        iteration += 1
        nxt = pattern.next_occurrence(current, options)

        if nxt is None:
            logger.debug("%s: no further occurrence after %s", pattern.key, current)
            break
        if options.past_end(nxt):
            logger.debug(
                "%s: %s is past end date %s", pattern.key, nxt, options.end_date
            )
            break

        occurrences.append(nxt)
        current = nxt
    else:
        if len(occurrences) < count:
            logger.warning(
                "%s: stopped after %d iterations with %d of %d occurrences",
                pattern.key,
                iteration,
                len(occurrences),
                count,
            )

    return occurrences
