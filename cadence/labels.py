"""Display labels used when rendering pattern descriptions.

Hosts that localize their output substitute their own :class:`Labels`; the
recurrence algorithms never look at these strings.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field


def ordinal_suffix(number: int) -> str:
    """Return the number with its English ordinal suffix (1st, 22nd, 11th)."""
    if number in (1, 21, 31):
        suffix = "st"
    elif number in (2, 22):
        suffix = "nd"
    elif number in (3, 23):
        suffix = "rd"
    else:
        suffix = "th"
    return f"{number}{suffix}"


@dataclass(frozen=True, kw_only=True)
class Labels:
    weekdays: tuple[str, ...] = (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
    )
    positions: Mapping[int, str] = field(
        default_factory=lambda: {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            -1: "last",
        }
    )
    ordinal: Callable[[int], str] = ordinal_suffix
    conjunction: str = "and"

    def __post_init__(self) -> None:
        if len(self.weekdays) != 7:
            raise ValueError(
                f"Labels.weekdays needs exactly 7 names (Sunday first), "
                f"got {len(self.weekdays)}.\n"
                f"Example: Labels(weekdays=('Sun', 'Mon', 'Tue', 'Wed', "
                f"'Thu', 'Fri', 'Sat'))"
            )

    def weekday(self, index: int) -> str:
        return self.weekdays[index % 7]

    def position(self, week_number: int) -> str:
        return self.positions.get(week_number, str(week_number))


ENGLISH = Labels()


def format_weekday_list(days: Iterable[int], labels: Labels = ENGLISH) -> str:
    """Join weekday names as "Monday", "Monday and Friday" or "Monday, Wednesday and Friday"."""
    names = [labels.weekday(day) for day in sorted(set(days))]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} {labels.conjunction} {names[-1]}"
