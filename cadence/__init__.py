from .config import Settings, configure_logging, get_settings
from .core import Pattern, generate_default
from .exclusions import (
    Exclusion,
    apply_exclusions,
    between,
    excluded,
    on_date,
    on_weekday,
)
from .labels import ENGLISH, Labels, format_weekday_list, ordinal_suffix
from .options import PatternOptions
from .recurrence import (
    CustomPattern,
    DailyPattern,
    MonthlyPattern,
    WeeklyPattern,
    biweekly,
)
from .registry import PatternRegistry, builtin_patterns, default_registry
from .series import Preview, PreviewDate, extend_series, preview
from .util import (
    FRIDAY,
    MAX_ITERATION_FACTOR,
    MAX_WEEKDAY_SCAN,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    WEDNESDAY,
)

__all__ = [
    "Pattern",
    "PatternOptions",
    "generate_default",
    "DailyPattern",
    "WeeklyPattern",
    "MonthlyPattern",
    "CustomPattern",
    "biweekly",
    "PatternRegistry",
    "builtin_patterns",
    "default_registry",
    "Labels",
    "ENGLISH",
    "format_weekday_list",
    "ordinal_suffix",
    "Exclusion",
    "on_date",
    "on_weekday",
    "between",
    "excluded",
    "apply_exclusions",
    "Preview",
    "PreviewDate",
    "preview",
    "extend_series",
    "Settings",
    "get_settings",
    "configure_logging",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "MAX_ITERATION_FACTOR",
    "MAX_WEEKDAY_SCAN",
]
