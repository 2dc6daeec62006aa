from collections.abc import Iterator

from cadence.config import Settings, get_settings
from cadence.core import Pattern
from cadence.labels import ENGLISH, Labels
from cadence.recurrence import (
    CustomPattern,
    DailyPattern,
    MonthlyPattern,
    WeeklyPattern,
    biweekly,
)


def builtin_patterns(labels: Labels = ENGLISH) -> list[Pattern]:
    """Return fresh instances of the five built-in strategies."""
    return [
        DailyPattern(labels),
        WeeklyPattern(labels),
        biweekly(labels),
        MonthlyPattern(labels),
        CustomPattern(labels),
    ]


class PatternRegistry:
    """Strategies indexed by their key.

    Starts with the built-in strategies; hosts can register their own.
    """

    def __init__(self, labels: Labels = ENGLISH, *, builtins: bool = True):
        self._patterns: dict[str, Pattern] = {}
        if builtins:
            for pattern in builtin_patterns(labels):
                self.register(pattern)

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, labels: Labels = ENGLISH
    ) -> "PatternRegistry":
        """Registry holding only the built-ins the host has left switched on.

        ``custom`` is dropped when ``enable_custom_patterns`` is off, and every
        key in ``disabled_patterns`` is dropped.
        """
        settings = settings or get_settings()
        disabled = set(settings.disabled_patterns)
        if not settings.enable_custom_patterns:
            disabled.add("custom")

        registry = cls(labels, builtins=False)
        for pattern in builtin_patterns(labels):
            if pattern.get_key() not in disabled:
                registry.register(pattern)
        return registry

    def register(self, pattern: Pattern, *, replace: bool = False) -> Pattern:
        key = pattern.get_key()
        if not key:
            raise ValueError(
                f"Pattern {pattern!r} has an empty key.\n"
                f"Hint: set a class attribute, e.g. key = 'fortnightly'"
            )
        if key in self._patterns and not replace:
            raise ValueError(
                f"A pattern is already registered under '{key}'.\n"
                f"Fix: pass replace=True to override it:\n"
                f"  registry.register(MyPattern(), replace=True)"
            )
        self._patterns[key] = pattern
        return pattern

    def get(self, key: str) -> Pattern | None:
        return self._patterns.get(key)

    def require(self, key: str) -> Pattern:
        """Return the pattern for ``key``.

        Raises:
            ValueError: If no pattern is registered under ``key``
        """
        pattern = self._patterns.get(key)
        if pattern is None:
            valid = ", ".join(sorted(self._patterns))
            raise ValueError(
                f"Invalid recurrence pattern: '{key}'\n" f"Valid patterns: {valid}\n"
            )
        return pattern

    def keys(self) -> list[str]:
        return list(self._patterns)

    def __contains__(self, key: object) -> bool:
        return key in self._patterns

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns.values())

    def __len__(self) -> int:
        return len(self._patterns)


_default: PatternRegistry | None = None


def default_registry() -> PatternRegistry:
    """Shared registry of the enabled built-in English-labelled strategies."""
    global _default
    if _default is None:
        _default = PatternRegistry.from_settings(get_settings())
    return _default
