"""Tests for the pattern registry."""

from datetime import datetime, timedelta

import pytest
from typing_extensions import override

from cadence import (
    DailyPattern,
    PatternRegistry,
    Settings,
    WeeklyPattern,
    default_registry,
)
from cadence.core import Pattern


class Fortnightly(Pattern):
    key = "fortnightly"
    label = "Fortnightly"

    @override
    def next_occurrence(self, current, options):
        return current + timedelta(days=14)

    @override
    def check_options(self, options):
        return True

    @override
    def describe(self, options):
        return "Every fortnight"


def test_builtin_keys():
    """Test that the five built-ins are registered under unique keys."""
    registry = PatternRegistry()
    assert registry.keys() == ["daily", "weekly", "biweekly", "monthly", "custom"]
    assert len(registry) == 5
    assert "biweekly" in registry


def test_get_and_require():
    """Test lookups by key."""
    registry = PatternRegistry()
    assert isinstance(registry.get("weekly"), WeeklyPattern)
    assert registry.get("hourly") is None

    with pytest.raises(ValueError, match="Invalid recurrence pattern: 'hourly'"):
        registry.require("hourly")


def test_register_custom_pattern():
    """Test that hosts can add their own strategies."""
    registry = PatternRegistry()
    registry.register(Fortnightly())

    pattern = registry.require("fortnightly")
    assert pattern.generate(datetime(2025, 1, 6), 2) == [
        datetime(2025, 1, 6),
        datetime(2025, 1, 20),
    ]


def test_register_duplicate_key():
    """Test that keys stay unique unless replacement is explicit."""
    registry = PatternRegistry()
    with pytest.raises(ValueError, match="already registered under 'daily'"):
        registry.register(DailyPattern())

    replacement = DailyPattern()
    registry.register(replacement, replace=True)
    assert registry.get("daily") is replacement


def test_empty_registry():
    """Test a registry without built-ins."""
    registry = PatternRegistry(builtins=False)
    assert len(registry) == 0
    assert list(registry) == []


def test_default_registry_is_shared():
    """Test that the default registry is a single shared instance."""
    assert default_registry() is default_registry()


def test_from_settings_drops_disabled_patterns():
    """Test that switched-off built-ins are not registered."""
    settings = Settings(disabled_patterns=["biweekly", "monthly"])
    registry = PatternRegistry.from_settings(settings)

    assert registry.keys() == ["daily", "weekly", "custom"]
    with pytest.raises(ValueError, match="Invalid recurrence pattern: 'monthly'"):
        registry.require("monthly")


def test_from_settings_custom_switch():
    """Test that enable_custom_patterns controls the custom strategy."""
    off = PatternRegistry.from_settings(Settings(enable_custom_patterns=False))
    on = PatternRegistry.from_settings(Settings(enable_custom_patterns=True))

    assert "custom" not in off
    assert "custom" in on
    assert len(off) == 4
