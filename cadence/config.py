import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUILTIN_KEYS = ("daily", "weekly", "biweekly", "monthly", "custom")


class Settings(BaseSettings):
    """Host-tunable limits for series generation and previews.

    Read from ``CADENCE_*`` environment variables or a ``.env`` file.
    """

    max_occurrences: int = 52
    generate_ahead_days: int = 30
    preview_count: int = 5
    preview_max: int = 12
    date_format: str = "%B %d, %Y"
    log_level: str = "WARNING"
    enable_custom_patterns: bool = True
    disabled_patterns: list[str] = []

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("max_occurrences")
    @classmethod
    def validate_max_occurrences(cls, v: int) -> int:
        if not 2 <= v <= 365:
            raise ValueError(f"max_occurrences must be between 2 and 365, got {v}")
        return v

    @field_validator("generate_ahead_days")
    @classmethod
    def validate_generate_ahead_days(cls, v: int) -> int:
        if not 7 <= v <= 90:
            raise ValueError(f"generate_ahead_days must be between 7 and 90, got {v}")
        return v

    @field_validator("preview_count", "preview_max")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"preview counts must be at least 1, got {v}")
        return v

    @field_validator("disabled_patterns")
    @classmethod
    def validate_disabled_patterns(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - set(BUILTIN_KEYS))
        if unknown:
            raise ValueError(
                f"Unknown pattern(s) in disabled_patterns: {', '.join(unknown)}\n"
                f"Valid patterns: {', '.join(BUILTIN_KEYS)}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stdout handler to the ``cadence`` logger.

    The library itself never installs handlers; host scripts call this.
    """
    logger = logging.getLogger("cadence")
    logger.setLevel((level or get_settings().log_level).upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
