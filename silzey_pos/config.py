"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .catalog import CATEGORIES, DEFAULT_CATEGORY
from .errors import ConfigError

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class PosConfig:
    """Tunables for a point-of-sale session.

    Environment variables:
        POS_SPLASH_SECONDS: Splash screen duration (default: 2)
        POS_THANK_YOU_SECONDS: Thank-you screen duration before reset (default: 10)
        POS_PAGE_SIZE: Products per page and per "load more" (default: 12)
        POS_DEFAULT_CATEGORY: Category shown on start and after reset (default: Flower)
        POS_LOG_LEVEL: structlog filtering level (default: info)
    """

    splash_seconds: float = 2.0
    thank_you_seconds: float = 10.0
    page_size: int = 12
    default_category: str = DEFAULT_CATEGORY
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.splash_seconds < 0:
            raise ConfigError("splash_seconds must not be negative")
        if self.thank_you_seconds < 0:
            raise ConfigError("thank_you_seconds must not be negative")
        if self.page_size < 1:
            raise ConfigError("page_size must be at least 1")
        if self.default_category not in CATEGORIES:
            raise ConfigError(f"unknown default category {self.default_category!r}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PosConfig":
        env = os.environ if environ is None else environ
        return cls(
            splash_seconds=_number(env, "POS_SPLASH_SECONDS", float, cls.splash_seconds),
            thank_you_seconds=_number(env, "POS_THANK_YOU_SECONDS", float, cls.thank_you_seconds),
            page_size=_number(env, "POS_PAGE_SIZE", int, cls.page_size),
            default_category=env.get("POS_DEFAULT_CATEGORY", cls.default_category),
            log_level=env.get("POS_LOG_LEVEL", cls.log_level).lower(),
        )


def _number(env: Mapping[str, str], name: str, kind: type, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigError(f"{name}={raw!r}", e) from e
