"""Plugin settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from subscription_filter.errors import ConfigurationError


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class PluginSettings:
    max_workers: int = 8
    filters_per_log_group: int = 1
    display_suffix_length: int = 6
    log_level: str = "INFO"

    @staticmethod
    def load() -> "PluginSettings":
        return PluginSettings(
            max_workers=_env_int("SUBSCRIPTION_FILTER_MAX_WORKERS", 8, 1),
            filters_per_log_group=_env_int("SUBSCRIPTION_FILTER_LIMIT", 1, 1),
            display_suffix_length=_env_int("SUBSCRIPTION_FILTER_SUFFIX_LENGTH", 6, 1),
            log_level=(os.environ.get("SUBSCRIPTION_FILTER_LOG_LEVEL") or "INFO").strip().upper(),
        )
