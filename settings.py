from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_BASE_URL_ENV = "THINGSPEAK_BASE_URL"
_CHANNEL_ID_ENV = "THINGSPEAK_CHANNEL_ID"
_RESULTS_ENV = "THINGSPEAK_RESULTS"
_TIMEOUT_ENV = "THINGSPEAK_TIMEOUT"
_ISOLATE_ENV = "DASHBOARD_ISOLATE_FAILURES"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    thingspeak_base_url: str
    channel_id: str
    results: int
    request_timeout: float
    isolate_failures: bool
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUTHY:
        return True
    if candidate in _FALSY:
        return False
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        thingspeak_base_url=_read_str_env(_BASE_URL_ENV, "https://api.thingspeak.com").rstrip("/"),
        channel_id=_read_str_env(_CHANNEL_ID_ENV, "2804070"),
        results=_read_positive_int(_RESULTS_ENV, 60),
        request_timeout=_read_positive_float(_TIMEOUT_ENV, 30.0),
        isolate_failures=_read_bool_env(_ISOLATE_ENV, False),
        log_level=_read_log_level("INFO"),
    )
