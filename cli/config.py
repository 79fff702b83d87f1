from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    base_url: str
    channel_id: str
    results: int
    timeout: float
    isolate_failures: bool


_Number = TypeVar("_Number", int, float)


def _positive_or(value: Optional[_Number], default: _Number) -> _Number:
    if value is None or value <= 0:
        return default
    return value


def load_config(
    base_url: Optional[str] = None,
    channel_id: Optional[str] = None,
    results: Optional[int] = None,
    timeout: Optional[float] = None,
    isolate_failures: Optional[bool] = None,
) -> CLIConfig:
    """Layer command-line overrides on top of the environment settings."""
    settings = get_settings()
    url = (base_url or "").strip() or settings.thingspeak_base_url
    channel = (channel_id or "").strip() or settings.channel_id
    return CLIConfig(
        base_url=url.rstrip("/"),
        channel_id=channel,
        results=_positive_or(results, settings.results),
        timeout=_positive_or(timeout, settings.request_timeout),
        isolate_failures=settings.isolate_failures if isolate_failures is None else isolate_failures,
    )
