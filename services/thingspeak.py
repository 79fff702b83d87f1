from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Dict, Optional

import httpx

from models.feeds import SensorField
from services.errors import TransportError
from settings import get_settings

logger = logging.getLogger(__name__)


class ThingSpeakClient:
    """Minimal read-only HTTP client for one ThingSpeak channel."""

    def __init__(
        self,
        base_url: str,
        channel_id: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.channel_id = channel_id
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def field_path(self, field: SensorField) -> str:
        return f"/channels/{self.channel_id}/fields/{field.field_number}.json"

    def fetch_field(self, field: SensorField, results: int) -> Dict[str, Any]:
        """Fetch the ``results`` most recent feed records for ``field``.

        Any failure to obtain a JSON body is raised as :class:`TransportError`.
        """
        path = self.field_path(field)
        started = time.perf_counter()
        try:
            response = self._client.get(path, params={"results": results})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning(
                "ThingSpeak request failed",
                extra={"sensor": field.name, "url": path, "status_code": status_code},
            )
            raise TransportError(f"HTTP error! status: {status_code}", status_code=status_code) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "ThingSpeak request could not be completed",
                extra={"sensor": field.name, "url": path, "reason": exc.__class__.__name__},
            )
            raise TransportError(f"Network error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Response body is not valid JSON") from exc

        logger.info(
            "Fetched ThingSpeak feed",
            extra={
                "sensor": field.name,
                "url": path,
                "status_code": response.status_code,
                "elapsed_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return payload


@lru_cache
def build_default_client(
    base_url: Optional[str] = None,
    channel_id: Optional[str] = None,
) -> ThingSpeakClient:
    settings = get_settings()
    return ThingSpeakClient(
        base_url=settings.thingspeak_base_url if base_url is None else base_url,
        channel_id=settings.channel_id if channel_id is None else channel_id,
        timeout=settings.request_timeout,
    )
