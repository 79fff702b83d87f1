"""Sequential fetch-and-summarize orchestration for the dashboard sensors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache
from typing import Dict, Optional, Sequence

from models.feeds import DEFAULT_SENSORS, SensorField, SensorResult, SensorSummary
from services.errors import SummaryError
from services.summarizer import SensorSummaryComputer
from services.thingspeak import ThingSpeakClient, build_default_client
from settings import get_settings

logger = logging.getLogger(__name__)

PAGE_ERROR_MESSAGE = "Error fetching sensor data"


@dataclass(frozen=True)
class DashboardState:
    """Result of one dashboard load.

    ``summaries`` holds a slot per sensor; a slot is ``None`` until a summary
    is available for it. ``error`` is the page-level error, if any.
    """

    sensors: Sequence[SensorField]
    summaries: Dict[str, Optional[SensorSummary]] = field(default_factory=dict)
    sensor_errors: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def summary_for(self, name: str) -> Optional[SensorSummary]:
        return self.summaries.get(name)


class DashboardService:
    """Coordinates the ThingSpeak client and the summary computation."""

    def __init__(
        self,
        client: ThingSpeakClient,
        computer: SensorSummaryComputer,
        sensors: Sequence[SensorField] = DEFAULT_SENSORS,
        results: int = 60,
        isolate_failures: bool = False,
    ) -> None:
        self.client = client
        self.computer = computer
        self.sensors = tuple(sensors)
        self.results = results
        self.isolate_failures = isolate_failures

    def get_sensor(self, name: str) -> SensorField:
        for sensor in self.sensors:
            if sensor.name == name:
                return sensor
        raise KeyError(f"Unknown sensor {name!r}.")

    def fetch_summary(self, sensor: SensorField) -> SensorResult:
        """Fetch and summarize one sensor, converting failures to a message."""
        try:
            payload = self.client.fetch_field(sensor, results=self.results)
            summary = self.computer.summarize(payload, sensor.key)
        except SummaryError as exc:
            logger.error(
                "Could not summarize sensor",
                extra={"sensor": sensor.name, "field": sensor.key, "reason": exc.message},
            )
            return SensorResult(sensor=sensor, error=exc.message)
        return SensorResult(sensor=sensor, summary=summary)

    def summarize_sensor(self, name: str) -> SensorResult:
        return self.fetch_summary(self.get_sensor(name))

    def load(self, isolate_failures: Optional[bool] = None) -> DashboardState:
        """Load every sensor in order, one request at a time."""
        isolate = self.isolate_failures if isolate_failures is None else isolate_failures
        results = [self.fetch_summary(sensor) for sensor in self.sensors]
        failed = [result for result in results if not result.ok]

        if failed and not isolate:
            return DashboardState(
                sensors=self.sensors,
                summaries={sensor.name: None for sensor in self.sensors},
                error=PAGE_ERROR_MESSAGE,
            )

        return DashboardState(
            sensors=self.sensors,
            summaries={result.sensor.name: result.summary for result in results},
            sensor_errors={
                result.sensor.name: result.error for result in failed if result.error is not None
            },
        )

    def close(self) -> None:
        self.client.close()


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard with the configured ThingSpeak channel."""
    settings = get_settings()
    return DashboardService(
        client=build_default_client(),
        computer=SensorSummaryComputer(),
        results=settings.results,
        isolate_failures=settings.isolate_failures,
    )
