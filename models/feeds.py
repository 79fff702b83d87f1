"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class SensorField:
    """A named sensor backed by one numbered field of a ThingSpeak channel."""

    name: str
    label: str
    field_number: int
    unit: str = ""

    @property
    def key(self) -> str:
        """Feed record key holding this sensor's value, e.g. ``field1``."""
        return f"field{self.field_number}"


TEMPERATURE = SensorField(name="temperature", label="Temperature", field_number=1, unit="°")
LIGHT = SensorField(name="light", label="Light", field_number=2)

DEFAULT_SENSORS: Tuple[SensorField, ...] = (TEMPERATURE, LIGHT)


@dataclass(frozen=True, slots=True)
class SensorSummary:
    """Most recent valid reading and the mean of all valid readings in a window."""

    current_value: float
    average: float


@dataclass(frozen=True, slots=True)
class SensorResult:
    """Outcome of loading one sensor: a summary or an error message."""

    sensor: SensorField
    summary: Optional[SensorSummary] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.summary is None) == (self.error is None):
            raise ValueError("SensorResult requires exactly one of summary or error.")

    @property
    def ok(self) -> bool:
        return self.summary is not None
