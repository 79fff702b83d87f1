"""Failures that prevent a sensor summary from being produced."""

from __future__ import annotations


class SummaryError(Exception):
    """Base class; ``str(exc)`` is a message suitable for display."""

    default_message = "Unable to summarize sensor data"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NoDataAvailable(SummaryError):
    default_message = "No data available"


class NoValidReadings(SummaryError):
    default_message = "No valid readings found"


class TransportError(SummaryError):
    default_message = "Error fetching sensor data"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
