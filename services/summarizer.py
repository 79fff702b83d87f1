"""Reduction of a raw feed window to a current-value/average summary."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, List

from models.feeds import SensorSummary
from services.errors import NoDataAvailable, NoValidReadings

logger = logging.getLogger(__name__)


_RADIX_PREFIXES = ("0x", "0o", "0b")


def _int_to_float(raw: int) -> float:
    try:
        return float(raw)
    except OverflowError:
        return math.inf if raw > 0 else -math.inf


def coerce_reading(raw: Any) -> float:
    """Convert a raw feed value to a float the way JavaScript's ``Number()`` does.

    Missing values and blank strings become ``0.0``; unsigned ``0x``/``0o``/``0b``
    strings are read as integers; anything unparsable becomes NaN. Integers too
    large for a float become infinite. Callers decide which of those count as
    readings.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, int):
        return _int_to_float(raw)
    if isinstance(raw, float):
        return raw
    if isinstance(raw, str):
        candidate = raw.strip()
        if not candidate:
            return 0.0
        if "_" in candidate:
            return math.nan
        if candidate[:2].lower() in _RADIX_PREFIXES:
            try:
                return _int_to_float(int(candidate, 0))
            except ValueError:
                return math.nan
        try:
            return float(candidate)
        except ValueError:
            return math.nan
    return math.nan


def is_valid_reading(value: float) -> bool:
    """Zero and negative readings are treated as sensor faults and excluded."""
    return math.isfinite(value) and value > 0


class SensorSummaryComputer:
    """Pure summary component that can be unit tested in isolation."""

    def summarize(self, payload: Any, field: str) -> SensorSummary:
        """Summarize ``field`` across the feed records of ``payload``.

        Raises :class:`NoDataAvailable` when the payload carries no records and
        :class:`NoValidReadings` when none of the records holds a valid value.
        """
        feeds = self._extract_feeds(payload)
        if not feeds:
            logger.warning("No feed records to summarize", extra={"field": field, "reason": "empty"})
            raise NoDataAvailable()

        candidates = [
            coerce_reading(record.get(field)) if isinstance(record, Mapping) else math.nan
            for record in feeds
        ]
        values: List[float] = [value for value in candidates if is_valid_reading(value)]

        if not values:
            logger.warning(
                "Feed window has no valid readings",
                extra={"field": field, "reading_count": len(candidates), "valid_count": 0},
            )
            raise NoValidReadings()

        logger.debug(
            "Summarized feed window",
            extra={"field": field, "reading_count": len(candidates), "valid_count": len(values)},
        )
        return SensorSummary(current_value=values[-1], average=sum(values) / len(values))

    @staticmethod
    def _extract_feeds(payload: Any) -> Sequence[Any]:
        if not isinstance(payload, Mapping):
            return ()
        feeds = payload.get("feeds")
        if not isinstance(feeds, Sequence) or isinstance(feeds, (str, bytes)):
            return ()
        return feeds
