from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

from app.schemas import DashboardResponse, SensorPanel, SensorStatus, SensorSummaryModel
from models.feeds import SensorField, SensorResult, SensorSummary
from services.dashboard import DashboardState

LOADING_TEXT = "Loading..."

STATUS_LABELS = {
    SensorStatus.above: "Above average",
    SensorStatus.below: "Below average",
    SensorStatus.equal: "Equal to average",
}


def compare_to_average(summary: SensorSummary) -> SensorStatus:
    if summary.current_value > summary.average:
        return SensorStatus.above
    if summary.current_value < summary.average:
        return SensorStatus.below
    return SensorStatus.equal


_TENTH = Decimal("0.1")
# Wide enough for any finite float written out in full.
_FORMAT_CONTEXT = Context(prec=400)


def format_value(value: float, unit: str = "") -> str:
    """One decimal place, halves of the exact binary value rounded away from zero."""
    if not math.isfinite(value):
        return f"{value}{unit}"
    rounded = Decimal(value).quantize(_TENTH, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT)
    return f"{rounded}{unit}"


def build_panel(
    sensor: SensorField,
    summary: Optional[SensorSummary],
    error: Optional[str] = None,
) -> SensorPanel:
    panel = SensorPanel(name=sensor.name, label=sensor.label, unit=sensor.unit)
    if summary is None:
        panel.error = error
        panel.loading = error is None
        return panel

    status = compare_to_average(summary)
    panel.summary = SensorSummaryModel(current_value=summary.current_value, average=summary.average)
    panel.status = status
    panel.status_label = STATUS_LABELS[status]
    panel.current_display = format_value(summary.current_value, sensor.unit)
    panel.average_display = format_value(summary.average, sensor.unit)
    return panel


def panel_from_result(result: SensorResult) -> SensorPanel:
    return build_panel(result.sensor, result.summary, result.error)


def build_dashboard_response(state: DashboardState) -> DashboardResponse:
    """Lay out one panel per sensor; a page-level error leaves every panel empty."""
    panels = [
        build_panel(
            sensor,
            state.summary_for(sensor.name),
            state.sensor_errors.get(sensor.name),
        )
        for sensor in state.sensors
    ]
    return DashboardResponse(sensors=panels, error=state.error, fetched_at=state.fetched_at)
