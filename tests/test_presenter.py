from __future__ import annotations

from app.presenter import (
    build_dashboard_response,
    build_panel,
    compare_to_average,
    format_value,
)
from app.schemas import SensorStatus
from models.feeds import DEFAULT_SENSORS, LIGHT, TEMPERATURE, SensorSummary
from services.dashboard import PAGE_ERROR_MESSAGE, DashboardState


def test_compare_to_average_is_three_way() -> None:
    assert compare_to_average(SensorSummary(current_value=30.0, average=20.0)) is SensorStatus.above
    assert compare_to_average(SensorSummary(current_value=10.0, average=20.0)) is SensorStatus.below
    assert compare_to_average(SensorSummary(current_value=20.0, average=20.0)) is SensorStatus.equal


def test_format_value_uses_one_decimal_and_unit() -> None:
    assert format_value(21.456, "°") == "21.5°"
    assert format_value(300.0) == "300.0"


def test_format_value_rounds_halves_up_like_to_fixed() -> None:
    assert format_value(22.25, "°") == "22.3°"
    assert format_value(0.25) == "0.3"
    assert format_value(1.05) == "1.1"
    assert format_value(1e22) == "10000000000000000000000.0"


def test_build_panel_with_summary() -> None:
    panel = build_panel(TEMPERATURE, SensorSummary(current_value=24.0, average=22.0))

    assert panel.name == "temperature"
    assert panel.current_display == "24.0°"
    assert panel.average_display == "22.0°"
    assert panel.status is SensorStatus.above
    assert panel.status_label == "Above average"
    assert panel.loading is False
    assert panel.error is None


def test_build_panel_without_summary_is_loading() -> None:
    panel = build_panel(LIGHT, None)

    assert panel.loading is True
    assert panel.summary is None
    assert panel.status is None


def test_build_panel_with_error_is_not_loading() -> None:
    panel = build_panel(LIGHT, None, "No valid readings found")

    assert panel.loading is False
    assert panel.error == "No valid readings found"


def test_dashboard_response_with_page_error_has_no_summaries() -> None:
    state = DashboardState(
        sensors=DEFAULT_SENSORS,
        summaries={"temperature": None, "light": None},
        error=PAGE_ERROR_MESSAGE,
    )

    response = build_dashboard_response(state)

    assert response.error == PAGE_ERROR_MESSAGE
    assert [panel.name for panel in response.sensors] == ["temperature", "light"]
    assert all(panel.summary is None for panel in response.sensors)


def test_dashboard_response_equal_status_label() -> None:
    state = DashboardState(
        sensors=DEFAULT_SENSORS,
        summaries={
            "temperature": SensorSummary(current_value=20.0, average=20.0),
            "light": SensorSummary(current_value=100.0, average=150.0),
        },
    )

    response = build_dashboard_response(state)
    labels = {panel.name: panel.status_label for panel in response.sensors}

    assert labels == {"temperature": "Equal to average", "light": "Below average"}
