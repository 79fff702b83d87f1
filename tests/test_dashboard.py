from __future__ import annotations

from typing import Dict, List

import httpx
import pytest

from models.feeds import SensorSummary
from services.dashboard import PAGE_ERROR_MESSAGE, DashboardService
from services.summarizer import SensorSummaryComputer
from services.thingspeak import ThingSpeakClient

TEMPERATURE_PATH = "/channels/42/fields/1.json"
LIGHT_PATH = "/channels/42/fields/2.json"


class FakeThingSpeak:
    """Routes requests to canned responses and records the order they arrive in."""

    def __init__(self, responses: Dict[str, httpx.Response]) -> None:
        self.responses = responses
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        canned = self.responses[request.url.path]
        return httpx.Response(canned.status_code, headers=canned.headers, content=canned.content)


def _feeds(field: str, *values: str) -> httpx.Response:
    return httpx.Response(200, json={"feeds": [{field: value} for value in values]})


@pytest.fixture()
def healthy_api() -> FakeThingSpeak:
    return FakeThingSpeak(
        {
            TEMPERATURE_PATH: _feeds("field1", "20", "22", "24"),
            LIGHT_PATH: _feeds("field2", "100", "0", "300"),
        }
    )


def _dashboard(api: FakeThingSpeak, isolate_failures: bool = False) -> DashboardService:
    client = ThingSpeakClient(
        base_url="https://thingspeak.test",
        channel_id="42",
        transport=httpx.MockTransport(api),
    )
    return DashboardService(
        client=client,
        computer=SensorSummaryComputer(),
        results=60,
        isolate_failures=isolate_failures,
    )


def test_load_fetches_sensors_sequentially_and_summarizes(healthy_api: FakeThingSpeak) -> None:
    dashboard = _dashboard(healthy_api)
    try:
        state = dashboard.load()
    finally:
        dashboard.close()

    assert state.error is None
    assert state.summary_for("temperature") == SensorSummary(current_value=24.0, average=22.0)
    assert state.summary_for("light") == SensorSummary(current_value=300.0, average=200.0)
    assert [request.url.path for request in healthy_api.requests] == [TEMPERATURE_PATH, LIGHT_PATH]
    assert all(request.url.params["results"] == "60" for request in healthy_api.requests)


def test_temperature_failure_discards_light_summary() -> None:
    api = FakeThingSpeak(
        {
            TEMPERATURE_PATH: httpx.Response(500),
            LIGHT_PATH: _feeds("field2", "100", "300"),
        }
    )
    dashboard = _dashboard(api)
    try:
        state = dashboard.load()
    finally:
        dashboard.close()

    assert state.error == PAGE_ERROR_MESSAGE
    assert state.summary_for("temperature") is None
    assert state.summary_for("light") is None
    assert state.sensor_errors == {}
    # The light request is still issued even though its result is discarded.
    assert [request.url.path for request in api.requests] == [TEMPERATURE_PATH, LIGHT_PATH]


def test_isolated_failures_keep_successful_sensors() -> None:
    api = FakeThingSpeak(
        {
            TEMPERATURE_PATH: httpx.Response(404),
            LIGHT_PATH: _feeds("field2", "100", "300"),
        }
    )
    dashboard = _dashboard(api, isolate_failures=True)
    try:
        state = dashboard.load()
    finally:
        dashboard.close()

    assert state.error is None
    assert state.summary_for("temperature") is None
    assert state.sensor_errors == {"temperature": "HTTP error! status: 404"}
    assert state.summary_for("light") == SensorSummary(current_value=300.0, average=200.0)


def test_load_override_takes_precedence_over_configured_mode() -> None:
    api = FakeThingSpeak(
        {
            TEMPERATURE_PATH: _feeds("field1", "0", "-5"),
            LIGHT_PATH: _feeds("field2", "50"),
        }
    )
    dashboard = _dashboard(api, isolate_failures=False)
    try:
        state = dashboard.load(isolate_failures=True)
    finally:
        dashboard.close()

    assert state.error is None
    assert state.sensor_errors == {"temperature": "No valid readings found"}
    assert state.summary_for("light") == SensorSummary(current_value=50.0, average=50.0)


def test_empty_feed_is_reported_as_no_data(healthy_api: FakeThingSpeak) -> None:
    healthy_api.responses[LIGHT_PATH] = httpx.Response(200, json={"feeds": []})
    dashboard = _dashboard(healthy_api)
    try:
        result = dashboard.summarize_sensor("light")
    finally:
        dashboard.close()

    assert not result.ok
    assert result.error == "No data available"


def test_summarize_sensor_rejects_unknown_name(healthy_api: FakeThingSpeak) -> None:
    dashboard = _dashboard(healthy_api)
    try:
        with pytest.raises(KeyError):
            dashboard.summarize_sensor("humidity")
    finally:
        dashboard.close()

    assert healthy_api.requests == []


def test_repeated_loads_produce_identical_summaries(healthy_api: FakeThingSpeak) -> None:
    dashboard = _dashboard(healthy_api)
    try:
        first = dashboard.load()
        second = dashboard.load()
    finally:
        dashboard.close()

    assert first.summaries == second.summaries
    assert len(healthy_api.requests) == 4


def test_oversized_integer_reading_does_not_break_load(healthy_api: FakeThingSpeak) -> None:
    body = '{"feeds": [{"field1": 1' + "0" * 400 + '}, {"field1": "21"}]}'
    healthy_api.responses[TEMPERATURE_PATH] = httpx.Response(
        200, content=body.encode("utf-8"), headers={"content-type": "application/json"}
    )
    dashboard = _dashboard(healthy_api)
    try:
        state = dashboard.load()
    finally:
        dashboard.close()

    assert state.error is None
    assert state.summary_for("temperature") == SensorSummary(current_value=21.0, average=21.0)
