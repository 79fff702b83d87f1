from __future__ import annotations

from typing import Any, Iterable

import typer

from app.presenter import LOADING_TEXT
from app.schemas import DashboardResponse, SensorPanel, SensorStatus
from models.feeds import SensorSummary

_STATUS_COLORS = {
    SensorStatus.above: typer.colors.RED,
    SensorStatus.below: typer.colors.BLUE,
    SensorStatus.equal: typer.colors.WHITE,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_panel(panel: SensorPanel) -> None:
    echo_heading(panel.label)
    if panel.summary is None:
        if panel.error:
            typer.secho(f"Unavailable: {panel.error}", fg=typer.colors.YELLOW)
        else:
            typer.echo(LOADING_TEXT)
        return

    echo_key_values(
        [
            ("Current", panel.current_display),
            ("Average", panel.average_display),
        ]
    )
    color = _STATUS_COLORS.get(panel.status) if panel.status else None
    typer.secho(f"Status: {panel.status_label}", fg=color)


def render_dashboard(response: DashboardResponse) -> None:
    if response.error:
        typer.secho(f"Error: {response.error}", fg=typer.colors.RED, err=True)
        return

    echo_heading("Sensor Data Dashboard")
    typer.echo(f"fetched_at: {response.fetched_at.isoformat()}")
    for panel in response.sensors:
        typer.echo()
        render_panel(panel)


def render_summary(field: str, summary: SensorSummary) -> None:
    echo_heading(f"Summary for {field}")
    echo_key_values(
        [
            ("current_value", summary.current_value),
            ("average", summary.average),
        ]
    )
