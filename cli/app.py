from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from app.presenter import build_dashboard_response
from cli.config import CLIConfig, load_config
from cli.render import render_dashboard, render_summary
from services.dashboard import DashboardService
from services.errors import SummaryError
from services.summarizer import SensorSummaryComputer
from services.thingspeak import ThingSpeakClient


@dataclass
class CLIState:
    config: CLIConfig
    client: ThingSpeakClient


app = typer.Typer(
    help="Show current and average sensor readings from a ThingSpeak channel.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="ThingSpeak API base URL (defaults to THINGSPEAK_BASE_URL env or https://api.thingspeak.com).",
    ),
    channel: Optional[str] = typer.Option(
        None,
        "--channel",
        "-c",
        help="ThingSpeak channel id (defaults to THINGSPEAK_CHANNEL_ID env).",
    ),
    results: Optional[int] = typer.Option(
        None,
        "--results",
        "-n",
        help="Number of most recent feed records to summarize.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each ThingSpeak request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(
        base_url=base_url,
        channel_id=channel,
        results=results,
        timeout=timeout,
    )
    client = ThingSpeakClient(
        base_url=config.base_url,
        channel_id=config.channel_id,
        timeout=config.timeout,
    )
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("show")
def show_command(
    ctx: typer.Context,
    isolate: Optional[bool] = typer.Option(
        None,
        "--isolate/--no-isolate",
        help="Show sensors that loaded even when another sensor failed.",
    ),
) -> None:
    """Fetch both sensors and print the dashboard."""
    state = _get_state(ctx)
    isolate_failures = state.config.isolate_failures if isolate is None else isolate
    dashboard = DashboardService(
        client=state.client,
        computer=SensorSummaryComputer(),
        results=state.config.results,
        isolate_failures=isolate_failures,
    )
    response = build_dashboard_response(dashboard.load())
    render_dashboard(response)
    if response.error:
        raise typer.Exit(code=1)


@app.command("summarize")
def summarize_command(
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Path to a saved ThingSpeak feed JSON file."
    ),
    field: str = typer.Option("field1", "--field", "-f", help="Feed key to summarize."),
) -> None:
    """Summarize one field of a feed payload saved to disk."""
    try:
        payload = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{file} is not valid JSON: {exc.msg}") from exc

    try:
        summary = SensorSummaryComputer().summarize(payload, field)
    except SummaryError as exc:
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_summary(field, summary)
