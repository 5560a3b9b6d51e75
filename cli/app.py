from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_dashboard, render_history, render_reading


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the flood monitor service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Flood monitor API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        help="Seconds between dashboard refreshes when watching.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(
        base_url=base_url,
        poll_interval=poll_interval,
        request_timeout=timeout,
    )
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("push")
def push_command(
    ctx: typer.Context,
    level: float = typer.Argument(..., min=0, help="Water level in centimeters."),
) -> None:
    """Write a water-level reading to the live feed."""
    state = _get_state(ctx)
    typer.echo(f"Pushing {level:g} cm to {state.config.base_url} ...")
    payload = state.client.push_reading(level)
    render_reading(payload)


@app.command("dashboard")
def dashboard_command(ctx: typer.Context) -> None:
    """Show the current reading, status, min/max and history."""
    state = _get_state(ctx)
    render_dashboard(state.client.get_dashboard())


@app.command("history")
def history_command(ctx: typer.Context) -> None:
    """List the indexed history series."""
    state = _get_state(ctx)
    render_history(state.client.get_history())


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=1,
        help="Stop after this many refreshes (default: until interrupted).",
    ),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        help="Override refresh interval.",
    ),
) -> None:
    """Refresh the dashboard view at a fixed interval."""
    state = _get_state(ctx)
    interval = poll_interval if poll_interval is not None else state.config.poll_interval
    refreshes = 0
    try:
        while count is None or refreshes < count:
            if refreshes:
                time.sleep(interval)
                typer.echo()
            render_dashboard(state.client.get_dashboard())
            refreshes += 1
    except KeyboardInterrupt:
        typer.echo("Stopped.")
