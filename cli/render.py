from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer

STATUS_COLORS = {
    "SAFE": typer.colors.GREEN,
    "WARNING": typer.colors.YELLOW,
    "DANGER": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def echo_status(status: Any) -> None:
    typer.secho(f"status: {status}", fg=STATUS_COLORS.get(str(status)), bold=True)


def render_reading(payload: Dict[str, Any]) -> None:
    if not payload.get("accepted"):
        typer.secho("Reading ignored: no usable water level.", fg=typer.colors.YELLOW)
    echo_key_values([("water_level", payload.get("water_level"))])
    echo_status(payload.get("status"))


def render_history(points: List[Dict[str, Any]]) -> None:
    echo_heading("History")
    if not points:
        typer.echo("No history recorded.")
        return
    for point in points:
        typer.echo(f"  {point.get('index')}: {point.get('level')} cm")


def render_dashboard(payload: Dict[str, Any]) -> None:
    echo_heading("Flood Monitoring Dashboard")
    if payload.get("alert"):
        typer.secho("Flood Risk Detected. Take Immediate Action.", fg=typer.colors.RED, bold=True)
    unit = payload.get("unit", "cm")
    echo_key_values(
        [
            ("location", payload.get("location")),
            ("time", payload.get("time")),
            ("water_level", f"{payload.get('water_level')} {unit}"),
        ]
    )
    echo_status(payload.get("status"))
    echo_key_values(
        [
            ("min", f"{payload.get('min_level')} {unit}"),
            ("max", f"{payload.get('max_level')} {unit}"),
        ]
    )
    thresholds = payload.get("thresholds") or []
    if thresholds:
        typer.echo(
            "thresholds: "
            + ", ".join(f"{t.get('status')} >= {t.get('level')} {unit}" for t in thresholds)
        )
    typer.echo()
    render_history(payload.get("history") or [])
