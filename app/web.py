from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.schemas import DashboardSnapshot, SeriesPoint, Threshold
from services.dashboard import DashboardService, build_default_dashboard


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

CHART_WIDTH = 360
CHART_HEIGHT = 150
CHART_HEADROOM = 1.2


@dataclass(frozen=True)
class ChartLine:
    y: float
    color: str
    label: str


@dataclass(frozen=True)
class Chart:
    width: int
    height: int
    points: str
    dots: list[tuple[float, float]]
    markers: list[ChartLine]


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


def build_chart(
    history: Sequence[SeriesPoint],
    thresholds: Sequence[Threshold],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> Chart:
    """Lay out the trend line and threshold markers in SVG coordinates."""
    ceiling = max([point.level for point in history] + [t.level for t in thresholds] + [1.0])
    ceiling *= CHART_HEADROOM

    def to_y(level: float) -> float:
        return round(height - (level / ceiling) * height, 2)

    step = width / max(len(history) - 1, 1)
    dots = [(round(position * step, 2), to_y(point.level)) for position, point in enumerate(history)]
    # A polyline needs two vertices; a lone reading is drawn as its dot only.
    points = " ".join(f"{x},{y}" for x, y in dots) if len(dots) > 1 else ""
    markers = [
        ChartLine(y=to_y(t.level), color=t.color, label=f"{t.status.value} {t.level:g} cm")
        for t in thresholds
    ]
    return Chart(width=width, height=height, points=points, dots=dots, markers=markers)


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    snapshot: DashboardSnapshot = dashboard.snapshot()
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "request": request,
            "snapshot": snapshot,
            "chart": build_chart(snapshot.history, snapshot.thresholds),
        },
    )
