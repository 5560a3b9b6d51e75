"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from app.schemas import DashboardSnapshot, ReadingAccepted, SeriesPoint, StatusResponse
from services.dashboard import DashboardService, build_default_dashboard

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.post(
    "/readings",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ReadingAccepted,
    summary="Write a raw sensor payload to the live feed node.",
)
async def submit_reading(
    payload: Dict[str, Any] = Body(..., examples=[{"waterLevel": 42}]),
    dashboard: DashboardService = Depends(get_dashboard),
) -> ReadingAccepted:
    try:
        accepted = dashboard.submit_reading(payload)
    except OSError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Realtime database is unavailable.",
        ) from exc
    state = dashboard.state
    return ReadingAccepted(accepted=accepted, water_level=state.water_level, status=state.status)


@router.get(
    "/dashboard",
    response_model=DashboardSnapshot,
    summary="Current level, status, min/max, history series and clock.",
)
async def get_dashboard_snapshot(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardSnapshot:
    return dashboard.snapshot()


@router.get(
    "/history",
    response_model=List[SeriesPoint],
    summary="Indexed water-level history for charting.",
)
async def get_history(
    dashboard: DashboardService = Depends(get_dashboard),
) -> List[SeriesPoint]:
    return [SeriesPoint(index=point.index, level=point.level) for point in dashboard.state.history]


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Risk status for the current water level.",
)
async def get_current_status(
    dashboard: DashboardService = Depends(get_dashboard),
) -> StatusResponse:
    state = dashboard.state
    return StatusResponse(
        level=state.water_level,
        status=state.status,
        color=dashboard.classifier.color_for(state.status),
    )


@router.get(
    "/status/{level}",
    response_model=StatusResponse,
    summary="Classify an arbitrary water level.",
)
async def classify_level(
    level: float = Path(..., description="Water level in centimeters."),
    dashboard: DashboardService = Depends(get_dashboard),
) -> StatusResponse:
    risk = dashboard.classifier.classify(level)
    return StatusResponse(level=level, status=risk, color=dashboard.classifier.color_for(risk))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /dashboard for the live reading or /ui for the page."}
