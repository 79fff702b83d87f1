"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.presenter import build_dashboard_response, panel_from_result
from app.schemas import DashboardResponse, SensorPanel
from services.dashboard import DashboardService, build_default_dashboard

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.get(
    "/api/dashboard",
    response_model=DashboardResponse,
    summary="Fetch both sensors and return their current/average summaries.",
)
def get_dashboard_summary(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardResponse:
    state = dashboard.load()
    return build_dashboard_response(state)


@router.get(
    "/api/sensors/{name}",
    response_model=SensorPanel,
    summary="Fetch and summarize a single sensor.",
)
def get_sensor_summary(
    name: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> SensorPanel:
    try:
        result = dashboard.summarize_sensor(name)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown sensor {name!r}.",
        ) from exc
    return panel_from_result(result)


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
    return {"status": "ok", "detail": "See /ui for the sensor dashboard."}
