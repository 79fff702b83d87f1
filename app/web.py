from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.presenter import LOADING_TEXT
from services.dashboard import DashboardService, build_default_dashboard


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_dashboard", response_class=HTMLResponse)
async def ui_dashboard(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    # Panels start as placeholders; the page requests /api/dashboard once on load.
    return templates.TemplateResponse(
        request,
        "ui/dashboard.html",
        {
            "sensors": dashboard.sensors,
            "loading_text": LOADING_TEXT,
            "summary_url": request.url_for("get_dashboard_summary").path,
        },
    )
