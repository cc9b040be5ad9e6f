"""
Dashboard Router - the HTML dashboard page and its JSON counterpart.
"""

from pathlib import Path
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from retail_dashboard.core.db.engine import get_session_factory
from retail_dashboard.core.response_interceptor import CustomAPIRoute
from retail_dashboard.modules.profiles.auth import (
    AuthState,
    ViewerContext,
    get_viewer,
    require_organization,
)
from .components import build_dashboard_view
from .constants import (
    LOW_STOCK_THRESHOLD,
    READ_LOW_STOCK,
    READ_RECENT_SALES,
)
from .schemas import DashboardViewResponse
from .service import DashboardService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/dashboard", tags=["dashboard"], route_class=CustomAPIRoute)

page_router = APIRouter(tags=["dashboard"])


@router.get("", response_model=DashboardViewResponse)
async def get_dashboard(
    viewer: ViewerContext = Depends(require_organization),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """
    Get all dashboard data in a single API call.

    Returns:
        - dashboard.stats: product count, total stock, today's sales, low-stock count
        - dashboard.low_stock_items: up to 10 inventory rows below 10 units
        - dashboard.recent_sales: last 5 sales
        - dashboard.unavailable: reads that failed and were left empty
        - cards / *_rows: the same data prepared for display
    """
    dashboard = await DashboardService.get_dashboard_data(
        session_factory, viewer.organization_id
    )
    return build_dashboard_view(dashboard)


@page_router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    viewer: ViewerContext = Depends(get_viewer),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Full dashboard page, or an explanation of why it cannot be shown."""
    if viewer.state == AuthState.unauthenticated:
        return templates.TemplateResponse(
            request,
            "dashboard_unavailable.html",
            {"state": viewer.state.value},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    if viewer.state == AuthState.no_organization:
        return templates.TemplateResponse(
            request,
            "dashboard_unavailable.html",
            {"state": viewer.state.value},
            status_code=status.HTTP_403_FORBIDDEN,
        )

    dashboard = await DashboardService.get_dashboard_data(
        session_factory, viewer.organization_id
    )
    view = build_dashboard_view(dashboard)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "view": view,
            "threshold": LOW_STOCK_THRESHOLD,
            "low_stock_failed": READ_LOW_STOCK in dashboard.unavailable,
            "recent_sales_failed": READ_RECENT_SALES in dashboard.unavailable,
        },
    )
