"""Dashboard module"""

from .service import DashboardService
from .router import router, page_router

__all__ = ["DashboardService", "router", "page_router"]
