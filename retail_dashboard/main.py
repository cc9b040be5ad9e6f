import logging
import sys
from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from retail_dashboard.core.config import config
from retail_dashboard.core.db.engine import check_database_connection, get_session_factory
from retail_dashboard.core.error_handler import global_exception_handler
from retail_dashboard.core.response_interceptor import (
    SuccessResponseInterceptor,
    CustomAPIRoute,
    skip_interceptor,
)
import retail_dashboard.core.db.models  # noqa: F401  registers every mapper
from retail_dashboard.modules.profiles import router as profiles_router
from retail_dashboard.modules.dashboard import (
    router as dashboard_router,
    page_router as dashboard_page_router,
)

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)
logger.info("Starting Retail Dashboard...")


def check_settings(settings) -> None:
    if not settings.secret_key:
        logger.warning(
            "JWT_SECRET is not set; access tokens are verified with an empty key"
        )


check_settings(config)

app = FastAPI(
    title="Retail Dashboard",
    description="Read-only business metrics for retail organizations",
    version="1.0.0",
)

app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Add Success Response Interceptor (must be added after CORS)
app.add_middleware(SuccessResponseInterceptor)

system_router = APIRouter(tags=["system"], route_class=CustomAPIRoute)


@system_router.get("/health")
@skip_interceptor
async def health(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> dict:
    database_ok = await check_database_connection(session_factory)
    return {"status": "ok" if database_ok else "degraded", "database": database_ok}


app.include_router(system_router, prefix="/api")
app.include_router(profiles_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")
app.include_router(dashboard_page_router)
