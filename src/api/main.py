"""FastAPI application entry point for Workforce Insights.

Wires structured logging, CORS for the dashboard front end, the dashboard
router, and two infrastructure endpoints (/health, /api/version).
"""

import logging

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import Field
from sqlalchemy import text

from src.api.dashboard import router as dashboard_router
from src.config.settings import Environment, Settings, get_settings
from src.models.common import InsightsBase

APP_NAME = "Workforce Insights"
APP_VERSION = "0.1.0"


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one level from settings."""
    level = logging.getLevelName(settings.LOG_LEVEL.value)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.ENVIRONMENT == Environment.DEV
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    # Library modules log through logging.getLogger(__name__).
    logging.basicConfig(level=level)


settings = get_settings()
configure_logging(settings)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


class HealthStatus(InsightsBase):
    status: str = Field(..., description="ok, or degraded when a check fails.")
    version: str
    environment: str
    checks: dict[str, bool]


# --- FastAPI app ---
app = FastAPI(
    title=f"{APP_NAME} API",
    description="Automation risk and reskilling analytics for workforce dashboards.",
    version=APP_VERSION,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ENVIRONMENT == Environment.DEV else [],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Tag every log line emitted during a request with its path."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(path=request.url.path)
    response = await call_next(request)
    logger.debug("request_completed", status_code=response.status_code)
    return response


app.include_router(dashboard_router)


# --- Infrastructure Endpoints ---


async def _database_reachable() -> bool:
    from src.db.session import async_session_factory

    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001  any driver failure means unreachable
        logger.warning("health_check_database_unreachable", error=str(exc))
        return False
    return True


@app.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Liveness probe. Always 200; a failed check reports ``degraded``."""
    checks = {"api": True, "database": await _database_reachable()}
    return HealthStatus(
        status="ok" if all(checks.values()) else "degraded",
        version=APP_VERSION,
        environment=settings.ENVIRONMENT.value,
        checks=checks,
    )


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
