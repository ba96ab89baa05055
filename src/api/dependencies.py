"""FastAPI dependency injection factories.

Each factory takes AsyncSession via Depends(get_async_session). API
endpoints use these via Depends().
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import Settings, get_settings
from src.dashboard.loader import DashboardDataLoader
from src.db.session import get_async_session

# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


async def get_dashboard_loader(
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> DashboardDataLoader:
    return DashboardDataLoader(session, row_limit=settings.QUERY_ROW_LIMIT)
