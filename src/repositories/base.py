"""Read-only repository base for Workforce Insights.

The analytics tables are owned by the hosted database; repositories only
issue SELECTs. Every listing accepts an optional row limit.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.session import Base

T = TypeVar("T", bound=Base)


class ReadOnlyRepository(Generic[T]):
    """Base repository: ``select`` over one table with filter/order/limit."""

    row_type: type[T]
    default_order: tuple[Any, ...] = ()

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _query(self) -> Select:
        return select(self.row_type).order_by(*self.default_order)

    async def _fetch(self, query: Select, limit: int | None = None) -> list[T]:
        if limit is not None:
            query = query.limit(limit)
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def list_all(self, *, limit: int | None = None) -> list[T]:
        return await self._fetch(self._query(), limit)
