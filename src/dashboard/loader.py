"""Dashboard data loader.

Fetches the tables a view needs, one after another on a single session,
and validates rows into record models. Each fetch is wrapped on its own:
a database error is logged, turned into a Notification, and leaves that
table's rows empty. No retry.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.dashboard import Notification
from src.models.workforce import (
    EmployeeProfile,
    JobRisk,
    Occupation,
    RecordBase,
    ReskillCase,
    ReskillEvent,
)
from src.repositories.base import ReadOnlyRepository
from src.repositories.workforce import (
    EmployeeProfileRepository,
    JobRiskRepository,
    OccupationRepository,
    ReskillCaseRepository,
    ReskillEventRepository,
)

logger = logging.getLogger(__name__)


class Table(StrEnum):
    """Analytics tables, by their name in the hosted database."""

    OCCUPATIONS = "occupations"
    JOB_RISK = "job_risk"
    EMPLOYEE_PROFILE = "employee_profile"
    CASES = "workforce_reskilling_cases"
    EVENTS = "workforce_reskilling_events"


@dataclass
class DashboardData:
    """Rows fetched for one request, plus any fetch failures."""

    occupations: list[Occupation] = field(default_factory=list)
    job_risks: list[JobRisk] = field(default_factory=list)
    employees: list[EmployeeProfile] = field(default_factory=list)
    cases: list[ReskillCase] = field(default_factory=list)
    events: list[ReskillEvent] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)


# table -> (repository, record model, DashboardData attribute)
_SOURCES: dict[Table, tuple[type[ReadOnlyRepository], type[RecordBase], str]] = {
    Table.OCCUPATIONS: (OccupationRepository, Occupation, "occupations"),
    Table.JOB_RISK: (JobRiskRepository, JobRisk, "job_risks"),
    Table.EMPLOYEE_PROFILE: (EmployeeProfileRepository, EmployeeProfile, "employees"),
    Table.CASES: (ReskillCaseRepository, ReskillCase, "cases"),
    Table.EVENTS: (ReskillEventRepository, ReskillEvent, "events"),
}


class DashboardDataLoader:
    """Load dashboard inputs from the analytics tables."""

    def __init__(self, session: AsyncSession, row_limit: int | None = None) -> None:
        self._session = session
        self._row_limit = row_limit

    async def load(self, tables: Iterable[Table]) -> DashboardData:
        data = DashboardData()
        for table in tables:
            repo_cls, model, attr = _SOURCES[table]
            try:
                rows = await repo_cls(self._session).list_all(limit=self._row_limit)
            except SQLAlchemyError as exc:
                logger.warning("Fetch from %s failed: %s", table.value, exc)
                data.notifications.append(
                    Notification(source=table.value, message=str(exc)),
                )
                # Postgres aborts the transaction on error; reset before the next fetch.
                await self._session.rollback()
                continue
            setattr(data, attr, [model.model_validate(row) for row in rows])
            logger.debug("Fetched %d rows from %s", len(rows), table.value)
        return data
