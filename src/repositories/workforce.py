"""Workforce repositories: one read-only repository per analytics table.

Repos take AsyncSession and only SELECT. No pagination; callers may cap
the row count with ``limit``.

The dashboard loader only uses ``list_all``. The keyed lookups (``get``,
``get_by_occupation``, ``list_filtered``, ``get_by_cases``) serve scripts
and other callers that need one case or one occupation at a time.
"""

from collections.abc import Collection

from src.db.tables import (
    EmployeeProfileRow,
    JobRiskRow,
    OccupationRow,
    ReskillCaseRow,
    ReskillEventRow,
)
from src.repositories.base import ReadOnlyRepository


class OccupationRepository(ReadOnlyRepository[OccupationRow]):
    row_type = OccupationRow
    default_order = (OccupationRow.occupation_id,)


class JobRiskRepository(ReadOnlyRepository[JobRiskRow]):
    row_type = JobRiskRow
    default_order = (JobRiskRow.occupation_code,)

    async def get(self, occupation_code: str) -> JobRiskRow | None:
        return await self._session.get(JobRiskRow, occupation_code)


class EmployeeProfileRepository(ReadOnlyRepository[EmployeeProfileRow]):
    row_type = EmployeeProfileRow
    default_order = (EmployeeProfileRow.employee_id,)

    async def get_by_occupation(
        self, occupation_code: str, *, limit: int | None = None,
    ) -> list[EmployeeProfileRow]:
        query = self._query().where(EmployeeProfileRow.occupation_code == occupation_code)
        return await self._fetch(query, limit)


class ReskillCaseRepository(ReadOnlyRepository[ReskillCaseRow]):
    """Training-program enrollments, ordered by case id."""

    row_type = ReskillCaseRow
    default_order = (ReskillCaseRow.case_id,)

    async def get(self, case_id: int) -> ReskillCaseRow | None:
        return await self._session.get(ReskillCaseRow, case_id)

    async def list_filtered(
        self,
        *,
        training_program: str | None = None,
        employee_id: int | None = None,
        limit: int | None = None,
    ) -> list[ReskillCaseRow]:
        query = self._query()
        if training_program is not None:
            query = query.where(ReskillCaseRow.training_program == training_program)
        if employee_id is not None:
            query = query.where(ReskillCaseRow.employee_id == employee_id)
        return await self._fetch(query, limit)


class ReskillEventRepository(ReadOnlyRepository[ReskillEventRow]):
    """Case events, ordered by timestamp then event id."""

    row_type = ReskillEventRow
    default_order = (ReskillEventRow.timestamp, ReskillEventRow.event_id)

    async def get_by_cases(
        self, case_ids: Collection[int], *, limit: int | None = None,
    ) -> list[ReskillEventRow]:
        if not case_ids:
            return []
        query = self._query().where(ReskillEventRow.case_id.in_(list(case_ids)))
        return await self._fetch(query, limit)
