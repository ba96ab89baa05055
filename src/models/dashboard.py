"""Pydantic schemas for the six dashboard views.

Every view carries the notifications raised while fetching its inputs; a
failed fetch contributes an empty row set plus one notification, so a view
is always returned, never an error.
"""

from pydantic import Field

from src.models.common import InsightsBase
from src.models.workforce import (
    BudgetImpact,
    CategoryShare,
    DepartmentRisk,
    MethodEffectiveness,
    MonthlyRate,
    ProgramEffectiveness,
    ProgramSuccess,
    RiskBand,
    RiskSummary,
    RiskyOccupation,
    RiskyRole,
    RolePriority,
    SkillDemand,
    SkillGain,
    SuccessFactor,
    SuccessGroup,
)


class Notification(InsightsBase):
    """A user-facing message about a failed table fetch."""

    source: str
    message: str


class DashboardView(InsightsBase):
    notifications: list[Notification] = Field(default_factory=list)


class OverviewView(DashboardView):
    high_risk_roles: int
    training_completion_rate: int
    reskill_success_rate: int
    top_risk_roles: list[RiskyOccupation]
    budget_distribution: list[CategoryShare]
    program_completion: list[ProgramEffectiveness]
    success_trend: list[MonthlyRate]


class AutomationRiskView(DashboardView):
    summary: RiskSummary
    top_roles: list[RiskyRole]
    risk_distribution: list[RiskBand]
    department_risk: list[DepartmentRisk]


class TrainingEffectivenessView(DashboardView):
    programs: list[ProgramEffectiveness]
    average_completion_rate: int
    average_score: float | None = None
    average_success_rate: int
    completion_trend: list[MonthlyRate]
    method_effectiveness: list[MethodEffectiveness]
    skill_gains: list[SkillGain]


class ReskillSuccessView(DashboardView):
    overall_success_rate: int
    success_factors: list[SuccessFactor]
    programs: list[ProgramSuccess]
    success_distribution: list[SuccessGroup]
    high_success_potential: int = Field(
        ..., description="In-progress cases with a mean score of 80 or more.",
    )
    needs_support: int = Field(
        ..., description="In-progress cases with a mean score below 60.",
    )


class BudgetCutView(BudgetImpact, DashboardView):
    pass


class ReskillPriorityView(DashboardView):
    roles: list[RolePriority]
    high_priority_roles: int
    total_employees: int
    average_success_probability: int
    investment_distribution: list[CategoryShare]
    target_skills: list[SkillDemand]
