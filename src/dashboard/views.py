"""Dashboard view service.

Builds the six dashboard views from a DashboardData bundle:
- overview
- automation risk
- training effectiveness
- reskill success
- budget-cut impact
- reskill priority

Each view re-runs its aggregations in full from the rows it is given.
Empty rows give zero/default values, never errors.
Deterministic.
"""

from collections.abc import Sequence

import numpy as np

from src.dashboard.loader import DashboardData, Table
from src.engine import budget, correlation, priority, risk, success, training
from src.models.common import round_half_up
from src.models.dashboard import (
    AutomationRiskView,
    BudgetCutView,
    OverviewView,
    ReskillPriorityView,
    ReskillSuccessView,
    TrainingEffectivenessView,
)
from src.models.workforce import ReskillCase, ReskillEvent

HIGH_POTENTIAL_SCORE = 80.0
NEEDS_SUPPORT_SCORE = 60.0

# Tables each view reads.
VIEW_TABLES: dict[str, tuple[Table, ...]] = {
    "overview": (Table.OCCUPATIONS, Table.CASES),
    "automation_risk": (Table.OCCUPATIONS, Table.JOB_RISK, Table.EMPLOYEE_PROFILE),
    "training_effectiveness": (Table.CASES, Table.EVENTS),
    "reskill_success": (Table.CASES, Table.EVENTS),
    "budget_cut": (Table.CASES, Table.JOB_RISK, Table.EMPLOYEE_PROFILE),
    "reskill_priority": (Table.JOB_RISK, Table.EMPLOYEE_PROFILE, Table.CASES, Table.EVENTS),
}


def _mean_rounded(values: Sequence[float]) -> int:
    return round_half_up(float(np.mean(values))) if values else 0


def _in_progress_scores(
    cases: Sequence[ReskillCase], events: Sequence[ReskillEvent],
) -> list[float]:
    """Mean event score of every scored case that is neither done nor certified."""
    scores = success.mean_scores_by_case(events)
    return [
        scores[c.case_id]
        for c in cases
        if not c.completed and not c.certified and c.case_id in scores
    ]


class DashboardService:
    """Compute dashboard views from fetched rows."""

    def overview(self, data: DashboardData) -> OverviewView:
        return OverviewView(
            high_risk_roles=risk.high_risk_role_count(data.occupations),
            training_completion_rate=success.overall_completion_rate(data.cases),
            reskill_success_rate=success.overall_success_rate(data.cases),
            top_risk_roles=risk.top_risk_occupations(data.occupations, n=5),
            budget_distribution=budget.budget_distribution(data.cases),
            program_completion=training.program_effectiveness(data.cases, []),
            success_trend=success.monthly_success_trend(data.cases),
            notifications=data.notifications,
        )

    def automation_risk(self, data: DashboardData) -> AutomationRiskView:
        return AutomationRiskView(
            summary=risk.risk_summary(data.occupations, data.job_risks, data.employees),
            top_roles=risk.top_risk_roles(data.job_risks, data.employees, n=10),
            risk_distribution=risk.risk_distribution(data.occupations),
            department_risk=risk.department_risk(data.job_risks, data.employees),
            notifications=data.notifications,
        )

    def training_effectiveness(self, data: DashboardData) -> TrainingEffectivenessView:
        programs = training.program_effectiveness(data.cases, data.events)
        scores = [p.average_score for p in programs if p.average_score is not None]
        return TrainingEffectivenessView(
            programs=programs,
            average_completion_rate=_mean_rounded([p.completion_rate for p in programs]),
            average_score=round(float(np.mean(scores)), 1) if scores else None,
            average_success_rate=_mean_rounded([p.success_rate for p in programs]),
            completion_trend=training.completion_trend(data.cases),
            method_effectiveness=training.method_effectiveness(data.events),
            skill_gains=training.skill_gains(data.events),
            notifications=data.notifications,
        )

    def reskill_success(self, data: DashboardData) -> ReskillSuccessView:
        in_progress = _in_progress_scores(data.cases, data.events)
        return ReskillSuccessView(
            overall_success_rate=success.overall_success_rate(data.cases),
            success_factors=correlation.estimate_success_factors(data.cases, data.events),
            programs=success.program_success(data.cases),
            success_distribution=success.success_distribution(data.cases, data.events),
            high_success_potential=sum(1 for s in in_progress if s >= HIGH_POTENTIAL_SCORE),
            needs_support=sum(1 for s in in_progress if s < NEEDS_SUPPORT_SCORE),
            notifications=data.notifications,
        )

    def budget_cut(self, data: DashboardData, cut: float = budget.DEFAULT_CUT) -> BudgetCutView:
        impact = budget.assess_budget_cut(data.cases, data.job_risks, data.employees, cut)
        return BudgetCutView(**impact.model_dump(), notifications=data.notifications)

    def reskill_priority(self, data: DashboardData) -> ReskillPriorityView:
        roles = priority.prioritize_roles(data.job_risks, data.employees, data.cases)
        return ReskillPriorityView(
            roles=roles,
            high_priority_roles=len(roles),
            total_employees=sum(r.employee_count for r in roles),
            average_success_probability=_mean_rounded([r.success_probability for r in roles]),
            investment_distribution=priority.investment_distribution(roles),
            target_skills=training.target_skills(data.cases, data.events),
            notifications=data.notifications,
        )
