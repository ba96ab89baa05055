"""Budget-cut impact assessment.

Estimates the training budget per program category from enrolment costs,
applies a uniform cut, and grades each program by the priority of its
learners and the sensitivity of its outcomes:

- enrolment cost: reskill_cost() of the employee's occupation risk,
  BASE_RESKILL_COST when the occupation is unknown
- priority: mean automation risk of enrolled employees (>75 High, >50 Medium)
- impact: program success rate (>=80 Minimal, >=70 Moderate, else Significant)
- projected success: overall rate eroding by cut × 0.5 over five months
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

import numpy as np

from src.engine.classification import classify_program_category
from src.engine.priority import BASE_RESKILL_COST, reskill_cost
from src.engine.success import overall_success_rate, program_outcomes
from src.models.common import percent, round_half_up
from src.models.workforce import (
    BudgetImpact,
    CategoryBudget,
    CategoryShare,
    EmployeeProfile,
    ImpactedProgram,
    JobRisk,
    MonthlyRate,
    ReskillCase,
)

logger = logging.getLogger(__name__)

DEFAULT_CUT = 0.30
SUCCESS_EROSION = 0.5
EROSION_MONTHS = 5
PROJECTION_MONTHS = 6


def _employee_risk(
    job_risks: Iterable[JobRisk],
    employees: Iterable[EmployeeProfile],
) -> dict[int, float]:
    """Employee id -> automation risk (0-100) of their occupation."""
    probability = {
        j.occupation_code: j.automation_probability
        for j in job_risks
        if j.automation_probability is not None
    }
    return {
        e.employee_id: probability[e.occupation_code] * 100
        for e in employees
        if e.occupation_code in probability
    }


def enrolment_cost(case: ReskillCase, employee_risk: dict[int, float]) -> int:
    risk = employee_risk.get(case.employee_id)
    if risk is None:
        return round_half_up(BASE_RESKILL_COST)
    return reskill_cost(risk)


def program_priority(risk: float | None) -> str:
    if risk is None:
        return "Low"
    if risk > 75:
        return "High"
    if risk > 50:
        return "Medium"
    return "Low"


def cut_impact(success_rate: float) -> str:
    if success_rate >= 80:
        return "Minimal"
    if success_rate >= 70:
        return "Moderate"
    return "Significant"


def projected_success(rate: float, cut: float) -> list[MonthlyRate]:
    """Overall success rate for the current month and the next six."""
    erosion = rate * cut * SUCCESS_EROSION
    return [
        MonthlyRate(
            month="Current" if month == 0 else f"Month {month}",
            rate=round_half_up(rate - erosion * min(month, EROSION_MONTHS) / EROSION_MONTHS),
        )
        for month in range(PROJECTION_MONTHS + 1)
    ]


def _impacted_programs(
    cases: Sequence[ReskillCase],
    employee_risk: dict[int, float],
) -> list[ImpactedProgram]:
    enrolled: dict[str, set[int]] = defaultdict(set)
    everyone: dict[str, set[int]] = defaultdict(set)
    for case in cases:
        everyone[case.training_program].add(case.employee_id)
        if not case.completed:
            enrolled[case.training_program].add(case.employee_id)

    rows = []
    for program, outcome in program_outcomes(cases).items():
        learners = enrolled.get(program) or everyone[program]
        risks = [employee_risk[eid] for eid in learners if eid in employee_risk]
        rows.append(
            ImpactedProgram(
                program=program,
                priority=program_priority(float(np.mean(risks)) if risks else None),
                impact=cut_impact(percent(outcome.certified, outcome.total)),
                employees=len(learners),
            )
        )
    rows.sort(key=lambda r: (-r.employees, r.program))
    return rows


def assess_budget_cut(
    cases: Sequence[ReskillCase],
    job_risks: Iterable[JobRisk],
    employees: Iterable[EmployeeProfile],
    cut: float = DEFAULT_CUT,
) -> BudgetImpact:
    """Current vs reduced budget per category and the programs affected."""
    if not 0.0 <= cut <= 1.0:
        raise ValueError(f"Budget cut must be between 0 and 1, got {cut}")

    employee_risk = _employee_risk(job_risks, employees)

    current: dict[str, int] = defaultdict(int)
    for case in cases:
        current[classify_program_category(case.training_program)] += enrolment_cost(
            case, employee_risk,
        )

    categories = [
        CategoryBudget(
            category=category,
            current=amount,
            reduced=round_half_up(amount * (1 - cut)),
        )
        for category, amount in sorted(current.items(), key=lambda kv: (-kv[1], kv[0]))
    ]
    total_current = sum(c.current for c in categories)
    total_reduced = sum(c.reduced for c in categories)
    impacted = _impacted_programs(cases, employee_risk)

    logger.debug(
        "Budget cut %.0f%%: %d -> %d across %d categories",
        cut * 100, total_current, total_reduced, len(categories),
    )

    return BudgetImpact(
        cut=cut,
        categories=categories,
        total_current=total_current,
        total_reduced=total_reduced,
        total_reduction=total_current - total_reduced,
        reduction_percentage=percent(total_current - total_reduced, total_current),
        impacted_programs=impacted,
        affected_employees=sum(p.employees for p in impacted),
        projected_success=projected_success(overall_success_rate(cases), cut),
    )


def budget_distribution(cases: Sequence[ReskillCase]) -> list[CategoryShare]:
    """Share of enrolments (percent) per program category, largest first."""
    counts: dict[str, int] = defaultdict(int)
    for case in cases:
        counts[classify_program_category(case.training_program)] += 1
    return [
        CategoryShare(category=category, value=percent(count, len(cases)))
        for category, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]
