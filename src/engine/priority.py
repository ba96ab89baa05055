"""Reskilling priority scorer.

Ranks occupations for reskilling investment with a fixed-weight linear score:

    risk     = automation_probability × 100
    cost     = round(2500 + 2500 × (risk / 100) × 0.5)
    priority = round(0.5 × risk + 0.3 × headcount + 0.2 × success_rate)

where headcount is the employee count capped at 100 and success_rate is the
historical certification rate of the occupation's employees (70 when there
is no history). Occupations with fewer than 5 employees are dropped as noise;
the top 7 by priority are returned.

Deterministic; weights are module constants.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from src.models.common import percent, round_half_up
from src.models.workforce import (
    CategoryShare,
    EmployeeProfile,
    JobRisk,
    ReskillCase,
    RolePriority,
)

logger = logging.getLogger(__name__)

RISK_WEIGHT = 0.5
HEADCOUNT_WEIGHT = 0.3
SUCCESS_WEIGHT = 0.2

HEADCOUNT_CAP = 100.0
DEFAULT_SUCCESS_RATE = 70.0
MIN_EMPLOYEES = 5
TOP_N = 7

BASE_RESKILL_COST = 2500.0
RISK_COST_FACTOR = 0.5

HIGH_PRIORITY_THRESHOLD = 85
MEDIUM_PRIORITY_THRESHOLD = 75

PRIORITY_TIERS = ("High", "Medium", "Low")


def reskill_cost(risk: float) -> int:
    """Estimated per-employee reskilling cost for a risk score (0-100)."""
    return round_half_up(BASE_RESKILL_COST + BASE_RESKILL_COST * (risk / 100) * RISK_COST_FACTOR)


def priority_score(risk: float, employee_count: int, success_rate: float) -> int:
    """Weighted score; raw headcount capped at 100 so 90% risk, 100 staff, 70% success gives 89."""
    headcount = min(float(employee_count), HEADCOUNT_CAP)
    return round_half_up(
        RISK_WEIGHT * risk
        + HEADCOUNT_WEIGHT * headcount
        + SUCCESS_WEIGHT * success_rate
    )


def priority_tier(score: float) -> str:
    if score >= HIGH_PRIORITY_THRESHOLD:
        return "High"
    if score >= MEDIUM_PRIORITY_THRESHOLD:
        return "Medium"
    return "Low"


def employees_by_occupation(employees: Iterable[EmployeeProfile]) -> dict[str, list[int]]:
    """Map occupation code -> employee ids (employees without a code skipped)."""
    mapping: dict[str, list[int]] = defaultdict(list)
    for employee in employees:
        if employee.occupation_code:
            mapping[employee.occupation_code].append(employee.employee_id)
    return dict(mapping)


def certification_history(cases: Iterable[ReskillCase]) -> dict[int, list[bool]]:
    """Map employee id -> certification outcome of each of their cases."""
    history: dict[int, list[bool]] = defaultdict(list)
    for case in cases:
        history[case.employee_id].append(case.certified)
    return dict(history)


def occupation_success_rates(
    occupation_employees: dict[str, list[int]],
    history: dict[int, list[bool]],
) -> dict[str, float]:
    """Historical certification rate (percent) per occupation code."""
    rates: dict[str, float] = {}
    for code, employee_ids in occupation_employees.items():
        outcomes = [o for eid in employee_ids for o in history.get(eid, [])]
        if outcomes:
            rates[code] = sum(outcomes) / len(outcomes) * 100
        else:
            rates[code] = DEFAULT_SUCCESS_RATE
    return rates


def prioritize_roles(
    job_risks: Iterable[JobRisk],
    employees: Iterable[EmployeeProfile],
    cases: Iterable[ReskillCase],
    *,
    top_n: int = TOP_N,
) -> list[RolePriority]:
    """Score every occupation and return the top ``top_n`` by priority."""
    occupation_employees = employees_by_occupation(employees)
    success_rates = occupation_success_rates(
        occupation_employees, certification_history(cases),
    )

    scored: list[RolePriority] = []
    skipped = 0
    for job in job_risks:
        if job.automation_probability is None:
            skipped += 1
            continue
        employee_count = len(occupation_employees.get(job.occupation_code, []))
        if employee_count < MIN_EMPLOYEES:
            skipped += 1
            continue

        risk = job.automation_probability * 100
        success_rate = success_rates.get(job.occupation_code, DEFAULT_SUCCESS_RATE)
        score = priority_score(risk, employee_count, success_rate)
        scored.append(
            RolePriority(
                occupation_code=job.occupation_code,
                role=job.job_title or job.occupation_code,
                risk_score=round_half_up(risk),
                employee_count=employee_count,
                reskill_cost=reskill_cost(risk),
                success_probability=round_half_up(success_rate),
                priority_score=score,
                tier=priority_tier(score),
            )
        )

    if skipped:
        logger.debug("Priority scoring skipped %d occupations", skipped)

    scored.sort(key=lambda r: (-r.priority_score, r.role))
    return scored[:top_n]


def investment_distribution(roles: Sequence[RolePriority]) -> list[CategoryShare]:
    """Share (percent) of estimated reskilling spend per priority tier."""
    spend = dict.fromkeys(PRIORITY_TIERS, 0.0)
    for role in roles:
        spend[role.tier] += role.reskill_cost * role.employee_count
    total = sum(spend.values())
    return [
        CategoryShare(category=f"{tier} Priority Roles", value=percent(amount, total))
        for tier, amount in spend.items()
    ]
