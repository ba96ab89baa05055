"""Automation-risk aggregations.

Two risk sources with different scales:
- occupations: automation probability 0-100 (parsed from text)
- job_risk: automation probability 0-1, keyed by occupation code and joined
  to employee profiles for headcounts.

A role is "high risk" above 75%.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

import numpy as np

from src.engine.classification import classify_department
from src.engine.priority import employees_by_occupation
from src.models.common import percent, round_half_up
from src.models.workforce import (
    DepartmentRisk,
    EmployeeProfile,
    JobRisk,
    Occupation,
    RiskBand,
    RiskSummary,
    RiskyOccupation,
    RiskyRole,
)

HIGH_RISK_PERCENT = 75.0
HIGH_RISK_PROBABILITY = HIGH_RISK_PERCENT / 100

# (exclusive lower bound, label), checked in order; the last band catches the rest.
RISK_BANDS: tuple[tuple[float, str], ...] = (
    (90.0, "Very High Risk (>90%)"),
    (75.0, "High Risk (75-90%)"),
    (50.0, "Medium Risk (50-75%)"),
)
LOW_RISK_FLOOR = 25.0
LOW_RISK_LABEL = "Low Risk (25-50%)"
VERY_LOW_RISK_LABEL = "Very Low Risk (<25%)"

CRITICAL_ROLE_COUNT = 3
HIGH_ROLE_COUNT = 6


def risk_band(probability: float) -> str:
    """Band label for a probability on the 0-100 scale."""
    for floor, label in RISK_BANDS:
        if probability > floor:
            return label
    if probability >= LOW_RISK_FLOOR:
        return LOW_RISK_LABEL
    return VERY_LOW_RISK_LABEL


def risk_distribution(occupations: Iterable[Occupation]) -> list[RiskBand]:
    """Occupation counts per risk band, highest band first."""
    labels = [label for _, label in RISK_BANDS] + [LOW_RISK_LABEL, VERY_LOW_RISK_LABEL]
    counts = dict.fromkeys(labels, 0)
    for occupation in occupations:
        if occupation.automation_probability is not None:
            counts[risk_band(occupation.automation_probability)] += 1
    return [RiskBand(level=label, count=count) for label, count in counts.items()]


def top_risk_occupations(occupations: Iterable[Occupation], n: int = 5) -> list[RiskyOccupation]:
    rated = [o for o in occupations if o.automation_probability is not None]
    rated.sort(key=lambda o: (-o.automation_probability, o.occupation_name or ""))
    return [
        RiskyOccupation(
            occupation_id=o.occupation_id,
            name=o.occupation_name or o.occupation_id,
            risk=o.automation_probability,
        )
        for o in rated[:n]
    ]


def role_priority_label(rank: int) -> str:
    """Label by position in the risk ranking (0-based)."""
    if rank < CRITICAL_ROLE_COUNT:
        return "Critical"
    if rank < HIGH_ROLE_COUNT:
        return "High"
    return "Medium"


def top_risk_roles(
    job_risks: Iterable[JobRisk],
    employees: Iterable[EmployeeProfile],
    n: int = 10,
) -> list[RiskyRole]:
    headcount = employees_by_occupation(employees)
    rated = [j for j in job_risks if j.automation_probability is not None]
    rated.sort(key=lambda j: (-j.automation_probability, j.job_title or ""))
    return [
        RiskyRole(
            occupation_code=job.occupation_code,
            role=job.job_title or job.occupation_code,
            risk=job.automation_probability,
            employee_count=len(headcount.get(job.occupation_code, [])),
            priority=role_priority_label(rank),
        )
        for rank, job in enumerate(rated[:n])
    ]


def department_risk(
    job_risks: Iterable[JobRisk],
    employees: Iterable[EmployeeProfile],
) -> list[DepartmentRisk]:
    """Share of employees in high-risk roles per department, descending."""
    jobs = {j.occupation_code: j for j in job_risks}
    counts: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for employee in employees:
        job = jobs.get(employee.occupation_code or "")
        if job is None:
            continue
        dept = counts[classify_department(job.job_title)]
        dept[1] += 1
        if job.automation_probability is not None and job.automation_probability > HIGH_RISK_PROBABILITY:
            dept[0] += 1
    rows = [
        DepartmentRisk(
            department=department,
            high_risk_count=high,
            total_count=total,
            risk_percentage=percent(high, total),
        )
        for department, (high, total) in counts.items()
    ]
    rows.sort(key=lambda r: (-r.risk_percentage, r.department))
    return rows


def risk_summary(
    occupations: Sequence[Occupation],
    job_risks: Iterable[JobRisk],
    employees: Iterable[EmployeeProfile],
) -> RiskSummary:
    probabilities = [
        o.automation_probability for o in occupations if o.automation_probability is not None
    ]
    high_risk_codes = {
        j.occupation_code
        for j in job_risks
        if j.automation_probability is not None and j.automation_probability > HIGH_RISK_PROBABILITY
    }
    return RiskSummary(
        high_risk_roles=high_risk_role_count(occupations),
        employees_in_high_risk_roles=sum(
            1 for e in employees if e.occupation_code in high_risk_codes
        ),
        average_risk_score=round_half_up(float(np.mean(probabilities))) if probabilities else 0,
    )


def high_risk_role_count(occupations: Iterable[Occupation]) -> int:
    return sum(
        1 for o in occupations
        if o.automation_probability is not None and o.automation_probability > HIGH_RISK_PERCENT
    )
