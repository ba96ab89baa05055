"""Reskilling success aggregations.

Pure functions over ReskillCase / ReskillEvent rows:
1. Per-program outcomes (total / certified / completed)
2. Success rate by program (sorted descending)
3. Success bands (High / Medium / Low)
4. Overall success and completion rates
5. Success distribution (four outcome groups)
6. Monthly success trend

Deterministic. A case counts as successful only when certification_earned
is True, and as completed when it has a completion date.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

import numpy as np

from src.models.common import percent
from src.models.workforce import (
    MonthlyRate,
    ProgramOutcome,
    ProgramSuccess,
    ReskillCase,
    ReskillEvent,
    SuccessGroup,
)

HIGH_SUCCESS_THRESHOLD = 80
MEDIUM_SUCCESS_THRESHOLD = 70

# Mean event score a certified case needs to count as "Highly Successful".
HIGHLY_SUCCESSFUL_SCORE = 85.0

SUCCESS_GROUPS = (
    "Highly Successful",
    "Moderately Successful",
    "Slightly Successful",
    "Unsuccessful",
)


def program_outcomes(cases: Iterable[ReskillCase]) -> dict[str, ProgramOutcome]:
    """Count total, certified and completed cases per training program."""
    totals: dict[str, list[int]] = defaultdict(lambda: [0, 0, 0])
    for case in cases:
        counts = totals[case.training_program]
        counts[0] += 1
        counts[1] += int(case.certified)
        counts[2] += int(case.completed)
    return {
        program: ProgramOutcome(
            program=program, total=total, certified=certified, completed=completed,
        )
        for program, (total, certified, completed) in totals.items()
    }


def success_rate_by_program(cases: Iterable[ReskillCase]) -> dict[str, int]:
    """Certified share of cases per program, as a rounded percentage.

    Returns an insertion-ordered mapping sorted by rate descending (ties by
    program name). An empty input gives an empty mapping.
    """
    rates = [
        (outcome.program, percent(outcome.certified, outcome.total))
        for outcome in program_outcomes(cases).values()
    ]
    rates.sort(key=lambda item: (-item[1], item[0]))
    return dict(rates)


def success_band(rate: float) -> str:
    """Label a success rate (percent) as High, Medium or Low."""
    if rate >= HIGH_SUCCESS_THRESHOLD:
        return "High"
    if rate >= MEDIUM_SUCCESS_THRESHOLD:
        return "Medium"
    return "Low"


def program_success(cases: Iterable[ReskillCase]) -> list[ProgramSuccess]:
    return [
        ProgramSuccess(program=program, success_rate=rate, band=success_band(rate))
        for program, rate in success_rate_by_program(cases).items()
    ]


def overall_success_rate(cases: Sequence[ReskillCase]) -> int:
    return percent(sum(1 for c in cases if c.certified), len(cases))


def overall_completion_rate(cases: Sequence[ReskillCase]) -> int:
    return percent(sum(1 for c in cases if c.completed), len(cases))


def mean_scores_by_case(events: Iterable[ReskillEvent]) -> dict[int, float]:
    """Mean of the parsed event scores per case id (unscored events skipped)."""
    scores: dict[int, list[float]] = defaultdict(list)
    for event in events:
        if event.case_id is not None and event.score is not None:
            scores[event.case_id].append(event.score)
    return {case_id: float(np.mean(values)) for case_id, values in scores.items()}


def success_distribution(
    cases: Sequence[ReskillCase],
    events: Iterable[ReskillEvent],
) -> list[SuccessGroup]:
    """Share of cases in each outcome group; empty input gives all zeros."""
    mean_scores = mean_scores_by_case(events)
    counts = dict.fromkeys(SUCCESS_GROUPS, 0)
    for case in cases:
        if case.certified:
            score = mean_scores.get(case.case_id)
            if score is not None and score >= HIGHLY_SUCCESSFUL_SCORE:
                counts["Highly Successful"] += 1
            else:
                counts["Moderately Successful"] += 1
        elif case.completed:
            counts["Slightly Successful"] += 1
        else:
            counts["Unsuccessful"] += 1
    return [
        SuccessGroup(group=group, percentage=percent(count, len(cases)))
        for group, count in counts.items()
    ]


def monthly_success_trend(cases: Iterable[ReskillCase]) -> list[MonthlyRate]:
    """Certified rate among cases completed in each month, oldest first."""
    by_month: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for case in cases:
        if case.completion_date is None:
            continue
        counts = by_month[case.completion_date.strftime("%Y-%m")]
        counts[0] += 1
        counts[1] += int(case.certified)
    return [
        MonthlyRate(month=month, rate=percent(certified, total))
        for month, (total, certified) in sorted(by_month.items())
    ]
