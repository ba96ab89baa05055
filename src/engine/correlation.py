"""Success-factor correlation estimator.

For each of five fixed factors, every case is split into a "high" and a
"low" bucket by a predicate over its events (or the employee's case
history). The proxy correlation is the difference in certification rate
between the buckets, as a fraction, clamped to [-0.95, 0.95].

Factors without enough data fall back to fixed defaults:
- fewer than MIN_CASES cases overall, or
- fewer than MIN_BUCKET_SIZE cases in either bucket.

"Age" has no source column; it always reports its default and is marked as
not derived.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Sequence
from datetime import date

import numpy as np

from src.models.workforce import ReskillCase, ReskillEvent, SuccessFactor

logger = logging.getLogger(__name__)

CORRELATION_BOUND = 0.95
MIN_CASES = 10
MIN_BUCKET_SIZE = 3

PRIOR_EDUCATION_SCORE = 60.0
TECHNICAL_SKILL_SCORE = 70.0
MOTIVATION_SCORE = 80.0

TECHNICAL_CATEGORIES = ("tech", "programming", "software", "data", "cloud", "cyber")

DEFAULT_CORRELATIONS: dict[str, float] = {
    "Prior Education Level": 0.72,
    "Years of Experience": 0.58,
    "Age": -0.31,
    "Prior Technical Skills": 0.65,
    "Learning Motivation Score": 0.83,
}

# Factors whose values cannot be derived from the stored records.
UNDERIVABLE_FACTORS = frozenset({"Age"})

CasePredicate = Callable[[ReskillCase], bool]


def clamp_correlation(value: float) -> float:
    return float(np.clip(value, -CORRELATION_BOUND, CORRELATION_BOUND))


def _events_by_case(events: Sequence[ReskillEvent]) -> dict[int, list[ReskillEvent]]:
    grouped: dict[int, list[ReskillEvent]] = defaultdict(list)
    for event in events:
        if event.case_id is not None:
            grouped[event.case_id].append(event)
    for case_events in grouped.values():
        case_events.sort(key=lambda e: (e.timestamp or "", e.event_id))
    return grouped


def _had_prior_education(case_events: list[ReskillEvent]) -> bool:
    """An assessment scored >= 60 before the first non-assessment activity."""
    for event in case_events:
        if not event.is_assessment:
            return False
        if event.score is not None and event.score >= PRIOR_EDUCATION_SCORE:
            return True
    return False


def _has_technical_skills(case_events: list[ReskillEvent]) -> bool:
    for event in case_events:
        category = (event.skill_category or "").lower()
        if (
            event.score is not None
            and event.score > TECHNICAL_SKILL_SCORE
            and any(token in category for token in TECHNICAL_CATEGORIES)
        ):
            return True
    return False


def _is_motivated(case_events: list[ReskillEvent]) -> bool:
    return any(
        e.is_assessment and e.score is not None and e.score > MOTIVATION_SCORE
        for e in case_events
    )


def _experience_predicate(cases: Sequence[ReskillCase]) -> CasePredicate:
    """True when the employee has a case that started earlier than this one."""
    ordering: dict[int, list[tuple[date, int]]] = defaultdict(list)
    for case in cases:
        ordering[case.employee_id].append((case.start_date or date.min, case.case_id))
    first_case = {eid: min(keys)[1] for eid, keys in ordering.items()}
    return lambda case: first_case.get(case.employee_id) != case.case_id


def bucket_difference(
    cases: Sequence[ReskillCase],
    predicate: CasePredicate,
) -> float | None:
    """Certified-rate difference between high and low buckets, or None."""
    high = [c.certified for c in cases if predicate(c)]
    low = [c.certified for c in cases if not predicate(c)]
    if len(high) < MIN_BUCKET_SIZE or len(low) < MIN_BUCKET_SIZE:
        return None
    return float(np.mean(high) - np.mean(low))


def estimate_success_factors(
    cases: Sequence[ReskillCase],
    events: Sequence[ReskillEvent],
) -> list[SuccessFactor]:
    """Estimate a correlation per factor, in DEFAULT_CORRELATIONS order."""
    by_case = _events_by_case(events)

    def on_events(check: Callable[[list[ReskillEvent]], bool]) -> CasePredicate:
        return lambda case: check(by_case.get(case.case_id, []))

    predicates: dict[str, CasePredicate] = {
        "Prior Education Level": on_events(_had_prior_education),
        "Years of Experience": _experience_predicate(cases),
        "Prior Technical Skills": on_events(_has_technical_skills),
        "Learning Motivation Score": on_events(_is_motivated),
    }

    factors: list[SuccessFactor] = []
    for name, default in DEFAULT_CORRELATIONS.items():
        value: float | None = None
        if len(cases) >= MIN_CASES and name not in UNDERIVABLE_FACTORS:
            value = bucket_difference(cases, predicates[name])
        if value is None:
            factors.append(
                SuccessFactor(factor=name, correlation=clamp_correlation(default), derived=False)
            )
        else:
            factors.append(
                SuccessFactor(
                    factor=name,
                    correlation=round(clamp_correlation(value), 2),
                    derived=True,
                )
            )

    logger.debug(
        "Estimated %d success factors (%d derived) from %d cases",
        len(factors), sum(f.derived for f in factors), len(cases),
    )
    return factors
