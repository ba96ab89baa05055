"""Training-effectiveness aggregations over reskilling cases and events.

- program_effectiveness: completion / success rate and mean score per program
- completion_trend: completion rate by start month
- method_effectiveness: mean event score per delivery channel (event actor)
- skill_gains: first vs last scored event per skill category
- target_skills: share of cases touching each skill category
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

import numpy as np

from src.engine.success import mean_scores_by_case, program_outcomes
from src.models.common import percent, round_half_up
from src.models.workforce import (
    MethodEffectiveness,
    MonthlyRate,
    ProgramEffectiveness,
    ReskillCase,
    ReskillEvent,
    SkillDemand,
    SkillGain,
)


def program_effectiveness(
    cases: Sequence[ReskillCase],
    events: Iterable[ReskillEvent],
) -> list[ProgramEffectiveness]:
    """Per-program stats, ordered by success rate then completion rate."""
    case_scores = mean_scores_by_case(events)
    program_scores: dict[str, list[float]] = defaultdict(list)
    for case in cases:
        if case.case_id in case_scores:
            program_scores[case.training_program].append(case_scores[case.case_id])

    rows = []
    for program, outcome in program_outcomes(cases).items():
        scores = program_scores.get(program)
        rows.append(
            ProgramEffectiveness(
                program=program,
                case_count=outcome.total,
                completion_rate=percent(outcome.completed, outcome.total),
                success_rate=percent(outcome.certified, outcome.total),
                average_score=round(float(np.mean(scores)), 1) if scores else None,
            )
        )
    rows.sort(key=lambda r: (-r.success_rate, -r.completion_rate, r.program))
    return rows


def completion_trend(cases: Iterable[ReskillCase]) -> list[MonthlyRate]:
    """Share of cases started in each month that have completed."""
    by_month: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for case in cases:
        if case.start_date is None:
            continue
        counts = by_month[case.start_date.strftime("%Y-%m")]
        counts[0] += 1
        counts[1] += int(case.completed)
    return [
        MonthlyRate(month=month, rate=percent(completed, total))
        for month, (total, completed) in sorted(by_month.items())
    ]


def method_effectiveness(events: Iterable[ReskillEvent]) -> list[MethodEffectiveness]:
    """Mean score per event actor, highest first."""
    scores: dict[str, list[float]] = defaultdict(list)
    for event in events:
        if event.actor and event.score is not None:
            scores[event.actor].append(event.score)
    rows = [
        MethodEffectiveness(method=actor, effectiveness=round_half_up(float(np.mean(values))))
        for actor, values in scores.items()
    ]
    rows.sort(key=lambda r: (-r.effectiveness, r.method))
    return rows


def skill_gains(events: Iterable[ReskillEvent]) -> list[SkillGain]:
    """Average first-vs-last score per skill category.

    Only (case, category) pairs with at least two scored events count.
    """
    journeys: dict[tuple[str, int], list[ReskillEvent]] = defaultdict(list)
    for event in events:
        if event.skill_category and event.case_id is not None and event.score is not None:
            journeys[(event.skill_category, event.case_id)].append(event)

    before: dict[str, list[float]] = defaultdict(list)
    after: dict[str, list[float]] = defaultdict(list)
    for (skill, _), journey in journeys.items():
        if len(journey) < 2:
            continue
        journey.sort(key=lambda e: (e.timestamp or "", e.event_id))
        before[skill].append(journey[0].score)
        after[skill].append(journey[-1].score)

    return [
        SkillGain(
            skill=skill,
            before=round(float(np.mean(before[skill])), 1),
            after=round(float(np.mean(after[skill])), 1),
        )
        for skill in sorted(before)
    ]


def target_skills(
    cases: Sequence[ReskillCase],
    events: Iterable[ReskillEvent],
) -> list[SkillDemand]:
    """Per skill category: share of cases involved and distinct employees."""
    employee_of = {c.case_id: c.employee_id for c in cases}
    case_ids: dict[str, set[int]] = defaultdict(set)
    for event in events:
        if event.skill_category and event.case_id in employee_of:
            case_ids[event.skill_category].add(event.case_id)
    rows = [
        SkillDemand(
            skill=skill,
            demand=percent(len(ids), len(cases)),
            roles=len({employee_of[i] for i in ids}),
        )
        for skill, ids in case_ids.items()
    ]
    rows.sort(key=lambda r: (-r.demand, r.skill))
    return rows
