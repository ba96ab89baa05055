"""Tests for training-effectiveness aggregations."""

import pytest

from src.engine.training import (
    completion_trend,
    method_effectiveness,
    program_effectiveness,
    skill_gains,
    target_skills,
)
from src.models.workforce import ReskillCase, ReskillEvent


def _case(case_id: int, program: str, *, employee_id: int, start: str | None, completed: str | None = None,
          certified: bool = False) -> ReskillCase:
    return ReskillCase(
        case_id=case_id,
        employee_id=employee_id,
        training_program=program,
        certification_earned=certified,
        start_date=start,
        completion_date=completed,
    )


def _event(event_id: int, case_id: int, *, ts: str, score: object = None, actor: str | None = None,
           skill: str | None = None) -> ReskillEvent:
    return ReskillEvent(
        event_id=event_id,
        case_id=case_id,
        activity="Module",
        timestamp=ts,
        actor=actor,
        skill_category=skill,
        score=score,
    )


CASES = [
    _case(1, "Data Analysis", employee_id=10, start="2024-01-05", completed="2024-03-01", certified=True),
    _case(2, "Data Analysis", employee_id=11, start="2024-01-20"),
    _case(3, "Leadership", employee_id=10, start="2024-02-01", completed="2024-04-01", certified=True),
    _case(4, "Writing", employee_id=12, start=None),
]

EVENTS = [
    _event(1, 1, ts="2024-01-06T09:00", score="50", actor="Online", skill="Python"),
    _event(2, 1, ts="2024-02-10T09:00", score="80", actor="Online", skill="Python"),
    _event(3, 2, ts="2024-01-21T09:00", score="60", actor="Workshop", skill="Python"),
    _event(4, 2, ts="2024-02-21T09:00", score="90", actor="Online", skill="Python"),
    _event(5, 1, ts="2024-01-07T09:00", score="70", actor="Workshop", skill="Excel"),
    _event(6, 3, ts="2024-02-02T09:00", score=None, actor="Mentor", skill="Coaching"),
    _event(7, 3, ts="2024-02-03T09:00", score="n/a", actor="Mentor", skill="Coaching"),
]


class TestProgramEffectiveness:
    def test_rows(self) -> None:
        rows = {r.program: r for r in program_effectiveness(CASES, EVENTS)}
        data = rows["Data Analysis"]
        assert data.case_count == 2
        assert data.completion_rate == 50
        assert data.success_rate == 50
        # case 1 mean (50, 80, 70) = 66.67, case 2 mean (60, 90) = 75
        assert data.average_score == pytest.approx(70.8)

    def test_unscored_program_has_no_average(self) -> None:
        rows = {r.program: r for r in program_effectiveness(CASES, EVENTS)}
        assert rows["Leadership"].average_score is None
        assert rows["Writing"].average_score is None

    def test_ordering(self) -> None:
        assert [r.program for r in program_effectiveness(CASES, EVENTS)] == [
            "Leadership", "Data Analysis", "Writing",
        ]


class TestCompletionTrend:
    def test_by_start_month(self) -> None:
        trend = completion_trend(CASES)
        assert [(m.month, m.rate) for m in trend] == [("2024-01", 50), ("2024-02", 100)]

    def test_empty(self) -> None:
        assert completion_trend([]) == []


class TestMethodEffectiveness:
    def test_mean_score_per_actor(self) -> None:
        methods = {m.method: m.effectiveness for m in method_effectiveness(EVENTS)}
        # Online: 50, 80, 90 -> 73.3; Workshop: 60, 70 -> 65
        assert methods == {"Online": 73, "Workshop": 65}

    def test_highest_first(self) -> None:
        assert [m.method for m in method_effectiveness(EVENTS)] == ["Online", "Workshop"]

    def test_overflowing_score_ignored(self) -> None:
        events = [
            _event(1, 1, ts="2024-01-01T09:00:00", score="1e400", actor="Online"),
            _event(2, 1, ts="2024-01-08T09:00:00", score="80", actor="Online"),
        ]
        assert [(m.method, m.effectiveness) for m in method_effectiveness(events)] == [("Online", 80)]


class TestSkillGains:
    def test_first_vs_last(self) -> None:
        gains = skill_gains(EVENTS)
        assert [(g.skill, g.before, g.after) for g in gains] == [("Python", 55.0, 85.0)]

    def test_single_event_journeys_skipped(self) -> None:
        assert all(g.skill != "Excel" for g in skill_gains(EVENTS))

    def test_out_of_order_events_sorted_by_timestamp(self) -> None:
        events = [
            _event(2, 1, ts="2024-02-01T00:00", score=90, skill="SQL"),
            _event(1, 1, ts="2024-01-01T00:00", score=40, skill="SQL"),
        ]
        assert skill_gains(events)[0].before == 40.0


class TestTargetSkills:
    def test_share_of_cases(self) -> None:
        skills = {s.skill: s for s in target_skills(CASES, EVENTS)}
        assert skills["Python"].demand == 50
        assert skills["Python"].roles == 2
        assert skills["Excel"].demand == 25
        assert skills["Coaching"].roles == 1

    def test_events_for_unknown_cases_ignored(self) -> None:
        events = [_event(99, 404, ts="2024-01-01", score=50, skill="Ghost")]
        assert target_skills(CASES, events) == []

    def test_no_cases(self) -> None:
        assert target_skills([], EVENTS) == []
