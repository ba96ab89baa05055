"""Tests for reskilling success aggregations.

Covers: program outcomes, success rate by program (ordering, bounds, empty
input), success bands, overall rates, success distribution, monthly trend.
"""

from datetime import date

import pytest

from src.engine.success import (
    mean_scores_by_case,
    monthly_success_trend,
    overall_completion_rate,
    overall_success_rate,
    program_outcomes,
    program_success,
    success_band,
    success_distribution,
    success_rate_by_program,
)
from src.models.workforce import ReskillCase, ReskillEvent


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _case(
    case_id: int,
    program: str | None = "Digital Skills",
    *,
    certified: bool | None = False,
    completed: str | None = None,
    employee_id: int | None = None,
) -> ReskillCase:
    return ReskillCase(
        case_id=case_id,
        employee_id=employee_id if employee_id is not None else case_id + 100,
        training_program=program,
        certification_earned=certified,
        start_date="2024-01-01",
        completion_date=completed,
    )


def _event(event_id: int, case_id: int, score: str | None) -> ReskillEvent:
    return ReskillEvent(event_id=event_id, case_id=case_id, activity="Module", score=score)


def _mixed_cases() -> list[ReskillCase]:
    return [
        # Data Analysis: 3/4 certified -> 75
        _case(1, "Data Analysis", certified=True, completed="2024-03-01"),
        _case(2, "Data Analysis", certified=True, completed="2024-03-10"),
        _case(3, "Data Analysis", certified=True, completed="2024-04-02"),
        _case(4, "Data Analysis", certified=False),
        # Leadership: 1/1 -> 100
        _case(5, "Leadership", certified=True, completed="2024-04-15"),
        # Writing: 0/2 -> 0
        _case(6, "Writing", certified=False, completed="2024-04-20"),
        _case(7, "Writing", certified=None),
    ]


# ===================================================================
# success_rate_by_program
# ===================================================================


class TestSuccessRateByProgram:
    def test_rates_per_program(self) -> None:
        rates = success_rate_by_program(_mixed_cases())
        assert rates == {"Leadership": 100, "Data Analysis": 75, "Writing": 0}

    def test_sorted_descending(self) -> None:
        rates = list(success_rate_by_program(_mixed_cases()).values())
        assert rates == sorted(rates, reverse=True)

    def test_values_within_bounds(self) -> None:
        for rate in success_rate_by_program(_mixed_cases()).values():
            assert 0 <= rate <= 100

    def test_empty_input_gives_empty_mapping(self) -> None:
        assert success_rate_by_program([]) == {}

    def test_rounds_half_up(self) -> None:
        # 1 of 8 = 12.5% -> 13
        cases = [_case(i, "P", certified=(i == 0)) for i in range(8)]
        assert success_rate_by_program(cases) == {"P": 13}

    def test_ties_ordered_by_name(self) -> None:
        cases = [_case(1, "Beta", certified=True), _case(2, "Alpha", certified=True)]
        assert list(success_rate_by_program(cases)) == ["Alpha", "Beta"]

    def test_missing_program_name_grouped_as_unspecified(self) -> None:
        cases = [_case(1, None, certified=True), _case(2, "  ", certified=False)]
        assert success_rate_by_program(cases) == {"Unspecified": 50}

    def test_null_certification_is_not_success(self) -> None:
        assert success_rate_by_program([_case(1, "P", certified=None)]) == {"P": 0}


class TestProgramOutcomes:
    def test_counts(self) -> None:
        outcomes = program_outcomes(_mixed_cases())
        data = outcomes["Data Analysis"]
        assert (data.total, data.certified, data.completed) == (4, 3, 3)
        assert outcomes["Writing"].completed == 1


class TestSuccessBand:
    @pytest.mark.parametrize(
        ("rate", "band"),
        [(100, "High"), (80, "High"), (79, "Medium"), (70, "Medium"), (69, "Low"), (0, "Low")],
    )
    def test_band_thresholds(self, rate: int, band: str) -> None:
        assert success_band(rate) == band

    def test_program_success_carries_band(self) -> None:
        rows = program_success(_mixed_cases())
        assert [(r.program, r.band) for r in rows] == [
            ("Leadership", "High"),
            ("Data Analysis", "Medium"),
            ("Writing", "Low"),
        ]


class TestOverallRates:
    def test_success_rate(self) -> None:
        # 4 certified of 7
        assert overall_success_rate(_mixed_cases()) == 57

    def test_completion_rate(self) -> None:
        # 5 completed of 7
        assert overall_completion_rate(_mixed_cases()) == 71

    def test_empty(self) -> None:
        assert overall_success_rate([]) == 0
        assert overall_completion_rate([]) == 0


# ===================================================================
# Distribution / trend
# ===================================================================


class TestMeanScores:
    def test_skips_unparseable_scores(self) -> None:
        events = [_event(1, 1, "80"), _event(2, 1, "n/a"), _event(3, 1, "90%")]
        assert mean_scores_by_case(events) == {1: pytest.approx(85.0)}


class TestSuccessDistribution:
    def test_groups(self) -> None:
        cases = [
            _case(1, certified=True, completed="2024-02-01"),
            _case(2, certified=True, completed="2024-02-01"),
            _case(3, certified=False, completed="2024-02-01"),
            _case(4, certified=False),
        ]
        events = [_event(1, 1, "90"), _event(2, 2, "70")]
        groups = {g.group: g.percentage for g in success_distribution(cases, events)}
        assert groups == {
            "Highly Successful": 25,
            "Moderately Successful": 25,
            "Slightly Successful": 25,
            "Unsuccessful": 25,
        }

    def test_empty_gives_zeros(self) -> None:
        groups = success_distribution([], [])
        assert len(groups) == 4
        assert all(g.percentage == 0 for g in groups)


class TestMonthlySuccessTrend:
    def test_by_completion_month(self) -> None:
        trend = monthly_success_trend(_mixed_cases())
        assert [(m.month, m.rate) for m in trend] == [
            ("2024-03", 100),
            ("2024-04", 67),
        ]

    def test_ignores_incomplete_cases(self) -> None:
        assert monthly_success_trend([_case(1, certified=False)]) == []

    def test_completion_date_parsed_from_timestamp(self) -> None:
        case = _case(1, certified=True, completed="2024-05-03T10:00:00+00:00")
        assert case.completion_date == date(2024, 5, 3)
        assert monthly_success_trend([case])[0].month == "2024-05"
