"""Tests for the keyword department / program-category classifiers."""

import pytest

from src.engine.classification import (
    OTHER,
    classify,
    classify_department,
    classify_program_category,
)


class TestClassifyDepartment:
    @pytest.mark.parametrize(
        ("title", "department"),
        [
            ("Administrative Assistant", "Administration"),
            ("Data Entry Clerk", "Administration"),
            ("Accounting Clerk", "Finance"),
            ("Financial Analyst", "Finance"),
            ("Bank Teller", "Finance"),
            ("Customer Service Rep", "Customer Support"),
            ("Software Developer", "IT"),
            ("Mail Sorter", "Operations"),
            ("Courier", "Operations"),
        ],
    )
    def test_known_titles(self, title: str, department: str) -> None:
        assert classify_department(title) == department

    def test_case_insensitive(self) -> None:
        assert classify_department("ADMIN OFFICER") == "Administration"

    def test_unmatched_falls_to_other(self) -> None:
        assert classify_department("Astronaut") == OTHER

    def test_none_and_blank(self) -> None:
        assert classify_department(None) == OTHER
        assert classify_department("") == OTHER


class TestClassifyProgramCategory:
    @pytest.mark.parametrize(
        ("program", "category"),
        [
            ("Digital Skills Fundamentals", "Digital Skills"),
            ("Advanced Data Analysis", "Technical Training"),
            ("Cybersecurity Basics", "Technical Training"),
            ("Cloud Computing", "Technical Training"),
            ("Leadership Development", "Leadership"),
            ("Project Management", "Leadership"),
            ("Customer Experience", "Soft Skills"),
            ("Yoga", "Other"),
        ],
    )
    def test_categories(self, program: str, category: str) -> None:
        assert classify_program_category(program) == category


class TestPurity:
    def test_same_input_same_output(self) -> None:
        names = ["Receptionist", "Astronaut", "Network Engineer", "Welder"]
        first = [classify_department(n) for n in names]
        second = [classify_department(n) for n in names]
        assert first == second

    def test_first_match_wins(self) -> None:
        keywords = (("data", "First"), ("data analysis", "Second"))
        assert classify("Data Analysis", keywords) == "First"
