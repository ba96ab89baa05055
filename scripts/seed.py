"""Seed script: load a demo dataset into the analytics tables.

Creates:
1. Occupations with automation probabilities (0-100, stored as text)
2. Job-risk rows (0-1) for the same occupation codes
3. Employee profiles spread across the occupations
4. Reskilling cases across seven training programs
5. Events (assessments, modules, final exams) for every case

Idempotent: safe to run multiple times; skips if occupations already exist.
Intended for a local database only; the hosted tables are never seeded.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
    pytest tests/scripts/test_seed.py  # against aiosqlite in-memory
"""

import asyncio
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import (
    EmployeeProfileRow,
    JobRiskRow,
    OccupationRow,
    ReskillCaseRow,
    ReskillEventRow,
)

# (code, title, automation probability 0-1, employees)
DEMO_ROLES: list[tuple[str, str, float, int]] = [
    ("43-6014", "Administrative Assistant", 0.89, 14),
    ("43-9021", "Data Entry Clerk", 0.92, 8),
    ("43-4051", "Customer Service Rep", 0.76, 12),
    ("43-3031", "Accounting Clerk", 0.85, 7),
    ("43-5053", "Mail Sorter", 0.94, 4),
    ("43-3071", "Bank Teller", 0.91, 6),
    ("15-1252", "Software Developer", 0.04, 9),
]

DEMO_PROGRAMS: list[str] = [
    "Digital Skills Fundamentals",
    "Advanced Data Analysis",
    "Project Management",
    "Leadership Development",
    "Technical Writing",
    "Cybersecurity Basics",
    "Customer Experience",
]

DEMO_SKILLS: dict[str, str] = {
    "Digital Skills Fundamentals": "Digital Literacy",
    "Advanced Data Analysis": "Data Analysis",
    "Project Management": "Project Management",
    "Leadership Development": "Leadership",
    "Technical Writing": "Communication",
    "Cybersecurity Basics": "Technical",
    "Customer Experience": "Communication",
}

DEMO_ACTORS = ["In-person Workshop", "Online Course", "Blended Learning", "Mentor"]

DEMO_START = date(2024, 1, 8)


def build_demo_rows() -> dict[str, list]:
    """Build the demo dataset deterministically (no randomness)."""
    occupations: list[OccupationRow] = []
    job_risks: list[JobRiskRow] = []
    employees: list[EmployeeProfileRow] = []
    cases: list[ReskillCaseRow] = []
    events: list[ReskillEventRow] = []

    employee_id = 1000
    for code, title, probability, headcount in DEMO_ROLES:
        occupations.append(
            OccupationRow(
                occupation_id=code,
                occupation_name=title,
                probability_of_automation=f"{probability * 100:.0f}",
            )
        )
        job_risks.append(
            JobRiskRow(occupation_code=code, job_title=title, automation_probability=probability)
        )
        for _ in range(headcount):
            employee_id += 1
            employees.append(EmployeeProfileRow(employee_id=employee_id, occupation_code=code))

    event_id = 0
    for idx, employee in enumerate(employees):
        case_id = idx + 1
        program = DEMO_PROGRAMS[idx % len(DEMO_PROGRAMS)]
        start = DEMO_START + timedelta(days=9 * idx)
        # Roughly 3 in 4 finish; most finishers certify.
        completed = idx % 4 != 3
        certified = completed and idx % 5 != 2
        cases.append(
            ReskillCaseRow(
                case_id=case_id,
                employee_id=employee.employee_id,
                training_program=program,
                certification_earned=certified,
                start_date=start.isoformat(),
                completion_date=(start + timedelta(days=60)).isoformat() if completed else None,
            )
        )

        base_score = 55 + (idx * 7) % 40
        steps = [
            ("Initial Assessment", base_score, "Assessor"),
            ("Module 1", min(base_score + 5, 100), DEMO_ACTORS[idx % len(DEMO_ACTORS)]),
            ("Module 2", min(base_score + 9, 100), DEMO_ACTORS[(idx + 1) % len(DEMO_ACTORS)]),
        ]
        if completed:
            steps.append(("Final Assessment", min(base_score + 15, 100), "Assessor"))
        for offset, (activity, score, actor) in enumerate(steps):
            event_id += 1
            events.append(
                ReskillEventRow(
                    event_id=event_id,
                    case_id=case_id,
                    activity=activity,
                    timestamp=f"{(start + timedelta(days=14 * offset)).isoformat()}T09:00:00",
                    actor=actor,
                    skill_category=DEMO_SKILLS[program],
                    score=str(score),
                    completion_status="completed" if completed or offset < 2 else "in_progress",
                )
            )

    return {
        "occupations": occupations,
        "job_risks": job_risks,
        "employees": employees,
        "cases": cases,
        "events": events,
    }


async def seed_demo_data(session: AsyncSession) -> bool:
    """Insert the demo dataset. Returns False if data already exists."""
    existing = await session.scalar(select(func.count()).select_from(OccupationRow))
    if existing:
        return False

    rows = build_demo_rows()
    # Cases before events (foreign key).
    for key in ("occupations", "job_risks", "employees", "cases", "events"):
        session.add_all(rows[key])
        await session.flush()
    return True


async def _run_seed() -> None:
    from src.db.session import async_session_factory

    async with async_session_factory() as session:
        created = await seed_demo_data(session)
        await session.commit()

    if created:
        print("Seeded demo workforce dataset.")
    else:
        print("Demo data already present, nothing to do.")


if __name__ == "__main__":
    asyncio.run(_run_seed())
