"""SQLAlchemy ORM table models for Workforce Insights.

The five analytics tables are owned by the hosted Supabase project; this
service maps them read-only. Column types mirror the hosted schema, which
stores several numeric values as text (automation probability, event score)
and dates as ISO strings. Parsing happens in the pydantic record models.
"""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.session import Base


# ---------------------------------------------------------------------------
# Occupations / risk
# ---------------------------------------------------------------------------


class OccupationRow(Base):
    __tablename__ = "occupations"

    occupation_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    occupation_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Column name contains spaces in the hosted schema.
    probability_of_automation: Mapped[str | None] = mapped_column(
        "Probability of automation", Text, nullable=True,
    )


class JobRiskRow(Base):
    """Automation probability (0-1) per occupation code."""

    __tablename__ = "job_risk"

    occupation_code: Mapped[str] = mapped_column(String(50), primary_key=True)
    job_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    automation_probability: Mapped[float | None] = mapped_column(Float, nullable=True)


class EmployeeProfileRow(Base):
    __tablename__ = "employee_profile"

    employee_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    occupation_code: Mapped[str | None] = mapped_column(String(50), nullable=True)


# ---------------------------------------------------------------------------
# Reskilling cases / events
# ---------------------------------------------------------------------------


class ReskillCaseRow(Base):
    """One employee's enrollment in a training program."""

    __tablename__ = "workforce_reskilling_cases"

    case_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    employee_id: Mapped[int] = mapped_column(Integer, nullable=False)
    training_program: Mapped[str | None] = mapped_column(Text, nullable=True)
    certification_earned: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    start_date: Mapped[str | None] = mapped_column(String(40), nullable=True)
    completion_date: Mapped[str | None] = mapped_column(String(40), nullable=True)


class ReskillEventRow(Base):
    """One timestamped activity within a case's training journey."""

    __tablename__ = "workforce_reskilling_events"

    event_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    case_id: Mapped[int | None] = mapped_column(
        ForeignKey("workforce_reskilling_cases.case_id"), nullable=True,
    )
    activity: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[str | None] = mapped_column(String(40), nullable=True)
    actor: Mapped[str | None] = mapped_column(Text, nullable=True)
    skill_category: Mapped[str | None] = mapped_column(Text, nullable=True)
    score: Mapped[str | None] = mapped_column(Text, nullable=True)
    completion_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
