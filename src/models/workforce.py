"""Pydantic schemas for workforce records and the analytics derived from them.

Records mirror the hosted tables (occupations, job risk, employee profiles,
reskilling cases and events). Text columns holding numbers or dates are
parsed leniently on validation; anything unparseable becomes None and is
skipped by the aggregators.

Result models are the small summaries produced by the engine functions and
embedded in the dashboard views.
"""

from datetime import date

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from src.models.common import InsightsBase, parse_date, parse_float

UNSPECIFIED_PROGRAM = "Unspecified"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class RecordBase(InsightsBase):
    """Record models validate straight from ORM rows."""

    model_config = ConfigDict(from_attributes=True)


class Occupation(RecordBase):
    """Occupation with an automation probability on a 0-100 scale."""

    occupation_id: str
    occupation_name: str | None = None
    automation_probability: float | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "automation_probability",
            "probability_of_automation",
            "Probability of automation",
        ),
    )

    @field_validator("automation_probability", mode="before")
    @classmethod
    def _parse_probability(cls, v: object) -> float | None:
        return parse_float(v)


class JobRisk(RecordBase):
    """Automation probability on a 0-1 scale, keyed by occupation code."""

    occupation_code: str
    job_title: str | None = None
    automation_probability: float | None = None

    @field_validator("automation_probability", mode="before")
    @classmethod
    def _parse_probability(cls, v: object) -> float | None:
        return parse_float(v)


class EmployeeProfile(RecordBase):
    employee_id: int
    occupation_code: str | None = None


class ReskillCase(RecordBase):
    """One employee's training-program enrollment."""

    case_id: int
    employee_id: int
    training_program: str = UNSPECIFIED_PROGRAM
    certification_earned: bool | None = None
    start_date: date | None = None
    completion_date: date | None = None

    @field_validator("training_program", mode="before")
    @classmethod
    def _default_program(cls, v: object) -> str:
        if v is None or not str(v).strip():
            return UNSPECIFIED_PROGRAM
        return str(v).strip()

    @field_validator("start_date", "completion_date", mode="before")
    @classmethod
    def _parse_dates(cls, v: object) -> date | None:
        return parse_date(v)

    @property
    def certified(self) -> bool:
        return self.certification_earned is True

    @property
    def completed(self) -> bool:
        return self.completion_date is not None


class ReskillEvent(RecordBase):
    """One timestamped activity within a case."""

    event_id: int
    case_id: int | None = None
    activity: str | None = None
    timestamp: str | None = None
    actor: str | None = None
    skill_category: str | None = None
    score: float | None = None
    completion_status: str | None = None

    @field_validator("score", mode="before")
    @classmethod
    def _parse_score(cls, v: object) -> float | None:
        return parse_float(v)

    @property
    def is_assessment(self) -> bool:
        return "assess" in (self.activity or "").lower()


# ---------------------------------------------------------------------------
# Success / training results
# ---------------------------------------------------------------------------


class ProgramOutcome(InsightsBase):
    """Case counts for one training program."""

    program: str
    total: int = Field(..., ge=0)
    certified: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)


class ProgramSuccess(InsightsBase):
    program: str
    success_rate: int = Field(..., ge=0, le=100)
    band: str


class ProgramEffectiveness(InsightsBase):
    program: str
    case_count: int
    completion_rate: int = Field(..., ge=0, le=100)
    success_rate: int = Field(..., ge=0, le=100)
    average_score: float | None = None


class MonthlyRate(InsightsBase):
    """A rate (percent) for one period label, e.g. ``2024-03``."""

    month: str
    rate: int


class MethodEffectiveness(InsightsBase):
    method: str
    effectiveness: int


class SkillGain(InsightsBase):
    skill: str
    before: float
    after: float


class SkillDemand(InsightsBase):
    skill: str
    demand: int = Field(..., ge=0, le=100)
    roles: int = Field(..., ge=0)


class SuccessGroup(InsightsBase):
    group: str
    percentage: int = Field(..., ge=0, le=100)


class SuccessFactor(InsightsBase):
    """Proxy correlation between a case factor and certification."""

    factor: str
    correlation: float = Field(..., ge=-0.95, le=0.95)
    derived: bool = Field(
        ..., description="False when the value is the fallback default.",
    )


class CategoryShare(InsightsBase):
    category: str
    value: int


# ---------------------------------------------------------------------------
# Risk / priority results
# ---------------------------------------------------------------------------


class RiskBand(InsightsBase):
    level: str
    count: int


class RiskyOccupation(InsightsBase):
    occupation_id: str
    name: str
    risk: float = Field(..., description="Automation probability, 0-100.")


class RiskyRole(InsightsBase):
    occupation_code: str
    role: str
    risk: float = Field(..., description="Automation probability, 0-1.")
    employee_count: int
    priority: str


class DepartmentRisk(InsightsBase):
    department: str
    high_risk_count: int
    total_count: int
    risk_percentage: int


class RiskSummary(InsightsBase):
    high_risk_roles: int
    employees_in_high_risk_roles: int
    average_risk_score: int


class RolePriority(InsightsBase):
    """One occupation ranked for reskilling investment."""

    occupation_code: str
    role: str
    risk_score: int
    employee_count: int
    reskill_cost: int
    success_probability: int
    priority_score: int
    tier: str


# ---------------------------------------------------------------------------
# Budget results
# ---------------------------------------------------------------------------


class CategoryBudget(InsightsBase):
    category: str
    current: int
    reduced: int


class ImpactedProgram(InsightsBase):
    program: str
    priority: str
    impact: str
    employees: int


class BudgetImpact(InsightsBase):
    """Effect of cutting the training budget by ``cut`` (a fraction)."""

    cut: float = Field(..., ge=0.0, le=1.0)
    categories: list[CategoryBudget] = Field(default_factory=list)
    total_current: int = 0
    total_reduced: int = 0
    total_reduction: int = 0
    reduction_percentage: int = 0
    impacted_programs: list[ImpactedProgram] = Field(default_factory=list)
    affected_employees: int = 0
    projected_success: list[MonthlyRate] = Field(default_factory=list)
