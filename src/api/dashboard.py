"""FastAPI dashboard endpoints.

GET /v1/dashboard/overview: headline stats and trends
GET /v1/dashboard/automation-risk: risk ranking and distribution
GET /v1/dashboard/training-effectiveness: program and method effectiveness
GET /v1/dashboard/reskill-success: success factors and outcomes
GET /v1/dashboard/budget-cut?cut=0.3: impact of a budget reduction
GET /v1/dashboard/reskill-priority: roles ranked for reskilling

Read-only. Fetch failures come back as notifications on the view, not as
HTTP errors.
"""

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_dashboard_loader
from src.dashboard.loader import DashboardDataLoader
from src.dashboard.views import VIEW_TABLES, DashboardService
from src.engine.budget import DEFAULT_CUT
from src.models.dashboard import (
    AutomationRiskView,
    BudgetCutView,
    OverviewView,
    ReskillPriorityView,
    ReskillSuccessView,
    TrainingEffectivenessView,
)

router = APIRouter(prefix="/v1/dashboard", tags=["dashboard"])

# ---------------------------------------------------------------------------
# Stateless services
# ---------------------------------------------------------------------------

_dashboard_svc = DashboardService()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/overview", response_model=OverviewView)
async def get_overview(
    loader: DashboardDataLoader = Depends(get_dashboard_loader),
) -> OverviewView:
    data = await loader.load(VIEW_TABLES["overview"])
    return _dashboard_svc.overview(data)


@router.get("/automation-risk", response_model=AutomationRiskView)
async def get_automation_risk(
    loader: DashboardDataLoader = Depends(get_dashboard_loader),
) -> AutomationRiskView:
    data = await loader.load(VIEW_TABLES["automation_risk"])
    return _dashboard_svc.automation_risk(data)


@router.get("/training-effectiveness", response_model=TrainingEffectivenessView)
async def get_training_effectiveness(
    loader: DashboardDataLoader = Depends(get_dashboard_loader),
) -> TrainingEffectivenessView:
    data = await loader.load(VIEW_TABLES["training_effectiveness"])
    return _dashboard_svc.training_effectiveness(data)


@router.get("/reskill-success", response_model=ReskillSuccessView)
async def get_reskill_success(
    loader: DashboardDataLoader = Depends(get_dashboard_loader),
) -> ReskillSuccessView:
    data = await loader.load(VIEW_TABLES["reskill_success"])
    return _dashboard_svc.reskill_success(data)


@router.get("/budget-cut", response_model=BudgetCutView)
async def get_budget_cut(
    cut: float = Query(default=DEFAULT_CUT, ge=0.0, le=1.0),
    loader: DashboardDataLoader = Depends(get_dashboard_loader),
) -> BudgetCutView:
    """Budget impact of reducing spend by ``cut`` (a fraction, default 0.3)."""
    data = await loader.load(VIEW_TABLES["budget_cut"])
    return _dashboard_svc.budget_cut(data, cut)


@router.get("/reskill-priority", response_model=ReskillPriorityView)
async def get_reskill_priority(
    loader: DashboardDataLoader = Depends(get_dashboard_loader),
) -> ReskillPriorityView:
    data = await loader.load(VIEW_TABLES["reskill_priority"])
    return _dashboard_svc.reskill_priority(data)
