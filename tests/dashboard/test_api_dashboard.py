"""Tests for the dashboard API endpoints.

The client fixture routes requests through the SAVEPOINT-isolated session;
requesting seeded_session as well loads the demo dataset into it.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from src.api.dependencies import get_dashboard_loader
from src.api.main import app
from src.dashboard.loader import DashboardDataLoader

ENDPOINTS = [
    "/v1/dashboard/overview",
    "/v1/dashboard/automation-risk",
    "/v1/dashboard/training-effectiveness",
    "/v1/dashboard/reskill-success",
    "/v1/dashboard/budget-cut",
    "/v1/dashboard/reskill-priority",
]


class _DownSession:
    async def execute(self, query):
        raise OperationalError("SELECT ...", {}, Exception("connection refused"))

    async def rollback(self) -> None:
        pass


@pytest.fixture
def database_down():
    """Override the loader with one whose every fetch fails."""
    app.dependency_overrides[get_dashboard_loader] = lambda: DashboardDataLoader(_DownSession())
    yield
    app.dependency_overrides.pop(get_dashboard_loader, None)


# ===================================================================
# Empty database
# ===================================================================


class TestEmptyDatabase:
    @pytest.mark.parametrize("path", ENDPOINTS)
    async def test_returns_200(self, client: AsyncClient, path: str) -> None:
        response = await client.get(path)
        assert response.status_code == 200
        assert response.json()["notifications"] == []

    async def test_overview_zeros(self, client: AsyncClient) -> None:
        data = (await client.get("/v1/dashboard/overview")).json()
        assert data["high_risk_roles"] == 0
        assert data["reskill_success_rate"] == 0


# ===================================================================
# Demo dataset
# ===================================================================


class TestWithDemoData:
    async def test_overview(self, client: AsyncClient, seeded_session) -> None:
        data = (await client.get("/v1/dashboard/overview")).json()
        assert data["high_risk_roles"] == 6
        assert data["training_completion_rate"] == 75

    async def test_reskill_priority(self, client: AsyncClient, seeded_session) -> None:
        data = (await client.get("/v1/dashboard/reskill-priority")).json()
        assert len(data["roles"]) == 6
        scores = [r["priority_score"] for r in data["roles"]]
        assert scores == sorted(scores, reverse=True)
        assert {s["category"] for s in data["investment_distribution"]} == {
            "High Priority Roles", "Medium Priority Roles", "Low Priority Roles",
        }

    async def test_reskill_success_factors(self, client: AsyncClient, seeded_session) -> None:
        data = (await client.get("/v1/dashboard/reskill-success")).json()
        assert len(data["success_factors"]) == 5
        for factor in data["success_factors"]:
            assert -0.95 <= factor["correlation"] <= 0.95


# ===================================================================
# Budget cut parameter
# ===================================================================


class TestBudgetCut:
    async def test_default_cut(self, client: AsyncClient) -> None:
        data = (await client.get("/v1/dashboard/budget-cut")).json()
        assert data["cut"] == 0.3

    async def test_custom_cut(self, client: AsyncClient, seeded_session) -> None:
        data = (await client.get("/v1/dashboard/budget-cut", params={"cut": 0.5})).json()
        assert data["cut"] == 0.5
        assert data["reduction_percentage"] == 50

    @pytest.mark.parametrize("cut", ["1.5", "-0.1", "lots"])
    async def test_invalid_cut_rejected(self, client: AsyncClient, cut: str) -> None:
        response = await client.get("/v1/dashboard/budget-cut", params={"cut": cut})
        assert response.status_code == 422


# ===================================================================
# Fetch failures
# ===================================================================


class TestFetchFailures:
    @pytest.mark.parametrize("path", ENDPOINTS)
    async def test_view_still_returned(self, client: AsyncClient, database_down, path: str) -> None:
        response = await client.get(path)
        assert response.status_code == 200
        notes = response.json()["notifications"]
        assert notes
        assert all("connection refused" in n["message"] for n in notes)

    async def test_one_notification_per_table(self, client: AsyncClient, database_down) -> None:
        data = (await client.get("/v1/dashboard/reskill-priority")).json()
        assert [n["source"] for n in data["notifications"]] == [
            "job_risk", "employee_profile", "workforce_reskilling_cases", "workforce_reskilling_events",
        ]
        assert data["roles"] == []
