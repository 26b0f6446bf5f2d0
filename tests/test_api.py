"""Tests for the internal API endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from dcarisk.api import routers
from dcarisk.api.routers import configure_routers
from dcarisk.calc.models import StrategyParameters
from dcarisk.errors import ComputeFault
from dcarisk.main import app
from dcarisk.repos.db import init_db
from dcarisk.repos.params_repo import ParamsRepo

client = TestClient(app)

_BODY = {
    "pipStep": 5,
    "firstVolume": 1,
    "volumeExponent": 1,
    "maxPositions": 3,
    "maxDrawdownPips": 20,
    "pipValue": 10,
}


@pytest.fixture(autouse=True)
def _reset_routers():
    configure_routers()
    yield
    configure_routers()


# ── Tests ────────────────────────────────────────────────────────────────


class TestCalculateEndpoints:
    def test_health(self):
        assert client.get("/health").json() == {"status": "ok"}

    def test_defaults(self):
        resp = client.get("/defaults")
        assert resp.status_code == 200
        assert resp.json()["params"]["maxPositions"] == 20

    def test_validate_ok(self):
        assert client.post("/validate", json=_BODY).json() == {"valid": True, "errors": []}

    def test_validate_errors(self):
        data = client.post("/validate", json={**_BODY, "pipStep": 0}).json()
        assert data["valid"] is False
        assert "DCA spacing" in data["errors"][0]

    def test_calculate(self):
        resp = client.post("/calculate", json=_BODY)
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["result"]["riskMetrics"]["maxPossibleLoss"] == pytest.approx(450.0)
        assert len(data["result"]["drawdownAnalysis"]) == 4
        assert len(data["advice"]) == 2
        assert data["suggestions"][0]["parameter"] == "pip_step"
        assert data["overallRisk"] == "low"

    def test_calculate_snake_case_body(self):
        body = {
            "pip_step": 5, "first_volume": 1, "volume_exponent": 1,
            "max_positions": 3, "max_drawdown_pips": 20, "pip_value": 10,
        }
        assert client.post("/calculate", json=body).json()["status"] == "ok"

    def test_calculate_invalid(self):
        data = client.post("/calculate", json={"pipStep": 5}).json()
        assert data["status"] == "error"
        assert len(data["errors"]) == 4

    def test_compute_fault_is_500(self, monkeypatch):
        def _boom(params):
            raise ComputeFault("calculation failed: boom")

        monkeypatch.setattr(routers, "run", _boom)
        resp = client.post("/calculate", json=_BODY)
        assert resp.status_code == 500
        assert "boom" in resp.json()["detail"]

    def test_overflowing_ladder_is_500(self):
        body = {**_BODY, "firstVolume": 1e280, "volumeExponent": 5, "maxPositions": 50}
        resp = client.post("/calculate", json=body)
        assert resp.status_code == 500
        assert "finite" in resp.json()["detail"]

    def test_debug(self):
        data = client.post("/debug", json=_BODY).json()
        assert data["type"] == "DCA_Debug_Analysis"
        assert len(data["debugInfo"]["calculationSteps"]) == 3


class TestParamsEndpoints:
    def test_params_without_repo(self):
        assert client.get("/params").json() == {"params": None}
        assert client.post("/params", json=_BODY).json()["status"] == "error"

    def test_save_and_load(self, tmp_path):
        db_path = str(tmp_path / "api.db")
        init_db(db_path)
        configure_routers(params_repo=ParamsRepo(db_path))
        assert client.get("/params").json() == {"params": None}
        assert client.post("/params", json=_BODY).json()["status"] == "ok"
        assert client.get("/params").json()["params"] == _BODY

    def test_repo_duck_type(self):
        repo = MagicMock()
        repo.load.return_value = StrategyParameters(1, 1, 1, 1, 10, 1)
        configure_routers(params_repo=repo)
        assert client.get("/params").json()["params"]["maxDrawdownPips"] == 10


class TestExportEndpoint:
    def test_export_in_response_only(self):
        data = client.post("/export", json=_BODY).json()
        assert data["status"] == "ok"
        assert data["path"] is None
        assert data["document"]["type"] == "cTrader_DCA_cBot_Analysis"

    def test_export_writes_file(self, tmp_path):
        configure_routers(export_dir=str(tmp_path))
        data = client.post("/export", json=_BODY).json()
        assert data["path"].startswith(str(tmp_path))
        assert data["path"].endswith(".json")

    def test_export_invalid(self):
        data = client.post("/export", json={**_BODY, "maxPositions": 99}).json()
        assert data["status"] == "error"
