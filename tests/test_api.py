"""Tests for FastAPI endpoints."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from service_monitor.api.routes.checks import parse_disabled
from service_monitor.checks.runner import CheckRunner
from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.models import MonitorSettings, ServiceCatalog, ServiceType
from service_monitor.transport.base import TransportResponse


@pytest.fixture()
def fake(make_transport):
    return make_transport(
        {
            "orders-api": TransportResponse(status_code=200, body={"status": "up", "checks": [{"name": "db"}]}),
            "country-soap": TransportResponse(status_code=200, body={"CountryNameResult": "United States"}),
            "billing-api": TransportResponse(status_code=200, body=None),
        }
    )


@pytest.fixture()
def app(settings: MonitorSettings, env_store: EnvironmentStore, sample_catalog: ServiceCatalog, fake):
    """Create a test app whose runners use the sample catalog and a fake transport."""

    def build_runner(runner_settings: MonitorSettings, env: EnvironmentStore | None = None) -> CheckRunner:
        return CheckRunner(
            runner_settings,
            env=env,
            transports={ServiceType.REST: fake, ServiceType.SOAP: fake},
            catalog=None if runner_settings.catalog_path else sample_catalog,
        )

    with patch("service_monitor.api.routes.checks.CheckRunner", side_effect=build_runner):
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware

        from service_monitor.api.routes import checks, meta

        test_app = FastAPI(title="Service Monitor Test")
        test_app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

        @test_app.get("/health")
        async def healthcheck():
            return {"status": "ok"}

        test_app.include_router(meta.router, prefix="/api")
        test_app.include_router(checks.router)

        test_app.state.settings = settings
        test_app.state.env = env_store

        yield test_app


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


# ─── Meta endpoints ───


class TestMetaEndpoints:
    def test_health(self, client: TestClient):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_api_health(self, client: TestClient):
        resp = client.get("/api/health")
        assert resp.json() == {"status": "ok", "message": "Service monitor is running"}

    def test_environments(self, client: TestClient):
        data = client.get("/api/environments").json()
        assert data == {"environments": ["DEV", "QA", "SIT", "UAT", "PROD"], "current": "SIT"}

    def test_services_hide_header_values(self, client: TestClient):
        resp = client.get("/api/services")
        assert resp.status_code == 200
        data = resp.json()
        assert [s["id"] for s in data] == ["orders-api", "country-soap"]
        assert data[0]["url"] == "https://orders.example.com/v1/health"
        assert data[0]["headers"] == ["Accept", "X-API-Key"]
        assert "orders-secret" not in resp.text

    def test_services_for_environment(self, client: TestClient):
        data = client.get("/api/services", params={"environment": "prod"}).json()
        assert [s["id"] for s in data] == ["orders-api", "billing-api"]
        assert all(s["environment"] == "PROD" for s in data)

    def test_services_unknown_environment(self, client: TestClient):
        resp = client.get("/api/services", params={"environment": "staging"})
        assert resp.status_code == 400
        assert "Unknown environment" in resp.json()["detail"]


# ─── Check endpoints ───


class TestCheckAll:
    def test_check_all(self, client: TestClient, fake):
        resp = client.get("/check-all")
        assert resp.status_code == 200
        data = resp.json()
        assert data["environment"] == "SIT"
        assert data["summary"] == {"total": 2, "success": 2, "failed": 0}
        assert [s["id"] for s in data["services"]] == ["orders-api", "country-soap"]
        assert data["services"][1]["response"] == {"CountryNameResult": "United States"}
        assert len(fake.calls) == 2

    def test_env_alias(self, client: TestClient):
        data = client.get("/check-all", params={"env": "PROD"}).json()
        assert data["environment"] == "PROD"
        assert [s["id"] for s in data["services"]] == ["orders-api", "billing-api"]

    def test_disabled_services(self, client: TestClient, fake):
        params = {"disabledServices": json.dumps({"orders-api": True})}
        data = client.get("/check-all", params=params).json()
        assert data["services"][0]["status"] == "failed"
        assert data["services"][0]["details"] == "Service disabled, check skipped"
        assert data["summary"]["failed"] == 1
        assert [s.id for s in fake.calls] == ["country-soap"]

    def test_malformed_disabled_services_ignored(self, client: TestClient, fake):
        resp = client.get("/check-all", params={"disabledServices": "{not json"})
        assert resp.status_code == 200
        assert resp.json()["summary"]["success"] == 2
        assert len(fake.calls) == 2

    def test_unknown_environment(self, client: TestClient, fake):
        resp = client.get("/check-all", params={"environment": "staging"})
        assert resp.status_code == 400
        assert fake.calls == []

    def test_catalog_load_failure(self, app, client: TestClient, settings: MonitorSettings):
        app.state.settings = settings.model_copy(update={"catalog_path": "/nonexistent/services.yaml"})
        resp = client.get("/check-all")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to check services"


class TestCheckOne:
    def test_check_one(self, client: TestClient, fake):
        resp = client.get("/check/country-soap")
        assert resp.status_code == 200
        data = resp.json()
        assert [s["id"] for s in data["services"]] == ["country-soap"]
        assert data["summary"]["total"] == 1
        assert [s.id for s in fake.calls] == ["country-soap"]

    def test_failed_check_still_200(self, client: TestClient, fake):
        fake.responses["orders-api"] = TransportResponse(status_code=503, body={"status": "down"})
        resp = client.get("/check/orders-api")
        assert resp.status_code == 200
        assert resp.json()["services"][0]["status"] == "failed"

    def test_unknown_service(self, client: TestClient):
        resp = client.get("/check/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Service with ID nope not found"

    def test_catalog_load_failure(self, app, client: TestClient, settings: MonitorSettings):
        app.state.settings = settings.model_copy(update={"catalog_path": "/nonexistent/services.yaml"})
        resp = client.get("/check/orders-api")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to check service"


class TestParseDisabled:
    def test_valid(self):
        assert parse_disabled('{"a": true, "b": 0}') == {"a": True, "b": False}

    def test_empty(self):
        assert parse_disabled(None) == {}
        assert parse_disabled("") == {}

    def test_not_an_object(self):
        assert parse_disabled("[1, 2]") == {}

    def test_malformed(self):
        assert parse_disabled("{oops") == {}
