"""Shared fixtures for service monitor tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.loader import parse_catalog
from service_monitor.config.models import Environment, MonitorSettings, ServiceCatalog
from service_monitor.errors import TransportError
from service_monitor.resolver.models import ResolvedService
from service_monitor.transport.base import TransportResponse

SAMPLE_CATALOG: list[dict[str, Any]] = [
    {
        "id": "orders-api",
        "name": "Orders API",
        "type": "REST",
        "baseUrl": "https://orders.example.com/",
        "path": "/v1/health",
        "method": "GET",
        "headers": {"Accept": "application/json"},
        "headerEnvVars": {"X-API-Key": "ORDERS_API_KEY"},
        "expectedStatus": 200,
        "expectedContent": {"status": "ok", "checks": [{"name": "db"}]},
    },
    {
        "id": "billing-api",
        "name": "Billing API",
        "type": "REST",
        "environmentUrls": {"UAT": "BILLING_URL_UAT", "PROD": "https://billing.example.com/api"},
        "path": "status",
        "expectedStatus": 200,
        "environment": "PROD",
    },
    {
        "id": "legacy-api",
        "name": "Legacy API",
        "type": "REST",
        "url": "https://legacy.example.com/ping",
        "enabled": False,
    },
    {
        "id": "country-soap",
        "name": "Country SOAP",
        "type": "SOAP",
        "url": "http://soap.example.com/CountryInfoService.wso?WSDL",
        "method": "CountryName",
        "args": {"sCountryISOCode": "US"},
        "options": {"namespace": "http://www.oorsprong.org/websamples.countryinfo"},
        "expectedContent": {"CountryNameResult": "United States"},
        "environment": "SIT",
    },
]


class FakeTransport:
    """Transport returning canned responses (or raising) per service id."""

    def __init__(self, responses: dict[str, TransportResponse | Exception] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[ResolvedService] = []

    async def invoke(self, service: ResolvedService) -> TransportResponse:
        self.calls.append(service)
        outcome = self.responses.get(service.id)
        if outcome is None:
            raise TransportError(f"no canned response for {service.id}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture()
def sample_catalog() -> ServiceCatalog:
    return parse_catalog(SAMPLE_CATALOG)


@pytest.fixture()
def sample_catalog_data() -> list[dict[str, Any]]:
    return [dict(entry) for entry in SAMPLE_CATALOG]


@pytest.fixture()
def env_store() -> EnvironmentStore:
    return EnvironmentStore({"ORDERS_API_KEY": "orders-secret"})


@pytest.fixture()
def settings() -> MonitorSettings:
    return MonitorSettings(environment=Environment.SIT)


@pytest.fixture()
def catalog_file(tmp_path: Path) -> Path:
    """Write the sample catalog to a temp services.yaml and return the path."""
    path = tmp_path / "services.yaml"
    with path.open("w") as fh:
        yaml.dump(SAMPLE_CATALOG, fh)
    return path


@pytest.fixture()
def make_transport() -> type[FakeTransport]:
    return FakeTransport
