"""Check orchestrator: resolve the catalog, call each service in turn, validate."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import UTC, datetime

from service_monitor.checks.models import CheckBatch, CheckResult
from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.loader import load_catalog
from service_monitor.config.models import Environment, MonitorSettings, ServiceCatalog, ServiceType
from service_monitor.errors import TransportError, UnknownServiceError
from service_monitor.resolver.models import ResolvedService
from service_monitor.resolver.resolver import ConfigurationResolver
from service_monitor.transport import Transport, default_transports
from service_monitor.validation.validator import ResponseValidator

logger = logging.getLogger(__name__)


class CheckRunner:
    """Runs one batch of service checks, strictly one service at a time."""

    def __init__(
        self,
        settings: MonitorSettings,
        env: EnvironmentStore | None = None,
        transports: Mapping[ServiceType, Transport] | None = None,
        validator: ResponseValidator | None = None,
        catalog: ServiceCatalog | None = None,
    ) -> None:
        self._settings = settings
        self._env = env if env is not None else EnvironmentStore.from_os()
        self._resolver = ConfigurationResolver(self._env)
        self._transports = dict(transports) if transports is not None else default_transports(settings.timeout)
        self._validator = validator or ResponseValidator.from_settings(settings)
        self._catalog = catalog

    @property
    def settings(self) -> MonitorSettings:
        return self._settings

    def load_catalog(self) -> ServiceCatalog:
        if self._catalog is not None:
            return self._catalog
        return load_catalog(self._settings.catalog_path, env=self._env)

    def resolve_services(self, environment: Environment | None = None) -> list[ResolvedService]:
        """Load and resolve the catalog. Raises ConfigLoadError before any call is made."""
        environment = environment or self._settings.environment
        return self._resolver.resolve(self.load_catalog().services, environment)

    async def check_service(
        self,
        service: ResolvedService,
        disabled: Mapping[str, bool] | None = None,
    ) -> CheckResult:
        logger.info("Checking %s service: %s (%s)", service.type.value, service.name, service.id)
        if disabled and disabled.get(service.id):
            logger.info("Service %s is disabled for this run, call skipped", service.id)
            return CheckResult(
                id=service.id,
                name=service.name,
                type=service.type,
                url=service.url,
                status="failed",
                details="Service disabled, check skipped",
            )

        start = time.monotonic()
        try:
            transport = self._transports.get(service.type)
            if transport is None:
                raise TransportError(f"No transport configured for {service.type.value} services")
            response = await transport.invoke(service)
            verdict = self._validator.validate(service, response)
        except TransportError as exc:
            logger.error("Error checking %s service %s: %s", service.type.value, service.name, exc)
            return CheckResult(
                id=service.id,
                name=service.name,
                type=service.type,
                url=service.url,
                status="failed",
                details=f"Error: {exc}",
                status_code=exc.status_code,
            )
        except Exception as exc:
            logger.error("Error checking %s service %s: %s", service.type.value, service.name, exc)
            return CheckResult(
                id=service.id,
                name=service.name,
                type=service.type,
                url=service.url,
                status="failed",
                details=f"Error: {exc}",
            )

        elapsed = response.elapsed_ms or round((time.monotonic() - start) * 1000, 1)
        details = "Service is healthy" if verdict.passed else f"Service response validation failed: {verdict.reason}"
        logger.info(
            "%s service %s check completed: %s",
            service.type.value,
            service.name,
            "SUCCESS" if verdict.passed else "FAILED",
        )
        return CheckResult(
            id=service.id,
            name=service.name,
            type=service.type,
            url=service.url,
            status="success" if verdict.passed else "failed",
            details=details,
            response_time_ms=elapsed,
            status_code=response.status_code,
            raw_response=response.body,
            strategy=verdict.strategy,
        )

    async def run(
        self,
        service_id: str | None = None,
        environment: Environment | None = None,
        disabled: Mapping[str, bool] | None = None,
    ) -> CheckBatch:
        """Check every applicable service (or just *service_id*) in catalog order."""
        environment = environment or self._settings.environment
        logger.info("Checking services for environment: %s", environment.value)
        started_at = datetime.now(UTC)

        services = self.resolve_services(environment)
        if service_id is not None:
            services = [s for s in services if s.id == service_id]
            if not services:
                raise UnknownServiceError(service_id)

        batch = CheckBatch(environment=environment, timestamp=started_at)
        for service in services:
            batch.services.append(await self.check_service(service, disabled))

        summary = batch.summary
        logger.info(
            "Checked %d service(s) in %s: %d success, %d failed",
            summary.total,
            environment.value,
            summary.success,
            summary.failed,
        )
        return batch
