"""Response validator combining the status precondition, fault check and strategies."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from service_monitor.config.models import MonitorSettings, ServiceType
from service_monitor.resolver.models import ResolvedService
from service_monitor.validation.faults import find_fault
from service_monitor.validation.models import ValidationVerdict
from service_monitor.validation.strategies import MatchStrategy, default_strategies

if TYPE_CHECKING:
    from service_monitor.transport.base import TransportResponse

logger = logging.getLogger(__name__)


class ResponseValidator:
    """Decides whether a response satisfies a service's declared expectation."""

    def __init__(self, strategies: Iterable[MatchStrategy] | None = None) -> None:
        self._strategies: tuple[MatchStrategy, ...] = (
            tuple(strategies) if strategies is not None else default_strategies()
        )

    @classmethod
    def from_settings(cls, settings: MonitorSettings) -> ResponseValidator:
        return cls(
            default_strategies(
                type_strict=settings.flexible_type_strict,
                allow_extra_fields=settings.flexible_allow_extra_fields,
            )
        )

    @property
    def strategies(self) -> tuple[MatchStrategy, ...]:
        return self._strategies

    def match_content(self, actual: Any, expected: Any) -> ValidationVerdict:
        """Try each strategy in order; the first match wins."""
        if expected is None:
            return ValidationVerdict.no_expectation()
        for strategy in self._strategies:
            try:
                matched = strategy.matches(actual, expected)
            except Exception as exc:
                logger.debug("Strategy %s raised %r, treating as no match", strategy.name, exc)
                continue
            if matched:
                return ValidationVerdict(passed=True, strategy=strategy.name, reason=f"{strategy.name} matches")  # type: ignore[arg-type]
        return ValidationVerdict.failed("Response structure does not match expected structure")

    def validate_rest(self, service: ResolvedService, response: TransportResponse) -> ValidationVerdict:
        if service.expected_status is not None and response.status_code != service.expected_status:
            logger.warning(
                "Service %s returned status %s, expected %s",
                service.name,
                response.status_code,
                service.expected_status,
            )
            return ValidationVerdict.failed(
                f"Status {response.status_code}, expected {service.expected_status}"
            )
        return self._match_logged(service, response.body)

    def validate_soap(self, service: ResolvedService, response: TransportResponse) -> ValidationVerdict:
        fault_key = find_fault(response.body)
        if fault_key is not None:
            logger.warning("Service %s response contains error indicator %r", service.name, fault_key)
            return ValidationVerdict.failed(f"Response contains error indicator '{fault_key}'")
        return self._match_logged(service, response.body)

    def validate(self, service: ResolvedService, response: TransportResponse) -> ValidationVerdict:
        if service.type == ServiceType.SOAP:
            return self.validate_soap(service, response)
        return self.validate_rest(service, response)

    def _match_logged(self, service: ResolvedService, body: Any) -> ValidationVerdict:
        verdict = self.match_content(body, service.expected_content)
        if not verdict.passed:
            logger.warning("Service %s: %s", service.name, verdict.reason)
        elif verdict.strategy != "none":
            logger.debug("Service %s: %s", service.name, verdict.reason)
        return verdict
