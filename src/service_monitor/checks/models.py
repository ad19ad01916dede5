"""Data models for check results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

from service_monitor.config.models import Environment, ServiceType

CheckStatus = Literal["success", "failed"]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking a single service."""

    id: str
    name: str
    type: ServiceType
    url: str | None
    status: CheckStatus
    details: str
    response_time_ms: float | None = None
    status_code: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    raw_response: Any = None
    strategy: str | None = None

    @property
    def success(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "url": self.url,
            "status": self.status,
            "response_time_ms": self.response_time_ms,
            "status_code": self.status_code,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
            "strategy": self.strategy,
            "response": self.raw_response,
        }


@dataclass(frozen=True)
class CheckSummary:
    total: int
    success: int
    failed: int


@dataclass
class CheckBatch:
    """Results of one check run for an environment."""

    environment: Environment
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    services: list[CheckResult] = field(default_factory=list)

    @property
    def summary(self) -> CheckSummary:
        success = sum(1 for s in self.services if s.success)
        return CheckSummary(total=len(self.services), success=success, failed=len(self.services) - success)

    @property
    def success(self) -> bool:
        return all(s.success for s in self.services)

    def to_dict(self) -> dict[str, Any]:
        summary = self.summary
        return {
            "timestamp": self.timestamp.isoformat(),
            "environment": self.environment.value,
            "services": [s.to_dict() for s in self.services],
            "summary": {
                "total": summary.total,
                "success": summary.success,
                "failed": summary.failed,
            },
        }
