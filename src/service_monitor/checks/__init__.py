"""Service check orchestration."""

from service_monitor.checks.models import CheckBatch, CheckResult, CheckSummary
from service_monitor.checks.runner import CheckRunner

__all__ = ["CheckBatch", "CheckResult", "CheckRunner", "CheckSummary"]
