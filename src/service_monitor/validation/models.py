"""Validation verdict model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StrategyName = Literal["structure", "schema", "pattern", "flexible", "none"]


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of validating one response."""

    passed: bool
    strategy: StrategyName = "none"
    reason: str = ""

    @classmethod
    def no_expectation(cls) -> ValidationVerdict:
        return cls(passed=True, strategy="none", reason="No expected content declared")

    @classmethod
    def failed(cls, reason: str) -> ValidationVerdict:
        return cls(passed=False, strategy="none", reason=reason)
