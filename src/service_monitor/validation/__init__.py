"""Response validation."""

from service_monitor.validation.faults import find_fault
from service_monitor.validation.models import ValidationVerdict
from service_monitor.validation.strategies import (
    FlexibleStrategy,
    MatchStrategy,
    PatternStrategy,
    SchemaStrategy,
    StructureStrategy,
    default_strategies,
)
from service_monitor.validation.validator import ResponseValidator

__all__ = [
    "FlexibleStrategy",
    "MatchStrategy",
    "PatternStrategy",
    "ResponseValidator",
    "SchemaStrategy",
    "StructureStrategy",
    "ValidationVerdict",
    "default_strategies",
    "find_fault",
]
