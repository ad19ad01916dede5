"""Structural matching strategies for response validation.

Each strategy is a pure function over two JSON value trees (the actual
response and the declared expectation), wrapped in a small class exposing
the shared :class:`MatchStrategy` interface. Leaf values are generally
ignored; what matters is the shape of the data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

WILDCARD = "*"
ANY_TYPE = "any"


def json_kind(value: Any) -> str:
    """Return the JSON kind of *value*: null, boolean, number, string, array or object."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


# ─── Structure ───


def compare_structure(actual: Any, expected: Any) -> bool:
    """Compare shapes recursively, ignoring leaf values.

    Primitives match when they share a JSON kind. Arrays must have the same
    length and match pairwise; objects must have the same key set.
    """
    if actual is None or expected is None:
        return actual is None and expected is None
    kind = json_kind(actual)
    if kind != json_kind(expected):
        return False
    if kind == "array":
        if len(actual) != len(expected):
            return False
        return all(compare_structure(a, e) for a, e in zip(actual, expected))
    if kind == "object":
        if set(actual) != set(expected):
            return False
        return all(compare_structure(actual[key], expected[key]) for key in actual)
    return True


# ─── Schema ───


def generate_schema(expected: Any) -> dict[str, Any]:
    """Derive a minimal JSON-schema-like description from an example value."""
    if expected is None:
        return {"type": "null"}
    if isinstance(expected, (list, tuple)):
        return {
            "type": "array",
            "items": generate_schema(expected[0]) if expected else {"type": ANY_TYPE},
        }
    if isinstance(expected, dict):
        return {
            "type": "object",
            "properties": {key: generate_schema(value) for key, value in expected.items()},
            "required": list(expected.keys()),
        }
    return {"type": json_kind(expected)}


def validate_schema(actual: Any, schema: dict[str, Any]) -> bool:
    """Check *actual* against a schema from :func:`generate_schema`.

    Objects must carry every required key and no extra keys. Every array
    element is checked against the single item schema.
    """
    schema_type = schema.get("type")
    if schema_type == ANY_TYPE:
        return True
    if schema_type == "null":
        return actual is None
    if schema_type == "array":
        if not isinstance(actual, (list, tuple)):
            return False
        return all(validate_schema(item, schema["items"]) for item in actual)
    if schema_type == "object":
        if not isinstance(actual, dict):
            return False
        properties: dict[str, Any] = schema.get("properties", {})
        if not all(key in actual for key in schema.get("required", [])):
            return False
        if len(actual) != len(properties):
            return False
        return all(key in properties and validate_schema(value, properties[key]) for key, value in actual.items())
    return json_kind(actual) == schema_type


# ─── Pattern ───


def create_pattern(expected: Any) -> Any:
    """Replace every leaf and array element of *expected* by the wildcard."""
    if expected is None:
        return None
    if isinstance(expected, (list, tuple)):
        return [WILDCARD for _ in expected]
    if isinstance(expected, dict):
        return {key: create_pattern(value) for key, value in expected.items()}
    return WILDCARD


def matches_pattern(actual: Any, pattern: Any) -> bool:
    if isinstance(pattern, str) and pattern == WILDCARD:
        return True
    if pattern is None:
        return actual is None
    if isinstance(pattern, list):
        if not isinstance(actual, (list, tuple)) or len(actual) != len(pattern):
            return False
        return all(matches_pattern(a, p) for a, p in zip(actual, pattern))
    if isinstance(pattern, dict):
        if not isinstance(actual, dict) or set(actual) != set(pattern):
            return False
        return all(matches_pattern(actual[key], sub) for key, sub in pattern.items())
    return actual == pattern


# ─── Flexible ───


def compare_flexible(
    actual: Any,
    expected: Any,
    type_strict: bool = False,
    allow_extra_fields: bool = False,
) -> bool:
    """Positional comparison with optional type checks and extra-field tolerance."""
    if expected is None:
        return actual is None
    if actual is None:
        return False
    if isinstance(expected, (list, tuple)):
        if not isinstance(actual, (list, tuple)) or len(actual) != len(expected):
            return False
        return all(
            compare_flexible(a, e, type_strict=type_strict, allow_extra_fields=allow_extra_fields)
            for a, e in zip(actual, expected)
        )
    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            return False
        if not allow_extra_fields and len(actual) != len(expected):
            return False
        return all(
            key in actual
            and compare_flexible(actual[key], value, type_strict=type_strict, allow_extra_fields=allow_extra_fields)
            for key, value in expected.items()
        )
    if type_strict:
        return json_kind(actual) == json_kind(expected)
    return True


# ─── Strategy interface ───


class MatchStrategy(Protocol):
    """Shared interface of the four matching strategies."""

    name: str

    def matches(self, actual: Any, expected: Any) -> bool: ...


class StructureStrategy:
    name: ClassVar[str] = "structure"

    def matches(self, actual: Any, expected: Any) -> bool:
        return compare_structure(actual, expected)


class SchemaStrategy:
    name: ClassVar[str] = "schema"

    def matches(self, actual: Any, expected: Any) -> bool:
        return validate_schema(actual, generate_schema(expected))


class PatternStrategy:
    name: ClassVar[str] = "pattern"

    def matches(self, actual: Any, expected: Any) -> bool:
        return matches_pattern(actual, create_pattern(expected))


@dataclass(frozen=True)
class FlexibleStrategy:
    name: ClassVar[str] = "flexible"

    type_strict: bool = False
    allow_extra_fields: bool = False

    def matches(self, actual: Any, expected: Any) -> bool:
        return compare_flexible(
            actual,
            expected,
            type_strict=self.type_strict,
            allow_extra_fields=self.allow_extra_fields,
        )


def default_strategies(type_strict: bool = False, allow_extra_fields: bool = False) -> tuple[MatchStrategy, ...]:
    """The four strategies in evaluation order."""
    return (
        StructureStrategy(),
        SchemaStrategy(),
        PatternStrategy(),
        FlexibleStrategy(type_strict=type_strict, allow_extra_fields=allow_extra_fields),
    )
