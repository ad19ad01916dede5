"""Read-only environment variable lookup injected into the resolver."""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping


class EnvironmentStore(Mapping[str, str]):
    """Immutable snapshot of environment variables.

    Empty values are treated as unset, so ``lookup`` only returns usable
    values. Resolution code receives a store instead of reading ``os.environ``.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    @classmethod
    def from_os(cls) -> EnvironmentStore:
        return cls(os.environ)

    def lookup(self, name: str | None) -> str | None:
        """Return the value of *name* if it is set to a non-empty string."""
        if not name:
            return None
        value = self._values.get(name)
        return value if value else None

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EnvironmentStore({len(self._values)} variables)"
