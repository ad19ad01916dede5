"""Transport protocol shared by the REST and SOAP clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from service_monitor.resolver.models import ResolvedService


@dataclass(frozen=True)
class TransportResponse:
    """Status and decoded body of one service call."""

    status_code: int | None
    body: Any = None
    elapsed_ms: float = 0.0


class Transport(Protocol):
    """Performs the network call for a resolved service."""

    async def invoke(self, service: ResolvedService) -> TransportResponse: ...
