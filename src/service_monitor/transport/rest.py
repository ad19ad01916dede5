"""REST transport over httpx."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from service_monitor.errors import TransportError, UnresolvedURLError
from service_monitor.resolver.models import ResolvedService
from service_monitor.transport.base import TransportResponse

logger = logging.getLogger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def decode_body(resp: httpx.Response) -> Any:
    """Decode a JSON body, falling back to text."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


class RestTransport:
    """Calls REST services. Any status code is returned, never raised."""

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    async def invoke(self, service: ResolvedService) -> TransportResponse:
        if not service.url:
            raise UnresolvedURLError(f"URL is required for REST service {service.name} ({service.id})")

        method = (service.method or "GET").upper()
        timeout = service.timeout or self._timeout
        kwargs: dict[str, Any] = {}
        if service.body is not None and method in BODY_METHODS:
            kwargs["json"] = service.body

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.request(method, service.url, headers=service.headers, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timeout after {timeout}s calling {service.url}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        latency = (time.monotonic() - start) * 1000
        logger.debug("%s %s -> %d in %.1fms", method, service.url, resp.status_code, latency)
        return TransportResponse(
            status_code=resp.status_code,
            body=decode_body(resp),
            elapsed_ms=round(latency, 1),
        )
