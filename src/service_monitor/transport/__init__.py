"""Service transports."""

from __future__ import annotations

from service_monitor.config.models import ServiceType
from service_monitor.transport.base import Transport, TransportResponse
from service_monitor.transport.rest import RestTransport
from service_monitor.transport.soap import SoapTransport


def default_transports(timeout: float = 30.0) -> dict[ServiceType, Transport]:
    return {
        ServiceType.REST: RestTransport(timeout=timeout),
        ServiceType.SOAP: SoapTransport(timeout=timeout),
    }


__all__ = [
    "RestTransport",
    "SoapTransport",
    "Transport",
    "TransportResponse",
    "default_transports",
]
