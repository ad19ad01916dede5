"""Exception hierarchy for the service monitor."""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for all service monitor errors."""


class ConfigLoadError(MonitorError):
    """The service catalog or settings could not be loaded."""


class TransportError(MonitorError):
    """A service call failed before a usable response was received."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnresolvedURLError(TransportError):
    """A resolved service carries no URL to call."""


class UnknownServiceError(MonitorError, LookupError):
    """A requested service id is not part of the filtered catalog."""

    def __init__(self, service_id: str) -> None:
        super().__init__(f"Service with ID {service_id} not found")
        self.service_id = service_id
