"""Service catalog configuration system."""

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.loader import find_catalog_file, load_catalog, load_settings, parse_catalog
from service_monitor.config.models import (
    Environment,
    MonitorSettings,
    ServiceCatalog,
    ServiceDescriptor,
    ServiceType,
)

__all__ = [
    "Environment",
    "EnvironmentStore",
    "MonitorSettings",
    "ServiceCatalog",
    "ServiceDescriptor",
    "ServiceType",
    "find_catalog_file",
    "load_catalog",
    "load_settings",
    "parse_catalog",
]
