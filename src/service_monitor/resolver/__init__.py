"""Configuration resolver."""

from service_monitor.resolver.headers import resolve_headers
from service_monitor.resolver.models import ResolvedService
from service_monitor.resolver.resolver import ConfigurationResolver, is_applicable
from service_monitor.resolver.urls import URL_RULES, join_url, resolve_url

__all__ = [
    "URL_RULES",
    "ConfigurationResolver",
    "ResolvedService",
    "is_applicable",
    "join_url",
    "resolve_headers",
    "resolve_url",
]
