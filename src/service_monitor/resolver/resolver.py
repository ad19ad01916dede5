"""Configuration resolver: descriptors + environment -> callable services."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.models import Environment, ServiceDescriptor
from service_monitor.resolver.headers import resolve_headers
from service_monitor.resolver.models import ResolvedService
from service_monitor.resolver.urls import resolve_url

logger = logging.getLogger(__name__)


def is_applicable(descriptor: ServiceDescriptor, environment: Environment) -> bool:
    """Whether *descriptor* should be checked in *environment*."""
    targets_environment = (
        environment in descriptor.environment_urls
        or descriptor.environment is None
        or descriptor.environment == environment
    )
    return targets_environment and descriptor.enabled


class ConfigurationResolver:
    """Resolves descriptors against an injected environment snapshot."""

    def __init__(self, env: EnvironmentStore) -> None:
        self._env = env

    def resolve_one(self, descriptor: ServiceDescriptor, environment: Environment) -> ResolvedService:
        url = resolve_url(descriptor, environment, self._env)
        headers = resolve_headers(descriptor, environment, self._env)
        return ResolvedService.from_descriptor(descriptor, environment, url=url, headers=headers)

    def resolve(self, descriptors: Iterable[ServiceDescriptor], environment: Environment) -> list[ResolvedService]:
        """Filter *descriptors* for *environment* and resolve the rest, keeping catalog order."""
        resolved: list[ResolvedService] = []
        for descriptor in descriptors:
            if not is_applicable(descriptor, environment):
                logger.debug("Skipping service %s for environment %s", descriptor.id, environment.value)
                continue
            resolved.append(self.resolve_one(descriptor, environment))
        logger.info("Resolved %d service(s) for environment %s", len(resolved), environment.value)
        return resolved
