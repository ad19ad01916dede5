"""URL resolution rules, evaluated in precedence order."""

from __future__ import annotations

import logging
from collections.abc import Callable

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.models import Environment, ServiceDescriptor

logger = logging.getLogger(__name__)

UrlRule = Callable[[ServiceDescriptor, Environment, EnvironmentStore], str | None]


def join_url(base: str | None, path: str | None) -> str:
    """Join *base* and *path* with exactly one slash between them."""
    base = base or ""
    path = path or ""
    if base and path:
        return f"{base.removesuffix('/')}/{path.removeprefix('/')}"
    return base or path


def environment_url_rule(descriptor: ServiceDescriptor, environment: Environment, env: EnvironmentStore) -> str | None:
    """``environmentUrls[E]``, either a variable name or a literal base URL."""
    candidate = descriptor.environment_urls.get(environment)
    if not candidate:
        return None
    base = env.lookup(candidate) or candidate
    if descriptor.path:
        return join_url(base, descriptor.path)
    return base


def url_env_var_rule(descriptor: ServiceDescriptor, environment: Environment, env: EnvironmentStore) -> str | None:
    """Complete URL held in the variable named by ``urlEnvVar``."""
    return env.lookup(descriptor.url_env_var)


def base_path_rule(descriptor: ServiceDescriptor, environment: Environment, env: EnvironmentStore) -> str | None:
    """``baseUrl`` (overridable by ``baseUrlEnvVar``) joined with ``path``."""
    if not descriptor.base_url and not descriptor.path:
        return None
    base = env.lookup(descriptor.base_url_env_var) or descriptor.base_url
    return join_url(base, descriptor.path) or None


def literal_url_rule(descriptor: ServiceDescriptor, environment: Environment, env: EnvironmentStore) -> str | None:
    """Literal ``url`` with no indirection."""
    return descriptor.url or None


URL_RULES: tuple[tuple[str, UrlRule], ...] = (
    ("environment_urls", environment_url_rule),
    ("url_env_var", url_env_var_rule),
    ("base_url_path", base_path_rule),
    ("url", literal_url_rule),
)


def resolve_url(descriptor: ServiceDescriptor, environment: Environment, env: EnvironmentStore) -> str | None:
    """Return the URL from the first matching rule, or None if none applies."""
    for rule_name, rule in URL_RULES:
        url = rule(descriptor, environment, env)
        if url is not None:
            logger.debug("Service %s: URL resolved by rule %s", descriptor.id, rule_name)
            return url
    logger.debug("Service %s: no URL could be resolved for %s", descriptor.id, environment.value)
    return None
