"""Header resolution from environment variables."""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.models import Environment, ServiceDescriptor


def environment_variable_name(var_name: str, environment: Environment) -> str:
    """``API_KEY`` -> ``API_KEY_UAT`` for environment UAT."""
    return f"{var_name}_{environment.value}"


def candidate_variables(var_names: str | Sequence[str], environment: Environment) -> list[str]:
    """Variables to probe, in order: every environment-specific form, then every plain form."""
    names = [var_names] if isinstance(var_names, str) else list(var_names)
    return [environment_variable_name(name, environment) for name in names] + names


def resolve_header_value(
    var_names: str | Sequence[str],
    environment: Environment,
    env: EnvironmentStore,
) -> str | None:
    for name in candidate_variables(var_names, environment):
        value = env.lookup(name)
        if value is not None:
            return value
    return None


def resolve_header_name(header_key: str, env: EnvironmentStore) -> str:
    """A header key naming a set variable is replaced by that variable's value."""
    return env.lookup(header_key) or header_key


def resolve_headers(
    descriptor: ServiceDescriptor,
    environment: Environment,
    env: EnvironmentStore,
) -> dict[str, str]:
    """Fold ``headerEnvVars`` over the literal ``headers`` into a new mapping.

    Unresolvable headers are left out; a literal default under the same
    name survives in that case.
    """

    def _apply(headers: dict[str, str], item: tuple[str, str | list[str]]) -> dict[str, str]:
        header_key, var_names = item
        value = resolve_header_value(var_names, environment, env)
        if value is None:
            return headers
        return {**headers, resolve_header_name(header_key, env): value}

    return reduce(_apply, descriptor.header_env_vars.items(), dict(descriptor.headers))
