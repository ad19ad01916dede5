"""Catalog and settings loaders with environment variable interpolation."""

from __future__ import annotations

import json
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.examples import example_catalog
from service_monitor.config.models import MonitorSettings, ServiceCatalog
from service_monitor.errors import ConfigLoadError

logger = logging.getLogger(__name__)

CATALOG_FILENAMES = ("services.yaml", "services.yml", "services.json")

SETTINGS_ENV_VARS: dict[str, str] = {
    "environment": "ENVIRONMENT",
    "catalog_path": "CONFIG_PATH",
    "timeout": "MONITOR_TIMEOUT",
    "flexible_type_strict": "MONITOR_FLEXIBLE_TYPE_STRICT",
    "flexible_allow_extra_fields": "MONITOR_FLEXIBLE_ALLOW_EXTRA_FIELDS",
}

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _interpolate_env(value: str, env: EnvironmentStore) -> str:
    """Replace ${VAR} and ${VAR:-default} patterns with values from *env*."""

    def _replace(match: re.Match[str]) -> str:
        expr = match.group(1)
        if ":-" in expr:
            var_name, default = expr.split(":-", 1)
            return env.lookup(var_name.strip()) or default
        return env.lookup(expr.strip()) or match.group(0)

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate_recursive(data: Any, env: EnvironmentStore) -> Any:
    """Walk a nested data structure and interpolate env vars in strings."""
    if isinstance(data, str):
        return _interpolate_env(data, env)
    if isinstance(data, dict):
        return {k: _interpolate_recursive(v, env) for k, v in data.items()}
    if isinstance(data, list):
        return [_interpolate_recursive(item, env) for item in data]
    return data


def find_catalog_file(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default cwd) looking for a services catalog."""
    current = (start or Path.cwd()).resolve()
    for ancestor in [current, *current.parents]:
        for filename in CATALOG_FILENAMES:
            candidate = ancestor / filename
            if candidate.is_file():
                return candidate
    return None


def parse_catalog(data: Any, source: str = "<memory>") -> ServiceCatalog:
    """Validate raw catalog data: a list of descriptors or ``{services: [...]}``."""
    if data is None:
        data = []
    if isinstance(data, list):
        data = {"services": data}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Invalid catalog in {source}: expected a list or a mapping with 'services'")
    try:
        catalog = ServiceCatalog(**data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid catalog in {source}: {exc}") from exc

    duplicates = sorted(k for k, n in Counter(catalog.ids).items() if n > 1)
    if duplicates:
        raise ConfigLoadError(f"Invalid catalog in {source}: duplicate service ids {', '.join(duplicates)}")
    return catalog


def load_catalog(path: Path | str | None = None, env: EnvironmentStore | None = None) -> ServiceCatalog:
    """Load the service catalog.

    ``.json`` files are parsed as JSON, anything else as YAML. An explicit
    *path* must exist. Without one, a catalog file is searched
    for upwards from the cwd, and the built-in example catalog is used when
    none is found.
    """
    env = env if env is not None else EnvironmentStore.from_os()
    if path is not None:
        catalog_path: Path | None = Path(path)
        if not catalog_path.is_file():
            raise ConfigLoadError(f"Failed to load service configuration: {catalog_path} does not exist")
    else:
        catalog_path = find_catalog_file()

    if catalog_path is None:
        logger.warning("No configuration file found, using example configuration")
        return parse_catalog(example_catalog(), source="example catalog")

    logger.info("Loading service configuration from %s", catalog_path)
    try:
        with catalog_path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh) if catalog_path.suffix.lower() == ".json" else yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigLoadError(f"Failed to load service configuration from {catalog_path}: {exc}") from exc
    return parse_catalog(_interpolate_recursive(raw, env), source=str(catalog_path))


def load_settings(env: EnvironmentStore | None = None) -> MonitorSettings:
    """Build MonitorSettings from environment variables."""
    env = env if env is not None else EnvironmentStore.from_os()
    data: dict[str, Any] = {}
    for field_name, var_name in SETTINGS_ENV_VARS.items():
        value = env.lookup(var_name)
        if value is not None:
            data[field_name] = value
    if "environment" in data:
        data["environment"] = data["environment"].strip().upper()
    try:
        return MonitorSettings(**data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid monitor settings: {exc}") from exc
