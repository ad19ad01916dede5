"""Service check endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request

from service_monitor.checks.runner import CheckRunner
from service_monitor.config.models import Environment
from service_monitor.errors import ConfigLoadError, UnknownServiceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checks"])


def get_runner(request: Request) -> CheckRunner:
    return CheckRunner(request.app.state.settings, env=request.app.state.env)


def parse_environment(value: str | None) -> Environment | None:
    if not value:
        return None
    try:
        return Environment(value.strip().upper())
    except ValueError as exc:
        allowed = ", ".join(e.value for e in Environment)
        raise HTTPException(status_code=400, detail=f"Unknown environment: {value} (expected one of {allowed})") from exc


def parse_disabled(raw: str | None) -> dict[str, bool]:
    """Parse the ``disabledServices`` JSON object; malformed input is ignored."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Error parsing disabledServices from query parameter: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring disabledServices: expected a JSON object")
        return {}
    return {str(k): bool(v) for k, v in data.items()}


@router.get("/check-all")
async def check_all(
    request: Request,
    environment: str | None = None,
    env: str | None = None,
    disabled_services: str | None = Query(None, alias="disabledServices"),
) -> dict[str, Any]:
    runner = get_runner(request)
    try:
        batch = await runner.run(
            environment=parse_environment(environment or env),
            disabled=parse_disabled(disabled_services),
        )
    except ConfigLoadError as exc:
        logger.error("Error checking all services: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to check services") from exc
    return batch.to_dict()


@router.get("/check/{service_id}")
async def check_one(
    request: Request,
    service_id: str,
    environment: str | None = None,
    env: str | None = None,
    disabled_services: str | None = Query(None, alias="disabledServices"),
) -> dict[str, Any]:
    runner = get_runner(request)
    try:
        batch = await runner.run(
            service_id=service_id,
            environment=parse_environment(environment or env),
            disabled=parse_disabled(disabled_services),
        )
    except UnknownServiceError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ConfigLoadError as exc:
        logger.error("Error checking service %s: %s", service_id, exc)
        raise HTTPException(status_code=500, detail="Failed to check service") from exc
    return batch.to_dict()
