"""Monitor metadata endpoints: liveness, environments and the resolved catalog."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from service_monitor.api.routes.checks import get_runner, parse_environment
from service_monitor.config.models import Environment
from service_monitor.errors import ConfigLoadError

router = APIRouter(tags=["meta"])


@router.get("/health")
async def monitor_health() -> dict[str, str]:
    return {"status": "ok", "message": "Service monitor is running"}


@router.get("/environments")
async def list_environments(request: Request) -> dict[str, Any]:
    return {
        "environments": [e.value for e in Environment],
        "current": request.app.state.settings.environment.value,
    }


@router.get("/services")
async def list_services(request: Request, environment: str | None = None) -> list[dict[str, Any]]:
    """Resolved services for an environment. Header values are never exposed."""
    runner = get_runner(request)
    try:
        services = runner.resolve_services(parse_environment(environment))
    except ConfigLoadError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return [
        {
            "id": s.id,
            "name": s.name,
            "type": s.type.value,
            "environment": s.environment.value,
            "url": s.url,
            "method": s.method,
            "headers": sorted(s.headers),
        }
        for s in services
    ]
