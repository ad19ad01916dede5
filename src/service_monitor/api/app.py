"""FastAPI application factory for the service monitor."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from service_monitor import __version__
from service_monitor.api.routes import checks, meta
from service_monitor.config.environment import EnvironmentStore
from service_monitor.config.loader import load_settings
from service_monitor.config.models import MonitorSettings
from service_monitor.errors import ConfigLoadError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    load_dotenv()
    app = FastAPI(
        title="Service Monitor",
        version=__version__,
        description="Configuration-driven REST/SOAP health monitor",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    env = EnvironmentStore.from_os()
    try:
        settings = load_settings(env)
    except ConfigLoadError as exc:
        logger.warning("%s; falling back to default settings", exc)
        settings = MonitorSettings()

    app.state.env = env
    app.state.settings = settings

    @app.get("/health", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(meta.router, prefix="/api")
    app.include_router(checks.router)

    return app


app = create_app()
