"""Luna API — FastAPI application entry point.

Run locally:
    uvicorn luna.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from luna.config import Settings, get_settings
from luna.cycle.config_loader import get_cycle_config, load_cycle_config
from luna.cycle.session import CycleSession
from luna.cycle.store import CycleStore
from luna.insights.fallback import build_insight_provider
from luna.routers import calendar, cycle, health, insights, logs
from luna.services.snapshot_file import SnapshotFile

logger = logging.getLogger("luna")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks.

    Loads the snapshot once and wires the store to rewrite it after every
    mutation.
    """
    settings: Settings = app.state.settings
    logger.info("Starting Luna API v%s [%s]", settings.app_version, settings.environment)

    config = (
        load_cycle_config(Path(settings.cycle_config_path))
        if settings.cycle_config_path
        else get_cycle_config()
    )
    snapshot_file = SnapshotFile(settings.data_path, config=config)
    store = CycleStore(config=config, on_change=snapshot_file.save)
    store.load_snapshot(snapshot_file.load())

    app.state.snapshot_file = snapshot_file
    app.state.session = CycleSession(store, config=config)
    app.state.insight_provider = build_insight_provider(settings, config)
    yield
    logger.info("Luna API shut down")


# ---------- App factory ----------

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Luna API",
        description=(
            "Personal cycle tracker — period records, daily logs, phase "
            "inference, calendar projection, and daily insights."
        ),
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- Health check (no version prefix) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(cycle.router, prefix=v1_prefix)
    app.include_router(logs.router, prefix=v1_prefix)
    app.include_router(calendar.router, prefix=v1_prefix)
    app.include_router(insights.router, prefix=v1_prefix)

    return app


app = create_app()
