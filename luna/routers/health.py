"""Health check endpoint."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["system"])
logger = logging.getLogger("luna.health")


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also reports whether the snapshot file has been written yet.
    """
    settings = request.app.state.settings
    snapshot_file = request.app.state.snapshot_file
    session = request.app.state.session

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "storage": "written" if snapshot_file.exists() else "empty",
        "state_version": session.store.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
