from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request
from src.api.deps import get_app_settings
from src.infrastructure.repositories.state import USERS_KEY

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_state_store(request: Request) -> dict:
    """Round-trip a read through the configured state repository."""
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        return {"status": "error", "message": "state repository not initialised"}
    try:
        await repository.load(USERS_KEY)
        return {"status": "ok", "backend": type(repository).__name__}
    except Exception as e:
        return {"status": "error", "message": str(e)[:100]}


@router.get("/health", summary="Service health check")
async def health_check(request: Request) -> dict:
    """Return basic service and datastore status information."""
    settings = get_app_settings(request)
    state_status = await check_state_store(request)

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": "ok" if state_status.get("status") == "ok" else "degraded",
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {"state": state_status},
    }
    logger.info("health_checked", **payload)
    return payload
