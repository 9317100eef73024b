"""
Health check endpoints for orchestration probes.

- /health, /health/live: liveness (always 200 while the process runs)
- /health/ready: readiness; in SQL mode the database must answer
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_session
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rental-core"


async def _database_healthy(session: AsyncSession) -> bool:
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return True
    except Exception as e:
        logger.error("Database health check failed", exc_info=e)
        return False


@router.get("/health")
@router.get("/health/live")
async def health_check():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
async def health_check_ready(
    session: AsyncSession | None = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    checks = {"storage": "in-memory" if settings.use_in_memory else "sql"}
    if session is not None:
        healthy = await _database_healthy(session)
        checks["database"] = "healthy" if healthy else "unhealthy"
        if not healthy:
            return JSONResponse(status_code=503, content={"status": "not_ready", "checks": checks})
    return {"status": "ready", "checks": checks}
