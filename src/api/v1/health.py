"""Health check endpoints.

Provides liveness and readiness probes.  Readiness means the statute
knowledge base is loaded and the analyzer is wired up.
"""

from __future__ import annotations

import time

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """Basic health check response."""

    success: bool = True
    status: str
    message: str
    version: str
    uptime_seconds: float
    sections_loaded: int = 0


class ReadinessResponse(BaseModel):
    """Readiness check response with individual component statuses."""

    status: str
    checks: dict[str, str]
    sections_loaded: int = 0


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness probe.

    Returns 200 if the application process is running, whether or not
    the knowledge base loaded (``sections_loaded`` is 0 if it did not).
    """
    start_time: float = getattr(request.app.state, "start_time", time.time())
    uptime = time.time() - start_time
    kb = getattr(request.app.state, "knowledge_base", None)

    return HealthResponse(
        status="healthy",
        message="DHARMA FIR Analyzer API is running",
        version=request.app.version,
        uptime_seconds=round(uptime, 2),
        sections_loaded=kb.section_count if kb is not None else 0,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse | ORJSONResponse:
    """Readiness probe; 503 until the knowledge base and analyzer exist."""
    checks: dict[str, str] = {}

    kb = getattr(request.app.state, "knowledge_base", None)
    checks["knowledge_base"] = "ok" if kb is not None else "unavailable"

    analyzer = getattr(request.app.state, "analyzer", None)
    checks["analyzer"] = "ok" if analyzer is not None else "unavailable"

    sections = kb.section_count if kb is not None else 0
    all_ok = all(v == "ok" for v in checks.values())
    if not all_ok:
        logger.warning("health.readiness_failed", checks=checks)
        return ORJSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": checks, "sections_loaded": sections},
        )

    return ReadinessResponse(status="ready", checks=checks, sections_loaded=sections)
