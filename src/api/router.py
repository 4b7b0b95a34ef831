"""Main API router combining all v1 route modules.

Aggregates all routers under the ``/api/v1`` prefix so the
FastAPI application only needs to include a single router.

Includes:
    * Analysis: FIR analysis, validation, keywords, JSON export
    * Legal sections: the statute knowledge base
    * Health: liveness and readiness probes
"""

from __future__ import annotations

from fastapi import APIRouter

from src.api.v1 import analysis, health, legal_sections

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(analysis.router)
api_router.include_router(legal_sections.router)
api_router.include_router(health.router)
