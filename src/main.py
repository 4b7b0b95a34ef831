"""DHARMA FastAPI application entry point.

Builds the FastAPI app, wires structlog, CORS and the request-context
middleware, and loads the statute knowledge base once at startup.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from config.settings import settings
from src.api.router import api_router
from src.middleware.request_context import REQUEST_ID_HEADER, RequestContextMiddleware
from src.pipeline.orchestrator import FIRAnalyzer
from src.services.knowledge_base import load_knowledge_base
from src.services.legal_mapper import LegalMapper

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _configure_logging(level: str, fmt: str) -> None:
    """Configure structlog; *fmt* is ``"json"`` or ``"console"``."""
    renderer: list = (
        [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        if fmt == "json"
        else [structlog.dev.ConsoleRenderer()]
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[level.upper()],
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def _install_analyzer(app: FastAPI) -> None:
    """Load the knowledge base and put it, with an analyzer, on ``app.state``.

    On failure both stay ``None``; analysis routes then answer 503 and
    the readiness probe reports the knowledge base as unavailable.
    """
    app.state.knowledge_base = None
    app.state.analyzer = None

    kb_path = Path(settings.knowledge_base_path) if settings.knowledge_base_path else None
    try:
        kb = load_knowledge_base(kb_path)
    except (OSError, ValueError):
        logger.error("app.knowledge_base_load_failed", path=str(kb_path), exc_info=True)
        return

    mapper = LegalMapper(kb, confidence_cap=settings.section_confidence_cap)
    app.state.knowledge_base = kb
    app.state.analyzer = FIRAnalyzer(mapper)
    logger.info("app.analyzer_ready", sections=kb.section_count)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    _configure_logging(settings.log_level, settings.log_format)
    logger.info("app.startup", env=settings.env)

    app.state.start_time = time.time()
    _install_analyzer(app)

    yield

    logger.info("app.shutdown")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="DHARMA FIR Analyzer API",
    description=(
        "Extracts complainant, accused, incident, offence and evidence "
        "details from FIR narratives and maps them to BNS 2023, SC/ST "
        "Act and Arms Act sections."
    ),
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

# Production only accepts the configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list if settings.is_production else ["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", REQUEST_ID_HEADER],
    expose_headers=[REQUEST_ID_HEADER],
)
app.add_middleware(RequestContextMiddleware)

app.include_router(api_router)


@app.get("/api")
async def api_info() -> dict:
    """Service name, version and the route map."""
    return {
        "name": app.title,
        "version": app.version,
        "docs": app.docs_url,
        "endpoints": {
            "analyze": "/api/v1/analyze",
            "validate": "/api/v1/analyze/validate",
            "keywords": "/api/v1/analyze/keywords",
            "export": "/api/v1/analyze/export",
            "legal_sections": "/api/v1/legal-sections",
            "health": "/api/v1/health",
            "ready": "/api/v1/health/ready",
        },
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
