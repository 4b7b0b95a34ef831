"""FIR analysis endpoints.

Thin adapter over :class:`~src.pipeline.orchestrator.FIRAnalyzer`: the
route enforces the configured length limits, maps input errors to 400,
and never leaks internal failures to the caller.  Routes that scan the
whole text are plain functions, so FastAPI runs them in its threadpool
instead of on the event loop.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import ORJSONResponse, Response

from config.settings import settings
from src.models.report import AnalysisResult
from src.models.request import FIRTextRequest, KeywordsResponse, ValidationResult
from src.pipeline.orchestrator import FIRAnalyzer
from src.services.errors import InputError
from src.services.export import export_report_json
from src.services.text_processing import extract_keywords, validate_fir_text

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])


def _get_analyzer(request: Request) -> FIRAnalyzer:
    analyzer = getattr(request.app.state, "analyzer", None)
    if analyzer is None:
        raise HTTPException(status_code=503, detail="FIR analyzer not available")
    return analyzer


def _check_length(text: str) -> None:
    stripped = text.strip()
    if len(stripped) < settings.min_text_length:
        raise InputError(
            "FIR text is required and must be at least "
            f"{settings.min_text_length} characters long"
        )
    if len(text) > settings.max_text_length:
        raise InputError(
            f"FIR text must be at most {settings.max_text_length} characters long"
        )


def _input_error_response(exc: InputError) -> ORJSONResponse:
    return ORJSONResponse(status_code=400, content={"success": False, "error": str(exc)})


def _run_analysis(request: Request, text: str) -> AnalysisResult:
    analyzer = _get_analyzer(request)
    try:
        return analyzer.analyze(text)
    except InputError:
        raise
    except Exception:
        logger.error("api.analysis.failed", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Internal server error during analysis"
        ) from None


@router.post("", response_model=AnalysisResult, response_model_by_alias=True)
def analyze_fir(body: FIRTextRequest, request: Request) -> AnalysisResult | ORJSONResponse:
    """Analyse an FIR narrative and return the structured report."""
    try:
        _check_length(body.fir_text)
        result = _run_analysis(request, body.fir_text)
    except InputError as exc:
        logger.info("api.analysis.rejected", reason=str(exc), text_length=len(body.fir_text))
        return _input_error_response(exc)
    return result


@router.post("/validate", response_model=ValidationResult, response_model_by_alias=True)
async def validate_fir(body: FIRTextRequest) -> ValidationResult:
    """Pre-submission check: length, a date, and a complainant mention."""
    return validate_fir_text(body.fir_text.strip(), settings.min_text_length)


@router.post("/keywords", response_model=KeywordsResponse)
def fir_keywords(body: FIRTextRequest) -> KeywordsResponse:
    return KeywordsResponse(keywords=extract_keywords(body.fir_text))


@router.post("/export")
def export_analysis(body: FIRTextRequest, request: Request) -> Response:
    """Analyse and return the full report as a JSON download."""
    try:
        _check_length(body.fir_text)
        result = _run_analysis(request, body.fir_text)
    except InputError as exc:
        return _input_error_response(exc)

    return Response(
        content=export_report_json(result),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="fir-analysis.json"'},
    )
