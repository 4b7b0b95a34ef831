"""FIR analysis pipeline.

Coordinates preprocessing, field extraction, legal section mapping,
insight generation and confidence scoring, and assembles the
:class:`~src.models.report.Report`.  One call handles one text; the
analyzer keeps no per-request state, so a single instance is shared by
every request.
"""

from __future__ import annotations

import time
from typing import Final

import structlog

from src.models.report import AnalysisResult, Report, ReportMetadata
from src.services.confidence import calculate_confidence
from src.services.errors import InputError
from src.services.extraction import (
    extract_accused,
    extract_complainant,
    extract_evidence,
    extract_incident,
    extract_offences,
)
from src.services.insights import generate_insights
from src.services.legal_mapper import LegalMapper
from src.services.text_processing import detect_language, normalize_text

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

PROCESSING_STEPS: Final[tuple[str, ...]] = (
    "preprocessing",
    "extraction",
    "mapping",
    "insights",
)


class FIRAnalyzer:
    """Single entry point of the analysis core.

    The legal mapper (and through it the statute knowledge base) is
    injected so tests can run against synthetic knowledge bases.
    """

    __slots__ = ("_mapper",)

    def __init__(self, mapper: LegalMapper) -> None:
        self._mapper = mapper

    @property
    def mapper(self) -> LegalMapper:
        return self._mapper

    def analyze(self, text: str) -> AnalysisResult:
        """Analyse one FIR text.

        Raises
        ------
        InputError
            If *text* is empty or whitespace only.

        Any other failure is logged and returned as
        ``AnalysisResult(success=False, error=...)``.
        """
        if not text or not text.strip():
            raise InputError("FIR text is required")

        start = time.perf_counter()
        try:
            report, confidence = self._run(text)
        except Exception as exc:
            logger.error(
                "fir_analyzer.analysis_failed",
                text_length=len(text),
                exc_info=True,
            )
            return AnalysisResult(
                success=False,
                processing_time_ms=_elapsed_ms(start),
                error=str(exc) or exc.__class__.__name__,
            )

        elapsed = _elapsed_ms(start)
        logger.info(
            "fir_analyzer.analysis_complete",
            text_length=len(text),
            accused=len(report.accused),
            offences=len(report.offences),
            sections=len(report.legal_sections),
            risk=report.insights.risk_assessment.level,
            confidence=confidence,
            elapsed_ms=elapsed,
        )
        return AnalysisResult(
            success=True,
            processing_time_ms=elapsed,
            confidence=confidence,
            results=report,
        )

    def _run(self, text: str) -> tuple[Report, int]:
        # -- 1. Preprocessing ------------------------------------------------
        normalized = normalize_text(text)

        # -- 2. Extraction (independent, order does not matter) --------------
        complainant = extract_complainant(normalized)
        accused = extract_accused(normalized)
        incident = extract_incident(normalized)
        offences = extract_offences(normalized)
        evidence = extract_evidence(normalized)

        # -- 3. Legal mapping ------------------------------------------------
        sections = self._mapper.map_sections(normalized)

        # -- 4. Insights and confidence --------------------------------------
        insights = generate_insights(
            complainant, accused, incident, offences, evidence, sections
        )
        confidence = calculate_confidence(complainant, incident, accused, evidence)

        report = Report(
            complainant=complainant,
            accused=accused,
            incident=incident,
            offences=offences,
            legal_sections=sections,
            evidence=evidence,
            insights=insights,
            metadata=ReportMetadata(
                text_length=len(text),
                language_detected=detect_language(text),
                processing_steps=list(PROCESSING_STEPS),
            ),
        )
        return report, confidence


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
