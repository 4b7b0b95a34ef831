"""Report data models for the FIR analyzer.

Every entity is built fresh for each analysis call.  Fields that the
extractors could not fill carry explicit sentinel strings (see the
``NOT_SPECIFIED`` family below) rather than ``None`` so that renderers
and the confidence scorer never need null checks.  The only nullable
field is :attr:`Complainant.age`.

JSON keys are camelCase (``serialNo``, ``legalSections``,
``riskAssessment`` ...); the models accept either spelling on input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.enums import (
    EvidenceCategory,
    IncidentType,
    LanguageLabel,
    RiskLevel,
    Severity,
)

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------

NOT_SPECIFIED = "Not specified"
UNKNOWN_ACCUSED = "Unknown"
GENERAL_OFFENCE = "General Criminal Offense"
PENDING_EVIDENCE = "Evidence to be collected"
PENDING_WITNESS = "Witness identification pending"
DEFAULT_INCIDENT_SUMMARY = "Incident details extracted from FIR text"


class _ReportModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


# ---------------------------------------------------------------------------
# Extracted entities
# ---------------------------------------------------------------------------


class Complainant(_ReportModel):
    name: str = NOT_SPECIFIED
    guardian: str = NOT_SPECIFIED
    age: int | None = None
    community: str = NOT_SPECIFIED
    address: str = NOT_SPECIFIED


class AccusedPerson(_ReportModel):
    serial_no: int
    name: str
    details: str
    identified: bool


class Incident(_ReportModel):
    date: str = NOT_SPECIFIED
    time: str = NOT_SPECIFIED
    location: str = NOT_SPECIFIED
    type: IncidentType = IncidentType.GENERAL
    summary: str = DEFAULT_INCIDENT_SUMMARY


class OffenceFinding(_ReportModel):
    name: str
    severity: Severity
    detected: bool = True


class EvidenceItem(_ReportModel):
    type: EvidenceCategory
    description: str
    collected: bool = True


class WitnessEntry(_ReportModel):
    name: str
    details: str
    statement: str


class EvidenceFindings(_ReportModel):
    """Evidence items and witnesses, extracted together in one pass."""

    evidence: list[EvidenceItem]
    witnesses: list[WitnessEntry]


# ---------------------------------------------------------------------------
# Legal mapping and insights
# ---------------------------------------------------------------------------


class LegalSection(_ReportModel):
    """A statute section cited as applicable to the FIR text."""

    act: str
    section: str
    title: str
    description: str
    severity: Severity = Severity.MEDIUM
    confidence: float = Field(ge=0.0, le=1.0)


class RiskAssessment(_ReportModel):
    level: RiskLevel
    score: int = Field(ge=0, le=100)
    factors: list[str] = Field(default_factory=list)


class Insights(_ReportModel):
    summary: str
    recommendations: list[str]
    risk_assessment: RiskAssessment
    next_steps: list[str]


class ReportMetadata(_ReportModel):
    text_length: int
    language_detected: LanguageLabel
    processing_steps: list[str]


class Report(_ReportModel):
    complainant: Complainant
    accused: list[AccusedPerson]
    incident: Incident
    offences: list[OffenceFinding]
    legal_sections: list[LegalSection]
    evidence: EvidenceFindings
    insights: Insights
    metadata: ReportMetadata


class AnalysisResult(_ReportModel):
    """Envelope returned by :meth:`FIRAnalyzer.analyze`.

    ``success`` is ``False`` only when an unexpected failure was caught
    inside the pipeline; ``results`` is then ``None`` and ``error``
    carries the message.
    """

    success: bool
    processing_time_ms: float = Field(default=0.0, alias="processingTime")
    confidence: int | None = None
    results: Report | None = None
    error: str | None = None
