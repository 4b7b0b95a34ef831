from src.models.enums import (
    EvidenceCategory,
    IncidentType,
    LanguageLabel,
    RiskLevel,
    Severity,
)
from src.models.report import (
    AccusedPerson,
    AnalysisResult,
    Complainant,
    EvidenceFindings,
    EvidenceItem,
    Incident,
    Insights,
    LegalSection,
    OffenceFinding,
    Report,
    ReportMetadata,
    RiskAssessment,
    WitnessEntry,
)
from src.models.request import FIRTextRequest, KeywordsResponse, ValidationResult

__all__ = [
    "AccusedPerson",
    "AnalysisResult",
    "Complainant",
    "EvidenceCategory",
    "EvidenceFindings",
    "EvidenceItem",
    "FIRTextRequest",
    "Incident",
    "IncidentType",
    "Insights",
    "KeywordsResponse",
    "LanguageLabel",
    "LegalSection",
    "OffenceFinding",
    "Report",
    "ReportMetadata",
    "RiskAssessment",
    "RiskLevel",
    "Severity",
    "ValidationResult",
    "WitnessEntry",
]
