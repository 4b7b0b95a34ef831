"""Narrative summary, recommendations, risk and next steps for a report.

Rules are gated on the mapped legal sections and the extracted
entities only; nothing here looks at the raw text again.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from src.models.enums import EvidenceCategory, RiskLevel, Severity
from src.models.report import (
    PENDING_WITNESS,
    AccusedPerson,
    Complainant,
    EvidenceFindings,
    Incident,
    Insights,
    LegalSection,
    OffenceFinding,
    RiskAssessment,
)

_DEFAULT_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Conduct thorough investigation",
    "Record witness statements",
    "Collect physical evidence",
)

# Risk weights; each hit also records a human-readable factor
_HIGH_SEVERITY_WEIGHT: Final[int] = 30
_CASTE_WEIGHT: Final[int] = 25
_ARMS_WEIGHT: Final[int] = 20
_MULTIPLE_ACCUSED_WEIGHT: Final[int] = 15
_MULTIPLE_ACCUSED_THRESHOLD: Final[int] = 2

_HIGH_RISK_ABOVE: Final[int] = 50
_MEDIUM_RISK_ABOVE: Final[int] = 25


def _cites_act(sections: Sequence[LegalSection], marker: str) -> bool:
    return any(marker in s.act for s in sections)


def generate_summary(
    complainant: Complainant,
    incident: Incident,
    accused: Sequence[AccusedPerson],
    offences: Sequence[OffenceFinding],
) -> str:
    offence_names = ", ".join(o.name for o in offences).lower()
    return (
        f"FIR filed by {complainant.name or 'complainant'} on "
        f"{incident.date or 'specified date'} regarding {offence_names} involving "
        f"{len(accused)} accused person(s). Incident occurred at "
        f"{incident.location or 'specified location'}."
    )


def generate_recommendations(
    sections: Sequence[LegalSection],
    evidence: EvidenceFindings,
) -> list[str]:
    recommendations: list[str] = []

    if _cites_act(sections, "SC/ST"):
        recommendations.append("File case under SC/ST Prevention of Atrocities Act")
        recommendations.append("Ensure fast-track court proceedings")

    if _cites_act(sections, "Arms"):
        recommendations.append("Conduct thorough search for illegal weapons")
        recommendations.append("Verify arms licenses of accused")

    categories = {item.type for item in evidence.evidence}
    if EvidenceCategory.VIDEO in categories:
        recommendations.append("Preserve CCTV footage immediately")
    if EvidenceCategory.MEDICAL in categories:
        recommendations.append("Conduct detailed medical examination")

    return recommendations or list(_DEFAULT_RECOMMENDATIONS)


def assess_risk(
    sections: Sequence[LegalSection],
    offences: Sequence[OffenceFinding],
    accused: Sequence[AccusedPerson],
) -> RiskAssessment:
    score = 0
    factors: list[str] = []

    if any(s.severity == Severity.HIGH for s in sections):
        score += _HIGH_SEVERITY_WEIGHT
        factors.append("High-severity legal sections applicable")

    if any("Caste" in o.name for o in offences):
        score += _CASTE_WEIGHT
        factors.append("Caste-based discrimination involved")

    if any("Arms" in o.name for o in offences):
        score += _ARMS_WEIGHT
        factors.append("Illegal arms possession suspected")

    if len(accused) > _MULTIPLE_ACCUSED_THRESHOLD:
        score += _MULTIPLE_ACCUSED_WEIGHT
        factors.append("Multiple accused persons")

    if score > _HIGH_RISK_ABOVE:
        level = RiskLevel.HIGH
    elif score > _MEDIUM_RISK_ABOVE:
        level = RiskLevel.MEDIUM
    else:
        level = RiskLevel.LOW

    return RiskAssessment(level=level, score=min(100, score), factors=factors)


def suggest_next_steps(
    sections: Sequence[LegalSection],
    offences: Sequence[OffenceFinding],
    evidence: EvidenceFindings,
) -> list[str]:
    steps = [
        "Register FIR under appropriate sections",
        "Conduct preliminary investigation",
    ]

    if any(w.name != PENDING_WITNESS for w in evidence.witnesses):
        steps.append("Record witness statements under Section 161 CrPC")

    if _cites_act(sections, "SC/ST"):
        steps.append("Inform SC/ST Commission")
        steps.append("Ensure investigation by DSP level officer")

    if any(o.severity == Severity.HIGH for o in offences):
        steps.append("Consider arrest of accused if evidence sufficient")

    steps.append("Submit charge sheet within stipulated time")
    return steps


def generate_insights(
    complainant: Complainant,
    accused: Sequence[AccusedPerson],
    incident: Incident,
    offences: Sequence[OffenceFinding],
    evidence: EvidenceFindings,
    sections: Sequence[LegalSection],
) -> Insights:
    return Insights(
        summary=generate_summary(complainant, incident, accused, offences),
        recommendations=generate_recommendations(sections, evidence),
        risk_assessment=assess_risk(sections, offences, accused),
        next_steps=suggest_next_steps(sections, offences, evidence),
    )
