from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    __slots__ = ()

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IncidentType(StrEnum):
    __slots__ = ()

    CASTE_BASED_CRIME = "Caste-based Crime"
    PROPERTY_CRIME = "Property Crime"
    VIOLENT_CRIME = "Violent Crime"
    INTIMIDATION = "Intimidation"
    ARMS_RELATED = "Arms Related"
    GENERAL = "General Criminal Complaint"


class EvidenceCategory(StrEnum):
    __slots__ = ()

    VIDEO = "Video Evidence"
    MEDICAL = "Medical Evidence"
    PHOTOGRAPHIC = "Photographic Evidence"
    DOCUMENTARY = "Documentary Evidence"
    PHYSICAL = "Physical Evidence"


class RiskLevel(StrEnum):
    __slots__ = ()

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class LanguageLabel(StrEnum):
    """Script mix of an FIR text, as reported in the report metadata."""

    __slots__ = ()

    MIXED_TELUGU = "Mixed (English + Telugu)"
    PRIMARILY_ENGLISH_WITH_TELUGU = "Primarily English with Telugu"
    ENGLISH = "English"
