"""Pattern library and the rule engine that evaluates it.

Every detection heuristic used by the extractors lives here as data:

* :class:`FieldRule` -- fills one entity field from the first pattern
  that matches (optionally rejecting a candidate capture).
* :class:`RuleTable` -- an ordered ``(pattern, value)`` table evaluated
  either *first-match-wins* (classifiers) or *all-matches* (offence
  detection).  The policy is the ``first_match`` flag, not code shape.

Adding or removing a detection rule means editing a table below; the
extractors in :mod:`src.services.extraction` never change.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar

from src.models.enums import EvidenceCategory, IncidentType, Severity
from src.models.report import NOT_SPECIFIED

T = TypeVar("T")

_I: Final[re.RegexFlag] = re.IGNORECASE


# =====================================================================
# Rule engine
# =====================================================================


@dataclass(frozen=True, slots=True)
class Rule(Generic[T]):
    pattern: re.Pattern[str]
    value: T


@dataclass(frozen=True, slots=True)
class RuleTable(Generic[T]):
    """Ordered rule table.

    With ``first_match=True`` evaluation stops at the first hit; otherwise
    every matching rule contributes, in table order (not text order).
    ``default`` is returned alone when nothing matched.
    """

    name: str
    rules: tuple[Rule[T], ...]
    first_match: bool
    default: T | None = None

    def evaluate(self, text: str) -> list[T]:
        hits: list[T] = []
        for rule in self.rules:
            if rule.pattern.search(text):
                hits.append(rule.value)
                if self.first_match:
                    break
        if not hits and self.default is not None:
            hits.append(self.default)
        return hits

    def classify(self, text: str) -> T | None:
        hits = self.evaluate(text)
        return hits[0] if hits else None


def _strip(value: str) -> str:
    return value.strip()


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Extract one field: first pattern whose group 1 survives ``reject``."""

    field: str
    patterns: tuple[re.Pattern[str], ...]
    default: Any = NOT_SPECIFIED
    transform: Callable[[str], Any] = _strip
    reject: Callable[[str], bool] | None = None

    def apply(self, text: str) -> Any:
        for pattern in self.patterns:
            # Only the first occurrence of each pattern is considered
            match = pattern.search(text)
            if match is None:
                continue
            captured = match.group(1)
            if self.reject is not None and self.reject(captured):
                continue
            return self.transform(captured)
        return self.default


def apply_field_rules(text: str, rules: Iterable[FieldRule]) -> dict[str, Any]:
    """Evaluate each rule independently against the full *text*."""
    return {rule.field: rule.apply(text) for rule in rules}


def _table(
    name: str,
    rows: Iterable[tuple[str, T]],
    *,
    first_match: bool,
    default: T | None = None,
) -> RuleTable[T]:
    return RuleTable(
        name=name,
        rules=tuple(Rule(re.compile(src, _I), value) for src, value in rows),
        first_match=first_match,
        default=default,
    )


# =====================================================================
# Complainant fields
# =====================================================================

COMPLAINANT_RULES: Final[tuple[FieldRule, ...]] = (
    FieldRule(
        "name",
        (re.compile(r"complainant\s+([A-Za-z\s]+?)(?:,|\s+S/o|\s+D/o|\s+W/o)", _I),),
    ),
    FieldRule(
        "guardian",
        (re.compile(r"(?:S/o|D/o|W/o)\s+([A-Za-z\s]+?)(?:,|\s*\bAge\b)", _I),),
    ),
    FieldRule(
        "age",
        (re.compile(r"\bAge[:\s]*(\d+)", _I),),
        default=None,
        transform=int,
    ),
    FieldRule(
        "community",
        (re.compile(r"Community[:\s]*([^,\n]+)", _I),),
    ),
    # Continuation fragments must start with a capital or digit, which
    # stops the address at the first lower-case clause after it.
    FieldRule(
        "address",
        (re.compile(r"(?i:R/o|Address)[:\s]*([^,:\n]+(?:,\s*[A-Z0-9][^,:\n]*)*)"),),
    ),
)


# =====================================================================
# Incident fields
# =====================================================================


def _mentions_about(captured: str) -> bool:
    return "about" in captured


INCIDENT_RULES: Final[tuple[FieldRule, ...]] = (
    FieldRule(
        "date",
        (re.compile(r"\bOn\s+(\d{1,2}(?:st|nd|rd|th)?\s+[A-Za-z]+\s+\d{4})", _I),),
    ),
    FieldRule(
        "time",
        (re.compile(r"\bat\s+about\s+([^,\n]+)", _I),),
    ),
    # Priority: near > at > in.  A capture containing "about" belongs to
    # the time clause and is skipped.
    FieldRule(
        "location",
        (
            re.compile(r"\bnear\s+([^,.:!?\n]+)", _I),
            re.compile(r"\bat\s+([^,.:!?\n]+)", _I),
            re.compile(r"\bin\s+([^,.:!?\n]+)", _I),
        ),
        reject=_mentions_about,
    ),
)

SUMMARY_KEYWORDS: Final[tuple[str, ...]] = ("incident", "reported", "complaint")
SUMMARY_MAX_CHARS: Final[int] = 200
SENTENCE_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"[.!?]+")

INCIDENT_TYPES: Final[RuleTable[IncidentType]] = _table(
    "incident_type",
    (
        (r"caste.*discrimination|sc/st", IncidentType.CASTE_BASED_CRIME),
        (r"robbery|theft|loot", IncidentType.PROPERTY_CRIME),
        (r"assault|violence|attack", IncidentType.VIOLENT_CRIME),
        (r"threat|intimidation", IncidentType.INTIMIDATION),
        (r"arms|weapon|gun", IncidentType.ARMS_RELATED),
    ),
    first_match=True,
    default=IncidentType.GENERAL,
)


# =====================================================================
# Offences
# =====================================================================


@dataclass(frozen=True, slots=True)
class OffenceSpec:
    name: str
    severity: Severity


OFFENCES: Final[RuleTable[OffenceSpec]] = _table(
    "offences",
    (
        (
            r"caste|scheduled\s+caste|sc/st|discrimination|humiliat",
            OffenceSpec("Caste-based Discrimination", Severity.HIGH),
        ),
        (
            r"robbery|loot|snatch|forcibly.*(?:took|taken)|stolen",
            OffenceSpec("Robbery/Theft", Severity.HIGH),
        ),
        (
            r"assault|attack|hit|beat|injur|hurt|harm",
            OffenceSpec("Physical Assault", Severity.MEDIUM),
        ),
        (
            r"pistol|gun|weapon|firearm|arms",
            OffenceSpec("Illegal Possession of Arms", Severity.HIGH),
        ),
        (
            r"abuse|slur|derogatory|offensive|insult",
            OffenceSpec("Verbal Abuse", Severity.MEDIUM),
        ),
        (
            r"threat|intimidat|fear|coer",
            OffenceSpec("Criminal Intimidation", Severity.MEDIUM),
        ),
        (
            r"mobile|phone|wallet|money|cash|property",
            OffenceSpec("Theft of Personal Property", Severity.MEDIUM),
        ),
        (
            r"dacoity|gang.*robbery|group.*crime",
            OffenceSpec("Dacoity", Severity.HIGH),
        ),
        (
            r"false.*evidence|fabricat.*evidence",
            OffenceSpec("Giving False Evidence", Severity.HIGH),
        ),
    ),
    first_match=False,
)


# =====================================================================
# Evidence and witnesses
# =====================================================================

_EVIDENCE_KEYWORDS: Final[tuple[str, ...]] = (
    r"cctv|camera|footage|video",
    r"medical|report|examination|injury|hospital",
    r"photograph|photo|image|picture",
    r"document|paper|\bid\b|card|certificate",
    r"torn|damaged|broken|destroyed",
    r"fingerprint|dna|forensic",
)

# Searched per sentence (split on SENTENCE_SPLIT_RE); a hit reports the
# whole sentence.
EVIDENCE_KEYWORD_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(src, _I) for src in _EVIDENCE_KEYWORDS
)

EVIDENCE_CATEGORIES: Final[RuleTable[EvidenceCategory]] = _table(
    "evidence_category",
    (
        (r"cctv|camera|video", EvidenceCategory.VIDEO),
        (r"medical|injury|hospital", EvidenceCategory.MEDICAL),
        (r"photo|image", EvidenceCategory.PHOTOGRAPHIC),
        (r"document|paper", EvidenceCategory.DOCUMENTARY),
        (r"torn|damaged", EvidenceCategory.PHYSICAL),
    ),
    first_match=True,
    default=EvidenceCategory.PHYSICAL,
)


# =====================================================================
# Numbered lists (accused and witnesses)
# =====================================================================

# Preprocessing removes the line breaks that separated list entries, so a
# name also ends at a capitalised word that opens the next sentence.
_NAME_STOP: Final[str] = (
    r"(?:The|They|Their|He|His|She|Her|It|This|That|These|Those|When|Then|"
    r"While|After|Before|On|In|At|Witness(?:es)?|Evidence|Accused|Medical|All|Both)\b"
)
_NAME: Final[str] = rf"(?!{_NAME_STOP})[A-Za-z]+(?:[ \t]+(?!{_NAME_STOP})[A-Za-z]+)*"

NUMBERED_ENTRY_RE: Final[re.Pattern[str]] = re.compile(
    rf"(?<![\w.])(\d{{1,3}})\.\s*({_NAME})(?:\s*\(([^)]*)\))?"
)

GENERAL_ACCUSED_RE: Final[re.Pattern[str]] = re.compile(
    rf"(?i:\baccused)\s+(?:(?i:persons?)\s+)?((?!{_NAME_STOP})[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)"
)

UNKNOWN_NAME_RE: Final[re.Pattern[str]] = re.compile(r"\bunknown\b", _I)

# A ".", "!" or "?" followed by whitespace or end of text, unless it is
# the dot of a list marker such as " 1." or "(12.".
_SENTENCE_END: Final[str] = r"(?<![\s(]\d)(?<![\s(]\d\d)[.!?](?=\s|$)"

WITNESS_SECTION_RE: Final[re.Pattern[str]] = re.compile(
    rf"\bwitness.*?(?:{_SENTENCE_END}|$)", _I
)
