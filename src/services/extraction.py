"""Field extractors: FIR text in, one structured entity out.

Each extractor is a pure function of the (normalised) text with no
shared state, so they can run in any order or concurrently.  A pattern
that does not match is resolved with the sentinel defaults defined in
:mod:`src.models.report`; list-valued results are never empty.
"""

from __future__ import annotations

import re

from src.models.enums import EvidenceCategory, Severity
from src.models.report import (
    DEFAULT_INCIDENT_SUMMARY,
    GENERAL_OFFENCE,
    PENDING_EVIDENCE,
    PENDING_WITNESS,
    UNKNOWN_ACCUSED,
    AccusedPerson,
    Complainant,
    EvidenceFindings,
    EvidenceItem,
    Incident,
    OffenceFinding,
    WitnessEntry,
)
from src.services.patterns import (
    COMPLAINANT_RULES,
    EVIDENCE_CATEGORIES,
    EVIDENCE_KEYWORD_PATTERNS,
    GENERAL_ACCUSED_RE,
    INCIDENT_RULES,
    INCIDENT_TYPES,
    NUMBERED_ENTRY_RE,
    OFFENCES,
    SENTENCE_SPLIT_RE,
    SUMMARY_KEYWORDS,
    SUMMARY_MAX_CHARS,
    UNKNOWN_NAME_RE,
    WITNESS_SECTION_RE,
    apply_field_rules,
)

_ACCUSED_DETAILS_DEFAULT = "Details not specified"
_WITNESS_DETAILS_DEFAULT = "Witness details not specified"
_WITNESS_STATEMENT = "Statement to be recorded"


# ---------------------------------------------------------------------------
# Complainant
# ---------------------------------------------------------------------------


def extract_complainant(text: str) -> Complainant:
    return Complainant(**apply_field_rules(text, COMPLAINANT_RULES))


# ---------------------------------------------------------------------------
# Accused
# ---------------------------------------------------------------------------


def is_identified(name: str) -> bool:
    """A person is identified unless their name contains the word "unknown"."""
    return UNKNOWN_NAME_RE.search(name) is None


def extract_accused(text: str) -> list[AccusedPerson]:
    """Extract accused persons.

    1. Numbered entries (``1. Ramesh (25 years)``) outside any witness
       section, keeping the serial number exactly as written.
    2. Otherwise, ``accused [person(s)] <Name>`` mentions, numbered
       sequentially.
    3. Otherwise, a single unidentified sentinel.
    """
    witness_spans = [m.span() for m in WITNESS_SECTION_RE.finditer(text)]

    accused: list[AccusedPerson] = []
    for match in NUMBERED_ENTRY_RE.finditer(text):
        if _inside(match.start(), witness_spans):
            continue
        name = match.group(2).strip()
        details = match.group(3)
        accused.append(
            AccusedPerson(
                serial_no=int(match.group(1)),
                name=name,
                details=details.strip() if details else _ACCUSED_DETAILS_DEFAULT,
                identified=is_identified(name),
            )
        )

    if not accused:
        for index, match in enumerate(GENERAL_ACCUSED_RE.finditer(text), start=1):
            name = match.group(1).strip()
            accused.append(
                AccusedPerson(
                    serial_no=index,
                    name=name,
                    details="General mention",
                    identified=is_identified(name),
                )
            )

    if accused:
        return accused
    return [
        AccusedPerson(
            serial_no=1,
            name=UNKNOWN_ACCUSED,
            details="Not identified",
            identified=False,
        )
    ]


def _inside(position: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= position < end for start, end in spans)


# ---------------------------------------------------------------------------
# Incident
# ---------------------------------------------------------------------------


def extract_incident(text: str) -> Incident:
    fields = apply_field_rules(text, INCIDENT_RULES)
    return Incident(
        **fields,
        type=INCIDENT_TYPES.classify(text),
        summary=summarize_incident(text),
    )


def summarize_incident(text: str) -> str:
    """First sentence mentioning the incident, report or complaint.

    Truncated to 200 characters with an ellipsis appended.
    """
    for sentence in SENTENCE_SPLIT_RE.split(text):
        lowered = sentence.lower()
        if any(keyword in lowered for keyword in SUMMARY_KEYWORDS):
            return sentence.strip()[:SUMMARY_MAX_CHARS] + "..."
    return DEFAULT_INCIDENT_SUMMARY


# ---------------------------------------------------------------------------
# Offences
# ---------------------------------------------------------------------------


def extract_offences(text: str) -> list[OffenceFinding]:
    offences = [
        OffenceFinding(name=spec.name, severity=spec.severity, detected=True)
        for spec in OFFENCES.evaluate(text)
    ]
    if offences:
        return offences
    return [OffenceFinding(name=GENERAL_OFFENCE, severity=Severity.MEDIUM, detected=False)]


# ---------------------------------------------------------------------------
# Evidence and witnesses
# ---------------------------------------------------------------------------


def categorize_evidence(description: str) -> EvidenceCategory:
    return EVIDENCE_CATEGORIES.classify(description) or EvidenceCategory.PHYSICAL


def extract_evidence(text: str) -> EvidenceFindings:
    """Extract evidence sentences and witnesses named in witness sections.

    A sentence matching several evidence patterns is reported once per
    pattern.
    """
    sentences = [s.strip() for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]

    evidence: list[EvidenceItem] = []
    for pattern in EVIDENCE_KEYWORD_PATTERNS:
        for description in sentences:
            if not pattern.search(description):
                continue
            evidence.append(
                EvidenceItem(
                    type=categorize_evidence(description),
                    description=description,
                    collected=True,
                )
            )

    witnesses = extract_witnesses(text)

    if not evidence:
        evidence = [
            EvidenceItem(
                type=EvidenceCategory.PHYSICAL,
                description=PENDING_EVIDENCE,
                collected=False,
            )
        ]
    return EvidenceFindings(evidence=evidence, witnesses=witnesses)


def extract_witnesses(text: str) -> list[WitnessEntry]:
    witnesses: list[WitnessEntry] = []
    for section in WITNESS_SECTION_RE.finditer(text):
        for entry in NUMBERED_ENTRY_RE.finditer(section.group(0)):
            details = entry.group(3)
            witnesses.append(
                WitnessEntry(
                    name=_clean_witness_name(entry.group(2)),
                    details=details.strip() if details else _WITNESS_DETAILS_DEFAULT,
                    statement=_WITNESS_STATEMENT,
                )
            )
    if witnesses:
        return witnesses
    return [
        WitnessEntry(
            name=PENDING_WITNESS,
            details="To be identified",
            statement="Statement pending",
        )
    ]


def _clean_witness_name(raw: str) -> str:
    return re.sub(r"\([^)]*\)", "", raw).strip()
