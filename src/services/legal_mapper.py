"""Map FIR text to statute sections from the knowledge base.

Algorithm
---------
1. Walk the KB keyword index in declaration order.
2. For every keyword occurring (case-insensitively) in the text, resolve
   each of its section references and emit a candidate citation whose
   confidence grows with keyword density::

       min(cap, occurrences / len(text) * 1000 + 0.3)

3. De-duplicate by ``(act, section)`` keeping the first candidate seen.
4. Sort by confidence, highest first (stable, so ties keep KB order).

When nothing matches, a single generic BNS citation is returned.
References the KB cannot resolve are logged and skipped: a partial
mapping is better than none.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

import structlog

from src.models.enums import Severity
from src.models.report import LegalSection
from src.services.knowledge_base import KnowledgeBase

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DEFAULT_CONFIDENCE_CAP: Final[float] = 0.9
_BASE_CONFIDENCE: Final[float] = 0.3
_DENSITY_SCALE: Final[float] = 1000.0

FALLBACK_SECTION: Final[LegalSection] = LegalSection(
    act="Bharatiya Nyaya Sanhita 2023",
    section="223",
    title="General criminal offense",
    description="General provisions for criminal offenses",
    severity=Severity.MEDIUM,
    confidence=0.5,
)


def section_confidence(keyword: str, text: str, cap: float = DEFAULT_CONFIDENCE_CAP) -> float:
    """Confidence that *keyword* makes its sections applicable to *text*."""
    if not text:
        return _BASE_CONFIDENCE
    occurrences = text.lower().count(keyword.lower())
    return min(cap, occurrences / len(text) * _DENSITY_SCALE + _BASE_CONFIDENCE)


def deduplicate_sections(candidates: Iterable[LegalSection]) -> list[LegalSection]:
    """Keep the first citation per ``(act, section)``, then rank by confidence."""
    unique: dict[tuple[str, str], LegalSection] = {}
    for candidate in candidates:
        unique.setdefault((candidate.act, candidate.section), candidate)
    return sorted(unique.values(), key=lambda s: s.confidence, reverse=True)


class LegalMapper:
    """Cross-reference text against an injected :class:`KnowledgeBase`."""

    __slots__ = ("_confidence_cap", "_kb")

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        confidence_cap: float = DEFAULT_CONFIDENCE_CAP,
    ) -> None:
        self._kb = knowledge_base
        self._confidence_cap = confidence_cap

    @property
    def knowledge_base(self) -> KnowledgeBase:
        return self._kb

    def candidates(self, text: str) -> list[LegalSection]:
        """All citations triggered by *text*, in keyword-index order."""
        text_lower = text.lower()
        found: list[LegalSection] = []

        for keyword, references in self._kb.keyword_index:
            if keyword.lower() not in text_lower:
                continue
            confidence = section_confidence(keyword, text, self._confidence_cap)
            for reference in references:
                resolved = self._kb.resolve(reference)
                if resolved is None:
                    logger.warning(
                        "legal_mapper.unresolved_reference",
                        keyword=keyword,
                        reference=reference,
                    )
                    continue
                act, section = resolved
                found.append(
                    LegalSection(
                        act=act.name,
                        section=section.section_id,
                        title=section.title,
                        description=section.description,
                        severity=self._kb.severity_of(reference),
                        confidence=confidence,
                    )
                )
        return found

    def map_sections(self, text: str) -> list[LegalSection]:
        """Ranked, de-duplicated citations; never empty."""
        ranked = deduplicate_sections(self.candidates(text))
        if not ranked:
            return [FALLBACK_SECTION.model_copy()]
        return ranked
