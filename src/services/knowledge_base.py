"""Statute knowledge base: acts, sections, keyword index, severities.

The bundled ``legal_sections.json`` is shaped as::

    {
      "<act_id>": {"name": ..., "sections": {"<section_id>": {
          "title": ..., "description": ..., "keywords": [...]}}},
      "keywords_to_sections": {"<keyword>": ["<act_id>.<section_id>", ...]},
      "severity_levels": {"high": {"sections": [...]}, "medium": ..., "low": ...}
    }

:func:`load_knowledge_base` parses it once at startup into an immutable
:class:`KnowledgeBase` that is injected into the legal mapper and can
be shared by concurrent analyses without locking.  Declaration order of
``keywords_to_sections`` is preserved because the mapper's
first-occurrence de-duplication depends on it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

import structlog

from src.models.enums import Severity
from src.services.errors import KnowledgeBaseError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_DATA_DIR: Final[Path] = Path(__file__).resolve().parent.parent / "data"
DEFAULT_KNOWLEDGE_BASE_PATH: Final[Path] = _DATA_DIR / "legal_sections.json"

_KEYWORD_INDEX_KEY: Final[str] = "keywords_to_sections"
_SEVERITY_KEY: Final[str] = "severity_levels"
_RESERVED_KEYS: Final[frozenset[str]] = frozenset({_KEYWORD_INDEX_KEY, _SEVERITY_KEY})


# =====================================================================
# Data classes
# =====================================================================


@dataclass(frozen=True, slots=True)
class StatuteSection:
    """One section of an act, with the keywords that describe it."""

    act_id: str
    section_id: str
    title: str
    description: str
    keywords: tuple[str, ...] = ()

    @property
    def reference(self) -> str:
        return f"{self.act_id}.{self.section_id}"


@dataclass(frozen=True, slots=True)
class Act:
    act_id: str
    name: str
    sections: Mapping[str, StatuteSection] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True, slots=True)
class KnowledgeBase:
    """Immutable statute knowledge base.

    ``keyword_index`` is an ordered tuple of ``(keyword, refs)`` pairs so
    iteration order always matches the source declaration order.
    """

    acts: Mapping[str, Act]
    keyword_index: tuple[tuple[str, tuple[str, ...]], ...]
    severity_levels: Mapping[Severity, frozenset[str]]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KnowledgeBase:
        """Build a knowledge base from the parsed JSON structure.

        Raises
        ------
        KnowledgeBaseError
            If the keyword index is missing, an act entry is not
            shaped as ``{"name": ..., "sections": {...}}``, or a severity
            level is not ``{"sections": [...]}``.
        """
        if not isinstance(data, Mapping):
            raise KnowledgeBaseError("Knowledge base root must be an object")

        raw_index = data.get(_KEYWORD_INDEX_KEY)
        if not isinstance(raw_index, Mapping):
            raise KnowledgeBaseError(
                f"Knowledge base is missing the '{_KEYWORD_INDEX_KEY}' mapping"
            )

        acts: dict[str, Act] = {}
        for act_id, act_data in data.items():
            if act_id in _RESERVED_KEYS:
                continue
            acts[act_id] = _parse_act(act_id, act_data)

        keyword_index = tuple(
            (str(keyword), tuple(str(ref) for ref in refs))
            for keyword, refs in raw_index.items()
        )

        severity_levels = _parse_severity_levels(data.get(_SEVERITY_KEY))

        return cls(
            acts=MappingProxyType(acts),
            keyword_index=keyword_index,
            severity_levels=MappingProxyType(severity_levels),
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def resolve(self, reference: str) -> tuple[Act, StatuteSection] | None:
        """Resolve ``"<act_id>.<section_id>"`` to its act and section.

        Returns ``None`` when either part is unknown.
        """
        act_id, _, section_id = reference.partition(".")
        act = self.acts.get(act_id)
        if act is None:
            return None
        section = act.sections.get(section_id)
        if section is None:
            return None
        return act, section

    def get_section(self, act_id: str, section_id: str) -> StatuteSection | None:
        act = self.acts.get(act_id)
        return act.sections.get(section_id) if act is not None else None

    def severity_of(self, reference: str) -> Severity:
        """Severity of a section reference; unlisted references are medium."""
        for level in (Severity.HIGH, Severity.MEDIUM, Severity.LOW):
            if reference in self.severity_levels.get(level, frozenset()):
                return level
        return Severity.MEDIUM

    @property
    def section_count(self) -> int:
        return sum(len(act.sections) for act in self.acts.values())

    def to_dict(self) -> dict[str, Any]:
        """Dump back to the JSON shape this knowledge base was loaded from."""
        data: dict[str, Any] = {
            act.act_id: {
                "name": act.name,
                "sections": {
                    section.section_id: {
                        "title": section.title,
                        "description": section.description,
                        "keywords": list(section.keywords),
                    }
                    for section in act.sections.values()
                },
            }
            for act in self.acts.values()
        }
        data[_KEYWORD_INDEX_KEY] = {kw: list(refs) for kw, refs in self.keyword_index}
        data[_SEVERITY_KEY] = {
            level.value: {"sections": sorted(self.severity_levels.get(level, ()))}
            for level in Severity
        }
        return data


def _parse_act(act_id: str, act_data: Any) -> Act:
    if not isinstance(act_data, Mapping):
        raise KnowledgeBaseError(f"Act '{act_id}' must be an object")
    name = act_data.get("name")
    sections = act_data.get("sections")
    if not isinstance(name, str) or not isinstance(sections, Mapping):
        raise KnowledgeBaseError(f"Act '{act_id}' needs a 'name' and a 'sections' object")

    parsed: dict[str, StatuteSection] = {}
    for section_id, section_data in sections.items():
        if not isinstance(section_data, Mapping):
            raise KnowledgeBaseError(f"Section '{act_id}.{section_id}' must be an object")
        parsed[section_id] = StatuteSection(
            act_id=act_id,
            section_id=section_id,
            title=section_data.get("title", ""),
            description=section_data.get("description", ""),
            keywords=tuple(section_data.get("keywords", [])),
        )
    return Act(act_id=act_id, name=name, sections=MappingProxyType(parsed))


def _parse_severity_levels(raw: Any) -> dict[Severity, frozenset[str]]:
    if raw is None:
        logger.warning("knowledge_base.severity_levels_missing")
        raw = {}
    if not isinstance(raw, Mapping):
        raise KnowledgeBaseError(f"'{_SEVERITY_KEY}' must be an object")

    levels: dict[Severity, frozenset[str]] = {}
    for level in Severity:
        entry = raw.get(level.value, {})
        sections = entry.get("sections", []) if isinstance(entry, Mapping) else None
        if not isinstance(sections, list):
            raise KnowledgeBaseError(
                f"Severity level '{level.value}' must be an object with a 'sections' list"
            )
        levels[level] = frozenset(str(ref) for ref in sections)
    return levels


# =====================================================================
# Loading
# =====================================================================


def load_knowledge_base(path: Path | None = None) -> KnowledgeBase:
    """Load the statute knowledge base from a JSON file.

    Parameters
    ----------
    path:
        Path to the JSON file.  Defaults to the bundled
        ``legal_sections.json``.

    Raises
    ------
    FileNotFoundError
        If the JSON file does not exist.
    json.JSONDecodeError
        If the JSON is malformed.
    KnowledgeBaseError
        If the JSON does not have the expected structure.
    """
    kb_path = path or DEFAULT_KNOWLEDGE_BASE_PATH
    with kb_path.open(encoding="utf-8") as fh:
        data = json.load(fh)

    kb = KnowledgeBase.from_dict(data)
    logger.info(
        "knowledge_base.loaded",
        path=str(kb_path),
        acts=len(kb.acts),
        sections=kb.section_count,
        keywords=len(kb.keyword_index),
    )
    return kb
