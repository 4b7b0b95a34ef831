"""DHARMA analysis core -- knowledge base, pattern library, extractors,
legal mapper, insights and confidence scoring.

Everything here is pure and synchronous; the only shared state is the
immutable :class:`KnowledgeBase`.
"""

from __future__ import annotations

from src.services.errors import InputError, KnowledgeBaseError
from src.services.knowledge_base import KnowledgeBase, load_knowledge_base
from src.services.legal_mapper import LegalMapper

__all__ = [
    "InputError",
    "KnowledgeBase",
    "KnowledgeBaseError",
    "LegalMapper",
    "load_knowledge_base",
]
