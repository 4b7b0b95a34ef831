"""Exceptions raised by the FIR analysis core.

A pattern that fails to match is *not* an error: extractors fall back
to sentinel values.  Only caller mistakes and a structurally broken
knowledge base raise.
"""

from __future__ import annotations


class InputError(ValueError):
    """The caller-supplied FIR text fails a precondition."""


class KnowledgeBaseError(ValueError):
    """The statute knowledge base is missing required structure."""
