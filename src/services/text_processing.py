"""Text preprocessing helpers for FIR narratives.

Whitespace normalisation, Telugu script-share detection, keyword
ranking and the pre-submission sanity check.  Non-Latin scripts are
passed through verbatim; nothing is transliterated.

All functions are pure and **O(n)** in ``len(text)``.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Final

from src.models.enums import LanguageLabel
from src.models.request import ValidationResult

# ---------------------------------------------------------------------------
# Unicode ranges
# ---------------------------------------------------------------------------

_TELUGU_RE: Final[re.Pattern[str]] = re.compile(r"[\u0C00-\u0C7F]")
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_WORD_RE: Final[re.Pattern[str]] = re.compile(r"\b\w+\b")

# Share of Telugu characters (percent) above which a label applies
_MIXED_THRESHOLD: Final[float] = 20.0
_PARTIAL_THRESHOLD: Final[float] = 5.0

_DATE_RE: Final[re.Pattern[str]] = re.compile(
    r"\d{1,2}(?:st|nd|rd|th)?\s+[A-Za-z]+\s+\d{4}"
)
_COMPLAINANT_RE: Final[re.Pattern[str]] = re.compile(r"complainant", re.IGNORECASE)

_STOP_WORDS: Final[frozenset[str]] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to",
    "for", "of", "with", "by",
})


def normalize_text(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends.

    Idempotent: ``normalize_text(normalize_text(t)) == normalize_text(t)``.
    """
    return _WHITESPACE_RE.sub(" ", text).strip()


def detect_language(text: str) -> LanguageLabel:
    """Classify *text* by the share of characters in the Telugu block."""
    if not text:
        return LanguageLabel.ENGLISH

    telugu_chars = len(_TELUGU_RE.findall(text))
    telugu_percentage = telugu_chars * 100 / len(text)

    if telugu_percentage > _MIXED_THRESHOLD:
        return LanguageLabel.MIXED_TELUGU
    if telugu_percentage > _PARTIAL_THRESHOLD:
        return LanguageLabel.PRIMARILY_ENGLISH_WITH_TELUGU
    return LanguageLabel.ENGLISH


def extract_keywords(text: str, limit: int = 10) -> list[str]:
    """Return the *limit* most frequent content words of *text*.

    Words of three characters or fewer and common stop words are
    dropped.  Ties keep first-appearance order.
    """
    words = _WORD_RE.findall(text.lower())
    counts = Counter(w for w in words if len(w) > 3 and w not in _STOP_WORDS)
    # Counter preserves insertion order and most_common() is stable
    return [word for word, _ in counts.most_common(limit)]


def validate_fir_text(text: str, min_length: int) -> ValidationResult:
    """Check that *text* looks like an FIR before it is analysed."""
    issues: list[str] = []
    if len(text) < min_length:
        issues.append(f"Text too short (minimum {min_length} characters)")
    if not _DATE_RE.search(text):
        issues.append("No date found in text")
    if not _COMPLAINANT_RE.search(text):
        issues.append("No complainant mentioned")
    return ValidationResult(is_valid=not issues, issues=issues)
