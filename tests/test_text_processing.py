"""Tests for preprocessing, language detection, keywords and validation."""

from __future__ import annotations

import pytest

from src.models.enums import LanguageLabel
from src.services.text_processing import (
    detect_language,
    extract_keywords,
    normalize_text,
    validate_fir_text,
)

_TELUGU_WORD = "నీవు"  # 4 Telugu characters


# -----------------------------------------------------------------------
# normalize_text
# -----------------------------------------------------------------------


class TestNormalizeText:
    def test_collapses_whitespace_runs(self) -> None:
        assert normalize_text("a  b\t\tc\n\nd") == "a b c d"

    def test_trims_ends(self) -> None:
        assert normalize_text("  \n hello world \t ") == "hello world"

    def test_whitespace_only_becomes_empty(self) -> None:
        assert normalize_text(" \n\t ") == ""

    def test_telugu_preserved_verbatim(self) -> None:
        text = f"slur   {_TELUGU_WORD}\nhere"
        assert normalize_text(text) == f"slur {_TELUGU_WORD} here", (
            "Telugu characters must pass through without transliteration"
        )

    def test_idempotent(self, sample_fir: str) -> None:
        once = normalize_text(sample_fir)
        assert normalize_text(once) == once


# -----------------------------------------------------------------------
# detect_language
# -----------------------------------------------------------------------


class TestDetectLanguage:
    def test_pure_ascii_is_english(self) -> None:
        assert detect_language("The complainant was robbed near the market.") == LanguageLabel.ENGLISH

    def test_mostly_telugu_is_mixed(self) -> None:
        text = _TELUGU_WORD * 3 + " abc"  # 12 of 16 characters are Telugu
        assert detect_language(text) == LanguageLabel.MIXED_TELUGU

    def test_some_telugu_is_primarily_english(self) -> None:
        text = _TELUGU_WORD + "a" * 36  # 10% Telugu
        assert detect_language(text) == LanguageLabel.PRIMARILY_ENGLISH_WITH_TELUGU

    def test_exactly_twenty_percent_is_not_mixed(self) -> None:
        text = _TELUGU_WORD + "a" * 16  # exactly 20%
        assert detect_language(text) == LanguageLabel.PRIMARILY_ENGLISH_WITH_TELUGU

    def test_exactly_five_percent_is_english(self) -> None:
        text = _TELUGU_WORD + "a" * 76  # exactly 5%
        assert detect_language(text) == LanguageLabel.ENGLISH

    def test_empty_text_is_english(self) -> None:
        assert detect_language("") == LanguageLabel.ENGLISH

    def test_sample_fir_is_english(self, sample_fir: str) -> None:
        assert detect_language(sample_fir) == LanguageLabel.ENGLISH


# -----------------------------------------------------------------------
# extract_keywords
# -----------------------------------------------------------------------


class TestExtractKeywords:
    def test_ranked_by_frequency(self) -> None:
        text = "pistol pistol pistol wallet wallet stick"
        assert extract_keywords(text) == ["pistol", "wallet", "stick"]

    def test_short_words_dropped(self) -> None:
        assert extract_keywords("a an the big red car") == []

    def test_case_insensitive(self) -> None:
        assert extract_keywords("Caste CASTE caste") == ["caste"]

    def test_limit(self) -> None:
        text = " ".join(f"word{i}" for i in range(20))
        assert len(extract_keywords(text, limit=5)) == 5

    def test_ties_keep_first_appearance(self) -> None:
        assert extract_keywords("zebra apple mango") == ["zebra", "apple", "mango"]


# -----------------------------------------------------------------------
# validate_fir_text
# -----------------------------------------------------------------------


class TestValidateFirText:
    def test_sample_is_valid(self, sample_fir: str) -> None:
        result = validate_fir_text(sample_fir, min_length=50)
        assert result.is_valid is True
        assert result.issues == []

    def test_short_text(self) -> None:
        result = validate_fir_text("complainant on 1st May 2024", min_length=100)
        assert result.is_valid is False
        assert result.issues == ["Text too short (minimum 100 characters)"]

    def test_missing_date_and_complainant(self) -> None:
        result = validate_fir_text("x" * 120, min_length=100)
        assert result.issues == ["No date found in text", "No complainant mentioned"]

    @pytest.mark.parametrize("date", ["14th September 2025", "1 May 2024", "22nd June 2023"])
    def test_date_formats(self, date: str) -> None:
        result = validate_fir_text(f"The complainant reported on {date}.", min_length=0)
        assert result.is_valid is True, f"'{date}' should count as a date"
