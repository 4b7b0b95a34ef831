"""Shared fixtures: the canonical sample FIR and knowledge base helpers."""

from __future__ import annotations

import pytest

from src.pipeline.orchestrator import FIRAnalyzer
from src.services.knowledge_base import KnowledgeBase, load_knowledge_base
from src.services.legal_mapper import LegalMapper

SAMPLE_FIR = """On 14th September 2025, at about 8:15 PM, complainant Rajesh Kumar, S/o Venkat Rao, Age 34, Community: Scheduled Caste, R/o H.No. 12-34, Gandhi Nagar, Hyderabad, Telangana, reported the following incident:

The complainant was returning home from work when he was stopped by three unknown persons near the bus stop. The accused persons, identified as:
1. Ramesh (approximately 25 years old)
2. Suresh (approximately 30 years old)
3. One unknown person

The accused persons started abusing the complainant using caste-based slurs in Telugu saying "నీవు ఎలా ఇక్కడ నడుస్తున్నావు" (How dare you walk here) and other derogatory remarks about his caste. They then forcibly snatched his mobile phone (Samsung Galaxy A54, worth Rs. 25,000) and wallet containing Rs. 3,500 cash and important documents including Aadhaar card.

When the complainant resisted, accused Ramesh hit him with a wooden stick on his left arm causing injury. The complainant also noticed that accused Suresh was carrying what appeared to be a country-made pistol.

Witnesses present at the scene:
1. Lakshmi Devi (vegetable vendor)
2. Auto driver Ravi Kumar

The complainant immediately reported the matter to the local police station. Medical examination was conducted at Government Hospital showing minor injuries on left arm.

Evidence collected:
- CCTV footage from nearby shop
- Medical report
- Witness statements
- Torn shirt of complainant

This incident appears to involve caste-based discrimination, robbery, assault, and illegal possession of arms. Appropriate legal action is requested under relevant sections of BNS 2023, SC/ST Prevention of Atrocities Act, and Arms Act."""

# No offence, evidence or knowledge-base keyword appears in this text.
NEUTRAL_FIR = (
    "On 3rd March 2024 the complainant Meena Devi, W/o Arun Rao, Age 41, "
    "stated that a neighbour parked a tractor across the village road near "
    "the temple and refused to move it for several days."
)


@pytest.fixture(scope="session")
def knowledge_base() -> KnowledgeBase:
    return load_knowledge_base()


@pytest.fixture
def analyzer(knowledge_base: KnowledgeBase) -> FIRAnalyzer:
    return FIRAnalyzer(LegalMapper(knowledge_base))


@pytest.fixture
def sample_fir() -> str:
    return SAMPLE_FIR


@pytest.fixture
def neutral_fir() -> str:
    return NEUTRAL_FIR


def make_knowledge_base(
    keywords: dict[str, list[str]],
    *,
    sections: dict[str, dict[str, str]] | None = None,
    high: list[str] | None = None,
    low: list[str] | None = None,
) -> KnowledgeBase:
    """Build a small synthetic knowledge base with one act, ``test_act``."""
    sections = sections or {
        "1": {"title": "First", "description": "First section"},
        "2": {"title": "Second", "description": "Second section"},
    }
    return KnowledgeBase.from_dict(
        {
            "test_act": {
                "name": "Test Act, 2000",
                "sections": {
                    sid: {**data, "keywords": []} for sid, data in sections.items()
                },
            },
            "keywords_to_sections": keywords,
            "severity_levels": {
                "high": {"sections": high or []},
                "medium": {"sections": []},
                "low": {"sections": low or []},
            },
        }
    )


@pytest.fixture
def make_kb():
    return make_knowledge_base
