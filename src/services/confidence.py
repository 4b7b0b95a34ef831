"""Overall analysis confidence from the completeness of extracted fields.

Each populated field contributes a fixed weight and counts as one
factor:

+------------------------------+--------+
| Field                        | Weight |
+------------------------------+--------+
| complainant name             |   20   |
| complainant age              |   10   |
| complainant address          |   15   |
| incident date                |   15   |
| incident location            |   15   |
| at least one identified      |   20   |
| accused                      |        |
| at least one collected       |    5   |
| evidence item                |        |
+------------------------------+--------+

``score / factors * 10`` is clamped to [60, 95] and rounded half up
(92.5 gives 93); with no factors the result is 75.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from src.models.report import (
    NOT_SPECIFIED,
    AccusedPerson,
    Complainant,
    EvidenceFindings,
    Incident,
)

MIN_CONFIDENCE: Final[int] = 60
MAX_CONFIDENCE: Final[int] = 95
DEFAULT_CONFIDENCE: Final[int] = 75


def round_half_up(value: float) -> int:
    """Round a non-negative score to the nearest int, halves upward."""
    return int(value + 0.5)


def calculate_confidence(
    complainant: Complainant,
    incident: Incident,
    accused: Sequence[AccusedPerson],
    evidence: EvidenceFindings,
) -> int:
    weights = (
        (complainant.name != NOT_SPECIFIED, 20),
        (bool(complainant.age), 10),
        (complainant.address != NOT_SPECIFIED, 15),
        (incident.date != NOT_SPECIFIED, 15),
        (incident.location != NOT_SPECIFIED, 15),
        (any(a.identified for a in accused), 20),
        (any(e.collected for e in evidence.evidence), 5),
    )
    contributing = [weight for present, weight in weights if present]
    if not contributing:
        return DEFAULT_CONFIDENCE

    raw = sum(contributing) / len(contributing) * 10
    return round_half_up(min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, raw)))
