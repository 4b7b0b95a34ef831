"""Report serialisation for download and sharing.

JSON is a structural dump of :class:`AnalysisResult` with camelCase
keys; the text brief is a short human-readable digest of a report.
"""

from __future__ import annotations

import orjson

from src.models.report import AnalysisResult, Report


def export_report_json(result: AnalysisResult) -> bytes:
    """Serialise *result* as indented UTF-8 JSON (Telugu kept verbatim)."""
    return orjson.dumps(
        result.model_dump(mode="json", by_alias=True),
        option=orjson.OPT_INDENT_2,
    )


def export_report_text(report: Report) -> str:
    insights = report.insights
    risk = insights.risk_assessment

    lines = [
        "FIR Analysis Report",
        "",
        insights.summary,
        "",
        f"Risk: {risk.level} ({risk.score}/100)",
    ]
    lines.extend(f"  - {factor}" for factor in risk.factors)

    lines += ["", "Applicable legal sections:"]
    lines.extend(
        f"  - {s.act} Section {s.section}: {s.title} "
        f"[{s.severity}, {s.confidence:.0%}]"
        for s in report.legal_sections
    )

    lines += ["", "Recommendations:"]
    lines.extend(f"  - {r}" for r in insights.recommendations)

    lines += ["", "Next steps:"]
    lines.extend(f"  {i}. {step}" for i, step in enumerate(insights.next_steps, start=1))

    return "\n".join(lines) + "\n"
