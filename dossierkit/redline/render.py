"""Rendering redline deliverables."""

from __future__ import annotations

from typing import Iterable, Sequence

from dossierkit.redline.model import (
    RedlineOsOutputManifestV1,
    RiskAssessment,
    SegmentedClause,
)


def output_manifest() -> RedlineOsOutputManifestV1:
    """Paths of everything the redline pack exports."""
    return RedlineOsOutputManifestV1(
        schema_version="REDLINEOS_OUTPUT_V1",
        deliverable_paths=[
            "exports/redlineos/deliverables/risk_memo.md",
            "exports/redlineos/deliverables/clause_map.csv",
            "exports/redlineos/deliverables/redline_suggestions.md",
        ],
        attachment_paths=[
            "exports/redlineos/attachments/citations_map.json",
            "exports/redlineos/attachments/anchor_index.json",
        ],
    )


def _count(assessments: Sequence[RiskAssessment], level: str) -> int:
    return sum(1 for a in assessments if a.risk_level == level)


def render_risk_memo(
    assessments: Iterable[RiskAssessment], clauses: Iterable[SegmentedClause] = ()
) -> str:
    """Markdown memo with one citation marker per assessed clause."""
    assessments = list(assessments)
    parts = [
        "# Risk Assessment Memo\n\n",
        "## Summary\n\n",
        f"- **HIGH Risk Clauses:** {_count(assessments, 'HIGH')}\n",
        f"- **MEDIUM Risk Clauses:** {_count(assessments, 'MEDIUM')}\n",
        f"- **LOW Risk Clauses:** {_count(assessments, 'LOW')}\n\n",
        "## Detailed Findings\n\n",
    ]
    for assessment in assessments:
        parts.append(f"### Clause: {assessment.anchor_id} \n")
        parts.append(f"**Risk Level:** {assessment.risk_level}\n\n")
        parts.append(f"**Advisory:** {assessment.advisory}\n\n")
        parts.append(
            f"<!-- CLAIM:C{assessment.anchor_id} ANCHOR:{assessment.anchor_id} -->\n\n"
        )
    parts.append("---\n\n")
    parts.append("*Generated by AIGC Core Phase 4 RedlineOS Pack*\n")
    parts.append("*Determinism: Enabled (reproducible outputs)*\n")
    return "".join(parts)


def render_clause_map_csv(assessments: Iterable[RiskAssessment]) -> str:
    """CSV of clause, risk level and matched keywords (joined with ';')."""
    rows = [
        f"{a.anchor_id},{a.risk_level},{';'.join(a.keywords_matched)},{a.anchor_id}\n"
        for a in assessments
    ]
    return "clause_id,risk_level,keywords,anchor_id\n" + "".join(rows)


def render_redline_suggestions(assessments: Iterable[RiskAssessment]) -> str:
    """Markdown listing the HIGH-risk clauses that need redlines."""
    high_risk = [a for a in assessments if a.risk_level == "HIGH"]
    parts = ["# Suggested Redlines\n\n"]
    if not high_risk:
        parts.append("No HIGH-risk clauses requiring redlines.\n")
        return "".join(parts)

    parts.append(f"## {len(high_risk)} HIGH-Risk Clauses Requiring Review\n\n")
    for assessment in high_risk:
        parts.append(f"### Clause: {assessment.anchor_id}\n\n")
        parts.append(f"**Issue:** {assessment.advisory}\n\n")
        parts.append(
            "**Recommended Action:** Consult legal counsel for appropriate redlines.\n\n"
        )
    return "".join(parts)