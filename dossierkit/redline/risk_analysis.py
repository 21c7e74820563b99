"""Keyword-based risk assessment of contract clauses."""

from __future__ import annotations

from dossierkit.redline.model import ClauseAnchor, RiskAssessment, SegmentedClause

HIGH_RISK_KEYWORDS = (
    "indemnify",
    "indemnification",
    "perpetual",
    "irrevocable",
    "sole discretion",
    "unrestricted",
    "terminate at will",
    "unlimited liability",
)

MEDIUM_RISK_KEYWORDS = (
    "limit liability",
    "limitation of liability",
    "liability",
    "breach",
    "default",
    "force majeure",
    "governing law",
    "dispute",
    "arbitration",
)


def assess_clause_risk(clause: SegmentedClause, anchor: ClauseAnchor) -> RiskAssessment:
    """Rate a clause HIGH, MEDIUM or LOW by the risk keywords its text contains."""
    text = clause.text.lower()
    matched_high = [kw for kw in HIGH_RISK_KEYWORDS if kw in text]
    matched_medium = [kw for kw in MEDIUM_RISK_KEYWORDS if kw in text]

    if matched_high:
        risk_level = "HIGH"
    elif matched_medium:
        risk_level = "MEDIUM"
    else:
        risk_level = "LOW"

    all_matched = matched_high + matched_medium
    if all_matched:
        advisory = (
            f"Risk level: {risk_level}. Keywords found: {', '.join(all_matched)}. "
            "Recommend legal review."
        )
    else:
        advisory = "No significant risk keywords detected. Standard contract language."

    return RiskAssessment(
        anchor_id=anchor.anchor_id,
        risk_level=risk_level,
        keywords_matched=all_matched,
        advisory=advisory,
        citations=[],
    )