"""Rendering healthcare deliverables and attachments."""

from __future__ import annotations

import json
from typing import Any

from dossierkit.healthcare.consent import ConsentStatus
from dossierkit.healthcare.model import HealthcareOsOutputManifestV1
from dossierkit.healthcare.parser import ClinicalTranscript

_AMBIGUOUS_TERMS = ("possible", "may have", "suspected", "rule out")
_CONFIDENCE_THRESHOLD = 0.95


def output_manifest() -> HealthcareOsOutputManifestV1:
    """Paths of everything the healthcare pack exports."""
    return HealthcareOsOutputManifestV1(
        schema_version="HEALTHCAREOS_OUTPUT_V1",
        deliverable_paths=[
            "exports/healthcareos/deliverables/draft_note.md",
            "exports/healthcareos/deliverables/verification_checklist.md",
        ],
        attachment_paths=[
            "exports/healthcareos/attachments/consent_record.json",
            "exports/healthcareos/attachments/citations_map.json",
            "exports/healthcareos/attachments/uncertainty_map.json",
        ],
    )


def render_draft_note(transcript: ClinicalTranscript, consent_status: ConsentStatus) -> str:
    """Markdown draft note with a citation marker for the transcript."""
    parts = [
        "# Clinical Draft Note\n\n",
        "## Patient Information\n\n",
        f"- **Patient ID:** {transcript.patient_id}\n",
        f"- **Date:** {transcript.date}\n",
        f"- **Provider:** {transcript.provider}\n",
        f"- **Specialty:** {transcript.specialty}\n",
        f"- **Confidence:** {transcript.confidence * 100.0:.0f}%\n\n",
    ]

    if consent_status is ConsentStatus.EXPIRED:
        parts.append(
            "⚠️ **WARNING:** Patient consent has expired. "
            "Request renewal before finalization.\n\n"
        )

    parts += [
        "## Clinical Summary\n\n",
        f"{transcript.content}\n\n",
        f"<!-- CLAIM:C{transcript.transcript_id} ANCHOR:{transcript.transcript_id} -->\n\n",
        "## Verification Status\n\n",
        "- [ ] Demographics verified\n",
        "- [ ] Chief complaint captured\n",
        "- [ ] Assessment accurate\n",
        "- [ ] Plan documented\n\n",
        "---\n\n",
        "*Generated by AIGC Core Phase 7 HealthcareOS Pack*\n",
        "*This draft requires provider review and signature*\n",
    ]
    return "".join(parts)


def render_verification_checklist(transcript: ClinicalTranscript) -> str:
    """Markdown checklist the reviewing provider works through."""
    parts = [
        "# Verification Checklist\n\n",
        f"**Patient:** {transcript.patient_id}\n",
        f"**Date:** {transcript.date}\n",
        f"**Provider:** {transcript.provider}\n\n",
        "## Required Verifications\n\n",
        "### Demographics\n",
        "- [ ] Patient name matches record\n",
        "- [ ] DOB verified\n",
        "- [ ] MRN confirmed\n\n",
        "### Clinical Content\n",
        "- [ ] Chief complaint documented\n",
        "- [ ] History of present illness clear\n",
        "- [ ] Physical exam findings documented\n",
        "- [ ] Assessment reflects clinical thinking\n",
        "- [ ] Plan is actionable\n\n",
        "### Quality Checks\n",
        "- [ ] No protected health info in free text\n",
        "- [ ] Grammar and spelling acceptable\n",
        "- [ ] Medical terminology accurate\n",
        "- [ ] Clinical logic sound\n\n",
        "### Sign-Off\n",
        "- [ ] Provider reviewed draft\n",
        "- [ ] Corrections applied\n",
        "- [ ] Ready for signature\n\n",
    ]
    return "".join(parts)


def render_uncertainty_map(transcript: ClinicalTranscript) -> str:
    """JSON array of low-confidence recognition and ambiguous clinical terms."""
    items: list[dict[str, Any]] = []

    if transcript.confidence < _CONFIDENCE_THRESHOLD:
        items.append(
            {
                "type": "speech_recognition",
                "confidence": transcript.confidence,
                "recommendation": "Verify medical terms against clinical context",
            }
        )

    content = transcript.content.lower()
    items.extend(
        {
            "type": "clinical_uncertainty",
            "term": term,
            "recommendation": "Clarify with provider before finalization",
        }
        for term in _AMBIGUOUS_TERMS
        if term in content
    )

    return json.dumps(items, indent=2, sort_keys=True, ensure_ascii=False)