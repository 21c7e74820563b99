"""Rendering incident deliverables and attachments."""

from __future__ import annotations

import json
from typing import Any

from dossierkit.incident.model import IncidentOsOutputManifestV1
from dossierkit.incident.redaction import RedactionEngine, RedactionProfile
from dossierkit.incident.timeline import IncidentTimeline, TimelineEvent


def output_manifest() -> IncidentOsOutputManifestV1:
    """Paths of everything the incident pack exports."""
    return IncidentOsOutputManifestV1(
        schema_version="INCIDENTOS_OUTPUT_V1",
        deliverable_paths=[
            "exports/incidentos/deliverables/customer_packet.md",
            "exports/incidentos/deliverables/internal_packet.md",
            "exports/incidentos/deliverables/timeline.csv",
        ],
        attachment_paths=[
            "exports/incidentos/attachments/redactions_map.json",
            "exports/incidentos/attachments/citations_map.json",
        ],
    )


def _to_json(items: list[dict[str, Any]]) -> str:
    return json.dumps(items, indent=2, sort_keys=True, ensure_ascii=False)


def _claim_marker(event: TimelineEvent) -> str:
    return f"<!-- CLAIM:C{event.anchor_id} ANCHOR:{event.anchor_id} -->\n\n"


def _event_header(event: TimelineEvent) -> str:
    return (
        f"**{event.timestamp_iso}** | {event.source_system} | {event.severity}\n"
        f"{event.actor} → {event.action}\n"
        f"Resource: {event.affected_resource}\n"
    )


def render_customer_packet(
    timeline: IncidentTimeline, redaction_profile: RedactionProfile
) -> str:
    """Customer-facing Markdown with evidence text redacted per profile."""
    parts = [
        "# Incident Timeline - Customer Summary\n\n",
        "## Overview\n\n",
        f"- **Total Events:** {len(timeline.events)}\n",
        f"- **Timeline Duration:** {timeline.total_duration_ms // 1000}s\n",
        f"- **Severity Summary:** {timeline.high_severity_count} HIGH, "
        f"{timeline.medium_severity_count} MEDIUM, {timeline.low_severity_count} LOW\n",
        f"- **Redaction Profile:** {redaction_profile.label}\n\n",
        "## Redacted Timeline\n\n",
    ]
    for event in timeline.events:
        redacted, _ = RedactionEngine(redaction_profile).redact(event.evidence_text)
        parts.append(_event_header(event))
        parts.append(f"{redacted}\n\n")
        parts.append(_claim_marker(event))

    parts.append("---\n\n")
    parts.append("*Generated by AIGC Core Phase 5 IncidentOS Pack*\n")
    parts.append("*This customer packet has redactions applied per profile*\n")
    return "".join(parts)


def render_internal_packet(timeline: IncidentTimeline) -> str:
    """Internal Markdown with the complete, unredacted evidence."""
    parts = [
        "# Incident Timeline - Internal Analysis\n\n",
        "## Overview\n\n",
        f"- **Total Events:** {len(timeline.events)}\n",
        f"- **Timeline Duration:** {timeline.total_duration_ms // 1000}s\n",
        f"- **Severity Breakdown:** {timeline.high_severity_count} HIGH, "
        f"{timeline.medium_severity_count} MEDIUM, {timeline.low_severity_count} LOW\n",
        f"- **Timeline Hash:** {timeline.timeline_hash}\n\n",
        "## Complete Timeline with Citations\n\n",
    ]
    for event in timeline.events:
        parts.append(_event_header(event))
        parts.append(f"Evidence: {event.evidence_text}\n")
        parts.append(_claim_marker(event))

    parts.append("---\n\n")
    parts.append("*Generated by AIGC Core Phase 5 IncidentOS Pack*\n")
    parts.append("*This internal packet contains full unredacted details*\n")
    return "".join(parts)


def render_redactions_map(
    timeline: IncidentTimeline, redaction_profile: RedactionProfile
) -> str:
    """JSON array describing every redaction applied to the timeline."""
    redactions = [
        {
            "event_id": event.anchor_id,
            "timestamp": event.timestamp_iso,
            "original_text": record.original_text,
            "reason": record.reason,
            "profile_rule": record.profile_rule,
        }
        for event in timeline.events
        for record in RedactionEngine(redaction_profile).redact(event.evidence_text)[1]
    ]
    return _to_json(redactions)


def render_citations_map(timeline: IncidentTimeline) -> str:
    """JSON array with one citation per timeline event."""
    citations = [
        {
            "claim_id": f"C{event.anchor_id}",
            "anchor_id": event.anchor_id,
            "timestamp": event.timestamp_iso,
            "system": event.source_system,
            "action": event.action,
        }
        for event in timeline.events
    ]
    return _to_json(citations)