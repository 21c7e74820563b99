"""Building anchored, hashed incident timelines."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable

from dossierkit.errors import InvalidInputError
from dossierkit.incident.parser import ParsedIncidentEvent
from dossierkit.incident.sanitize import sanitize_untrusted_log

_CSV_HEADER = "timestamp,system,actor,action,resource,severity,anchor_id\n"


@dataclass
class TimelineEvent:
    """A timeline entry carrying a citation anchor."""

    anchor_id: str
    timestamp_iso: str
    timestamp_epoch_ms: int
    source_system: str
    actor: str
    action: str
    affected_resource: str
    evidence_text: str
    severity: str


@dataclass
class IncidentTimeline:
    """All events of one incident with summary counts and a content hash."""

    timeline_id: str
    incident_id: str
    events: list[TimelineEvent]
    total_duration_ms: int
    high_severity_count: int
    medium_severity_count: int
    low_severity_count: int
    timeline_hash: str


def build_timeline(incident_id: str, events: Iterable[ParsedIncidentEvent]) -> IncidentTimeline:
    """Build a timeline from parsed events, keeping their order."""
    events = list(events)
    if not events:
        raise InvalidInputError("Cannot build timeline from empty events")

    total_duration_ms = max(events[-1].timestamp_epoch_ms - events[0].timestamp_epoch_ms, 0)
    severities = [e.severity for e in events]

    timeline_events = []
    hash_parts = []
    for event in events:
        sanitized = sanitize_untrusted_log(event.evidence_text)
        anchor = _timeline_anchor(
            incident_id, event.event_id, sanitized.content, event.timestamp_epoch_ms
        )
        hash_parts.append(f"{anchor}{event.timestamp_epoch_ms}")
        timeline_events.append(
            TimelineEvent(
                anchor_id=anchor,
                timestamp_iso=event.timestamp_iso,
                timestamp_epoch_ms=event.timestamp_epoch_ms,
                source_system=event.source_system,
                actor=event.actor,
                action=event.action,
                affected_resource=event.affected_resource,
                evidence_text=sanitized.content,
                severity=event.severity,
            )
        )

    timeline_hash = hashlib.sha256("".join(hash_parts).encode("utf-8")).hexdigest()

    return IncidentTimeline(
        timeline_id=f"TIMELINE_{incident_id}",
        incident_id=incident_id,
        events=timeline_events,
        total_duration_ms=total_duration_ms,
        high_severity_count=severities.count("HIGH"),
        medium_severity_count=severities.count("MEDIUM"),
        low_severity_count=severities.count("LOW"),
        timeline_hash=timeline_hash,
    )


def _timeline_anchor(incident_id: str, event_id: str, evidence_text: str, timestamp_ms: int) -> str:
    combined = f"{incident_id}{event_id}{evidence_text}{timestamp_ms}"
    digest = hashlib.sha256(combined.encode("utf-8")).digest()
    return f"INCIDENT_{event_id}_{digest[:8].hex()}"


def render_timeline_csv(timeline: IncidentTimeline) -> str:
    """Render the timeline as CSV rows, one per event."""
    rows = [
        ",".join(
            (
                event.timestamp_iso,
                event.source_system,
                event.actor,
                event.action,
                event.affected_resource.replace('"', '""'),
                event.severity,
                event.anchor_id,
            )
        )
        + "\n"
        for event in timeline.events
    ]
    return _CSV_HEADER + "".join(rows)