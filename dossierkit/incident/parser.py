"""Parsing JSON and NDJSON incident logs into ordered events."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Iterable, Optional

from dossierkit.errors import InvalidInputError

_U64_MASK = (1 << 64) - 1
_HIGH_KEYWORDS = ("critical", "error", "fail", "breach", "attack", "intrusion")
_MEDIUM_KEYWORDS = ("warn", "timeout", "retry", "denied", "rejected")


@dataclass
class RawIncidentEvent:
    """An event as it appears in a log file."""

    timestamp: str
    source_system: str
    actor: str
    action: str
    affected_resource: str
    evidence_text: str


@dataclass(order=True)
class ParsedIncidentEvent:
    """An event with a derived id, numeric timestamp and severity."""

    event_id: str
    timestamp_epoch_ms: int
    timestamp_iso: str
    source_system: str
    actor: str
    action: str
    affected_resource: str
    evidence_text: str
    severity: str


_RAW_FIELDS = tuple(f.name for f in fields(RawIncidentEvent))


def _raw_event_from(obj: Any) -> RawIncidentEvent:
    if not isinstance(obj, dict):
        raise ValueError("expected a JSON object")
    values = {}
    for name in _RAW_FIELDS:
        if name not in obj:
            raise ValueError(f"missing field `{name}`")
        value = obj[name]
        if not isinstance(value, str):
            raise ValueError(f"field `{name}` must be a string")
        values[name] = value
    return RawIncidentEvent(**values)


def parse_json_log(json_str: str) -> list[ParsedIncidentEvent]:
    """Parse a JSON array of events."""
    try:
        data = json.loads(json_str)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        raw_events = [_raw_event_from(item) for item in data]
    except ValueError as exc:
        raise InvalidInputError(f"Failed to parse JSON log: {exc}") from exc
    return _parse_raw_events(raw_events)


def parse_ndjson_log(ndjson_str: str) -> list[ParsedIncidentEvent]:
    """Parse newline-delimited JSON, one event per non-blank line."""
    raw_events = []
    for line_num, line in enumerate(ndjson_str.split("\n"), start=1):
        trimmed = line.strip()
        if not trimmed:
            continue
        try:
            raw_events.append(_raw_event_from(json.loads(trimmed)))
        except ValueError as exc:
            raise InvalidInputError(f"Failed to parse NDJSON line {line_num}: {exc}") from exc
    return _parse_raw_events(raw_events)


def _parse_raw_events(raw_events: Iterable[RawIncidentEvent]) -> list[ParsedIncidentEvent]:
    events = []
    for idx, raw in enumerate(raw_events):
        epoch_ms = _timestamp_to_epoch_ms(raw.timestamp)
        if epoch_ms is None:
            epoch_ms = idx * 1000
        length_mix = len(raw.action.encode("utf-8")) ^ len(raw.source_system.encode("utf-8"))
        event_id = "INCIDENT_{:08x}_{:04x}_{:04x}".format(
            (epoch_ms ^ idx) & 0xFFFFFFFF,
            idx & 0xFFFF,
            length_mix & 0xFFFF,
        )
        events.append(
            ParsedIncidentEvent(
                event_id=event_id,
                timestamp_epoch_ms=epoch_ms,
                timestamp_iso=raw.timestamp,
                source_system=raw.source_system,
                actor=raw.actor,
                action=raw.action,
                affected_resource=raw.affected_resource,
                evidence_text=raw.evidence_text,
                severity=_infer_severity(raw.action, raw.evidence_text),
            )
        )

    events.sort(key=lambda e: e.timestamp_epoch_ms)
    if not events:
        raise InvalidInputError("No valid events found in incident log")
    return events


def _timestamp_to_epoch_ms(timestamp: str) -> Optional[int]:
    """Fold the ASCII digits of a timestamp into one deterministic number."""
    value = 0
    for ch in timestamp.strip():
        if "0" <= ch <= "9":
            value = (value * 10 + ord(ch) - ord("0")) & _U64_MASK
    return value or None


def _infer_severity(action: str, evidence: str) -> str:
    text = f"{action.lower()} {evidence.lower()}"
    if any(kw in text for kw in _HIGH_KEYWORDS):
        return "HIGH"
    if any(kw in text for kw in _MEDIUM_KEYWORDS):
        return "MEDIUM"
    return "LOW"