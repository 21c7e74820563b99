"""Parsing clinical transcripts and consent records from JSON."""

from __future__ import annotations

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Any

from dossierkit.errors import InvalidInputError

_YEAR_RE = re.compile(r"\+?[0-9]+")
_U32_MAX = (1 << 32) - 1


@dataclass
class ClinicalTranscript:
    """A speech-to-text transcript of one clinical encounter."""

    transcript_id: str
    patient_id: str
    date: str
    provider: str
    specialty: str
    content: str
    confidence: float


@dataclass
class ConsentRecord:
    """A patient's consent to processing."""

    consent_id: str
    patient_id: str
    date_given: str
    date_expires: str
    scope: str  # "general", "research", "limited"
    status: str  # "VALID", "EXPIRED", "REVOKED"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number {name}")


def _load(json_str: str, what: str) -> dict[str, Any]:
    try:
        raw = json.loads(json_str, parse_constant=_reject_constant)
    except ValueError as exc:
        raise InvalidInputError(f"Failed to parse {what}: {exc}") from exc
    return raw if isinstance(raw, dict) else {}


def _required_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise InvalidInputError(f"Missing {key}")
    return value


def parse_transcript(json_str: str) -> ClinicalTranscript:
    """Parse a transcript object and derive its deterministic id."""
    raw = _load(json_str, "transcript")
    patient_id = _required_str(raw, "patient_id")
    date = _required_str(raw, "date")
    provider = _required_str(raw, "provider")
    specialty = _required_str(raw, "specialty")
    content = _required_str(raw, "content")

    confidence = raw.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise InvalidInputError("Missing/invalid confidence")

    transcript_id = _short_hash_id("CLINICAL_", f"{patient_id}{date}{content}")

    if not content:
        raise InvalidInputError("Transcript content cannot be empty")

    return ClinicalTranscript(
        transcript_id=transcript_id,
        patient_id=patient_id,
        date=date,
        provider=provider,
        specialty=specialty,
        content=content,
        confidence=float(confidence),
    )


def parse_consent(json_str: str) -> ConsentRecord:
    """Parse a consent object; it expires two years after it was given."""
    raw = _load(json_str, "consent")
    patient_id = _required_str(raw, "patient_id")
    date_given = _required_str(raw, "date_given")
    scope = _required_str(raw, "scope")
    status = raw.get("status")
    if not isinstance(status, str):
        status = "VALID"

    return ConsentRecord(
        consent_id=_short_hash_id("CONSENT_", f"CONSENT_{patient_id}{date_given}"),
        patient_id=patient_id,
        date_given=date_given,
        date_expires=_add_years(date_given, 2),
        scope=scope,
        status=status,
    )


def _short_hash_id(prefix: str, text: str) -> str:
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return f"{prefix}{digest[:8].hex()}"


def _add_years(date: str, years: int) -> str:
    """Add years to a YYYY-MM-DD string; anything else is returned unchanged."""
    parts = date.split("-")
    if len(parts) == 3 and _YEAR_RE.fullmatch(parts[0]):
        year = int(parts[0])
        if year <= _U32_MAX:
            return f"{year + years}-{parts[1]}-{parts[2]}"
    return date