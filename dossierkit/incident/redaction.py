"""Profile-driven redaction of incident evidence text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from dossierkit.errors import InvalidInputError

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")
_SSN_RE = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")
_IP_RE = re.compile(
    r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b"
)
_COMMAND_KEYWORDS = (
    "SELECT",
    "INSERT",
    "UPDATE",
    "DELETE",
    "curl",
    "wget",
    "password",
    "secret",
    "token",
)


class RedactionProfile(str, Enum):
    """How much of the customer-facing text is redacted."""

    BASIC = "BASIC"  # PII only
    STANDARD = "STANDARD"  # PII and network addresses
    STRICT = "STRICT"  # PII, network addresses and command output

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``Basic``."""
        return self.name.capitalize()


def parse_redaction_profile(value: Union[str, RedactionProfile]) -> RedactionProfile:
    """Look up a profile by its wire name (BASIC, STANDARD or STRICT)."""
    try:
        return RedactionProfile(value)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid redaction profile: {value}") from exc


@dataclass(frozen=True)
class RedactionRecord:
    """One span of text that a rule matched."""

    span_start: int
    span_end: int
    original_text: str
    reason: str
    profile_rule: str


def _find(pattern: re.Pattern, text: str, reason: str, rule: str) -> Iterator[RedactionRecord]:
    for match in pattern.finditer(text):
        yield RedactionRecord(
            span_start=match.start(),
            span_end=match.end(),
            original_text=match.group(0),
            reason=reason,
            profile_rule=rule,
        )


def _apply_replacements(text: str, records: list[RedactionRecord]) -> str:
    """Replace recorded spans, walking the records from last to first."""
    result = text
    for record in reversed(records):
        if record.span_start < len(result) and record.span_end <= len(result):
            replacement = f"[REDACTED: {record.reason}]"
            result = result[: record.span_start] + replacement + result[record.span_end :]
    return result


def _redact_pii(text: str) -> tuple[str, list[RedactionRecord]]:
    records = [
        *_find(_EMAIL_RE, text, "Email address", "PII.email"),
        *_find(_PHONE_RE, text, "Phone number", "PII.phone"),
        *_find(_SSN_RE, text, "Social security number", "PII.ssn"),
    ]
    return _apply_replacements(text, records), records


def _redact_system_paths(text: str) -> tuple[str, list[RedactionRecord]]:
    records = list(_find(_IP_RE, text, "Network address", "SYSTEM.ip_address"))
    return _apply_replacements(text, records), records


def _redact_command_outputs(text: str) -> tuple[str, list[RedactionRecord]]:
    records = [
        RedactionRecord(
            span_start=0,
            span_end=0,
            original_text=keyword,
            reason=f"Command output containing {keyword}",
            profile_rule="COMMAND.output",
        )
        for keyword in _COMMAND_KEYWORDS
        if keyword in text
    ]
    return text, records


class RedactionEngine:
    """Applies the rules of one profile and remembers the last redaction."""

    def __init__(self, profile: RedactionProfile) -> None:
        self.profile = profile
        self._records: list[RedactionRecord] = []

    def redact(self, text: str) -> tuple[str, list[RedactionRecord]]:
        """Return the redacted text and the records of what was matched."""
        result, records = _redact_pii(text)

        if self.profile in (RedactionProfile.STANDARD, RedactionProfile.STRICT):
            result, path_records = _redact_system_paths(result)
            records.extend(path_records)

        if self.profile is RedactionProfile.STRICT:
            result, cmd_records = _redact_command_outputs(result)
            records.extend(cmd_records)

        self._records = list(records)
        return result, records

    def records(self) -> list[RedactionRecord]:
        """Records produced by the most recent call to :meth:`redact`."""
        return list(self._records)