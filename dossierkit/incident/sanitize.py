"""Neutralising untrusted log text before it is rendered."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SanitizedEvidenceText:
    """Log text that is safe to treat as inert evidence."""

    content: str


def sanitize_untrusted_log(raw: str) -> SanitizedEvidenceText:
    """Keep the text as-is except for NUL characters, which are removed."""
    return SanitizedEvidenceText(content=raw.replace("\0", ""))