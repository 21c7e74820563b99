"""Segmenting contract text into clauses and deriving stable anchors."""

from __future__ import annotations

import hashlib
import re
from typing import Iterable

from dossierkit.redline.model import ClauseAnchor, SegmentedClause

_CLAUSE_RE = re.compile(r"^(\d+(?:\.\d+)*)\s+([^\n]+)", re.MULTILINE)
_FALLBACK_CONFIDENCE = 0.7
_CLAUSE_CONFIDENCE = 0.85


def sha256_hex(data: bytes) -> str:
    """SHA-256 digest of the bytes as lower-case hex."""
    return hashlib.sha256(data).hexdigest()


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def segment_clauses(extracted_text: str, contract_id: str) -> list[SegmentedClause]:
    """Split text at numbered lines (1.1, 2.0, ...); offsets are UTF-8 byte offsets.

    Text without numbered lines becomes a single clause; blank text yields none.
    """
    if not extracted_text.strip():
        return []

    starts = [match.start() for match in _CLAUSE_RE.finditer(extracted_text)]
    ends = starts[1:] + [len(extracted_text)]

    clauses: list[SegmentedClause] = []
    for start, end in zip(starts, ends):
        clause_text = extracted_text[start:end].strip()
        if not clause_text:
            continue
        byte_start = _utf8_len(extracted_text[:start])
        index = len(clauses)
        clauses.append(
            SegmentedClause(
                clause_id=f"{contract_id}_C{index}",
                clause_number=f"{index + 1}.0",
                title=None,
                text=clause_text,
                start_page=0,
                start_char_offset=byte_start,
                end_char_offset=byte_start + _utf8_len(clause_text),
                confidence=_CLAUSE_CONFIDENCE,
            )
        )

    if not clauses:
        clauses.append(
            SegmentedClause(
                clause_id=f"{contract_id}_C0",
                clause_number="1.0",
                title="General Terms",
                text=extracted_text,
                start_page=0,
                start_char_offset=0,
                end_char_offset=_utf8_len(extracted_text),
                confidence=_FALLBACK_CONFIDENCE,
            )
        )

    return clauses


def generate_anchors(
    clauses: Iterable[SegmentedClause], contract_id: str
) -> list[ClauseAnchor]:
    """Anchors of the form REDLINE_<contract>_<hash8>_<offset>, one per clause."""
    anchors = []
    for clause in clauses:
        text_hash = sha256_hex(clause.text.encode("utf-8"))
        anchors.append(
            ClauseAnchor(
                anchor_id=f"REDLINE_{contract_id}_{text_hash[:8]}_{clause.start_char_offset}",
                clause_id=clause.clause_id,
                text_hash=text_hash,
                page_hint=clause.start_page,
                char_offset_range=(clause.start_char_offset, clause.end_char_offset),
            )
        )
    return anchors


def stable_clause_anchor(clause_text: str) -> str:
    """Anchor that ignores differences in whitespace."""
    normalized = " ".join(clause_text.split())
    return f"clause_{sha256_hex(normalized.encode('utf-8'))[:16]}"