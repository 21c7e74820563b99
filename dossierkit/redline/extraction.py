"""Extracting text and metadata from contract PDFs."""

from __future__ import annotations

import hashlib

from dossierkit.errors import InvalidInputError
from dossierkit.redline.model import ExtractedContract, PageLayout

_MODE_CONFIDENCE = {"NATIVE_PDF": 0.98, "OCR": 0.85}
_DEFAULT_CONFIDENCE = 0.80
_LETTER_WIDTH_POINTS = 612.0
_LETTER_HEIGHT_POINTS = 792.0


def sha256_hex(data: bytes) -> str:
    """SHA-256 digest of the bytes as lower-case hex."""
    return hashlib.sha256(data).hexdigest()


def extract_contract_text(pdf_bytes: bytes, extraction_mode: str) -> ExtractedContract:
    """Pull the shown text out of a PDF's text objects."""
    if not pdf_bytes:
        raise InvalidInputError("Empty PDF bytes")
    if not pdf_bytes.startswith(b"%PDF"):
        raise InvalidInputError("Invalid PDF format")

    source_hash = sha256_hex(pdf_bytes)
    pdf_text = pdf_bytes.decode("utf-8", errors="replace")

    extracted_text = _extract_text_objects(pdf_text)
    if not extracted_text.strip():
        raise InvalidInputError("No text found in PDF")

    return ExtractedContract(
        artifact_id=f"a_contract_{source_hash[:8]}",
        source_bytes_hash=source_hash,
        extracted_text=extracted_text,
        page_count=max(pdf_text.count("/Type /Page"), 1),
        extraction_confidence=_MODE_CONFIDENCE.get(extraction_mode, _DEFAULT_CONFIDENCE),
        spatial_data=[
            PageLayout(
                page_num=1,
                width_points=_LETTER_WIDTH_POINTS,
                height_points=_LETTER_HEIGHT_POINTS,
            )
        ],
    )


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _extract_text_objects(pdf_text: str) -> str:
    """Collect strings shown with Tj between BT and ET, one line per object."""
    extracted: list[str] = []
    current: list[str] = []
    in_text_object = False

    for line in _lines(pdf_text):
        if "BT" in line:
            in_text_object = True
        elif "ET" in line:
            in_text_object = False
            if current:
                extracted.append("".join(current) + "\n")
                current = []
        elif in_text_object and "Tj" in line:
            start = line.find("(")
            if start != -1:
                end = line.find(")", start + 1)
                if end != -1:
                    current.append(line[start + 1 : end] + " ")

    return "".join(extracted)