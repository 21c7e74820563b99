"""Data structures for the contract redline pack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ContractArtifactRef:
    """A reference to one contract document."""

    artifact_id: str
    sha256: str
    filename: str


@dataclass
class RedlineOsInputV1:
    """Workflow input for contract review packs."""

    schema_version: str
    contract_artifacts: list[ContractArtifactRef]
    extraction_mode: str
    review_profile: str
    jurisdiction_hint: Optional[str] = field(default=None, kw_only=True)


@dataclass
class RedlineOsOutputManifestV1:
    """Paths of the files a redline pack exports."""

    schema_version: str
    deliverable_paths: list[str]
    attachment_paths: list[str]


@dataclass
class TextBlock:
    """A positioned run of text on a page."""

    text: str
    x: float
    y: float
    width: float
    height: float
    font_size: Optional[float] = None
    is_bold: bool = False
    is_heading: bool = False


@dataclass
class PageLayout:
    """Dimensions and text blocks of one page."""

    page_num: int
    width_points: float
    height_points: float
    text_blocks: list[TextBlock] = field(default_factory=list)


@dataclass
class ExtractedContract:
    """Text and metadata extracted from a contract document."""

    artifact_id: str
    source_bytes_hash: str
    extracted_text: str
    page_count: int
    extraction_confidence: float
    spatial_data: Optional[list[PageLayout]] = None


@dataclass
class SegmentedClause:
    """One clause cut out of the extracted contract text."""

    clause_id: str
    clause_number: Optional[str]
    title: Optional[str]
    text: str
    start_page: int
    start_char_offset: int
    end_char_offset: int
    confidence: float


@dataclass
class ClauseAnchor:
    """A stable, hash-derived citation anchor for a clause."""

    anchor_id: str
    clause_id: str
    text_hash: str
    page_hint: Optional[int]
    char_offset_range: tuple[int, int]


@dataclass
class CitationMarker:
    """Links a claim in a deliverable to a span of the source."""

    claim_id: str
    anchor_id: str
    locator_span: tuple[int, int]


@dataclass
class RiskAssessment:
    """The risk level and advisory derived for one clause."""

    anchor_id: str
    risk_level: str
    keywords_matched: list[str]
    advisory: str
    citations: list[CitationMarker] = field(default_factory=list)