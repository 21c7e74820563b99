from dataclasses import asdict

from dossierkit.redline.model import (
    CitationMarker,
    ClauseAnchor,
    ContractArtifactRef,
    ExtractedContract,
    PageLayout,
    RedlineOsInputV1,
    RedlineOsOutputManifestV1,
    RiskAssessment,
    SegmentedClause,
    TextBlock,
)


def test_artifact_ref_equality():
    a = ContractArtifactRef("c1", "abc123", "test.pdf")
    b = ContractArtifactRef("c1", "abc123", "test.pdf")
    c = ContractArtifactRef("c1", "abc123", "other.pdf")
    assert a == b
    assert (a == c) is False


def test_input_jurisdiction_hint_defaults_to_none():
    inputs = RedlineOsInputV1(
        schema_version="REDLINEOS_INPUT_V1",
        contract_artifacts=[],
        extraction_mode="NATIVE_PDF",
        review_profile="default",
    )
    assert inputs.jurisdiction_hint is None
    hinted = RedlineOsInputV1(
        "REDLINEOS_INPUT_V1", [], "NATIVE_PDF", "default", jurisdiction_hint="US-CA"
    )
    assert hinted.jurisdiction_hint == "US-CA"


def test_output_manifest_roundtrip():
    manifest = RedlineOsOutputManifestV1("REDLINEOS_OUTPUT_V1", ["a.md"], ["b.json"])
    assert RedlineOsOutputManifestV1(**asdict(manifest)) == manifest


def test_text_block_defaults():
    block = TextBlock("Heading", 1.0, 2.0, 3.0, 4.0)
    assert block.font_size is None
    assert block.is_bold is False
    assert block.is_heading is False


def test_page_layout_blocks_are_independent():
    first = PageLayout(1, 612.0, 792.0)
    second = PageLayout(2, 612.0, 792.0)
    first.text_blocks.append(TextBlock("x", 0.0, 0.0, 1.0, 1.0))
    assert second.text_blocks == []
    assert len(first.text_blocks) == 1


def test_extracted_contract_spatial_data_default():
    contract = ExtractedContract("a_contract_1", "hash", "text", 1, 0.98)
    assert contract.spatial_data is None
    assert contract.page_count == 1


def test_clause_anchor_asdict_preserves_range():
    anchor = ClauseAnchor("REDLINE_c1_abcd_3", "c1_C0", "abcd", 0, (3, 9))
    data = asdict(anchor)
    assert data["char_offset_range"] == (3, 9)
    assert ClauseAnchor(**data) == anchor


def test_segmented_clause_roundtrip():
    clause = SegmentedClause("c1_C0", "1.0", None, "Text", 0, 0, 4, 0.85)
    assert SegmentedClause(**asdict(clause)) == clause
    assert clause.title is None


def test_risk_assessment_citations():
    default = RiskAssessment("REDLINE_x", "LOW", [], "advice")
    assert default.citations == []
    marker = CitationMarker("CREDLINE_x", "REDLINE_x", (0, 10))
    cited = RiskAssessment("REDLINE_x", "HIGH", ["indemnify"], "advice", [marker])
    assert asdict(cited)["citations"][0]["anchor_id"] == "REDLINE_x"
    assert default.citations == []