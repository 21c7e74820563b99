"""The redline pack's staged workflow: extract, segment, assess, render."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from dossierkit.errors import (
    ArtifactMissingError,
    InputSchemaError,
    WorkflowTransitionError,
)
from dossierkit.redline.anchors import generate_anchors, segment_clauses
from dossierkit.redline.extraction import extract_contract_text
from dossierkit.redline.model import RedlineOsInputV1
from dossierkit.redline.render import (
    render_clause_map_csv,
    render_redline_suggestions,
    render_risk_memo,
)
from dossierkit.redline.risk_analysis import assess_clause_risk

_SCHEMA_VERSION = "REDLINEOS_INPUT_V1"


class RedlineWorkflowStage(str, Enum):
    """Stages a redline workflow passes through, in order."""

    INGESTED = "Ingested"
    ANALYZED = "Analyzed"
    REVIEWED = "Reviewed"
    RENDERABLE = "Renderable"
    EXPORT_READY = "ExportReady"


_ALLOWED_TRANSITIONS = {
    (RedlineWorkflowStage.INGESTED, RedlineWorkflowStage.ANALYZED),
    (RedlineWorkflowStage.ANALYZED, RedlineWorkflowStage.REVIEWED),
    (RedlineWorkflowStage.REVIEWED, RedlineWorkflowStage.RENDERABLE),
    (RedlineWorkflowStage.RENDERABLE, RedlineWorkflowStage.EXPORT_READY),
}


@dataclass(frozen=True)
class RedlineWorkflowState:
    """The current stage together with the validated input."""

    stage: RedlineWorkflowStage
    inputs: RedlineOsInputV1

    @classmethod
    def ingest(cls, inputs: RedlineOsInputV1) -> RedlineWorkflowState:
        """Validate the input and start the workflow in the Ingested stage."""
        if inputs.schema_version != _SCHEMA_VERSION:
            raise InputSchemaError(
                f"expected {_SCHEMA_VERSION}, got {inputs.schema_version}"
            )
        if not inputs.contract_artifacts:
            raise ArtifactMissingError("at least one contract artifact is required")
        return cls(stage=RedlineWorkflowStage.INGESTED, inputs=inputs)

    def transition(self, next_stage: RedlineWorkflowStage) -> RedlineWorkflowState:
        """Return the state moved to the next stage; only single forward steps are allowed."""
        if (self.stage, next_stage) not in _ALLOWED_TRANSITIONS:
            raise WorkflowTransitionError(
                f"invalid transition {self.stage.value} -> {next_stage.value}"
            )
        return replace(self, stage=next_stage)


@dataclass(frozen=True)
class RedlineWorkflowOutput:
    """Everything a redline workflow run produces."""

    stage: RedlineWorkflowStage
    risk_memo: str
    clause_map: str
    suggestions: str
    assessment_count: int
    high_risk_count: int
    extraction_confidence: float


def execute_redlineos_workflow(
    inputs: RedlineOsInputV1, contract_bytes: bytes
) -> RedlineWorkflowOutput:
    """Run the whole redline workflow over one contract PDF."""
    state = RedlineWorkflowState.ingest(inputs)

    extracted = extract_contract_text(contract_bytes, state.inputs.extraction_mode)
    state = state.transition(RedlineWorkflowStage.ANALYZED)

    clauses = segment_clauses(extracted.extracted_text, extracted.artifact_id)
    anchors = generate_anchors(clauses, extracted.artifact_id)
    state = state.transition(RedlineWorkflowStage.REVIEWED)

    assessments = [
        assess_clause_risk(clause, anchor) for clause, anchor in zip(clauses, anchors)
    ]
    state = state.transition(RedlineWorkflowStage.RENDERABLE)

    risk_memo = render_risk_memo(assessments, clauses)
    clause_map = render_clause_map_csv(assessments)
    suggestions = render_redline_suggestions(assessments)
    state = state.transition(RedlineWorkflowStage.EXPORT_READY)

    return RedlineWorkflowOutput(
        stage=state.stage,
        risk_memo=risk_memo,
        clause_map=clause_map,
        suggestions=suggestions,
        assessment_count=len(assessments),
        high_risk_count=sum(1 for a in assessments if a.risk_level == "HIGH"),
        extraction_confidence=extracted.extraction_confidence,
    )