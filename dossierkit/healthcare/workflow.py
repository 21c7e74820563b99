"""The healthcare pack's staged workflow: parse, check consent, render."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from dossierkit.errors import (
    ArtifactMissingError,
    InputSchemaError,
    WorkflowTransitionError,
)
from dossierkit.healthcare.consent import (
    enforce_consent_block,
    get_consent_warning,
    validate_consent,
)
from dossierkit.healthcare.model import HealthcareOsInputV1
from dossierkit.healthcare.parser import parse_consent, parse_transcript
from dossierkit.healthcare.render import (
    render_draft_note,
    render_uncertainty_map,
    render_verification_checklist,
)

_SCHEMA_VERSION = "HEALTHCAREOS_INPUT_V1"


class HealthcareWorkflowStage(str, Enum):
    """Stages a healthcare workflow passes through, in order."""

    INGESTED = "Ingested"
    ANALYZED = "Analyzed"
    REVIEWED = "Reviewed"
    RENDERABLE = "Renderable"
    EXPORT_READY = "ExportReady"


_ALLOWED_TRANSITIONS = {
    (HealthcareWorkflowStage.INGESTED, HealthcareWorkflowStage.ANALYZED),
    (HealthcareWorkflowStage.ANALYZED, HealthcareWorkflowStage.REVIEWED),
    (HealthcareWorkflowStage.REVIEWED, HealthcareWorkflowStage.RENDERABLE),
    (HealthcareWorkflowStage.RENDERABLE, HealthcareWorkflowStage.EXPORT_READY),
}


@dataclass(frozen=True)
class HealthcareWorkflowState:
    """The current stage together with the validated input."""

    stage: HealthcareWorkflowStage
    inputs: HealthcareOsInputV1

    @classmethod
    def ingest(cls, inputs: HealthcareOsInputV1) -> HealthcareWorkflowState:
        """Validate the input and start the workflow in the Ingested stage."""
        if inputs.schema_version != _SCHEMA_VERSION:
            raise InputSchemaError(
                f"expected {_SCHEMA_VERSION}, got {inputs.schema_version}"
            )
        if not inputs.consent_artifacts:
            raise ArtifactMissingError("at least one consent artifact is required")
        if not inputs.transcript_artifacts:
            raise ArtifactMissingError("at least one transcript artifact is required")
        return cls(stage=HealthcareWorkflowStage.INGESTED, inputs=inputs)

    def transition(self, next_stage: HealthcareWorkflowStage) -> HealthcareWorkflowState:
        """Return the state moved to the next stage; only single forward steps are allowed."""
        if (self.stage, next_stage) not in _ALLOWED_TRANSITIONS:
            raise WorkflowTransitionError(
                f"invalid transition {self.stage.value} -> {next_stage.value}"
            )
        return replace(self, stage=next_stage)


@dataclass(frozen=True)
class HealthcareWorkflowOutput:
    """Everything a healthcare workflow run produces."""

    stage: HealthcareWorkflowStage
    draft_note: str
    verification_checklist: str
    uncertainty_map: str
    consent_status: str
    consent_warning: Optional[str]


def execute_healthcareos_workflow(
    inputs: HealthcareOsInputV1,
    transcript_content: str,
    consent_content: Optional[str] = None,
) -> HealthcareWorkflowOutput:
    """Run the whole healthcare workflow; missing or revoked consent raises."""
    state = HealthcareWorkflowState.ingest(inputs)

    transcript = parse_transcript(transcript_content)
    state = state.transition(HealthcareWorkflowStage.ANALYZED)

    consent_record = parse_consent(consent_content) if consent_content is not None else None
    consent_status = validate_consent(consent_record, transcript.patient_id)
    enforce_consent_block(consent_status)
    state = state.transition(HealthcareWorkflowStage.REVIEWED)

    draft_note = render_draft_note(transcript, consent_status)
    verification_checklist = render_verification_checklist(transcript)
    uncertainty_map = render_uncertainty_map(transcript)

    state = state.transition(HealthcareWorkflowStage.RENDERABLE)
    state = state.transition(HealthcareWorkflowStage.EXPORT_READY)

    return HealthcareWorkflowOutput(
        stage=state.stage,
        draft_note=draft_note,
        verification_checklist=verification_checklist,
        uncertainty_map=uncertainty_map,
        consent_status=consent_status.value,
        consent_warning=get_consent_warning(consent_status),
    )