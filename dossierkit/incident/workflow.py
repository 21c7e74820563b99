"""The incident pack's staged workflow: parse, build a timeline, render."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from dossierkit.errors import (
    ArtifactMissingError,
    InputSchemaError,
    WorkflowTransitionError,
)
from dossierkit.incident.model import IncidentOsInputV1
from dossierkit.incident.parser import parse_json_log, parse_ndjson_log
from dossierkit.incident.redaction import parse_redaction_profile
from dossierkit.incident.render import render_customer_packet, render_internal_packet
from dossierkit.incident.timeline import build_timeline, render_timeline_csv

_SCHEMA_VERSION = "INCIDENTOS_INPUT_V1"


class IncidentWorkflowStage(str, Enum):
    """Stages an incident workflow passes through, in order."""

    INGESTED = "Ingested"
    ANALYZED = "Analyzed"
    REVIEWED = "Reviewed"
    RENDERABLE = "Renderable"
    EXPORT_READY = "ExportReady"


_ALLOWED_TRANSITIONS = {
    (IncidentWorkflowStage.INGESTED, IncidentWorkflowStage.ANALYZED),
    (IncidentWorkflowStage.ANALYZED, IncidentWorkflowStage.REVIEWED),
    (IncidentWorkflowStage.REVIEWED, IncidentWorkflowStage.RENDERABLE),
    (IncidentWorkflowStage.RENDERABLE, IncidentWorkflowStage.EXPORT_READY),
}


@dataclass(frozen=True)
class IncidentWorkflowState:
    """The current stage together with the validated input."""

    stage: IncidentWorkflowStage
    inputs: IncidentOsInputV1

    @classmethod
    def ingest(cls, inputs: IncidentOsInputV1) -> IncidentWorkflowState:
        """Validate the input and start the workflow in the Ingested stage."""
        if inputs.schema_version != _SCHEMA_VERSION:
            raise InputSchemaError(
                f"expected {_SCHEMA_VERSION}, got {inputs.schema_version}"
            )
        if not inputs.incident_artifacts:
            raise ArtifactMissingError("at least one incident artifact is required")
        return cls(stage=IncidentWorkflowStage.INGESTED, inputs=inputs)

    def transition(self, next_stage: IncidentWorkflowStage) -> IncidentWorkflowState:
        """Return the state moved to the next stage; only single forward steps are allowed."""
        if (self.stage, next_stage) not in _ALLOWED_TRANSITIONS:
            raise WorkflowTransitionError(
                f"invalid transition {self.stage.value} -> {next_stage.value}"
            )
        return replace(self, stage=next_stage)


@dataclass(frozen=True)
class IncidentWorkflowOutput:
    """Everything an incident workflow run produces."""

    stage: IncidentWorkflowStage
    customer_packet: str
    internal_packet: str
    timeline_csv: str
    event_count: int
    high_severity_count: int
    redaction_count: int


def execute_incidentos_workflow(
    inputs: IncidentOsInputV1, log_content: str
) -> IncidentWorkflowOutput:
    """Run the whole incident workflow over one log (JSON array or NDJSON)."""
    state = IncidentWorkflowState.ingest(inputs)

    if log_content.strip().startswith("["):
        events = parse_json_log(log_content)
    else:
        events = parse_ndjson_log(log_content)
    state = state.transition(IncidentWorkflowStage.ANALYZED)

    timeline = build_timeline(state.inputs.incident_artifacts[0].artifact_id, events)
    state = state.transition(IncidentWorkflowStage.REVIEWED)

    profile = parse_redaction_profile(state.inputs.customer_redaction_profile)
    state = state.transition(IncidentWorkflowStage.RENDERABLE)

    customer_packet = render_customer_packet(timeline, profile)
    internal_packet = render_internal_packet(timeline)
    timeline_csv = render_timeline_csv(timeline)
    state = state.transition(IncidentWorkflowStage.EXPORT_READY)

    event_count = len(timeline.events)
    return IncidentWorkflowOutput(
        stage=state.stage,
        customer_packet=customer_packet,
        internal_packet=internal_packet,
        timeline_csv=timeline_csv,
        event_count=event_count,
        high_severity_count=timeline.high_severity_count,
        # Estimate: roughly two redactions per event.
        redaction_count=event_count * 2,
    )