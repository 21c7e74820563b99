import json

import pytest

from dossierkit.errors import (
    ArtifactMissingError,
    InputSchemaError,
    InvalidInputError,
    WorkflowTransitionError,
)
from dossierkit.healthcare.model import HealthcareArtifactRef, HealthcareOsInputV1
from dossierkit.healthcare.workflow import (
    HealthcareWorkflowStage,
    HealthcareWorkflowState,
    execute_healthcareos_workflow,
)

TRANSCRIPT = json.dumps(
    {
        "patient_id": "PT-2026-001",
        "date": "2026-02-12",
        "provider": "Dr. Smith",
        "specialty": "Cardiology",
        "content": (
            "Patient with chest pain. Possible myocardial infarction. "
            "EKG shows ST elevation. Recommend troponin levels."
        ),
        "confidence": 0.96,
    }
)


def _consent(date_given="2024-06-12", status="VALID", patient_id="PT-2026-001"):
    return json.dumps(
        {
            "patient_id": patient_id,
            "date_given": date_given,
            "scope": "general",
            "status": status,
        }
    )


def _inputs(consent_artifacts=True, transcript_artifacts=True, schema="HEALTHCAREOS_INPUT_V1"):
    return HealthcareOsInputV1(
        schema_version=schema,
        consent_artifacts=(
            [HealthcareArtifactRef("consent_001", "def456", "consent")] if consent_artifacts else []
        ),
        transcript_artifacts=(
            [HealthcareArtifactRef("tx_001", "abc123", "transcript")] if transcript_artifacts else []
        ),
        draft_template_profile="standard",
        verifier_identity="Dr. Reviewer",
    )


def test_full_workflow_execution():
    output = execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent())
    assert output.stage is HealthcareWorkflowStage.EXPORT_READY
    assert "Draft Note" in output.draft_note
    assert "Verification" in output.verification_checklist
    assert "Valid" in output.consent_status
    assert output.consent_warning is None


def test_workflow_missing_consent_artifacts_blocks():
    with pytest.raises(ArtifactMissingError):
        execute_healthcareos_workflow(_inputs(consent_artifacts=False), TRANSCRIPT, None)


def test_workflow_missing_transcript_artifacts_blocks():
    with pytest.raises(ArtifactMissingError):
        execute_healthcareos_workflow(_inputs(transcript_artifacts=False), TRANSCRIPT, _consent())


def test_workflow_missing_consent_content_blocks():
    with pytest.raises(InvalidInputError, match="No consent record"):
        execute_healthcareos_workflow(_inputs(), TRANSCRIPT, None)


def test_workflow_revoked_consent_blocks():
    with pytest.raises(InvalidInputError, match="revoked"):
        execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent(status="REVOKED"))


def test_workflow_expired_consent_warns():
    output = execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent(date_given="2024-01-01"))
    assert output.consent_status == "Expired"
    assert output.consent_warning is not None
    assert "expired" in output.consent_warning
    assert "WARNING" in output.draft_note


def test_workflow_patient_mismatch_raises():
    with pytest.raises(InvalidInputError, match="does not match"):
        execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent(patient_id="PT-OTHER"))


def test_workflow_invalid_schema():
    with pytest.raises(InputSchemaError):
        execute_healthcareos_workflow(_inputs(schema="INVALID_V1"), TRANSCRIPT, _consent())


def test_workflow_citation_enforcement():
    output = execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent())
    assert "<!-- CLAIM:C" in output.draft_note


def test_workflow_uncertainty_map_flags_possible():
    output = execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent())
    items = json.loads(output.uncertainty_map)
    assert [item["term"] for item in items] == ["possible"]


def test_workflow_is_deterministic():
    first = execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent())
    second = execute_healthcareos_workflow(_inputs(), TRANSCRIPT, _consent())
    assert first == second


def test_workflow_state_transitions():
    state = HealthcareWorkflowState.ingest(_inputs())
    assert state.stage is HealthcareWorkflowStage.INGESTED

    for stage in (
        HealthcareWorkflowStage.ANALYZED,
        HealthcareWorkflowStage.REVIEWED,
        HealthcareWorkflowStage.RENDERABLE,
        HealthcareWorkflowStage.EXPORT_READY,
    ):
        state = state.transition(stage)
        assert state.stage is stage

    with pytest.raises(WorkflowTransitionError, match="ExportReady -> Ingested"):
        state.transition(HealthcareWorkflowStage.INGESTED)


def test_skipping_a_stage_is_rejected():
    state = HealthcareWorkflowState.ingest(_inputs())
    with pytest.raises(WorkflowTransitionError):
        state.transition(HealthcareWorkflowStage.REVIEWED)