"""Input and output descriptors for the healthcare pack."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HealthcareArtifactRef:
    """A reference to one consent or transcript artifact."""

    artifact_id: str
    sha256: str
    artifact_kind: str


@dataclass
class HealthcareOsInputV1:
    """Workflow input for clinical draft-note packs."""

    schema_version: str
    consent_artifacts: list[HealthcareArtifactRef]
    transcript_artifacts: list[HealthcareArtifactRef]
    draft_template_profile: str
    verifier_identity: str


@dataclass
class HealthcareOsOutputManifestV1:
    """Paths of the files a healthcare pack exports."""

    schema_version: str
    deliverable_paths: list[str]
    attachment_paths: list[str]