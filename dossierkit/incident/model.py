"""Input and output descriptors for the incident pack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class IncidentArtifactRef:
    """A reference to one incident log artifact."""

    artifact_id: str
    sha256: str
    source_type: str


@dataclass
class IncidentOsInputV1:
    """Workflow input for incident timeline packs."""

    schema_version: str
    incident_artifacts: list[IncidentArtifactRef]
    customer_redaction_profile: str
    timeline_start_hint: Optional[str] = field(default=None, kw_only=True)
    timeline_end_hint: Optional[str] = field(default=None, kw_only=True)


@dataclass
class IncidentOsOutputManifestV1:
    """Paths of the files an incident pack exports."""

    schema_version: str
    deliverable_paths: list[str]
    attachment_paths: list[str]