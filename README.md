# dossierkit

Deterministic evidence packs built from raw inputs. The same input always
gives the same output, and every deliverable carries citation markers of the
form `<!-- CLAIM:C<anchor> ANCHOR:<anchor> -->`, so each claim can be traced
back to its source. There are three packs:

- **Incident** (`dossierkit.incident`) parses JSON-array or NDJSON incident
  logs into events sorted by timestamp, infers a HIGH/MEDIUM/LOW severity from
  keywords, and builds a timeline with per-event anchors and a SHA-256
  timeline hash. It renders a customer packet with redactions applied, an
  internal packet, a CSV timeline, and JSON redaction and citation maps.
- **Healthcare** (`dossierkit.healthcare`) parses a clinical transcript and a
  consent record and classifies the consent as `Valid`, `Expired`, `Missing`
  or `Revoked`. Missing or revoked consent stops processing with an error;
  expired consent gives a warning. It renders a draft note, a verification
  checklist and a JSON uncertainty map.
- **Redline** (`dossierkit.redline`) extracts the text shown with `Tj` inside
  `BT`/`ET` blocks of a simple PDF, splits it into numbered clauses with
  hash-derived anchors, rates each clause by risk keywords and renders a risk
  memo, a clause map CSV and redline suggestions.

The `dossierkit.policy` package holds the policy enumerations (`PolicyMode`,
`NetworkMode`, `ProofLevel`, `InputExportProfile`), `AllowlistEntry` with
canonicalisation and URL matching, and `NetworkSnapshot` /
`AdapterEndpointSnapshot` with `to_dict()` for serialisation.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Incident timeline

```python
from dossierkit.incident.model import IncidentArtifactRef, IncidentOsInputV1
from dossierkit.incident.workflow import execute_incidentos_workflow

log = (
    '{"timestamp":"2026-02-12T10:15:30Z","source_system":"web","actor":"user@example.com",'
    '"action":"login_attempt","affected_resource":"auth","evidence_text":"User authenticated"}\n'
    '{"timestamp":"2026-02-12T10:15:35Z","source_system":"db","actor":"system",'
    '"action":"critical_error","affected_resource":"users","evidence_text":"System breach detected"}'
)

inputs = IncidentOsInputV1(
    schema_version="INCIDENTOS_INPUT_V1",
    incident_artifacts=[
        IncidentArtifactRef(artifact_id="incident_001", sha256="abc123", source_type="json")
    ],
    customer_redaction_profile="BASIC",
)

output = execute_incidentos_workflow(inputs, log)
print(output.customer_packet)
print(output.timeline_csv)
print(output.event_count, output.high_severity_count)
```

A log whose first non-blank character is `[` is read as a JSON array;
anything else is read as NDJSON.

The redaction profile is one of `BASIC`, `STANDARD` or `STRICT`
(see `dossierkit.incident.redaction.parse_redaction_profile`):

- `BASIC` replaces e-mail addresses, phone numbers and social security
  numbers with `[REDACTED: <reason>]`.
- `STANDARD` also replaces IPv4 addresses.
- `STRICT` additionally records command keywords (`SELECT`, `curl`,
  `password` and so on) in the redaction records, without changing the text.

`render_redactions_map` and `render_citations_map` in
`dossierkit.incident.render` produce the JSON attachments, and
`output_manifest()` lists the export paths of the pack.

## Clinical draft note

```python
from dossierkit.healthcare.model import HealthcareArtifactRef, HealthcareOsInputV1
from dossierkit.healthcare.workflow import execute_healthcareos_workflow

transcript_json = """{
    "patient_id": "PT-2026-001",
    "date": "2026-02-12",
    "provider": "Dr. Smith",
    "specialty": "Cardiology",
    "content": "Patient with chest pain. Possible angina. Recommend stress test.",
    "confidence": 0.96
}"""

consent_json = """{
    "patient_id": "PT-2026-001",
    "date_given": "2024-06-12",
    "scope": "general",
    "status": "VALID"
}"""

inputs = HealthcareOsInputV1(
    schema_version="HEALTHCAREOS_INPUT_V1",
    consent_artifacts=[
        HealthcareArtifactRef(artifact_id="consent_001", sha256="def456", artifact_kind="consent")
    ],
    transcript_artifacts=[
        HealthcareArtifactRef(artifact_id="tx_001", sha256="abc123", artifact_kind="transcript")
    ],
    draft_template_profile="standard",
    verifier_identity="Dr. Reviewer",
)

output = execute_healthcareos_workflow(inputs, transcript_json, consent_json)
print(output.consent_status)   # "Valid"
print(output.draft_note)
print(output.uncertainty_map)
```

Consent expires two years after `date_given`. Expiry is judged against the
fixed reference date 2026-02-12, not the current date, so results stay
reproducible. Passing no consent content (`None`) raises `InvalidInputError`.

## Contract review

```python
from dossierkit.redline.model import ContractArtifactRef, RedlineOsInputV1
from dossierkit.redline.workflow import execute_redlineos_workflow

inputs = RedlineOsInputV1(
    schema_version="REDLINEOS_INPUT_V1",
    contract_artifacts=[
        ContractArtifactRef(artifact_id="contract_001", sha256="abc123", filename="contract.pdf")
    ],
    extraction_mode="NATIVE_PDF",
    review_profile="default",
)

with open("contract.pdf", "rb") as fh:
    output = execute_redlineos_workflow(inputs, fh.read())
print(output.risk_memo)
print(output.clause_map)
print(output.suggestions)
```

The extraction mode sets the reported confidence: `NATIVE_PDF` 0.98, `OCR`
0.85, anything else 0.80. The building blocks are available separately:
`extract_contract_text`, `segment_clauses`, `generate_anchors`,
`stable_clause_anchor`, `assess_clause_risk` and the `render_*` functions.

## Workflow stages

Each pack has a state object (`IncidentWorkflowState`,
`HealthcareWorkflowState`, `RedlineWorkflowState`). `ingest()` checks the
schema version and required artifacts, and `transition()` only allows single
forward steps: Ingested → Analyzed → Reviewed → Renderable → ExportReady.

## Errors

Every failure raises a subclass of `dossierkit.errors.CoreError`:
`InvalidInputError`, `InputSchemaError`, `ArtifactMissingError` or
`WorkflowTransitionError`.

## What it does not do

- There is no command-line tool; the packs are used from Python.
- Nothing is written to disk. `output_manifest()` names export paths, but the
  rendered deliverables are returned as strings for the caller to store.
- The PDF reader handles only simple, uncompressed text streams; it does not
  decompress streams, run OCR or fill in page layout blocks.
- The policy package describes allowlists and network posture but makes no
  network requests and keeps no audit log.