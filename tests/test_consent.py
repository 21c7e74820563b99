import pytest

from dossierkit.errors import InvalidInputError
from dossierkit.healthcare.consent import (
    ConsentStatus,
    enforce_consent_block,
    get_consent_warning,
    validate_consent,
)
from dossierkit.healthcare.parser import ConsentRecord


def sample_consent(status: str, expires: str) -> ConsentRecord:
    return ConsentRecord(
        consent_id="CONSENT_001",
        patient_id="PT-2026-001",
        date_given="2024-02-12",
        date_expires=expires,
        scope="general",
        status=status,
    )


def test_valid_consent():
    consent = sample_consent("VALID", "2026-12-12")
    assert validate_consent(consent, "PT-2026-001") is ConsentStatus.VALID


def test_expired_consent():
    consent = sample_consent("VALID", "2024-01-01")
    assert validate_consent(consent, "PT-2026-001") is ConsentStatus.EXPIRED


def test_revoked_consent():
    consent = sample_consent("REVOKED", "2026-12-12")
    assert validate_consent(consent, "PT-2026-001") is ConsentStatus.REVOKED


def test_revoked_takes_precedence_over_expiry():
    consent = sample_consent("REVOKED", "2024-01-01")
    assert validate_consent(consent, "PT-2026-001") is ConsentStatus.REVOKED


def test_missing_consent():
    assert validate_consent(None, "PT-2026-001") is ConsentStatus.MISSING


def test_expiry_on_reference_date_is_valid():
    consent = sample_consent("VALID", "2026-02-12")
    assert validate_consent(consent, "PT-2026-001") is ConsentStatus.VALID


def test_blocking_statuses():
    assert ConsentStatus.MISSING.is_blocking()
    assert ConsentStatus.REVOKED.is_blocking()
    assert not ConsentStatus.VALID.is_blocking()
    assert not ConsentStatus.EXPIRED.is_blocking()


def test_valid_or_expired():
    assert ConsentStatus.VALID.is_valid_or_expired()
    assert ConsentStatus.EXPIRED.is_valid_or_expired()
    assert not ConsentStatus.MISSING.is_valid_or_expired()
    assert not ConsentStatus.REVOKED.is_valid_or_expired()


def test_enforce_missing_consent():
    with pytest.raises(InvalidInputError, match="No consent record found"):
        enforce_consent_block(ConsentStatus.MISSING)


def test_enforce_revoked_consent():
    with pytest.raises(InvalidInputError, match="revoked"):
        enforce_consent_block(ConsentStatus.REVOKED)


@pytest.mark.parametrize("status", [ConsentStatus.VALID, ConsentStatus.EXPIRED])
def test_enforce_non_blocking_consent(status):
    assert enforce_consent_block(status) is None


def test_consent_warning():
    warning = get_consent_warning(ConsentStatus.EXPIRED)
    assert warning is not None
    assert "expired" in warning

    assert get_consent_warning(ConsentStatus.VALID) is None


def test_patient_id_mismatch():
    consent = sample_consent("VALID", "2026-12-12")
    with pytest.raises(InvalidInputError, match="PT-DIFFERENT"):
        validate_consent(consent, "PT-DIFFERENT")


def test_status_value_is_display_name():
    assert ConsentStatus.VALID.value == "Valid"
    assert ConsentStatus("Revoked") is ConsentStatus.REVOKED