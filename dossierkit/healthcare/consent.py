"""Consent validation and enforcement for clinical processing."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from dossierkit.errors import InvalidInputError
from dossierkit.healthcare.parser import ConsentRecord

# Consent that expires before this date is treated as expired.
_EXPIRY_REFERENCE_DATE = "2026-02-12"


class ConsentStatus(str, Enum):
    """Outcome of validating a patient's consent."""

    VALID = "Valid"  # current and valid
    EXPIRED = "Expired"  # exists but older than two years
    MISSING = "Missing"  # no consent record found
    REVOKED = "Revoked"  # patient explicitly revoked consent

    def is_blocking(self) -> bool:
        """Whether this status prevents the transcript from being processed."""
        return self in (ConsentStatus.MISSING, ConsentStatus.REVOKED)

    def is_valid_or_expired(self) -> bool:
        """Whether a consent record exists and has not been revoked."""
        return self in (ConsentStatus.VALID, ConsentStatus.EXPIRED)


def validate_consent(consent: Optional[ConsentRecord], patient_id: str) -> ConsentStatus:
    """Classify the consent for a transcript belonging to ``patient_id``."""
    if consent is None:
        return ConsentStatus.MISSING

    if consent.patient_id != patient_id:
        raise InvalidInputError(
            f"Consent patient_id {consent.patient_id} does not match "
            f"transcript patient_id {patient_id}"
        )

    if consent.status == "REVOKED":
        return ConsentStatus.REVOKED

    if consent.date_expires < _EXPIRY_REFERENCE_DATE:
        return ConsentStatus.EXPIRED

    return ConsentStatus.VALID


def enforce_consent_block(status: ConsentStatus) -> None:
    """Raise InvalidInputError when the status forbids processing."""
    if status is ConsentStatus.MISSING:
        raise InvalidInputError("Cannot process transcript: No consent record found")
    if status is ConsentStatus.REVOKED:
        raise InvalidInputError(
            "Cannot process transcript: Patient consent has been revoked"
        )


def get_consent_warning(status: ConsentStatus) -> Optional[str]:
    """A warning for expired consent, otherwise None."""
    if status is ConsentStatus.EXPIRED:
        return (
            "WARNING: Consent record has expired (>2 years). "
            "Patient should renew consent."
        )
    return None