"""Tests for the credential accessors."""

from datetime import datetime, timezone

import pytest

from conftest import CRED, ISSUER, WEBID
from vc_client import (
    CredentialSubject,
    InvalidParameterError,
    MalformedCredentialError,
    get_credential_subject,
    get_expiration_date,
    get_id,
    get_issuance_date,
    get_issuer,
    get_proof_value,
    is_expired,
    normalize_credential,
)


class TestGetId:
    """Tests for get_id."""

    def test_object_and_identifier_agree(self, legacy_credential):
        vc = normalize_credential(legacy_credential)
        assert get_id(vc) == get_id(vc.id) == "https://vc.example.org/vc/1"

    def test_raw_mapping(self, canonical_credential):
        assert get_id(canonical_credential) == canonical_credential["id"]

    @pytest.mark.parametrize("value", [None, 42, ["https://example.org"], {"id": 3}])
    def test_unusable_value(self, value):
        with pytest.raises(InvalidParameterError):
            get_id(value)


class TestGetCredentialSubject:
    """Tests for get_credential_subject."""

    def test_both_dialects(self, legacy_credential, canonical_credential):
        expected = CredentialSubject(
            WEBID,
            {"hasConsent": {"mode": "acl:Read", "forPurpose": "https://example.org/p"}},
        )
        assert get_credential_subject(legacy_credential) == expected
        assert get_credential_subject(canonical_credential) == expected

    def test_subject_as_iri(self, canonical_credential):
        canonical_credential[f"{CRED}credentialSubject"] = WEBID
        assert get_credential_subject(canonical_credential).value == WEBID

    def test_single_item_list(self, legacy_credential):
        legacy_credential["credentialSubject"] = [legacy_credential["credentialSubject"]]
        assert get_credential_subject(legacy_credential).value == WEBID

    def test_several_subjects(self, legacy_credential):
        subject = legacy_credential["credentialSubject"]
        legacy_credential["credentialSubject"] = [subject, dict(subject, id="https://b")]
        with pytest.raises(MalformedCredentialError, match="exactly one"):
            get_credential_subject(legacy_credential)

    def test_missing_subject(self, legacy_credential):
        del legacy_credential["credentialSubject"]
        with pytest.raises(MalformedCredentialError):
            get_credential_subject(legacy_credential)

    def test_subject_without_id(self, legacy_credential):
        del legacy_credential["credentialSubject"]["id"]
        with pytest.raises(MalformedCredentialError):
            get_credential_subject(legacy_credential)

    def test_claims_are_copies(self, legacy_credential):
        subject = get_credential_subject(legacy_credential)
        subject.claims["hasConsent"]["mode"] = "acl:Write"
        assert legacy_credential["credentialSubject"]["hasConsent"]["mode"] == "acl:Read"

    def test_not_a_credential(self):
        with pytest.raises(InvalidParameterError):
            get_credential_subject("https://vc.example.org/vc/1")


class TestOtherGetters:
    """Tests for the issuer, date and proof accessors."""

    def test_issuer(self, legacy_credential):
        assert get_issuer(legacy_credential) == ISSUER
        legacy_credential["issuer"] = {"id": ISSUER, "name": "Example"}
        assert get_issuer(legacy_credential) == ISSUER

    def test_issuance_date(self, canonical_credential):
        assert get_issuance_date(canonical_credential) == datetime(
            2024, 1, 15, 10, 0, tzinfo=timezone.utc
        )

    def test_expiration_date(self, legacy_credential):
        assert get_expiration_date(legacy_credential) is None
        legacy_credential["validUntil"] = "2030-01-01T00:00:00+02:00"
        assert get_expiration_date(legacy_credential) == datetime(
            2029, 12, 31, 22, 0, tzinfo=timezone.utc
        )

    def test_invalid_expiration_date(self, legacy_credential):
        legacy_credential["expirationDate"] = "tomorrow"
        with pytest.raises(MalformedCredentialError, match="expirationDate"):
            get_expiration_date(legacy_credential)

    def test_is_expired(self, legacy_credential):
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert not is_expired(legacy_credential, now)
        legacy_credential["expirationDate"] = "2024-06-01T00:00:00Z"
        assert is_expired(legacy_credential, now)

    def test_proof_value(self, legacy_credential, canonical_credential):
        assert get_proof_value(legacy_credential) == get_proof_value(canonical_credential)

    def test_accessors_do_not_modify_input(self, legacy_credential):
        snapshot = dict(legacy_credential)
        get_credential_subject(legacy_credential)
        get_proof_value(legacy_credential)
        assert legacy_credential == snapshot
        assert "credentialSubject" in legacy_credential
