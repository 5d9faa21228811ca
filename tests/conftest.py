"""Shared fixtures: credentials in both dialects and claim sets."""

import copy

import pytest

from vc_client.config import DEFAULT_MAX_JSON_SIZE, set_max_json_size

WEBID = "https://pod.example.org/alice/profile/card#me"
ISSUER = "https://vc.example.org"
SEC = "https://w3id.org/security#"
CRED = "https://www.w3.org/2018/credentials#"
DC = "http://purl.org/dc/terms/"


def build_legacy_credential(
    credential_id: str = "https://vc.example.org/vc/1",
    subject_id: str = WEBID,
    **overrides,
) -> dict:
    credential = {
        "@context": [
            "https://www.w3.org/2018/credentials/v1",
            "https://w3id.org/security/suites/ed25519-2020/v1",
        ],
        "id": credential_id,
        "type": ["VerifiableCredential", "SolidCredential"],
        "issuer": ISSUER,
        "issuanceDate": "2024-01-15T10:00:00Z",
        "credentialSubject": {
            "id": subject_id,
            "hasConsent": {"mode": "acl:Read", "forPurpose": "https://example.org/p"},
        },
        "proof": {
            "type": "Ed25519Signature2020",
            "created": "2024-01-15T10:00:01Z",
            "proofPurpose": "assertionMethod",
            "proofValue": "z58DAdFfa9SkqZMVPxAQpic7ndSayn1PzZs6ZjWp1CktyGesjuTSwRdoWhAfGFCF5bppETSTojQCrfFPP2oumHKtz",
            "verificationMethod": "https://vc.example.org/key/1",
        },
    }
    credential.update(overrides)
    return credential


def to_canonical_by_hand(credential: dict) -> dict:
    """The canonical dialect, as a server would send it."""
    canonical = copy.deepcopy(credential)
    canonical[f"{CRED}credentialSubject"] = canonical.pop("credentialSubject")
    proof = canonical["proof"]
    proof[f"{SEC}proofValue"] = proof.pop("proofValue")
    proof[f"{SEC}proofPurpose"] = proof.pop("proofPurpose")
    proof[f"{SEC}verificationMethod"] = proof.pop("verificationMethod")
    proof[f"{DC}created"] = proof.pop("created")
    return canonical


@pytest.fixture
def legacy_credential():
    """A valid credential in the legacy dialect."""
    return build_legacy_credential()


@pytest.fixture
def canonical_credential(legacy_credential):
    """The same credential in the canonical dialect."""
    return to_canonical_by_hand(legacy_credential)


@pytest.fixture
def legacy_presentation(legacy_credential):
    """A presentation wrapping two legacy credentials."""
    return {
        "@context": ["https://www.w3.org/2018/credentials/v1"],
        "type": ["VerifiablePresentation"],
        "holder": "https://vc.example.org",
        "verifiableCredential": [
            legacy_credential,
            build_legacy_credential("https://vc.example.org/vc/2"),
        ],
        "proof": {
            "type": "Ed25519Signature2020",
            "created": "2024-01-15T10:00:02Z",
            "proofPurpose": "authentication",
            "proofValue": "z3FXQjecWufY46yg5abdVZsXqLhxhueuSoZgNSARiKBk",
            "verificationMethod": "https://vc.example.org/key/1",
        },
    }


@pytest.fixture
def valid_subject_claims():
    """Claims matching the shape the issuer expects."""
    return {
        "@context": {
            "gc": "https://w3id.org/GConsent#",
            "acl": "http://www.w3.org/ns/auth/acl#",
            "mode": {"@id": "acl:mode", "@type": "@id"},
            "hasConsent": {"@id": "gc:hasConsent", "@type": "@id"},
            "forPurpose": {"@id": "gc:forPurpose", "@type": "@id"},
        },
        "hasConsent": {
            "mode": "acl:Read",
            "forPurpose": "https://example.org/p",
        },
    }


@pytest.fixture
def invalid_subject_claims():
    """Claims matching no shape known by the issuer."""
    return {
        "@context": {
            "acl": "http://www.w3.org/ns/auth/acl#",
            "mode": {"@id": "acl:mode", "@type": "@id"},
        },
    }


@pytest.fixture
def max_json_size():
    """Restore the JSON size limit after a test changes it."""
    yield set_max_json_size
    set_max_json_size(DEFAULT_MAX_JSON_SIZE)
