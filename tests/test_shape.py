"""Tests for derivation request bodies."""

import pytest

from conftest import CRED, WEBID
from vc_client import InvalidParameterError, build_shape_query, normalize_credential


class TestBuildShapeQuery:
    """Tests for build_shape_query."""

    def test_only_template_fields(self):
        """Test that no constraint is invented."""
        body = build_shape_query({"credentialSubject": {"id": WEBID}})
        assert body == {
            "credential": {
                "@context": ["https://www.w3.org/2018/credentials/v1"],
                "credentialSubject": {"id": WEBID},
            }
        }

    def test_template_context_is_merged(self):
        body = build_shape_query(
            {
                "@context": [
                    "https://www.w3.org/2018/credentials/v1",
                    {"ex": "https://example.org/ns#"},
                ],
                "type": ["ex:Membership"],
            }
        )
        assert body["credential"]["@context"] == [
            "https://www.w3.org/2018/credentials/v1",
            {"ex": "https://example.org/ns#"},
        ]
        assert body["credential"]["type"] == ["ex:Membership"]

    def test_none_means_unconstrained(self):
        body = build_shape_query(
            {"credentialSubject": {"id": WEBID, "hasConsent": None}, "issuer": None}
        )
        assert body["credential"] == {
            "@context": ["https://www.w3.org/2018/credentials/v1"],
            "credentialSubject": {"id": WEBID},
        }

    def test_canonical_template(self):
        """Test that qualified names are sent with their short name."""
        body = build_shape_query({f"{CRED}credentialSubject": {"id": WEBID}})
        assert body["credential"]["credentialSubject"] == {"id": WEBID}

    def test_credential_as_template(self, canonical_credential):
        vc = normalize_credential(canonical_credential, return_legacy_jsonld=False)
        body = build_shape_query(vc)
        assert body["credential"]["credentialSubject"]["id"] == WEBID
        assert body["credential"]["proof"]["proofValue"] == vc.proof_value

    def test_template_is_not_modified(self):
        template = {"@context": {"ex": "https://example.org/"}, "type": ["ex:T"]}
        build_shape_query(template)
        assert template == {"@context": {"ex": "https://example.org/"}, "type": ["ex:T"]}

    def test_not_a_mapping(self):
        with pytest.raises(InvalidParameterError):
            build_shape_query("https://vc.example.org/vc/1")
