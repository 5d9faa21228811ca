"""
Issuance of Verifiable Credentials through a W3C VC API issuer service.

https://w3c-ccg.github.io/vc-api/#issue-credential
"""

from __future__ import annotations

from typing import Any, Mapping

from vc_client.contexts import (
    DEFAULT_CONTEXT,
    DEFAULT_CREDENTIAL_TYPES,
    concatenate_contexts,
)
from vc_client.documents import VerifiableCredential
from vc_client.errors import UnexpectedResponseError
from vc_client.fetcher import Fetch, ensure_success, parse_json, send
from vc_client.normalizer import normalize_credential


def build_issue_request(
    subject_claims: Mapping[str, Any],
    credential_claims: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Compose the body of an issuance request.

    The @context of both claim sets is merged after the default VC context,
    the requested types are appended to the default credential types, and
    the remaining credential claims sit next to the credentialSubject.
    """
    subject = dict(subject_claims)
    subject_context = subject.pop("@context", None)

    credential = dict(credential_claims or {})
    credential_context = credential.pop("@context", None)
    requested_types = credential.pop("type", None)
    if requested_types is None:
        requested_types = []
    elif not isinstance(requested_types, list):
        requested_types = [requested_types]

    return {
        "credential": {
            "@context": concatenate_contexts(
                DEFAULT_CONTEXT, subject_context, credential_context
            ),
            "type": [*DEFAULT_CREDENTIAL_TYPES, *requested_types],
            **credential,
            "credentialSubject": subject,
        }
    }


async def issue_verifiable_credential(
    issuer_endpoint: str,
    subject_claims: Mapping[str, Any],
    credential_claims: Mapping[str, Any] | None = None,
    *,
    fetch: Fetch | None = None,
    return_legacy_jsonld: bool = True,
) -> VerifiableCredential:
    """Request that an issuer issues a credential containing the given claims.

    Args:
        issuer_endpoint: The `/issue` endpoint of the issuer.
        subject_claims: Claims about the subject, with their @context.
        credential_claims: Claims about the credential itself, such as its
            type or expiration date.
        fetch: Alternative transport, typically an authenticated one.
        return_legacy_jsonld: Whether the legacy projection is also computed.

    Returns:
        The issued credential.

    Raises:
        HttpError: If the issuer answers with a non-2xx status.
        UnexpectedResponseError: If the body is not JSON, or the credential
            lacks one of the requested types.
        MalformedCredentialError: If the body is not a valid credential.
    """
    body = build_issue_request(subject_claims, credential_claims)
    response = await send(fetch, issuer_endpoint, "POST", json=body)
    ensure_success(
        response, f"Issuing a VC at the endpoint [{issuer_endpoint}]"
    )
    data = parse_json(response, f"The VC issuing endpoint [{issuer_endpoint}]")
    credential = normalize_credential(data, return_legacy_jsonld=return_legacy_jsonld)

    # The issuer may accept claims matching none of its shapes and answer
    # with a credential missing the requested type
    missing = [t for t in body["credential"]["type"] if t not in credential.types]
    if missing:
        raise UnexpectedResponseError(
            f"The VC issuing endpoint [{issuer_endpoint}] returned a credential "
            f"without the requested type(s) {missing}"
        )
    return credential
