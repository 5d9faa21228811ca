"""
Verification of credentials and presentations by a remote verifier service.

The checks themselves (signature, revocation, expiry) run server-side. This
module only normalizes the object sent and hands back the verifier's report
unchanged: an empty `errors` array means the object is valid.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from vc_client.configuration import get_verifiable_credential_api_configuration
from vc_client.derive import get_verifiable_credential
from vc_client.documents import VerifiableCredential, VerifiablePresentation
from vc_client.errors import InvalidParameterError, UnexpectedResponseError
from vc_client.fetcher import Fetch, ensure_success, parse_json, send
from vc_client.getters import get_issuer
from vc_client.normalizer import (
    normalize_credential,
    normalize_presentation,
    to_legacy,
)

logger = logging.getLogger(__name__)

REVOKED_CREDENTIAL_ERROR = (
    "credentialStatus validation has failed: credential has been revoked"
)


async def _dereference_vc(
    vc: VerifiableCredential | Mapping[str, Any] | str,
    fetch: Fetch | None,
) -> VerifiableCredential:
    if isinstance(vc, VerifiableCredential):
        return vc
    if isinstance(vc, str):
        if not vc.startswith(("http://", "https://")):
            raise InvalidParameterError(f"Expected a credential URL, got [{vc}]")
        return await get_verifiable_credential(
            vc, fetch=fetch, return_legacy_jsonld=False
        )
    if isinstance(vc, Mapping):
        return normalize_credential(vc, return_legacy_jsonld=False)
    raise InvalidParameterError(
        f"Expected a Verifiable Credential or its URL, got {type(vc).__name__}"
    )


async def _verifier_endpoint(
    provider: str | None,
    verification_endpoint: str | None,
    fetch: Fetch | None,
) -> str:
    if verification_endpoint is not None:
        return verification_endpoint
    if provider is None:
        raise InvalidParameterError(
            "No verification endpoint given, and no provider to discover it from"
        )
    configuration = await get_verifiable_credential_api_configuration(
        provider, fetch=fetch
    )
    if configuration.verifier_service is None:
        raise InvalidParameterError(
            f"The VC service provider {provider} does not advertise a verifier "
            f"service in its .well-known/vc-configuration document"
        )
    return configuration.verifier_service


async def _post_for_report(
    endpoint: str,
    body: dict[str, Any],
    fetch: Fetch | None,
) -> dict[str, Any]:
    response = await send(fetch, endpoint, "POST", json=body)
    ensure_success(response, f"The request to the verification endpoint [{endpoint}]")
    report = parse_json(response, f"The verification endpoint [{endpoint}]")
    if not isinstance(report, dict):
        raise UnexpectedResponseError(
            f"The verification endpoint [{endpoint}] returned an unexpected report: {report!r}"
        )
    return report


async def is_valid_vc(
    vc: VerifiableCredential | Mapping[str, Any] | str,
    *,
    fetch: Fetch | None = None,
    verification_endpoint: str | None = None,
) -> dict[str, Any]:
    """Have a verifier service check a credential.

    Args:
        vc: The credential, in either dialect, or its URL (dereferenced
            first).
        fetch: Alternative transport, typically an authenticated one.
        verification_endpoint: A trusted verifier. When omitted, the verifier
            advertised by the credential's issuer is used.

    Returns:
        The verifier's report, e.g. `{"checks": [...], "warnings": [...],
        "errors": [...]}`.

    Raises:
        InvalidParameterError: If vc is unusable or no verifier is found.
        MalformedCredentialError: If vc is not a valid credential.
        HttpError: If a service answers with a non-2xx status.
        UnexpectedResponseError: If the report is not a JSON object.
    """
    credential = await _dereference_vc(vc, fetch)
    endpoint = await _verifier_endpoint(
        get_issuer(credential), verification_endpoint, fetch
    )
    report = await _post_for_report(
        endpoint, {"verifiableCredential": to_legacy(credential.canonical)}, fetch
    )
    logger.debug("Verification of %s: %s", credential.id, report.get("errors"))
    return report


async def is_valid_verifiable_presentation(
    verification_endpoint: str | None,
    verifiable_presentation: VerifiablePresentation | Mapping[str, Any],
    *,
    fetch: Fetch | None = None,
    domain: str | None = None,
    challenge: str | None = None,
) -> dict[str, Any]:
    """Have a verifier service check a presentation and the credentials it holds.

    Args:
        verification_endpoint: The verifier to use. When None, the verifier
            advertised by the presentation's holder is used.
        verifiable_presentation: The presentation, in either dialect.
        fetch: Alternative transport, typically an authenticated one.
        domain: Domain the presentation proof is bound to.
        challenge: Challenge the presentation proof is bound to.

    Returns:
        The verifier's report, unchanged.
    """
    if isinstance(verifiable_presentation, VerifiablePresentation):
        presentation = verifiable_presentation
    else:
        presentation = normalize_presentation(
            verifiable_presentation, return_legacy_jsonld=False
        )

    endpoint = await _verifier_endpoint(
        presentation.holder, verification_endpoint, fetch
    )
    options = {
        key: value
        for key, value in (("domain", domain), ("challenge", challenge))
        if value is not None
    }
    return await _post_for_report(
        endpoint,
        {
            "verifiablePresentation": to_legacy(
                presentation.canonical, presentation=True
            ),
            "options": options,
        },
        fetch,
    )
