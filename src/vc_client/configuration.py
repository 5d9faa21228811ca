"""
Discovery of the services offered by a VC provider.

A provider advertises its issuer, derivation, status and verifier services
in a JSON-LD document at /.well-known/vc-configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from vc_client.contexts import SOLID_VC
from vc_client.errors import UnexpectedResponseError
from vc_client.fetcher import Fetch, ensure_success, parse_json, send

logger = logging.getLogger(__name__)

WELL_KNOWN_PATH = "/.well-known/vc-configuration"


@dataclass
class VerifiableCredentialApiConfiguration:
    """URLs of the services of a VC provider. Unadvertised services are None."""

    derivation_service: str | None = None
    issuer_service: str | None = None
    status_service: str | None = None
    verifier_service: str | None = None


def _iri_value(value: Any) -> str | None:
    """Read an IRI from a compact string, an @id node, or a list of those."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("@id", value.get("@value"))
    return value if isinstance(value, str) else None


def _service(node: dict[str, Any], term: str) -> str | None:
    for key in (term, f"{SOLID_VC}{term}"):
        if key in node:
            return _iri_value(node[key])
    return None


def well_known_url(vc_service_url: str | httpx.URL) -> str:
    """URL of the discovery document; any path on vc_service_url is ignored."""
    return str(httpx.URL(str(vc_service_url)).join(WELL_KNOWN_PATH))


async def get_verifiable_credential_api_configuration(
    vc_service_url: str | httpx.URL,
    *,
    fetch: Fetch | None = None,
) -> VerifiableCredentialApiConfiguration:
    """Discover the services available from a VC provider.

    Args:
        vc_service_url: Any URL on the provider's origin.
        fetch: Alternative transport for the request.

    Returns:
        The advertised service URLs.

    Raises:
        HttpError: If the discovery document cannot be fetched.
        UnexpectedResponseError: If it is not a JSON object.
    """
    url = well_known_url(vc_service_url)
    response = await send(fetch, url)
    ensure_success(response, f"Fetching the VC configuration [{url}]")
    data = parse_json(response, f"The VC configuration endpoint [{url}]")

    # Expanded JSON-LD is an array with a single root node
    if isinstance(data, list):
        data = data[0] if data else {}
    if not isinstance(data, dict):
        raise UnexpectedResponseError(
            f"The VC configuration endpoint [{url}] returned an unexpected response: {data!r}"
        )

    configuration = VerifiableCredentialApiConfiguration(
        derivation_service=_service(data, "derivationService"),
        issuer_service=_service(data, "issuerService"),
        status_service=_service(data, "statusService"),
        verifier_service=_service(data, "verifierService"),
    )
    logger.debug("Discovered VC services at %s: %s", url, configuration)
    return configuration
