"""
Lookup of Verifiable Credentials: by shape from a derivation service, and
by dereferencing a credential URL.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

from vc_client.documents import VerifiableCredential
from vc_client.errors import UnexpectedResponseError
from vc_client.fetcher import Fetch, ensure_success, parse_json, send
from vc_client.getters import is_expired
from vc_client.normalizer import normalize_credential
from vc_client.shape import build_shape_query

logger = logging.getLogger(__name__)


async def _crawl_credentials(
    response: Any,
    endpoint: str,
    fetch: Fetch | None,
) -> list[Any]:
    """Collect the raw credentials of a derivation response.

    The service answers with a list of credentials, a presentation-like
    object wrapping them, or one credential per page linked by
    `Link: <...>; rel="next"` headers.
    """
    collected: list[Any] = []
    visited: set[str] = set()
    page_url = endpoint

    while True:
        ensure_success(response, f"The request to the derivation endpoint [{endpoint}]")
        data = parse_json(response, f"The derivation endpoint [{endpoint}]")

        if isinstance(data, list):
            return collected + data
        if not isinstance(data, dict):
            raise UnexpectedResponseError(
                f"The derivation endpoint [{endpoint}] returned an unexpected response: {data!r}"
            )
        if "verifiableCredential" in data:
            embedded = data["verifiableCredential"]
            return collected + (embedded if isinstance(embedded, list) else [embedded])

        collected.append(data)
        next_url = response.links.get("next", {}).get("url")
        if next_url is None:
            return collected
        # Link targets may be relative to the page carrying them
        next_url = str(httpx.URL(page_url).join(next_url))
        if next_url in visited:
            raise UnexpectedResponseError(
                f"The derivation endpoint [{endpoint}] links back to [{next_url}]"
            )
        visited.add(next_url)
        page_url = next_url
        response = await send(fetch, next_url)


async def derive_from_shape(
    derivation_endpoint: str,
    vc_shape: Mapping[str, Any],
    *,
    fetch: Fetch | None = None,
    include_expired_vc: bool = True,
    return_legacy_jsonld: bool = True,
) -> list[VerifiableCredential]:
    """Look up the credentials matching a subset of their claims.

    The derivation service is expected to implement the W3C VC API
    `/derive` endpoint.

    Args:
        derivation_endpoint: The `/derive` endpoint of the service.
        vc_shape: The subset of claims the matching credentials contain.
        fetch: Alternative transport, typically an authenticated one.
        include_expired_vc: Whether expired credentials are kept.
        return_legacy_jsonld: Whether the legacy projection is also computed.

    Returns:
        The matching credentials, in the order returned by the service.

    Raises:
        HttpError: If a request gets a non-2xx status.
        UnexpectedResponseError: If a body is not the expected JSON.
        MalformedCredentialError: If a returned credential is malformed.
    """
    body = build_shape_query(vc_shape)
    response = await send(fetch, derivation_endpoint, "POST", json=body)
    raw_credentials = await _crawl_credentials(response, derivation_endpoint, fetch)

    credentials = [
        normalize_credential(raw, return_legacy_jsonld=return_legacy_jsonld)
        for raw in raw_credentials
    ]
    if include_expired_vc:
        return credentials

    now = datetime.now(timezone.utc)
    valid = [vc for vc in credentials if not is_expired(vc, now)]
    if len(valid) != len(credentials):
        logger.debug(
            "Dropped %d expired credential(s) from %s",
            len(credentials) - len(valid),
            derivation_endpoint,
        )
    return valid


async def get_verifiable_credential(
    vc_url: str,
    *,
    fetch: Fetch | None = None,
    return_legacy_jsonld: bool = True,
) -> VerifiableCredential:
    """Dereference a credential URL and validate the result.

    Raises:
        HttpError: If the URL answers with a non-2xx status.
        UnexpectedResponseError: If the body is not JSON.
        MalformedCredentialError: If the body is not a valid credential.
    """
    response = await send(fetch, vc_url)
    ensure_success(response, f"Fetching the Verifiable Credential [{vc_url}]")
    data = parse_json(response, f"The Verifiable Credential [{vc_url}]")
    return normalize_credential(data, return_legacy_jsonld=return_legacy_jsonld)
