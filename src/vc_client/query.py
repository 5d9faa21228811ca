"""
Verifiable Presentation requests, Query By Example flavour.

https://w3c-ccg.github.io/vp-request-spec/#query-by-example
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from vc_client.documents import VerifiablePresentation
from vc_client.errors import InvalidParameterError
from vc_client.fetcher import Fetch, ensure_success, parse_json, send
from vc_client.normalizer import normalize_presentation


@dataclass
class CredentialQuery:
    """One example credential the requester wants, and why."""

    example: dict[str, Any]
    reason: str | None = None
    required: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"example": self.example}
        if self.reason is not None:
            result["reason"] = self.reason
        if self.required is not None:
            result["required"] = self.required
        return result


@dataclass
class QueryByExample:
    credential_query: list[CredentialQuery]
    type: str = "QueryByExample"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "credentialQuery": [q.to_dict() for q in self.credential_query],
        }


@dataclass
class VerifiablePresentationRequest:
    """A request for a presentation of the credentials matching the queries."""

    query: list[QueryByExample] = field(default_factory=list)
    challenge: str | None = None
    domain: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"query": [q.to_dict() for q in self.query]}
        if self.challenge is not None:
            result["challenge"] = self.challenge
        if self.domain is not None:
            result["domain"] = self.domain
        return result


def _request_body(
    vp_request: VerifiablePresentationRequest | Mapping[str, Any],
) -> dict[str, Any]:
    if isinstance(vp_request, VerifiablePresentationRequest):
        return vp_request.to_dict()
    if isinstance(vp_request, Mapping) and isinstance(vp_request.get("query"), list):
        return dict(vp_request)
    raise InvalidParameterError(
        "Expected a VerifiablePresentationRequest or a mapping with a 'query' array"
    )


async def query(
    query_endpoint: str,
    vp_request: VerifiablePresentationRequest | Mapping[str, Any],
    *,
    fetch: Fetch | None = None,
    return_legacy_jsonld: bool = True,
) -> VerifiablePresentation:
    """Retrieve the credentials matching a request, wrapped in one presentation.

    Args:
        query_endpoint: URL of the query endpoint.
        vp_request: The request, as a VerifiablePresentationRequest or the
            equivalent JSON mapping.
        fetch: Alternative transport, typically an authenticated one.
        return_legacy_jsonld: Whether the legacy projection is also computed.

    Returns:
        The presentation, wrapping zero or more credentials.

    Raises:
        InvalidParameterError: If vp_request has no query array.
        HttpError: If the endpoint answers with a non-2xx status.
        UnexpectedResponseError: If the body is not JSON.
        MalformedPresentationError: If the body is not a valid presentation.
    """
    body = _request_body(vp_request)
    response = await send(fetch, query_endpoint, "POST", json=body)
    ensure_success(response, f"The request to the query endpoint [{query_endpoint}]")
    data = parse_json(response, f"The query endpoint [{query_endpoint}]")
    return normalize_presentation(data, return_legacy_jsonld=return_legacy_jsonld)
