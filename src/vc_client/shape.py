"""
Query-by-shape request bodies for derivation services.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vc_client.contexts import DEFAULT_CONTEXT, concatenate_contexts
from vc_client.documents import JsonLdDocument
from vc_client.errors import InvalidParameterError
from vc_client.normalizer import to_legacy


def _prune(value: Any) -> Any:
    # None means "not constrained": drop it instead of sending a null
    if isinstance(value, Mapping):
        return {k: _prune(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune(v) for v in value if v is not None]
    return value


def build_shape_query(vc_shape: Mapping[str, Any]) -> dict[str, Any]:
    """Build the body of a derivation request from a partial credential.

    Only the properties present on the template constrain the match; no type
    or other claim is added. The template's @context is merged after the
    default VC context. Qualified property names are sent with their short
    name, as the derivation service matches on the compact form.

    Args:
        vc_shape: Any subset of a credential's properties, in either dialect.

    Returns:
        The request body, `{"credential": {...}}`.

    Raises:
        InvalidParameterError: If vc_shape is not a mapping.
    """
    if not isinstance(vc_shape, Mapping):
        raise InvalidParameterError(
            f"Expected a credential shape, got {type(vc_shape).__name__}"
        )
    template = vc_shape.canonical if isinstance(vc_shape, JsonLdDocument) else vc_shape

    claims = _prune(to_legacy(template))
    claims_context = claims.pop("@context", None)
    return {
        "credential": {
            "@context": concatenate_contexts(DEFAULT_CONTEXT, claims_context),
            **claims,
        }
    }
