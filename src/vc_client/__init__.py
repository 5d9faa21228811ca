"""
VC Client - W3C Verifiable Credentials HTTP API client library.

Supports:
- Issuing, deriving (query by shape), dereferencing and revoking credentials
- Verifiable Presentation requests (Query By Example)
- Remote verification of credentials and presentations
- Service discovery through /.well-known/vc-configuration
- Legacy and canonical JSON-LD dialects of credentials and presentations
"""

from vc_client.config import get_max_json_size, set_max_json_size
from vc_client.configuration import (
    VerifiableCredentialApiConfiguration,
    get_verifiable_credential_api_configuration,
)
from vc_client.contexts import (
    DEFAULT_CONTEXT,
    DEFAULT_CREDENTIAL_TYPES,
    concatenate_contexts,
)
from vc_client.derive import derive_from_shape, get_verifiable_credential
from vc_client.documents import VerifiableCredential, VerifiablePresentation
from vc_client.errors import (
    HttpError,
    InvalidParameterError,
    MalformedCredentialError,
    MalformedDocumentError,
    MalformedPresentationError,
    RevocationError,
    UnexpectedResponseError,
    VcClientError,
)
from vc_client.fetcher import HttpxFetcher, default_fetch
from vc_client.getters import (
    CredentialSubject,
    get_credential_subject,
    get_expiration_date,
    get_id,
    get_issuance_date,
    get_issuer,
    get_proof_value,
    is_expired,
)
from vc_client.issue import issue_verifiable_credential
from vc_client.normalizer import (
    is_verifiable_credential,
    is_verifiable_presentation,
    normalize,
    normalize_credential,
    normalize_presentation,
    to_canonical,
    to_legacy,
)
from vc_client.query import (
    CredentialQuery,
    QueryByExample,
    VerifiablePresentationRequest,
    query,
)
from vc_client.revoke import revoke_verifiable_credential
from vc_client.shape import build_shape_query
from vc_client.verify import is_valid_verifiable_presentation, is_valid_vc

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONTEXT",
    "DEFAULT_CREDENTIAL_TYPES",
    "CredentialQuery",
    "CredentialSubject",
    "HttpError",
    "HttpxFetcher",
    "InvalidParameterError",
    "MalformedCredentialError",
    "MalformedDocumentError",
    "MalformedPresentationError",
    "QueryByExample",
    "RevocationError",
    "UnexpectedResponseError",
    "VcClientError",
    "VerifiableCredential",
    "VerifiableCredentialApiConfiguration",
    "VerifiablePresentation",
    "VerifiablePresentationRequest",
    "build_shape_query",
    "concatenate_contexts",
    "default_fetch",
    "derive_from_shape",
    "get_credential_subject",
    "get_expiration_date",
    "get_id",
    "get_issuance_date",
    "get_issuer",
    "get_max_json_size",
    "get_proof_value",
    "get_verifiable_credential",
    "get_verifiable_credential_api_configuration",
    "is_expired",
    "is_valid_vc",
    "is_valid_verifiable_presentation",
    "is_verifiable_credential",
    "is_verifiable_presentation",
    "issue_verifiable_credential",
    "normalize",
    "normalize_credential",
    "normalize_presentation",
    "query",
    "revoke_verifiable_credential",
    "set_max_json_size",
    "to_canonical",
    "to_legacy",
]
