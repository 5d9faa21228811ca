"""
Revocation of Verifiable Credentials through a status service.

https://w3c-ccg.github.io/vc-api/#update-status
"""

from __future__ import annotations

from typing import Any

from vc_client.errors import RevocationError
from vc_client.fetcher import Fetch, ensure_success, send
from vc_client.getters import IdentifierOrCredential, get_id


def build_revocation_request(credential_id: str) -> dict[str, Any]:
    return {
        "credentialId": credential_id,
        "credentialStatus": [
            {
                "type": "RevocationList2020Status",
                "status": "1",
            }
        ],
    }


async def revoke_verifiable_credential(
    status_endpoint: str,
    credential_id: IdentifierOrCredential,
    *,
    fetch: Fetch | None = None,
) -> None:
    """Revoke a credential, so that subsequent verifications fail.

    Args:
        status_endpoint: The `/status` endpoint of the issuer.
        credential_id: The credential to revoke, or its identifier.
        fetch: Alternative transport, typically an authenticated one.

    Raises:
        InvalidParameterError: If credential_id is not usable.
        RevocationError: If the service answers with a non-2xx status.
    """
    body = build_revocation_request(get_id(credential_id))
    response = await send(fetch, status_endpoint, "POST", json=body)
    ensure_success(
        response,
        f"Revoking through the status endpoint [{status_endpoint}]",
        error_cls=RevocationError,
    )
