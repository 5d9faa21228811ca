"""
Accessors over Verifiable Credentials.

Every accessor accepts a normalized VerifiableCredential as well as a raw
credential mapping in either dialect, and returns the same value for both.
No accessor modifies its input.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Union

from vc_client.documents import JsonLdDocument
from vc_client.errors import InvalidParameterError, MalformedCredentialError
from vc_client.normalizer import (
    CREDENTIAL_SUBJECT,
    PROOF_VALUE,
    parse_datetime,
    to_canonical,
)

Identifier = str
CredentialLike = Mapping[str, Any]
IdentifierOrCredential = Union[Identifier, CredentialLike]


@dataclass(frozen=True)
class CredentialSubject:
    """The subject a credential makes claims about."""

    value: str
    claims: dict[str, Any] = field(default_factory=dict)


def _canonical(vc: CredentialLike) -> Mapping[str, Any]:
    if isinstance(vc, JsonLdDocument):
        return vc.canonical
    if isinstance(vc, Mapping):
        return to_canonical(vc, error_cls=MalformedCredentialError)
    raise InvalidParameterError(
        f"Expected a Verifiable Credential, got {type(vc).__name__}"
    )


def get_id(vc: IdentifierOrCredential) -> str:
    """Get the ID (URL) of a credential or presentation.

    Args:
        vc: A credential or presentation object, or its identifier.

    Returns:
        The identifier. A string argument is returned unchanged.

    Raises:
        InvalidParameterError: If vc is neither a string nor an object
            with a string id.
    """
    if isinstance(vc, str):
        return vc
    if isinstance(vc, Mapping):
        identifier = vc.get("id")
        if isinstance(identifier, str):
            return identifier
        raise InvalidParameterError("The given object has no string id")
    raise InvalidParameterError(
        f"Expected an identifier or a Verifiable Credential, got {type(vc).__name__}"
    )


def get_credential_subject(vc: CredentialLike) -> CredentialSubject:
    """Get the single subject of a credential and the claims made about it.

    Raises:
        MalformedCredentialError: If there is no subject, more than one
            subject, or a subject without an IRI.
    """
    subject = _canonical(vc).get(CREDENTIAL_SUBJECT)
    if subject is None:
        raise MalformedCredentialError(
            "The credential has no credentialSubject", ["Missing credentialSubject"]
        )
    if isinstance(subject, list):
        if len(subject) != 1:
            problem = f"Expected exactly one credentialSubject, found {len(subject)}"
            raise MalformedCredentialError(problem, [problem])
        subject = subject[0]
    if isinstance(subject, str):
        return CredentialSubject(subject)
    if not isinstance(subject, Mapping) or not isinstance(subject.get("id"), str):
        problem = "credentialSubject has no string id"
        raise MalformedCredentialError(problem, [problem])
    claims = {k: copy.deepcopy(v) for k, v in subject.items() if k != "id"}
    return CredentialSubject(subject["id"], claims)


def get_issuer(vc: CredentialLike) -> str:
    issuer = _canonical(vc).get("issuer")
    if isinstance(issuer, Mapping):
        issuer = issuer.get("id")
    if not isinstance(issuer, str):
        raise MalformedCredentialError("The credential has no issuer", ["Missing issuer"])
    return issuer


def _date(vc: CredentialLike, names: tuple[str, str]) -> datetime | None:
    doc = _canonical(vc)
    for name in names:
        if name in doc:
            try:
                return parse_datetime(doc[name])
            except ValueError as e:
                problem = f"Invalid {name}: {doc[name]!r}"
                raise MalformedCredentialError(problem, [problem]) from e
    return None


def get_issuance_date(vc: CredentialLike) -> datetime:
    """Get the issuance date (issuanceDate, or validFrom) of a credential."""
    issued = _date(vc, ("issuanceDate", "validFrom"))
    if issued is None:
        raise MalformedCredentialError(
            "The credential has no issuance date", ["Missing issuanceDate"]
        )
    return issued


def get_expiration_date(vc: CredentialLike) -> datetime | None:
    """Get the expiration date (expirationDate, or validUntil), None if unset."""
    return _date(vc, ("expirationDate", "validUntil"))


def is_expired(vc: CredentialLike, now: datetime | None = None) -> bool:
    expires = get_expiration_date(vc)
    if expires is None:
        return False
    return expires < (now or datetime.now(timezone.utc))


def get_proof_value(vc: CredentialLike) -> str:
    """Get the signature value of the (first) proof of a credential."""
    proof = _canonical(vc).get("proof")
    if isinstance(proof, list):
        proof = proof[0] if proof else None
    value = proof.get(PROOF_VALUE) if isinstance(proof, Mapping) else None
    if not isinstance(value, str):
        raise MalformedCredentialError(
            "The credential has no proof value", ["Missing proofValue in proof"]
        )
    return value
