"""
Credential and presentation normalization.

Servers return Verifiable Credentials and Presentations in one of two
dialects of the same JSON-LD data:

- the legacy dialect, where every property uses its short name
  (`credentialSubject`, `proof.proofValue`, ...);
- the canonical dialect, where a fixed set of properties appears under its
  fully qualified IRI (`https://w3id.org/security#proofValue`, ...) and the
  short name is absent.

Every document is validated and kept internally in the canonical dialect.
The legacy dialect is a projection of it, computed once when requested.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import urlsplit

from vc_client.contexts import CRED, DC, SEC
from vc_client.documents import VerifiableCredential, VerifiablePresentation
from vc_client.errors import (
    MalformedCredentialError,
    MalformedDocumentError,
    MalformedPresentationError,
)


@dataclass(frozen=True)
class DualNamedField:
    """A property that may appear under its short name or its full IRI."""

    path: tuple[str, ...]
    bare: str
    qualified: str


PROOF_FIELDS = (
    DualNamedField(("proof",), "proofValue", f"{SEC}proofValue"),
    DualNamedField(("proof",), "proofPurpose", f"{SEC}proofPurpose"),
    DualNamedField(("proof",), "verificationMethod", f"{SEC}verificationMethod"),
    DualNamedField(("proof",), "created", f"{DC}created"),
)

CREDENTIAL_FIELDS = (
    DualNamedField((), "credentialSubject", f"{CRED}credentialSubject"),
) + PROOF_FIELDS

CREDENTIAL_SUBJECT = f"{CRED}credentialSubject"
PROOF_VALUE = f"{SEC}proofValue"
PROOF_PURPOSE = f"{SEC}proofPurpose"
VERIFICATION_METHOD = f"{SEC}verificationMethod"
PROOF_CREATED = f"{DC}created"


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 date-time, assuming UTC when no offset is given.

    Raises:
        ValueError: If value is not a valid date-time string.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected a date-time string, got {value!r}")
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _containers(doc: dict[str, Any], path: tuple[str, ...]) -> list[dict[str, Any]]:
    # A path step may lead to a single object or to a list of objects
    nodes = [doc]
    for key in path:
        children: list[dict[str, Any]] = []
        for node in nodes:
            value = node.get(key)
            if isinstance(value, dict):
                children.append(value)
            elif isinstance(value, list):
                children.extend(v for v in value if isinstance(v, dict))
        nodes = children
    return nodes


def _rename(
    doc: dict[str, Any],
    fields: tuple[DualNamedField, ...],
    qualify: bool,
    error_cls: type[MalformedDocumentError],
) -> None:
    for field in fields:
        source, target = (
            (field.bare, field.qualified) if qualify else (field.qualified, field.bare)
        )
        for container in _containers(doc, field.path):
            if source not in container:
                continue
            value = container.pop(source)
            if target in container and container[target] != value:
                problem = (
                    f"Conflicting values for [{field.bare}] and [{field.qualified}]"
                )
                raise error_cls(problem, [problem])
            container[target] = value


def _embedded_credentials(doc: dict[str, Any]) -> list[dict[str, Any]]:
    embedded = doc.get("verifiableCredential")
    if isinstance(embedded, dict):
        return [embedded]
    if isinstance(embedded, list):
        return [vc for vc in embedded if isinstance(vc, dict)]
    return []


def _convert(
    doc: Mapping[str, Any],
    presentation: bool,
    qualify: bool,
    error_cls: type[MalformedDocumentError],
) -> dict[str, Any]:
    result = copy.deepcopy(dict(doc))
    if presentation:
        _rename(result, PROOF_FIELDS, qualify, error_cls)
        for credential in _embedded_credentials(result):
            _rename(credential, CREDENTIAL_FIELDS, qualify, error_cls)
    else:
        _rename(result, CREDENTIAL_FIELDS, qualify, error_cls)
    return result


def to_canonical(
    doc: Mapping[str, Any],
    *,
    presentation: bool = False,
    error_cls: type[MalformedDocumentError] = MalformedDocumentError,
) -> dict[str, Any]:
    """Project a credential or presentation to the canonical dialect.

    Short-named dual properties are moved to their qualified key. Properties
    already qualified are left as they are, so the projection is idempotent.

    Args:
        doc: The document, in either dialect. It is not modified.
        presentation: Whether doc is a presentation (its embedded credentials
            are projected too).
        error_cls: Error raised when both names carry different values.

    Returns:
        A new document without any short-named dual property.
    """
    return _convert(doc, presentation, True, error_cls)


def to_legacy(
    doc: Mapping[str, Any],
    *,
    presentation: bool = False,
    error_cls: type[MalformedDocumentError] = MalformedDocumentError,
) -> dict[str, Any]:
    """Project a credential or presentation to the legacy dialect.

    The inverse of to_canonical: qualified dual properties are moved back to
    their short name.
    """
    return _convert(doc, presentation, False, error_cls)


def _validate_types(doc: Mapping[str, Any], expected: str) -> list[str]:
    types = doc.get("type")
    if types is None:
        return ["Missing type"]
    if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
        return ["type must be an array of strings"]
    if expected not in types:
        return [f"type must include '{expected}'"]
    return []


def _validate_date(doc: Mapping[str, Any], names: tuple[str, ...], required: bool) -> list[str]:
    present = [name for name in names if name in doc]
    if not present:
        return [f"Missing {names[0]}"] if required else []
    try:
        parse_datetime(doc[present[0]])
    except ValueError:
        return [f"Invalid {present[0]}: {doc[present[0]]!r}"]
    return []


def validate_credential(doc: Mapping[str, Any]) -> list[str]:
    """Validate the structure of a canonical Verifiable Credential.

    Args:
        doc: The credential, in the canonical dialect.

    Returns:
        List of validation problems (empty if valid).
    """
    problems: list[str] = []

    if "@context" not in doc:
        problems.append("Missing @context")
    if not isinstance(doc.get("id"), str):
        problems.append("Missing or non-string id")
    problems.extend(_validate_types(doc, "VerifiableCredential"))

    issuer = doc.get("issuer")
    if isinstance(issuer, dict):
        issuer = issuer.get("id")
    if not isinstance(issuer, str):
        problems.append("Missing issuer")

    problems.extend(_validate_date(doc, ("issuanceDate", "validFrom"), required=True))
    problems.extend(
        _validate_date(doc, ("expirationDate", "validUntil"), required=False)
    )

    problems.extend(_validate_subject(doc))

    proof = doc.get("proof")
    if proof is None:
        problems.append("Missing proof")
    else:
        for item in proof if isinstance(proof, list) else [proof]:
            problems.extend(_validate_proof(item))

    return problems


def _validate_subject(doc: Mapping[str, Any]) -> list[str]:
    if CREDENTIAL_SUBJECT not in doc:
        return ["Missing credentialSubject"]
    subject = doc[CREDENTIAL_SUBJECT]
    if isinstance(subject, list):
        if len(subject) != 1:
            return [f"Expected exactly one credentialSubject, found {len(subject)}"]
        subject = subject[0]
    # A bare IRI names the subject directly
    if isinstance(subject, str):
        return []
    if not isinstance(subject, dict) or not isinstance(subject.get("id"), str):
        return ["credentialSubject has no string id"]
    return []


def _validate_proof(proof: Any) -> list[str]:
    if not isinstance(proof, dict):
        return ["proof must be an object"]

    problems = []
    if not isinstance(proof.get("type"), str):
        problems.append("Missing type in proof")
    if not isinstance(proof.get(PROOF_VALUE), str):
        problems.append("Missing proofValue in proof")
    if not isinstance(proof.get(PROOF_PURPOSE), str):
        problems.append("Missing proofPurpose in proof")
    if not isinstance(proof.get(VERIFICATION_METHOD), str):
        problems.append("Missing verificationMethod in proof")

    if PROOF_CREATED not in proof:
        problems.append("Missing created in proof")
    else:
        try:
            parse_datetime(proof[PROOF_CREATED])
        except ValueError:
            problems.append(f"Invalid created in proof: {proof[PROOF_CREATED]!r}")
    return problems


def _is_url(value: str) -> bool:
    parts = urlsplit(value)
    return bool(parts.scheme) and bool(parts.netloc)


def validate_presentation(doc: Mapping[str, Any]) -> list[str]:
    """Validate the structure of a canonical Verifiable Presentation.

    Embedded credentials are validated as well; their problems are prefixed
    with their position in the verifiableCredential array.
    """
    problems: list[str] = []

    if "@context" not in doc:
        problems.append("Missing @context")
    if "id" in doc and not isinstance(doc["id"], str):
        problems.append("id must be a string")
    problems.extend(_validate_types(doc, "VerifiablePresentation"))

    holder = doc.get("holder")
    if holder is not None and not (isinstance(holder, str) and _is_url(holder)):
        problems.append(f"holder must be a URL, got {holder!r}")

    if "verifiableCredential" in doc:
        embedded = doc["verifiableCredential"]
        if not isinstance(embedded, list):
            problems.append("verifiableCredential must be an array")
        else:
            for index, credential in enumerate(embedded):
                if not isinstance(credential, dict):
                    problems.append(f"verifiableCredential[{index}]: not an object")
                    continue
                problems.extend(
                    f"verifiableCredential[{index}]: {problem}"
                    for problem in validate_credential(credential)
                )

    return problems


def normalize_credential(
    raw: Any,
    *,
    return_legacy_jsonld: bool = True,
) -> VerifiableCredential:
    """Validate a raw credential and build its canonical representation.

    Args:
        raw: A parsed JSON object claiming to be a Verifiable Credential, in
            either dialect. It is not modified.
        return_legacy_jsonld: Whether the legacy projection is also computed.

    Returns:
        The normalized VerifiableCredential.

    Raises:
        MalformedCredentialError: If raw is not a valid credential.
    """
    if not isinstance(raw, Mapping):
        problem = f"Expected a JSON object, got {type(raw).__name__}"
        raise MalformedCredentialError(
            f"The value is not a Verifiable Credential: {problem}", [problem]
        )

    canonical = to_canonical(raw, error_cls=MalformedCredentialError)
    problems = validate_credential(canonical)
    if problems:
        raise MalformedCredentialError(
            f"The value is not a Verifiable Credential: {'; '.join(problems)}",
            problems,
        )

    legacy = to_legacy(canonical) if return_legacy_jsonld else None
    return VerifiableCredential(canonical, legacy)


def normalize_presentation(
    raw: Any,
    *,
    return_legacy_jsonld: bool = True,
) -> VerifiablePresentation:
    """Validate a raw presentation and build its canonical representation.

    Raises:
        MalformedPresentationError: If raw, or one of the credentials it
            embeds, is malformed.
    """
    if not isinstance(raw, Mapping):
        problem = f"Expected a JSON object, got {type(raw).__name__}"
        raise MalformedPresentationError(
            f"The value is not a Verifiable Presentation: {problem}", [problem]
        )

    canonical = to_canonical(
        raw, presentation=True, error_cls=MalformedPresentationError
    )
    problems = validate_presentation(canonical)
    if problems:
        raise MalformedPresentationError(
            f"The value is not a Verifiable Presentation: {'; '.join(problems)}",
            problems,
        )

    legacy = to_legacy(canonical, presentation=True) if return_legacy_jsonld else None
    return VerifiablePresentation(canonical, legacy)


def normalize(
    raw: Any,
    *,
    return_legacy_jsonld: bool = True,
) -> VerifiableCredential | VerifiablePresentation:
    """Normalize a credential or a presentation, according to its declared type."""
    types = raw.get("type") if isinstance(raw, Mapping) else None
    if isinstance(types, list) and "VerifiablePresentation" in types:
        return normalize_presentation(raw, return_legacy_jsonld=return_legacy_jsonld)
    return normalize_credential(raw, return_legacy_jsonld=return_legacy_jsonld)


def is_verifiable_credential(data: Any) -> bool:
    """Check whether data is a valid Verifiable Credential, in either dialect."""
    try:
        normalize_credential(data, return_legacy_jsonld=False)
    except MalformedCredentialError:
        return False
    return True


def is_verifiable_presentation(data: Any) -> bool:
    """Check whether data is a valid Verifiable Presentation, in either dialect."""
    try:
        normalize_presentation(data, return_legacy_jsonld=False)
    except MalformedPresentationError:
        return False
    return True
