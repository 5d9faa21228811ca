"""
Read-only value objects for normalized credentials and presentations.

Instances are built by vc_client.normalizer and never modified afterwards.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any


class JsonLdDocument(Mapping[str, Any]):
    """A normalized JSON-LD document.

    Holds the canonical form and, when it was requested, the legacy
    projection. Item access reads the legacy view if there is one, and the
    canonical view otherwise. Every accessor hands out copies, so the
    document cannot be changed once built.
    """

    def __init__(
        self,
        canonical: dict[str, Any],
        legacy: dict[str, Any] | None = None,
    ) -> None:
        self._canonical = canonical
        self._legacy = legacy

    @property
    def canonical(self) -> dict[str, Any]:
        return copy.deepcopy(self._canonical)

    @property
    def legacy(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._legacy)

    @property
    def _view(self) -> dict[str, Any]:
        return self._legacy if self._legacy is not None else self._canonical

    def __getitem__(self, key: str) -> Any:
        return copy.deepcopy(self._view[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._view)

    def __len__(self) -> int:
        return len(self._view)

    def __repr__(self) -> str:
        dialect = "legacy" if self._legacy is not None else "canonical"
        return f"{type(self).__name__}(id={self.id!r}, dialect={dialect})"

    @property
    def id(self) -> str | None:
        return self._canonical.get("id")

    @property
    def types(self) -> list[str]:
        return list(self._canonical.get("type", []))

    def to_json(self) -> dict[str, Any]:
        """Return a deep copy of the item-access view, safe to modify or serialize."""
        return copy.deepcopy(self._view)


class VerifiableCredential(JsonLdDocument):
    """A validated Verifiable Credential.

    The typed properties below give the same answer whichever dialect the
    credential was received or projected in.
    """

    @property
    def credential_subject(self) -> dict[str, Any]:
        from vc_client.getters import get_credential_subject

        subject = get_credential_subject(self)
        return {"id": subject.value, **subject.claims}

    @property
    def issuer(self) -> str:
        from vc_client.getters import get_issuer

        return get_issuer(self)

    @property
    def issuance_date(self) -> datetime:
        from vc_client.getters import get_issuance_date

        return get_issuance_date(self)

    @property
    def expiration_date(self) -> datetime | None:
        from vc_client.getters import get_expiration_date

        return get_expiration_date(self)

    @property
    def proof_value(self) -> str:
        from vc_client.getters import get_proof_value

        return get_proof_value(self)


class VerifiablePresentation(JsonLdDocument):
    """A validated Verifiable Presentation."""

    @property
    def holder(self) -> str | None:
        return self._canonical.get("holder")

    @property
    def verifiable_credentials(self) -> list[VerifiableCredential]:
        """The embedded credentials, in the same dialects as the presentation."""
        from vc_client.normalizer import to_legacy

        credentials = self._canonical.get("verifiableCredential", [])
        return [
            VerifiableCredential(
                credential,
                to_legacy(credential) if self._legacy is not None else None,
            )
            for credential in credentials
        ]
