"""
Exception taxonomy for the VC HTTP API client.

Every error raised by this package derives from VcClientError. HTTP failures
embed the status code in their message so callers can match on it.
"""

from __future__ import annotations

from typing import Any


class VcClientError(Exception):
    """Base class for all errors raised by vc_client."""


class InvalidParameterError(VcClientError, ValueError):
    """Raised when a caller passes an unusable identifier or object."""


class MalformedDocumentError(VcClientError):
    """Raised when a JSON-LD document does not have the expected shape."""

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = list(problems or [])


class MalformedCredentialError(MalformedDocumentError):
    """Raised when a Verifiable Credential fails shape validation."""


class MalformedPresentationError(MalformedDocumentError):
    """Raised when a Verifiable Presentation fails shape validation."""


class UnexpectedResponseError(VcClientError):
    """Raised when a successful response has an unusable body."""


class HttpError(VcClientError):
    """Raised when a remote service answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human readable message, including the status code.
            status_code: The HTTP status code of the response.
            body: The parsed JSON body of the response, if any.
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def errors(self) -> list[str]:
        """The `errors` array reported by the service, if any."""
        if isinstance(self.body, dict) and isinstance(self.body.get("errors"), list):
            return [str(e) for e in self.body["errors"]]
        return []


class RevocationError(HttpError):
    """Raised when the status service refuses a revocation request."""
