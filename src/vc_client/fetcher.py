"""
HTTP transport used by the operation clients.

A transport ("fetch") is any async callable with the signature

    await fetch(url, method="GET", *, json=None, headers=None) -> httpx.Response

Callers pass their own (for instance one carrying an authenticated session)
through the `fetch` keyword of every operation. When they do not, the
module-level `default_fetch` is used.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping

import httpx

from vc_client.config import check_response_size
from vc_client.errors import HttpError, UnexpectedResponseError

logger = logging.getLogger(__name__)

Fetch = Callable[..., Awaitable[httpx.Response]]

JSON_HEADERS = {"Content-Type": "application/json"}


class HttpxFetcher:
    """Default transport, one short-lived httpx.AsyncClient per request."""

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: HTTP request timeout in seconds.
            verify_ssl: Whether to verify SSL certificates.
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    async def __call__(
        self,
        url: str,
        method: str = "GET",
        *,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout, verify=self.verify_ssl
        ) as client:
            return await client.request(method, url, json=json, headers=headers)


default_fetch = HttpxFetcher()


async def send(
    fetch: Fetch | None,
    url: str,
    method: str = "GET",
    *,
    json: Any = None,
) -> httpx.Response:
    """Perform a single request through the given transport or the default one."""
    transport = fetch if fetch is not None else default_fetch
    logger.debug("%s %s", method, url)
    if json is None:
        return await transport(url, method, headers={"Accept": "application/json"})
    return await transport(url, method, json=json, headers=JSON_HEADERS)


def is_success(response: Any) -> bool:
    return 200 <= response.status_code < 300


def _body_or_none(response: Any) -> Any:
    try:
        check_response_size(response)
        return response.json()
    except (UnexpectedResponseError, ValueError):
        return None


def ensure_success(
    response: Any,
    description: str,
    error_cls: type[HttpError] = HttpError,
) -> None:
    """Raise if the response status is not 2xx.

    Args:
        response: The response returned by the transport.
        description: What was attempted, used as the message prefix.
        error_cls: The HttpError subclass to raise.

    Raises:
        HttpError: (or error_cls) carrying the status code and JSON body.
    """
    if is_success(response):
        return
    reason = getattr(response, "reason_phrase", "") or ""
    raise error_cls(
        f"{description} failed: {response.status_code} {reason}".rstrip(),
        status_code=response.status_code,
        body=_body_or_none(response),
    )


def parse_json(response: Any, description: str) -> Any:
    """Parse a successful response body as JSON.

    Raises:
        UnexpectedResponseError: If the body is too large or not JSON.
    """
    check_response_size(response)
    try:
        return response.json()
    except ValueError as e:
        raise UnexpectedResponseError(
            f"{description} returned a malformed, non-JSON response: {response.text}"
        ) from e
