"""
Process-wide settings.

Only the maximum accepted size of JSON response bodies is configurable here;
per-call settings (transport, output dialect) are keyword arguments of the
operations themselves.
"""

from __future__ import annotations

from typing import Any

from vc_client.errors import InvalidParameterError, UnexpectedResponseError

DEFAULT_MAX_JSON_SIZE = 10 * 1024 * 1024

_settings: dict[str, Any] = {"max_json_size": DEFAULT_MAX_JSON_SIZE}


def set_max_json_size(size: int | None) -> None:
    """Set the largest JSON body, in bytes, the client agrees to parse.

    Args:
        size: A positive number of bytes, or None to disable the check.

    Raises:
        InvalidParameterError: If size is not a positive integer.
    """
    if size is not None and (
        isinstance(size, bool) or not isinstance(size, int) or size <= 0
    ):
        raise InvalidParameterError(
            f"set_max_json_size: size must be a positive integer, got {size!r}"
        )
    _settings["max_json_size"] = size


def get_max_json_size() -> int | None:
    return _settings["max_json_size"]


def check_response_size(response: Any) -> None:
    """Refuse to parse a response body bigger than the configured limit.

    The Content-Length header is used when present, the actual body length
    otherwise.

    Raises:
        UnexpectedResponseError: If the body exceeds the limit.
    """
    limit = get_max_json_size()
    if limit is None:
        return

    content_length = response.headers.get("Content-Length")
    try:
        size = int(content_length) if content_length is not None else None
    except ValueError:
        size = None
    if size is None:
        size = len(response.content)

    if size > limit:
        raise UnexpectedResponseError(
            f"The response body is not safe to parse as JSON. "
            f"Max size=[{limit}], actual=[{size}]"
        )
