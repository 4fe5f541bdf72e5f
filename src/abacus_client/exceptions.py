r"""Exceptions raised by the Abacus counter client.

Transport failures (connection errors, timeouts) are not wrapped: once
the retry budget is exhausted the original ``httpx.TransportError`` is
re-raised to the caller.
"""

from __future__ import annotations

__all__ = ["AbacusError", "InvalidInputError", "RequestFailedError"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class AbacusError(Exception):
    """Base class for errors raised by the counter client."""


class InvalidInputError(AbacusError, ValueError):
    """Raised when an input is missing or malformed.

    Validation happens before any network activity, except for a
    malformed ``Retry-After`` header which is reported while retrying.

    Example:
        ```pycon
        >>> from abacus_client.exceptions import InvalidInputError
        >>> raise InvalidInputError("Missing required input: key")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Missing required input: key

        ```
    """


class RequestFailedError(AbacusError):
    """Raised when the final response has a non-2xx status code.

    Args:
        message: The human-readable error message.
        operation: The name of the attempted operation.
        status_code: The HTTP status code of the final response.
        url: The requested URL.
        response: The final ``httpx.Response``, if available.
        payload: The interpreted response payload.

    Example:
        ```pycon
        >>> from abacus_client.exceptions import RequestFailedError
        >>> err = RequestFailedError(
        ...     "Key not found (operation=get)", operation="get", status_code=404
        ... )
        >>> err.status_code
        404
        >>> str(err)
        'Key not found (operation=get)'

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        status_code: int,
        url: str | None = None,
        response: httpx.Response | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.status_code = status_code
        self.url = url
        self.response = response
        self.payload = payload
