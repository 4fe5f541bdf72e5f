r"""Interpretation of counter service responses.

The response body is parsed as JSON; a body that is not valid JSON is
kept under an ``error`` field instead of failing the invocation.
Success is decided by the HTTP status code alone.
"""

from __future__ import annotations

__all__ = ["RemoteResult", "interpret_response", "read_json_safely"]

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from abacus_client.exceptions import RequestFailedError
from abacus_client.operations import Operation, get_operation_spec
from abacus_client.redaction import sanitize_for_logs

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def read_json_safely(text: str) -> tuple[str, Any]:
    """Parse a response body as JSON without failing.

    Args:
        text: The raw response body.

    Returns:
        A ``(raw_text, payload)`` tuple. An empty body gives an empty
        payload and an unparseable body gives ``{"error": raw_text}``.

    Example:
        ```pycon
        >>> from abacus_client.response import read_json_safely
        >>> read_json_safely('{"value": 3}')
        ('{"value": 3}', {'value': 3})
        >>> read_json_safely("")
        ('', {})
        >>> read_json_safely("Bad Gateway")
        ('Bad Gateway', {'error': 'Bad Gateway'})

        ```
    """
    if not text:
        return "", {}
    try:
        return text, json.loads(text)
    except ValueError:
        return text, {"error": text}


@dataclass
class RemoteResult:
    """Interpreted response of a counter operation.

    Attributes:
        operation: The operation that produced the response.
        status_code: The HTTP status code.
        payload: The parsed body. Usually a mapping; other JSON values
            are kept as is.
        raw_text: The raw body.
        url: The requested URL, if known.
        response: The underlying response, if available.

    Example:
        ```pycon
        >>> from abacus_client.operations import Operation
        >>> from abacus_client.response import RemoteResult
        >>> result = RemoteResult(
        ...     Operation.CREATE,
        ...     200,
        ...     {"value": 0, "namespace": "org", "key": "k", "admin_key": "secret"},
        ... )
        >>> result.ok
        True
        >>> result.outputs()
        {'value': 0, 'namespace': 'org', 'key': 'k', 'admin_key': 'secret'}
        >>> result.secret_outputs()
        ('admin_key',)

        ```
    """

    operation: Operation
    status_code: int
    payload: Any = field(default_factory=dict)
    raw_text: str = ""
    url: str | None = None
    response: httpx.Response | None = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    def get(self, name: str, default: Any = None) -> Any:
        """Return a payload field, or ``default`` if it is absent or null."""
        if not isinstance(self.payload, dict):
            return default
        value = self.payload.get(name)
        return default if value is None else value

    @property
    def error_message(self) -> str | None:
        """The failure message, or ``None`` for a successful response.

        The payload ``error`` field is used when it is a string, otherwise
        a generic message naming the status code. The attempted operation
        is always appended.
        """
        if self.ok:
            return None
        error = self.get("error")
        message = error if isinstance(error, str) else f"Request failed with status {self.status_code}"
        return f"{message} (operation={self.operation.value})"

    def outputs(self) -> dict[str, Any]:
        """Return the output fields of the operation present in the payload.

        Absent and null fields are omitted, never defaulted.
        """
        spec = get_operation_spec(self.operation)
        return {name: self.get(name) for name in spec.output_fields if self.get(name) is not None}

    def secret_outputs(self) -> tuple[str, ...]:
        """Return the names of output fields that must be handled as
        secrets."""
        if self.operation is Operation.CREATE and isinstance(self.get("admin_key"), str):
            return ("admin_key",)
        return ()

    def raise_for_status(self) -> RemoteResult:
        """Raise ``RequestFailedError`` for a non-2xx status.

        Returns:
            The result itself, to allow chaining.
        """
        if not self.ok:
            raise RequestFailedError(
                self.error_message,
                operation=self.operation.value,
                status_code=self.status_code,
                url=self.url,
                response=self.response,
                payload=self.payload,
            )
        return self


def interpret_response(
    operation: Operation | str, response: httpx.Response, url: str | None = None
) -> RemoteResult:
    """Turn the final response of the retry loop into a ``RemoteResult``.

    Args:
        operation: The attempted operation.
        response: The final HTTP response.
        url: The requested URL, reported in errors.

    Returns:
        The interpreted result. Failures are not raised here; call
        ``RemoteResult.raise_for_status``.
    """
    spec = get_operation_spec(operation)
    raw_text, payload = read_json_safely(response.text)
    logger.debug(f"response body: {sanitize_for_logs(payload)}")
    return RemoteResult(
        operation=spec.operation,
        status_code=response.status_code,
        payload=payload,
        raw_text=raw_text,
        url=url,
        response=response,
    )
