r"""Synchronous client for the Abacus counter service.

This module provides a context manager-based client issuing counter
operations with automatic retry logic, and ``run_operation`` for
one-shot invocations.
"""

from __future__ import annotations

__all__ = ["AbacusClient", "run_operation"]

import logging
from typing import TYPE_CHECKING

import httpx

from abacus_client.config import ClientConfig
from abacus_client.redaction import mark_secret
from abacus_client.request import CounterRequest, build_headers
from abacus_client.response import RemoteResult, interpret_response
from abacus_client.retry import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

    from abacus_client.operations import Operation

logger: logging.Logger = logging.getLogger(__name__)


def log_request(request: CounterRequest) -> None:
    logger.info(f"op: {request.operation.value} namespace={request.namespace} key={request.key}")


def finalize_result(result: RemoteResult) -> RemoteResult:
    """Raise for a failed result and mark its secret outputs."""
    result.raise_for_status()
    for name in result.secret_outputs():
        mark_secret(result.get(name))
    return result


class AbacusClient:
    r"""Synchronous client for counter operations.

    The client sends each operation through a ``RetryExecutor`` and
    interprets the final response. When no ``httpx.Client`` is given, one
    is created with the configured timeout and closed when the context
    manager exits; a given client is left open for its owner to close.

    Args:
        config: Optional client configuration. Defaults to
            ``ClientConfig()``.
        client: Optional ``httpx.Client`` used to send the requests.
        admin_key: Default admin credential for admin operations.
        sleep: Optional function used to wait between attempts, taking a
            duration in seconds.

    Example:
        ```pycon
        >>> from abacus_client import AbacusClient
        >>> with AbacusClient() as client:  # doctest: +SKIP
        ...     created = client.create("my-org", "visits")
        ...     hit = client.hit("my-org", "visits")
        ...     hit.get("value")
        ...
        1

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.Client | None = None,
        admin_key: str | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=self._config.timeout)
        self._executor = RetryExecutor(self._config, sleep=sleep)
        self._admin_key = admin_key
        mark_secret(admin_key)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        """Close the underlying ``httpx.Client`` if this client created
        it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def execute(self, request: CounterRequest) -> RemoteResult:
        """Send a counter request and interpret the final response.

        Args:
            request: The validated request.

        Returns:
            The successful result. Secret output fields (the admin key
            returned by ``create``) are marked as secrets.

        Raises:
            RequestFailedError: If the final response is not 2xx.
            httpx.TransportError: If every attempt failed at the
                transport level.
            InvalidInputError: If a retried 429 response carries a
                malformed ``Retry-After`` header.
        """
        url = request.url(self._config.base_url)
        log_request(request)
        response = self._executor.execute(
            url=url,
            method=request.method,
            request_func=getattr(self._client, request.method.lower()),
            headers=build_headers(request),
        )
        return finalize_result(interpret_response(request.operation, response, url=url))

    def request(
        self,
        operation: Operation | str,
        namespace: str,
        key: str,
        *,
        initializer: int | None = None,
        value: int | None = None,
        admin_key: str | None = None,
    ) -> RemoteResult:
        """Validate and send a counter operation.

        The client's default admin key is used when ``admin_key`` is not
        given.

        Raises:
            InvalidInputError: If a parameter is missing or malformed.
        """
        return self.execute(
            CounterRequest(
                operation=operation,
                namespace=namespace,
                key=key,
                initializer=initializer,
                value=value,
                admin_key=admin_key or self._admin_key,
            )
        )

    def hit(self, namespace: str, key: str) -> RemoteResult:
        """Increment a counter by one and return its new value."""
        return self.request("hit", namespace, key)

    def create(self, namespace: str, key: str, initializer: int = 0) -> RemoteResult:
        """Create a counter.

        The result carries the ``admin_key`` of the new counter. It is
        only returned by this call and must be stored by the caller.
        """
        return self.request("create", namespace, key, initializer=initializer)

    def get(self, namespace: str, key: str) -> RemoteResult:
        """Read a counter without incrementing it."""
        return self.request("get", namespace, key)

    def info(self, namespace: str, key: str) -> RemoteResult:
        return self.request("info", namespace, key)

    def set(self, namespace: str, key: str, value: int, *, admin_key: str | None = None) -> RemoteResult:
        return self.request("set", namespace, key, value=value, admin_key=admin_key)

    def update(
        self, namespace: str, key: str, value: int, *, admin_key: str | None = None
    ) -> RemoteResult:
        """Add ``value`` (possibly negative) to a counter."""
        return self.request("update", namespace, key, value=value, admin_key=admin_key)

    def reset(self, namespace: str, key: str, *, admin_key: str | None = None) -> RemoteResult:
        return self.request("reset", namespace, key, admin_key=admin_key)

    def delete(self, namespace: str, key: str, *, admin_key: str | None = None) -> RemoteResult:
        return self.request("delete", namespace, key, admin_key=admin_key)


def run_operation(
    operation: Operation | str,
    namespace: str,
    key: str,
    *,
    initializer: int | None = None,
    value: int | None = None,
    admin_key: str | None = None,
    config: ClientConfig | None = None,
    client: httpx.Client | None = None,
) -> RemoteResult:
    """Run one counter operation with a short-lived client.

    Example:
        ```pycon
        >>> from abacus_client import run_operation
        >>> result = run_operation("get", "my-org", "visits")  # doctest: +SKIP
        >>> result.outputs()  # doctest: +SKIP
        {'value': 42}

        ```
    """
    with AbacusClient(config=config, client=client) as abacus:
        return abacus.request(
            operation,
            namespace,
            key,
            initializer=initializer,
            value=value,
            admin_key=admin_key,
        )
