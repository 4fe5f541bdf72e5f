r"""Asynchronous client for the Abacus counter service."""

from __future__ import annotations

__all__ = ["AsyncAbacusClient", "run_operation_async"]

from typing import TYPE_CHECKING

import httpx

from abacus_client.client import finalize_result, log_request
from abacus_client.config import ClientConfig
from abacus_client.redaction import mark_secret
from abacus_client.request import CounterRequest, build_headers
from abacus_client.response import RemoteResult, interpret_response
from abacus_client.retry import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType
    from typing import Self

    from abacus_client.operations import Operation


class AsyncAbacusClient:
    r"""Asynchronous client for counter operations.

    Behaves like ``AbacusClient`` on top of ``httpx.AsyncClient``. Waits
    between attempts use ``asyncio.sleep`` so other tasks run meanwhile;
    the attempts of one operation stay strictly sequential.

    Args:
        config: Optional client configuration. Defaults to
            ``ClientConfig()``.
        client: Optional ``httpx.AsyncClient`` used to send the requests.
            A given client is left open for its owner to close.
        admin_key: Default admin credential for admin operations.
        sleep: Optional coroutine function used to wait between attempts,
            taking a duration in seconds.

    Example:
        ```pycon
        >>> import asyncio
        >>> from abacus_client import AsyncAbacusClient
        >>> async def main():
        ...     async with AsyncAbacusClient() as client:
        ...         result = await client.hit("my-org", "visits")
        ...     return result.get("value")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP
        43

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        admin_key: str | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(
            timeout=self._config.timeout
        )
        self._executor = AsyncRetryExecutor(self._config, sleep=sleep)
        self._admin_key = admin_key
        mark_secret(admin_key)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the underlying ``httpx.AsyncClient`` if this client
        created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def execute(self, request: CounterRequest) -> RemoteResult:
        """Send a counter request and interpret the final response.

        See ``AbacusClient.execute``.
        """
        url = request.url(self._config.base_url)
        log_request(request)
        response = await self._executor.execute(
            url=url,
            method=request.method,
            request_func=getattr(self._client, request.method.lower()),
            headers=build_headers(request),
        )
        return finalize_result(interpret_response(request.operation, response, url=url))

    async def request(
        self,
        operation: Operation | str,
        namespace: str,
        key: str,
        *,
        initializer: int | None = None,
        value: int | None = None,
        admin_key: str | None = None,
    ) -> RemoteResult:
        return await self.execute(
            CounterRequest(
                operation=operation,
                namespace=namespace,
                key=key,
                initializer=initializer,
                value=value,
                admin_key=admin_key or self._admin_key,
            )
        )

    async def hit(self, namespace: str, key: str) -> RemoteResult:
        return await self.request("hit", namespace, key)

    async def create(self, namespace: str, key: str, initializer: int = 0) -> RemoteResult:
        return await self.request("create", namespace, key, initializer=initializer)

    async def get(self, namespace: str, key: str) -> RemoteResult:
        return await self.request("get", namespace, key)

    async def info(self, namespace: str, key: str) -> RemoteResult:
        return await self.request("info", namespace, key)

    async def set(
        self, namespace: str, key: str, value: int, *, admin_key: str | None = None
    ) -> RemoteResult:
        return await self.request("set", namespace, key, value=value, admin_key=admin_key)

    async def update(
        self, namespace: str, key: str, value: int, *, admin_key: str | None = None
    ) -> RemoteResult:
        return await self.request("update", namespace, key, value=value, admin_key=admin_key)

    async def reset(self, namespace: str, key: str, *, admin_key: str | None = None) -> RemoteResult:
        return await self.request("reset", namespace, key, admin_key=admin_key)

    async def delete(
        self, namespace: str, key: str, *, admin_key: str | None = None
    ) -> RemoteResult:
        return await self.request("delete", namespace, key, admin_key=admin_key)


async def run_operation_async(
    operation: Operation | str,
    namespace: str,
    key: str,
    *,
    initializer: int | None = None,
    value: int | None = None,
    admin_key: str | None = None,
    config: ClientConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> RemoteResult:
    """Run one counter operation with a short-lived async client."""
    async with AsyncAbacusClient(config=config, client=client) as abacus:
        return await abacus.request(
            operation,
            namespace,
            key,
            initializer=initializer,
            value=value,
            admin_key=admin_key,
        )
