r"""Asynchronous retry executor for counter requests."""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from abacus_client.backoff import ExponentialBackoff
from abacus_client.config import ClientConfig
from abacus_client.retry.handlers import handle_response, handle_transport_error
from abacus_client.retry.state import RetryState

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes async HTTP requests with bounded retries and backoff.

    Attempts are strictly sequential. Rate-limited (429) and server error
    (5xx) responses are retried while attempts remain, as are transport
    errors. Any other response is returned as is, and so is a 429 or
    5xx once the attempts are exhausted. A transport error on the last
    attempt is re-raised unchanged.

    Args:
        config: The client configuration. Defaults to ``ClientConfig()``.
        sleep: The function used to wait between attempts, taking a
            duration in seconds. Defaults to ``asyncio.sleep``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from abacus_client.retry import AsyncRetryExecutor
        >>> async def main():
        ...     executor = AsyncRetryExecutor()
        ...     async with httpx.AsyncClient() as client:
        ...         return await executor.execute(
        ...             url="https://abacus.jasoncameron.dev/get/my-org/visits",
        ...             method="GET",
        ...             request_func=client.get,
        ...             headers={"Accept": "application/json"},
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.backoff = ExponentialBackoff(self.config.initial_backoff, self.config.max_backoff)
        self._sleep = sleep or asyncio.sleep

    def new_state(self) -> RetryState:
        return RetryState(max_attempts=self.config.max_attempts, backoff=self.backoff)

    async def execute(
        self,
        url: str,
        method: str,
        request_func: Callable[..., Awaitable[httpx.Response]],
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute a request with automatic retry logic.

        Args:
            url: The URL to request.
            method: The HTTP method name, used for logging.
            request_func: The function sending the request, e.g.
                ``client.get``. Called as ``request_func(url=url, **kwargs)``.
            **kwargs: Additional keyword arguments passed to
                ``request_func``, e.g. ``headers``. They are never logged.

        Returns:
            The final response.

        Raises:
            httpx.TransportError: If the last attempt fails at the
                transport level.
            InvalidInputError: If a retried 429 response carries a
                malformed ``Retry-After`` header.
        """
        state = self.new_state()
        logger.info(f"request: {method} {url}")

        while True:
            logger.info(f"attempt: {state.attempt}/{state.max_attempts}")
            try:
                response = await request_func(url=url, **kwargs)
            except httpx.TransportError as exc:
                decision = handle_transport_error(state, exc)
                if state.is_finished:
                    raise
            else:
                decision = handle_response(state, response)
                if state.is_finished:
                    return response

            await self._sleep(decision.wait / 1000)
            state.advance()
