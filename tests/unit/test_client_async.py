r"""Unit tests for the asynchronous counter client."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import httpx
import pytest

from abacus_client import AsyncAbacusClient, run_operation_async
from abacus_client.exceptions import InvalidInputError, RequestFailedError
from abacus_client.redaction import get_secret_registry

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://abacus.jasoncameron.dev"


@pytest.fixture
def make_client(
    make_transport: Callable[..., httpx.MockTransport], mock_asleep: AsyncMock
) -> Callable[..., AsyncAbacusClient]:
    def factory(*outcomes: httpx.Response | Exception, **kwargs) -> AsyncAbacusClient:
        http_client = httpx.AsyncClient(transport=make_transport(*outcomes))
        return AsyncAbacusClient(client=http_client, sleep=mock_asleep, **kwargs)

    return factory


@pytest.mark.asyncio
async def test_async_abacus_client_hit(
    make_client: Callable[..., AsyncAbacusClient], sent_requests: list[httpx.Request]
) -> None:
    async with make_client(httpx.Response(200, json={"value": 43})) as client:
        result = await client.hit("my-org", "visits")
    assert result.outputs() == {"value": 43}
    assert str(sent_requests[0].url) == f"{BASE_URL}/hit/my-org/visits"


@pytest.mark.asyncio
async def test_async_abacus_client_create(make_client: Callable[..., AsyncAbacusClient]) -> None:
    payload = {"value": 0, "namespace": "org", "key": "k", "admin_key": "async-admin-key"}
    async with make_client(httpx.Response(200, json=payload)) as client:
        result = await client.create("org", "kkk")
    assert result.outputs() == payload
    assert "async-admin-key" in get_secret_registry()


@pytest.mark.asyncio
async def test_async_abacus_client_admin_operation(
    make_client: Callable[..., AsyncAbacusClient], sent_requests: list[httpx.Request]
) -> None:
    async with make_client(httpx.Response(200, json={"value": 5}), admin_key="k3y") as client:
        await client.set("my-org", "visits", 5)
    assert sent_requests[0].method == "POST"
    assert str(sent_requests[0].url) == f"{BASE_URL}/set/my-org/visits?value=5"
    assert sent_requests[0].headers["Authorization"] == "Bearer k3y"


@pytest.mark.asyncio
async def test_async_abacus_client_retries(
    make_client: Callable[..., AsyncAbacusClient], mock_asleep: AsyncMock
) -> None:
    async with make_client(
        httpx.ConnectError("refused"), httpx.Response(502), httpx.Response(200, json={"value": 2})
    ) as client:
        result = await client.update("my-org", "visits", 1, admin_key="k3y")
    assert result.get("value") == 2
    assert [c.args[0] for c in mock_asleep.await_args_list] == [0.5, 1.0]


@pytest.mark.asyncio
async def test_async_abacus_client_application_error(
    make_client: Callable[..., AsyncAbacusClient],
) -> None:
    async with make_client(httpx.Response(400, json={"error": "Invalid key"})) as client:
        with pytest.raises(RequestFailedError, match=r"Invalid key \(operation=info\)"):
            await client.info("my-org", "visits")


@pytest.mark.asyncio
async def test_async_abacus_client_validation_before_network(
    make_client: Callable[..., AsyncAbacusClient], sent_requests: list[httpx.Request]
) -> None:
    async with make_client() as client:
        with pytest.raises(InvalidInputError):
            await client.get("ab", "visits")
    assert sent_requests == []


@pytest.mark.asyncio
async def test_async_abacus_client_closes_own_client() -> None:
    client = AsyncAbacusClient()
    async with client:
        pass
    assert client._client.is_closed


@pytest.mark.asyncio
async def test_run_operation_async(
    make_transport: Callable[..., httpx.MockTransport],
) -> None:
    async with httpx.AsyncClient(
        transport=make_transport(httpx.Response(200, json={"value": 4}))
    ) as http_client:
        result = await run_operation_async("hit", "my-org", "visits", client=http_client)
    assert result.get("value") == 4
