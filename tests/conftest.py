from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def mock_sleep() -> Mock:
    """Create a fake sleep function recording the waits in seconds."""
    return Mock(return_value=None)


@pytest.fixture
def mock_asleep() -> AsyncMock:
    """Create a fake async sleep function recording the waits in
    seconds."""
    return AsyncMock(return_value=None)


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Collect the requests received by the mock transport."""
    return []


@pytest.fixture
def make_transport(
    sent_requests: list[httpx.Request],
) -> Callable[..., httpx.MockTransport]:
    """Create a mock transport replaying a sequence of responses.

    Each item is either an ``httpx.Response`` to return or an exception
    to raise for the corresponding attempt.
    """

    def factory(*outcomes: httpx.Response | Exception) -> httpx.MockTransport:
        remaining = list(outcomes)

        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            outcome = remaining.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        return httpx.MockTransport(handler)

    return factory
