r"""abacus_client - Resilient client for the Abacus counter service.

This package issues counter operations (hit, create, get, info, set,
update, reset, delete) against a namespaced key over HTTP and returns
the resulting counter state. Built on top of the httpx library, it
retries rate-limited and transient server failures with a bounded
exponential backoff and keeps admin credentials out of the logs.

Key Features:
    - Automatic retry of 429 and 5xx responses and transport errors
    - Retry-After header support for rate-limited responses
    - Bounded doubling backoff with a hard attempt ceiling
    - Validation of every input before any network call
    - Redaction of credentials in diagnostic output
    - Sync and async clients, and a GitHub Actions entry point

Example:
    ```pycon
    >>> from abacus_client import AbacusClient
    >>> with AbacusClient() as client:  # doctest: +SKIP
    ...     result = client.hit("my-org", "visits")
    ...
    >>> result.outputs()  # doctest: +SKIP
    {'value': 43}

    ```
"""

from __future__ import annotations

__all__ = [
    "AbacusClient",
    "AbacusError",
    "AsyncAbacusClient",
    "ClientConfig",
    "CounterRequest",
    "InvalidInputError",
    "Operation",
    "RemoteResult",
    "RequestFailedError",
    "__version__",
    "build_url",
    "run_operation",
    "run_operation_async",
    "sanitize_for_logs",
]

from importlib.metadata import PackageNotFoundError, version

from abacus_client.client import AbacusClient, run_operation
from abacus_client.client_async import AsyncAbacusClient, run_operation_async
from abacus_client.config import ClientConfig
from abacus_client.exceptions import AbacusError, InvalidInputError, RequestFailedError
from abacus_client.operations import Operation
from abacus_client.redaction import sanitize_for_logs
from abacus_client.request import CounterRequest
from abacus_client.response import RemoteResult
from abacus_client.url import build_url

try:
    __version__ = version("abacus-client")
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
