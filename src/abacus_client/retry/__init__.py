r"""Retry package for counter requests.

Public API:
    - RetryState: I/O free state machine of the retry loop
    - RetryDecision: Decision taken after each attempt
    - Outcome: Classification of an attempt
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "Outcome",
    "RetryDecision",
    "RetryExecutor",
    "RetryPhase",
    "RetryState",
    "classify_status",
]

from abacus_client.retry.executor import RetryExecutor
from abacus_client.retry.executor_async import AsyncRetryExecutor
from abacus_client.retry.state import (
    Outcome,
    RetryDecision,
    RetryPhase,
    RetryState,
    classify_status,
)
