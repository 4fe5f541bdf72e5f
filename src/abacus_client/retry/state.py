r"""Retry loop state machine.

The state machine decides, from the classified outcome of each attempt,
whether to retry and how long to wait. It performs no I/O.

Phases:

- ``ATTEMPTING``: an attempt is in flight.
- ``WAITING``: the previous attempt is retryable and the loop waits
  before the next one.
- ``DONE``: the last response is final and returned to the caller.
- ``FAILED``: the last attempt raised a transport error and the budget
  is exhausted.
"""

from __future__ import annotations

__all__ = ["Outcome", "RetryDecision", "RetryPhase", "RetryState", "classify_status"]

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abacus_client.backoff import ExponentialBackoff


class RetryPhase(Enum):
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    DONE = "done"
    FAILED = "failed"


class Outcome(Enum):
    """Classification of one attempt.

    ``FINAL`` covers every response that is never retried: 2xx, 3xx and
    4xx other than 429.
    """

    FINAL = "final"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"


def classify_status(status_code: int) -> Outcome:
    """Classify a response status code.

    Example:
        ```pycon
        >>> from abacus_client.retry import classify_status
        >>> classify_status(429), classify_status(503), classify_status(404)
        (<Outcome.RATE_LIMITED: 'rate_limited'>, <Outcome.SERVER_ERROR: 'server_error'>, <Outcome.FINAL: 'final'>)

        ```
    """
    if status_code == 429:
        return Outcome.RATE_LIMITED
    if 500 <= status_code <= 599:
        return Outcome.SERVER_ERROR
    return Outcome.FINAL


@dataclass(frozen=True)
class RetryDecision:
    """Decision taken after an attempt.

    Attributes:
        retry: Whether another attempt follows.
        wait: The wait before the next attempt, in milliseconds.
    """

    retry: bool
    wait: float | None = None


class RetryState:
    """Attempt counter and backoff of one retry loop.

    Args:
        max_attempts: Total number of attempts allowed.
        backoff: The backoff strategy giving the initial duration and its
            growth.

    Example:
        ```pycon
        >>> from abacus_client.backoff import ExponentialBackoff
        >>> from abacus_client.retry import Outcome, RetryState
        >>> state = RetryState(max_attempts=3, backoff=ExponentialBackoff(500, 8000))
        >>> state.record(Outcome.RATE_LIMITED, retry_after=2)
        RetryDecision(retry=True, wait=2)
        >>> state.advance()
        >>> state.record(Outcome.SERVER_ERROR)
        RetryDecision(retry=True, wait=1000)
        >>> state.advance()
        >>> state.record(Outcome.SERVER_ERROR)
        RetryDecision(retry=False, wait=None)
        >>> state.attempt, state.phase
        (3, <RetryPhase.DONE: 'done'>)

        ```
    """

    def __init__(self, max_attempts: int, backoff: ExponentialBackoff) -> None:
        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)
        self.max_attempts = max_attempts
        self.strategy = backoff
        self.attempt = 1
        self.backoff = backoff.base_delay
        self.phase = RetryPhase.ATTEMPTING

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(attempt={self.attempt}, "
            f"max_attempts={self.max_attempts}, backoff={self.backoff}, phase={self.phase.name})"
        )

    @property
    def has_attempts_left(self) -> bool:
        return self.attempt < self.max_attempts

    @property
    def is_finished(self) -> bool:
        return self.phase in (RetryPhase.DONE, RetryPhase.FAILED)

    def record(self, outcome: Outcome, retry_after: float | None = None) -> RetryDecision:
        """Record the outcome of the current attempt.

        Args:
            outcome: The classified outcome of the attempt.
            retry_after: The server-specified wait, in milliseconds. Only
                used for rate-limited outcomes.

        Returns:
            The decision. When it is a retry, the backoff has already been
            doubled (bounded by the ceiling) for the following retry.

        Raises:
            RuntimeError: If no attempt is in flight.
        """
        if self.phase is not RetryPhase.ATTEMPTING:
            msg = f"cannot record an outcome in phase {self.phase.name}"
            raise RuntimeError(msg)

        if outcome is Outcome.FINAL:
            self.phase = RetryPhase.DONE
            return RetryDecision(retry=False)
        if not self.has_attempts_left:
            self.phase = (
                RetryPhase.FAILED if outcome is Outcome.TRANSPORT_ERROR else RetryPhase.DONE
            )
            return RetryDecision(retry=False)

        wait = self.backoff
        if outcome is Outcome.RATE_LIMITED and retry_after is not None:
            wait = retry_after
        self.backoff = self.strategy.next_delay(self.backoff)
        self.phase = RetryPhase.WAITING
        return RetryDecision(retry=True, wait=wait)

    def advance(self) -> None:
        """Start the next attempt after a wait.

        Raises:
            RuntimeError: If the loop is not waiting.
        """
        if self.phase is not RetryPhase.WAITING:
            msg = f"cannot start a new attempt in phase {self.phase.name}"
            raise RuntimeError(msg)
        self.attempt += 1
        self.phase = RetryPhase.ATTEMPTING
