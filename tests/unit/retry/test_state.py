r"""Unit tests for the retry loop state machine."""

from __future__ import annotations

import pytest

from abacus_client.backoff import ExponentialBackoff
from abacus_client.retry import (
    Outcome,
    RetryDecision,
    RetryPhase,
    RetryState,
    classify_status,
)


@pytest.fixture
def state() -> RetryState:
    return RetryState(max_attempts=5, backoff=ExponentialBackoff(500, 8000))


def run_outcomes(state: RetryState, *outcomes: Outcome) -> list[RetryDecision]:
    decisions = []
    for outcome in outcomes:
        decision = state.record(outcome)
        decisions.append(decision)
        if decision.retry:
            state.advance()
    return decisions


#####################################
#     Tests for classify_status     #
#####################################


@pytest.mark.parametrize("status_code", [200, 201, 204, 301, 400, 401, 403, 404, 409, 600])
def test_classify_status_final(status_code: int) -> None:
    assert classify_status(status_code) is Outcome.FINAL


def test_classify_status_rate_limited() -> None:
    assert classify_status(429) is Outcome.RATE_LIMITED


@pytest.mark.parametrize("status_code", [500, 502, 503, 504, 599])
def test_classify_status_server_error(status_code: int) -> None:
    assert classify_status(status_code) is Outcome.SERVER_ERROR


################################
#     Tests for RetryState     #
################################


def test_retry_state_initial(state: RetryState) -> None:
    assert state.attempt == 1
    assert state.backoff == 500
    assert state.phase is RetryPhase.ATTEMPTING
    assert state.has_attempts_left
    assert not state.is_finished


def test_retry_state_final_outcome(state: RetryState) -> None:
    assert state.record(Outcome.FINAL) == RetryDecision(retry=False)
    assert state.phase is RetryPhase.DONE
    assert state.is_finished


def test_retry_state_rate_limited_uses_retry_after(state: RetryState) -> None:
    assert state.record(Outcome.RATE_LIMITED, retry_after=2) == RetryDecision(retry=True, wait=2)
    assert state.phase is RetryPhase.WAITING
    assert state.backoff == 1000


def test_retry_state_rate_limited_without_retry_after(state: RetryState) -> None:
    assert state.record(Outcome.RATE_LIMITED) == RetryDecision(retry=True, wait=500)


def test_retry_state_retry_after_ignored_for_server_error(state: RetryState) -> None:
    assert state.record(Outcome.SERVER_ERROR, retry_after=2) == RetryDecision(retry=True, wait=500)


def test_retry_state_retry_after_then_backoff(state: RetryState) -> None:
    assert state.record(Outcome.RATE_LIMITED, retry_after=2).wait == 2
    state.advance()
    assert state.record(Outcome.RATE_LIMITED).wait == 1000
    state.advance()
    assert state.record(Outcome.FINAL) == RetryDecision(retry=False)
    assert state.attempt == 3


def test_retry_state_backoff_growth_is_capped() -> None:
    state = RetryState(max_attempts=8, backoff=ExponentialBackoff(500, 8000))
    decisions = run_outcomes(state, *[Outcome.SERVER_ERROR] * 8)
    assert [d.wait for d in decisions] == [500, 1000, 2000, 4000, 8000, 8000, 8000, None]


def test_retry_state_server_errors_exhausted(state: RetryState) -> None:
    decisions = run_outcomes(state, *[Outcome.SERVER_ERROR] * 5)
    assert [d.retry for d in decisions] == [True, True, True, True, False]
    assert state.attempt == 5
    assert state.phase is RetryPhase.DONE


def test_retry_state_rate_limit_exhausted(state: RetryState) -> None:
    run_outcomes(state, *[Outcome.RATE_LIMITED] * 5)
    assert state.phase is RetryPhase.DONE


def test_retry_state_transport_errors_exhausted(state: RetryState) -> None:
    decisions = run_outcomes(state, *[Outcome.TRANSPORT_ERROR] * 5)
    assert [d.wait for d in decisions] == [500, 1000, 2000, 4000, None]
    assert state.phase is RetryPhase.FAILED
    assert state.is_finished


def test_retry_state_single_attempt() -> None:
    state = RetryState(max_attempts=1, backoff=ExponentialBackoff(500, 8000))
    assert not state.has_attempts_left
    assert state.record(Outcome.RATE_LIMITED, retry_after=2) == RetryDecision(retry=False)
    assert state.phase is RetryPhase.DONE


def test_retry_state_record_requires_attempting(state: RetryState) -> None:
    state.record(Outcome.SERVER_ERROR)
    with pytest.raises(RuntimeError, match="cannot record an outcome in phase WAITING"):
        state.record(Outcome.FINAL)


def test_retry_state_advance_requires_waiting(state: RetryState) -> None:
    with pytest.raises(RuntimeError, match="cannot start a new attempt in phase ATTEMPTING"):
        state.advance()


def test_retry_state_invalid_max_attempts() -> None:
    with pytest.raises(ValueError, match="max_attempts must be >= 1"):
        RetryState(max_attempts=0, backoff=ExponentialBackoff(500, 8000))


def test_retry_state_repr(state: RetryState) -> None:
    assert repr(state) == "RetryState(attempt=1, max_attempts=5, backoff=500, phase=ATTEMPTING)"
