r"""Unit tests for the exponential backoff strategy."""

from __future__ import annotations

import pytest

from abacus_client.backoff import ExponentialBackoff


def test_exponential_backoff_calculate() -> None:
    backoff = ExponentialBackoff(base_delay=500, max_delay=8000)
    assert [backoff.calculate(i) for i in range(7)] == [500, 1000, 2000, 4000, 8000, 8000, 8000]


def test_exponential_backoff_next_delay() -> None:
    backoff = ExponentialBackoff(base_delay=500, max_delay=8000)
    assert backoff.next_delay(500) == 1000
    assert backoff.next_delay(6000) == 8000
    assert backoff.next_delay(8000) == 8000


def test_exponential_backoff_zero() -> None:
    backoff = ExponentialBackoff(base_delay=0, max_delay=0)
    assert backoff.calculate(3) == 0
    assert backoff.next_delay(0) == 0


def test_exponential_backoff_negative_base_delay() -> None:
    with pytest.raises(ValueError, match="base_delay must be non-negative"):
        ExponentialBackoff(base_delay=-1, max_delay=10)


def test_exponential_backoff_max_delay_below_base() -> None:
    with pytest.raises(ValueError, match="max_delay must be >= base_delay"):
        ExponentialBackoff(base_delay=500, max_delay=100)


def test_exponential_backoff_repr() -> None:
    assert repr(ExponentialBackoff(500, 8000)) == "ExponentialBackoff(base_delay=500, max_delay=8000)"
