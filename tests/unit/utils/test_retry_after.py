r"""Unit tests for Retry-After header parsing utilities."""

from __future__ import annotations

import pytest

from abacus_client.exceptions import InvalidInputError
from abacus_client.utils import parse_retry_after

#######################################
#     Tests for parse_retry_after     #
#######################################


@pytest.mark.parametrize(("header", "wait"), [("2", 2), ("0", 0), ("1500", 1500), (" 30 ", 30)])
def test_parse_retry_after_integer(header: str, wait: int) -> None:
    assert parse_retry_after(header) == wait


@pytest.mark.parametrize("header", [None, ""])
def test_parse_retry_after_absent(header: str | None) -> None:
    assert parse_retry_after(header) is None


def test_parse_retry_after_negative_is_clamped() -> None:
    assert parse_retry_after("-100") == 0


@pytest.mark.parametrize("header", ["soon", "1.5", "1_000", "\u0662", "Wed, 21 Oct 2015 07:28:00 GMT"])
def test_parse_retry_after_malformed(header: str) -> None:
    with pytest.raises(InvalidInputError, match="Invalid Retry-After"):
        parse_retry_after(header)
