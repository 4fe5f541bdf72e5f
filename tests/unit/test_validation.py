r"""Unit tests for input validation."""

from __future__ import annotations

import pytest

from abacus_client.exceptions import InvalidInputError
from abacus_client.validation import (
    parse_integer,
    require_non_empty,
    validate_name,
    validate_retry_params,
)

#######################################
#     Tests for require_non_empty     #
#######################################


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_require_non_empty_missing(value: str | None) -> None:
    with pytest.raises(InvalidInputError, match="Missing required input: namespace"):
        require_non_empty("namespace", value)


def test_require_non_empty_present() -> None:
    require_non_empty("namespace", "my-org")


###################################
#     Tests for validate_name     #
###################################


@pytest.mark.parametrize("value", ["abc", "my-org", "a.b_c-D9", "x" * 64])
def test_validate_name_valid(value: str) -> None:
    validate_name("key", value)


@pytest.mark.parametrize("value", ["ab", "bad/key", "x" * 65, "with space", "émoji", "abc\n"])
def test_validate_name_invalid(value: str) -> None:
    with pytest.raises(InvalidInputError, match="Invalid key"):
        validate_name("key", value)


###################################
#     Tests for parse_integer     #
###################################


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", 0), ("42", 42), ("-5", -5), (" 7 ", 7), ("3.0", 3), ("1e3", 1000)],
)
def test_parse_integer_valid(raw: str, expected: int) -> None:
    assert parse_integer("value", raw) == expected


@pytest.mark.parametrize(
    "raw", ["1.5", "abc", "", "inf", "-inf", "nan", "1e400", "1_000", "1_0.0", "\u0661\u0662", "0x10"]
)
def test_parse_integer_invalid(raw: str) -> None:
    with pytest.raises(InvalidInputError, match="Invalid value: expected integer"):
        parse_integer("value", raw)


###########################################
#     Tests for validate_retry_params     #
###########################################


def test_validate_retry_params_valid() -> None:
    validate_retry_params(max_attempts=1, initial_backoff=0, max_backoff=0, timeout=0.1)


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"max_attempts": 0}, "max_attempts must be >= 1"),
        ({"initial_backoff": -1}, "initial_backoff must be >= 0"),
        ({"max_backoff": 100}, "max_backoff must be >= initial_backoff"),
        ({"timeout": 0}, "timeout must be > 0"),
    ],
)
def test_validate_retry_params_invalid(kwargs: dict, message: str) -> None:
    params = {"max_attempts": 5, "initial_backoff": 500, "max_backoff": 8000, "timeout": 10.0}
    params.update(kwargs)
    with pytest.raises(ValueError, match=message):
        validate_retry_params(**params)
