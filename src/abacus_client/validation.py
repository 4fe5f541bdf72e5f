r"""Input validation utilities.

This module validates the raw inputs of an invocation (counter names,
numeric parameters) and the retry parameters of ``ClientConfig``. Every
check raises ``InvalidInputError`` so that validation failures abort the
invocation before any network call.
"""

from __future__ import annotations

__all__ = [
    "INTEGER_PATTERN",
    "NAME_PATTERN",
    "NUMBER_PATTERN",
    "parse_integer",
    "require_non_empty",
    "validate_name",
    "validate_retry_params",
]

import math
import re

from abacus_client.exceptions import InvalidInputError

# Namespaces and keys: 3 to 64 letters, digits, underscores, hyphens or dots
NAME_PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_.-]{3,64}$")

# Plain ASCII decimal notation, without digit separators
INTEGER_PATTERN: re.Pattern[str] = re.compile(r"[+-]?\d+", re.ASCII)
NUMBER_PATTERN: re.Pattern[str] = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)


def require_non_empty(name: str, value: str | None) -> None:
    """Check that a required input is present and not blank.

    Args:
        name: The input name, used in the error message.
        value: The raw input value.

    Raises:
        InvalidInputError: If the value is ``None``, empty or whitespace.

    Example:
        ```pycon
        >>> from abacus_client.validation import require_non_empty
        >>> require_non_empty("key", "visits")
        >>> require_non_empty("key", "  ")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Missing required input: key

        ```
    """
    if value is None or not value.strip():
        msg = f"Missing required input: {name}"
        raise InvalidInputError(msg)


def validate_name(kind: str, value: str) -> None:
    """Check that a namespace or key matches ``NAME_PATTERN``.

    Args:
        kind: ``"namespace"`` or ``"key"``, used in the error message.
        value: The name to check.

    Raises:
        InvalidInputError: If the name does not match the pattern.

    Example:
        ```pycon
        >>> from abacus_client.validation import validate_name
        >>> validate_name("namespace", "my-org.site")
        >>> validate_name("key", "ab")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Invalid key: must match ^[A-Za-z0-9_.-]{3,64}$ (got "ab")

        ```
    """
    if NAME_PATTERN.fullmatch(value) is None:
        msg = f'Invalid {kind}: must match {NAME_PATTERN.pattern} (got "{value}")'
        raise InvalidInputError(msg)


def parse_integer(name: str, raw: str) -> int:
    """Parse a raw input as a finite integer.

    Only plain ASCII decimal notation is read. Integral forms such as
    ``"5.0"`` or ``"1e3"`` are accepted; fractions, infinities, digit
    separators (``"1_000"``) and non-ASCII digits are rejected.

    Args:
        name: The input name, used in the error message.
        raw: The raw input value.

    Returns:
        The parsed integer.

    Raises:
        InvalidInputError: If the value is not a finite integer.

    Example:
        ```pycon
        >>> from abacus_client.validation import parse_integer
        >>> parse_integer("value", "-3")
        -3
        >>> parse_integer("value", "2.0")
        2
        >>> parse_integer("value", "1.5")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Invalid value: expected integer, got "1.5"

        ```
    """
    text = raw.strip()
    if NUMBER_PATTERN.fullmatch(text) is not None:
        if INTEGER_PATTERN.fullmatch(text) is not None:
            return int(text)
        number = float(text)
        if math.isfinite(number) and number.is_integer():
            return int(number)
    msg = f'Invalid {name}: expected integer, got "{raw}"'
    raise InvalidInputError(msg)


def validate_retry_params(
    max_attempts: int,
    initial_backoff: float,
    max_backoff: float,
    timeout: float,
) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Total number of attempts. Must be >= 1.
        initial_backoff: First backoff duration. Must be >= 0.
        max_backoff: Backoff ceiling. Must be >= initial_backoff.
        timeout: Seconds to wait for one exchange. Must be > 0.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from abacus_client.validation import validate_retry_params
        >>> validate_retry_params(max_attempts=5, initial_backoff=500, max_backoff=8000, timeout=10.0)

        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)
    if initial_backoff < 0:
        msg = f"initial_backoff must be >= 0, got {initial_backoff}"
        raise ValueError(msg)
    if max_backoff < initial_backoff:
        msg = f"max_backoff must be >= initial_backoff ({initial_backoff}), got {max_backoff}"
        raise ValueError(msg)
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)
