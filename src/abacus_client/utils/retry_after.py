r"""Retry-After header parsing utilities.

The counter service sends ``Retry-After`` as an integer number of
milliseconds, the same unit as the backoff durations of the retry loop.
"""

from __future__ import annotations

__all__ = ["parse_retry_after"]

from abacus_client.validation import parse_integer


def parse_retry_after(retry_after_header: str | None) -> int | None:
    """Parse the Retry-After header value of a rate-limited response.

    Args:
        retry_after_header: The value of the Retry-After header, or
            ``None`` if the header is absent.

    Returns:
        The number of milliseconds to wait, clamped to >= 0, or ``None``
        if the header is absent or empty.

    Raises:
        InvalidInputError: If the header is present but not an integer.

    Example:
        ```pycon
        >>> from abacus_client.utils import parse_retry_after
        >>> parse_retry_after("2")
        2
        >>> parse_retry_after("-10")
        0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("soon")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Invalid Retry-After: expected integer, got "soon"

        ```
    """
    if not retry_after_header:
        return None
    return max(0, parse_integer("Retry-After", retry_after_header))
