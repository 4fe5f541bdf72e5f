r"""Exponential backoff strategy used between retry attempts."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]


class ExponentialBackoff:
    """Doubling backoff with a ceiling.

    Calculates the delay as ``base_delay * (2 ** retry_index)``, capped at
    ``max_delay``. Delays use the same unit as their inputs; the retry
    loop works in milliseconds.

    Args:
        base_delay: The delay before the first retry.
        max_delay: The maximum delay.

    Example:
        ```pycon
        >>> from abacus_client.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=500, max_delay=8000)
        >>> [backoff.calculate(i) for i in range(6)]
        [500, 1000, 2000, 4000, 8000, 8000]

        ```
    """

    def __init__(self, base_delay: float, max_delay: float) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay < base_delay:
            msg = f"max_delay must be >= base_delay ({base_delay}), got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_delay={self.base_delay}, max_delay={self.max_delay})"

    def calculate(self, retry_index: int) -> float:
        """Calculate the delay before a retry.

        Args:
            retry_index: The retry number (0-indexed): 0 is the first retry.

        Returns:
            The delay, capped at ``max_delay``.
        """
        return min(self.base_delay * (2**retry_index), self.max_delay)

    def next_delay(self, delay: float) -> float:
        """Return the delay following ``delay``: doubled, then capped."""
        return min(delay * 2, self.max_delay)
