r"""Configuration dataclass and defaults for the Abacus counter client.

This module provides the default constants used by the retry loop and a
dataclass-based configuration object shared by ``AbacusClient`` and
``AsyncAbacusClient``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_INITIAL_BACKOFF",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_BACKOFF",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
]

from dataclasses import dataclass, replace
from typing import Any

from abacus_client.validation import validate_retry_params

# Origin of the public Abacus counter service
DEFAULT_BASE_URL = "https://abacus.jasoncameron.dev"

# Total number of attempts, including the initial one
DEFAULT_MAX_ATTEMPTS = 5

# Backoff durations are expressed in milliseconds, like Retry-After.
# 1st retry waits 500ms, then 1000ms, 2000ms, 4000ms, capped at 8000ms
DEFAULT_INITIAL_BACKOFF = 500
DEFAULT_MAX_BACKOFF = 8000

# Default timeout in seconds for a single HTTP exchange
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the counter client and its retry loop.

    Args:
        base_url: Origin of the counter service. A trailing slash is
            removed when URLs are built.
        max_attempts: Total number of attempts, including the first one.
            Must be >= 1.
        initial_backoff: Wait before the first retry, in milliseconds.
            Must be >= 0.
        max_backoff: Ceiling of the doubling backoff, in milliseconds.
            Must be >= initial_backoff.
        timeout: Maximum seconds to wait for one HTTP exchange. Only used
            when the client creates its own ``httpx`` client. Must be > 0.

    Example:
        ```pycon
        >>> from abacus_client.config import ClientConfig
        >>> config = ClientConfig()
        >>> config.max_attempts
        5
        >>> config.merge(max_attempts=2).max_attempts
        2
        >>> config.merge(max_attempts=None).max_attempts
        5

        ```
    """

    base_url: str = DEFAULT_BASE_URL
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF
    max_backoff: float = DEFAULT_MAX_BACKOFF
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_retry_params(
            max_attempts=self.max_attempts,
            initial_backoff=self.initial_backoff,
            max_backoff=self.max_backoff,
            timeout=self.timeout,
        )

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with the non-None overrides applied.

        Args:
            **overrides: Keyword arguments for the fields to override.

        Returns:
            A new ``ClientConfig``; the current one is left unchanged.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
