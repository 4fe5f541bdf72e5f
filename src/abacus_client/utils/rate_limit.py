r"""Rate-limit header reporting."""

from __future__ import annotations

__all__ = ["RATE_LIMIT_HEADERS", "RateLimitInfo", "log_rate_limit"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

logger: logging.Logger = logging.getLogger(__name__)

RATE_LIMIT_HEADERS = (
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
    "X-RateLimit-Reset",
    "Retry-After",
)


@dataclass(frozen=True)
class RateLimitInfo:
    """Raw rate-limit headers of a response.

    Attributes:
        limit: The ``X-RateLimit-Limit`` header.
        remaining: The ``X-RateLimit-Remaining`` header.
        reset: The ``X-RateLimit-Reset`` header.
        retry_after: The ``Retry-After`` header, in milliseconds.
    """

    limit: str | None = None
    remaining: str | None = None
    reset: str | None = None
    retry_after: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo:
        """Read the rate-limit headers of a response.

        Example:
            ```pycon
            >>> import httpx
            >>> from abacus_client.utils import RateLimitInfo
            >>> info = RateLimitInfo.from_headers(httpx.Headers({"x-ratelimit-remaining": "3"}))
            >>> info.remaining, info.limit
            ('3', None)

            ```
        """
        limit, remaining, reset, retry_after = (headers.get(name) for name in RATE_LIMIT_HEADERS)
        return cls(limit=limit, remaining=remaining, reset=reset, retry_after=retry_after)

    def describe(self) -> str:
        """Return the present headers as ``name=value`` pairs.

        Example:
            ```pycon
            >>> from abacus_client.utils import RateLimitInfo
            >>> RateLimitInfo(limit="30", retry_after="1500").describe()
            'limit=30 retryAfterMs=1500'

            ```
        """
        parts = []
        if self.limit:
            parts.append(f"limit={self.limit}")
        if self.remaining:
            parts.append(f"remaining={self.remaining}")
        if self.reset:
            parts.append(f"reset={self.reset}")
        if self.retry_after:
            parts.append(f"retryAfterMs={self.retry_after}")
        return " ".join(parts)


def log_rate_limit(response: httpx.Response) -> RateLimitInfo:
    """Log the rate-limit headers of a response, if any.

    Args:
        response: The HTTP response.

    Returns:
        The parsed rate-limit headers.
    """
    info = RateLimitInfo.from_headers(response.headers)
    description = info.describe()
    if description:
        logger.info(f"rate-limit: {description}")
    return info
