r"""Utility functions for response header handling.

This package provides helpers used by the retry loop: Retry-After
header parsing and rate-limit header reporting.
"""

from __future__ import annotations

__all__ = ["RateLimitInfo", "log_rate_limit", "parse_retry_after"]

from abacus_client.utils.rate_limit import RateLimitInfo, log_rate_limit
from abacus_client.utils.retry_after import parse_retry_after
