r"""Shared attempt handling for the sync and async retry executors.

These functions feed an attempt's outcome to the ``RetryState`` and
emit the diagnostics of the retry loop. Header contents are never
logged; only the rate-limit headers are reported.
"""

from __future__ import annotations

__all__ = ["handle_response", "handle_transport_error", "read_body_for_logs"]

import logging

import httpx

from abacus_client.redaction import sanitize_for_logs
from abacus_client.retry.state import Outcome, RetryDecision, RetryState, classify_status
from abacus_client.utils import log_rate_limit, parse_retry_after

logger: logging.Logger = logging.getLogger(__name__)


def read_body_for_logs(response: httpx.Response) -> str:
    """Return the response body text, or an empty string if it cannot be
    read."""
    try:
        return response.text
    except (httpx.StreamError, UnicodeDecodeError):
        return ""


def handle_response(state: RetryState, response: httpx.Response) -> RetryDecision:
    """Record a received response and decide whether to retry.

    A 429 with attempts remaining waits for its ``Retry-After`` header
    when present, otherwise for the current backoff. A 5xx with attempts
    remaining waits for the current backoff. The body of a retried
    response is logged at DEBUG level, sanitized.

    Args:
        state: The state of the retry loop.
        response: The received response.

    Returns:
        The retry decision.

    Raises:
        InvalidInputError: If a retried 429 carries a non-integer
            ``Retry-After`` header.
    """
    status_code = response.status_code
    logger.info(f"response: status={status_code}")
    log_rate_limit(response)

    outcome = classify_status(status_code)
    retry_after = None
    if outcome is Outcome.RATE_LIMITED and state.has_attempts_left:
        retry_after = parse_retry_after(response.headers.get("Retry-After"))

    decision = state.record(outcome, retry_after=retry_after)
    if not decision.retry:
        return decision

    body = read_body_for_logs(response)
    if outcome is Outcome.RATE_LIMITED:
        if body:
            logger.debug(f"response body (429): {sanitize_for_logs(body)}")
        logger.info(f"retry: status=429 waitMs={decision.wait}")
    else:
        if body:
            logger.debug(f"response body (5xx): {sanitize_for_logs(body)}")
        logger.info(f"retry: status={status_code} backoffMs={decision.wait}")
    return decision


def handle_transport_error(state: RetryState, exc: httpx.TransportError) -> RetryDecision:
    """Record a transport failure and decide whether to retry.

    Args:
        state: The state of the retry loop.
        exc: The transport exception raised by the attempt.

    Returns:
        The retry decision. The caller re-raises ``exc`` unchanged when
        no retry follows.
    """
    logger.info(f"network error: {type(exc).__name__}: {exc}")
    decision = state.record(Outcome.TRANSPORT_ERROR)
    if decision.retry:
        logger.info(f"retry: network backoffMs={decision.wait}")
    return decision
