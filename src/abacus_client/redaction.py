r"""Redaction utilities for diagnostic output.

Two independent layers keep credentials out of the logs:

- ``sanitize_for_logs`` formats response bodies and payloads, masking
  credential-like fields and truncating long output.
- ``SecretRegistry`` and ``RedactingFilter`` mask every value marked as
  secret in any record that reaches the package's log handler.

Example:
    Route the package logs through the redacting handler:

    ```python
    import logging
    from abacus_client.redaction import configure_logging, mark_secret

    configure_logging(logging.DEBUG)
    mark_secret("my-admin-key")
    ```
"""

from __future__ import annotations

__all__ = [
    "MASK",
    "MAX_LOG_BODY_CHARS",
    "REDACTED_FIELDS",
    "RedactingFilter",
    "SecretRegistry",
    "configure_logging",
    "get_secret_registry",
    "mark_secret",
    "sanitize_for_logs",
    "truncate",
]

import json
import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import TextIO

MASK = "***"
MAX_LOG_BODY_CHARS = 2000

# Compared case-insensitively
REDACTED_FIELDS = frozenset({"admin_key", "authorization"})


def truncate(text: str, max_chars: int = MAX_LOG_BODY_CHARS) -> str:
    """Truncate a string and state how many characters were dropped.

    Example:
        ```pycon
        >>> from abacus_client.redaction import truncate
        >>> truncate("abcdef", 4)
        'abcd… [truncated 2 chars]'
        >>> truncate("abc", 4)
        'abc'

        ```
    """
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}… [truncated {len(text) - max_chars} chars]"


def _redact(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            k: MASK if str(k).lower() in REDACTED_FIELDS else _redact(v) for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_redact(v) for v in value]
    return value


def sanitize_for_logs(value: Any, max_chars: int = MAX_LOG_BODY_CHARS) -> str:
    """Format a value for diagnostic output.

    Strings are only truncated. Other values are serialized to JSON after
    replacing every credential-like field, at any depth, with ``MASK``.
    If serialization fails, the redacted value is converted with
    ``str``. The output is always truncated to ``max_chars`` and this
    function never raises.

    Args:
        value: The string or structured value to format.
        max_chars: Maximum number of characters kept.

    Returns:
        The bounded, redacted string.

    Example:
        ```pycon
        >>> from abacus_client.redaction import sanitize_for_logs
        >>> print(sanitize_for_logs({"admin_key": "abc123", "value": 7}))
        {
          "admin_key": "***",
          "value": 7
        }

        ```
    """
    if isinstance(value, str):
        return truncate(value, max_chars)
    try:
        redacted = _redact(value)
        try:
            text = json.dumps(redacted, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            text = str(redacted)
    except Exception:  # noqa: BLE001
        text = f"<unprintable {type(value).__name__}>"
    return truncate(text, max_chars)


class SecretRegistry:
    """Append-only set of values that must never appear in the logs.

    Values can be added but never removed: once marked, a value stays
    sensitive for the lifetime of the registry.

    Example:
        ```pycon
        >>> from abacus_client.redaction import SecretRegistry
        >>> registry = SecretRegistry()
        >>> registry.add("s3cr3t")
        >>> "s3cr3t" in registry
        True
        >>> registry.mask("token=s3cr3t")
        'token=***'

        ```
    """

    def __init__(self) -> None:
        self._secrets: set[str] = set()
        self._lock = threading.Lock()

    def __contains__(self, value: object) -> bool:
        return value in self._secrets

    def __len__(self) -> int:
        return len(self._secrets)

    def add(self, value: str | None) -> None:
        """Mark a value as secret. Empty values are ignored."""
        if not value:
            return
        with self._lock:
            self._secrets.add(value)

    def mask(self, text: str) -> str:
        """Replace every registered secret in ``text`` with ``MASK``."""
        with self._lock:
            # Longest first so a secret containing another is fully masked
            secrets = sorted(self._secrets, key=len, reverse=True)
        for secret in secrets:
            text = text.replace(secret, MASK)
        return text


_registry = SecretRegistry()


def get_secret_registry() -> SecretRegistry:
    """Return the process-wide secret registry."""
    return _registry


def mark_secret(value: str | None) -> None:
    """Mark a value as secret in the process-wide registry."""
    _registry.add(value)


class RedactingFilter(logging.Filter):
    """Logging filter masking registered secrets in rendered messages.

    Args:
        registry: The registry to read secrets from. Defaults to the
            process-wide registry.
    """

    def __init__(self, registry: SecretRegistry | None = None) -> None:
        super().__init__()
        self.registry = registry if registry is not None else _registry

    def filter(self, record: logging.LogRecord) -> bool:
        if len(self.registry) == 0:
            return True
        message = record.getMessage()
        masked = self.registry.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True


def configure_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Handler:
    """Attach a redacting stream handler to the ``abacus_client`` logger.

    Args:
        level: The level of the package logger.
        stream: The output stream. Defaults to ``sys.stderr``.

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(RedactingFilter())
    logger = logging.getLogger("abacus_client")
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
