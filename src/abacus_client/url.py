r"""URL construction for counter operations."""

from __future__ import annotations

__all__ = ["build_url", "normalize_base_url"]

from urllib.parse import quote, urlencode

from abacus_client.config import DEFAULT_BASE_URL
from abacus_client.operations import Operation, get_operation_spec


def normalize_base_url(url: str) -> str:
    """Remove a single trailing slash from the base URL.

    Example:
        ```pycon
        >>> from abacus_client.url import normalize_base_url
        >>> normalize_base_url("https://abacus.jasoncameron.dev/")
        'https://abacus.jasoncameron.dev'

        ```
    """
    return url[:-1] if url.endswith("/") else url


def build_url(
    operation: Operation | str,
    namespace: str,
    key: str,
    initializer: int | None = None,
    value: int | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build the request URL of a counter operation.

    The path is ``/{operation}/{namespace}/{key}`` with the namespace and
    key percent-encoded as single path segments. ``initializer`` is only
    attached for ``create`` and ``value`` only for ``set``/``update``;
    parameters given to other operations are ignored.

    Args:
        operation: The operation to send.
        namespace: The counter namespace.
        key: The counter key.
        initializer: Optional initial value for ``create``.
        value: Optional value for ``set`` and ``update``.
        base_url: Origin of the counter service.

    Returns:
        The fully qualified URL.

    Raises:
        InvalidInputError: If the operation is unknown.

    Example:
        ```pycon
        >>> from abacus_client.url import build_url
        >>> build_url("create", "my-org", "visits", initializer=5)
        'https://abacus.jasoncameron.dev/create/my-org/visits?initializer=5'
        >>> build_url("hit", "my-org", "visits", initializer=5, value=1)
        'https://abacus.jasoncameron.dev/hit/my-org/visits'
        >>> build_url("update", "my-org", "visits", value=-2, base_url="http://localhost/")
        'http://localhost/update/my-org/visits?value=-2'

        ```
    """
    spec = get_operation_spec(operation)
    path = f"/{spec.operation.value}/{quote(namespace, safe='')}/{quote(key, safe='')}"

    params: dict[str, int] = {}
    if spec.accepts_initializer and initializer is not None:
        params["initializer"] = initializer
    if spec.accepts_value and value is not None:
        params["value"] = value

    url = normalize_base_url(base_url) + path
    if params:
        url = f"{url}?{urlencode(params)}"
    return url
