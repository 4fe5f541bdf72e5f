r"""Validated description of one counter request."""

from __future__ import annotations

__all__ = ["CounterRequest", "build_headers"]

from dataclasses import dataclass, field

from abacus_client.exceptions import InvalidInputError
from abacus_client.operations import Operation, OperationSpec, get_operation_spec
from abacus_client.redaction import mark_secret
from abacus_client.url import build_url
from abacus_client.validation import parse_integer, require_non_empty, validate_name


@dataclass(frozen=True)
class CounterRequest:
    """A counter operation with validated parameters.

    Construction enforces the request invariants: namespace and key match
    the name pattern, an admin operation carries a non-empty admin key,
    ``set`` and ``update`` carry a value. The admin key is marked as a
    secret as soon as it is accepted.

    Attributes:
        operation: The operation to send.
        namespace: The counter namespace.
        key: The counter key.
        initializer: The initial value, only used by ``create``.
        value: The new value or delta, only used by ``set``/``update``.
        admin_key: The admin credential, required by admin operations.

    Example:
        ```pycon
        >>> from abacus_client.request import CounterRequest
        >>> request = CounterRequest("create", "my-org", "visits", initializer=10)
        >>> request.url()
        'https://abacus.jasoncameron.dev/create/my-org/visits?initializer=10'
        >>> CounterRequest("reset", "my-org", "visits")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Missing required input: admin_key

        ```
    """

    operation: Operation
    namespace: str
    key: str
    initializer: int | None = None
    value: int | None = None
    admin_key: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        spec = get_operation_spec(self.operation)
        object.__setattr__(self, "operation", spec.operation)

        require_non_empty("namespace", self.namespace)
        require_non_empty("key", self.key)
        validate_name("namespace", self.namespace)
        validate_name("key", self.key)

        if spec.is_admin:
            require_non_empty("admin_key", self.admin_key)
            mark_secret(self.admin_key)
        if spec.accepts_value and self.value is None:
            msg = f"Missing required input: value (required for operation={spec.operation.value})"
            raise InvalidInputError(msg)
        for name in ("initializer", "value"):
            number = getattr(self, name)
            if number is not None and (isinstance(number, bool) or not isinstance(number, int)):
                msg = f'Invalid {name}: expected integer, got "{number}"'
                raise InvalidInputError(msg)

    @classmethod
    def from_inputs(
        cls,
        operation: str | None,
        namespace: str | None,
        key: str | None,
        *,
        initializer: str | None = None,
        value: str | None = None,
        admin_key: str | None = None,
    ) -> CounterRequest:
        """Create a request from raw string inputs.

        Blank inputs count as missing. The operation defaults to ``hit``
        and the initializer of ``create`` defaults to ``0``. Numeric
        inputs are only parsed for the operations that use them.

        Raises:
            InvalidInputError: If an input is missing or malformed.

        Example:
            ```pycon
            >>> from abacus_client.request import CounterRequest
            >>> request = CounterRequest.from_inputs("update", "my-org", "visits", value="-2", admin_key="k3y")
            >>> request.value
            -2

            ```
        """
        spec = get_operation_spec(operation or Operation.HIT)
        require_non_empty("namespace", namespace)
        require_non_empty("key", key)
        validate_name("namespace", namespace)
        validate_name("key", key)
        if spec.is_admin:
            require_non_empty("admin_key", admin_key)
            mark_secret(admin_key)
        if spec.accepts_value and (value is None or not value.strip()):
            msg = f"Missing required input: value (required for operation={spec.operation.value})"
            raise InvalidInputError(msg)

        return cls(
            operation=spec.operation,
            namespace=namespace,
            key=key,
            initializer=parse_integer("initializer", initializer or "0")
            if spec.accepts_initializer
            else None,
            value=parse_integer("value", value) if spec.accepts_value else None,
            admin_key=admin_key if spec.is_admin else None,
        )

    @property
    def spec(self) -> OperationSpec:
        return get_operation_spec(self.operation)

    @property
    def method(self) -> str:
        return self.spec.method

    def url(self, base_url: str | None = None) -> str:
        """Build the request URL, optionally against another origin."""
        if base_url is None:
            return build_url(self.operation, self.namespace, self.key, self.initializer, self.value)
        return build_url(
            self.operation,
            self.namespace,
            self.key,
            self.initializer,
            self.value,
            base_url=base_url,
        )


def build_headers(request: CounterRequest) -> dict[str, str]:
    """Build the request headers.

    Admin operations carry ``Authorization: Bearer <admin_key>``. The
    headers must never be logged.

    Example:
        ```pycon
        >>> from abacus_client.request import CounterRequest, build_headers
        >>> build_headers(CounterRequest("hit", "my-org", "visits"))
        {'Accept': 'application/json'}

        ```
    """
    headers = {"Accept": "application/json"}
    if request.spec.is_admin:
        headers["Authorization"] = f"Bearer {request.admin_key}"
    return headers
