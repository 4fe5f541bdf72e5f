r"""Descriptors of the operations supported by the counter service.

Each operation maps to an HTTP method, tells whether it needs the admin
credential, which optional query parameters it accepts and which output
fields are extracted from a successful response.
"""

from __future__ import annotations

__all__ = [
    "OPERATION_SPECS",
    "Operation",
    "OperationSpec",
    "get_operation_spec",
    "is_admin_operation",
    "method_for",
]

from dataclasses import dataclass
from enum import Enum

from abacus_client.exceptions import InvalidInputError


class Operation(str, Enum):
    """Operations exposed by the counter service."""

    HIT = "hit"
    CREATE = "create"
    GET = "get"
    INFO = "info"
    SET = "set"
    UPDATE = "update"
    RESET = "reset"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationSpec:
    """Static description of one operation.

    Attributes:
        operation: The described operation.
        method: The HTTP method used to send it.
        is_admin: Whether the ``Authorization`` header is required.
        accepts_initializer: Whether the ``initializer`` query parameter
            is sent.
        accepts_value: Whether the ``value`` query parameter is sent.
        output_fields: Response fields exposed on success.
    """

    operation: Operation
    method: str
    is_admin: bool = False
    accepts_initializer: bool = False
    accepts_value: bool = False
    output_fields: tuple[str, ...] = ("value",)


OPERATION_SPECS: dict[Operation, OperationSpec] = {
    Operation.HIT: OperationSpec(Operation.HIT, "GET"),
    Operation.CREATE: OperationSpec(
        Operation.CREATE,
        "GET",
        accepts_initializer=True,
        output_fields=("value", "namespace", "key", "admin_key"),
    ),
    Operation.GET: OperationSpec(Operation.GET, "GET"),
    Operation.INFO: OperationSpec(
        Operation.INFO,
        "GET",
        output_fields=("value", "exists", "expires_in", "expires_str", "full_key", "is_genuine"),
    ),
    Operation.SET: OperationSpec(Operation.SET, "POST", is_admin=True, accepts_value=True),
    Operation.UPDATE: OperationSpec(Operation.UPDATE, "POST", is_admin=True, accepts_value=True),
    Operation.RESET: OperationSpec(Operation.RESET, "POST", is_admin=True),
    Operation.DELETE: OperationSpec(
        Operation.DELETE, "POST", is_admin=True, output_fields=("value", "status", "message")
    ),
}


def get_operation_spec(operation: Operation | str) -> OperationSpec:
    """Look up the descriptor of an operation.

    Args:
        operation: An ``Operation`` or its name, e.g. ``"hit"``.

    Returns:
        The matching ``OperationSpec``.

    Raises:
        InvalidInputError: If the name is not a known operation.

    Example:
        ```pycon
        >>> from abacus_client.operations import get_operation_spec
        >>> spec = get_operation_spec("reset")
        >>> spec.method, spec.is_admin
        ('POST', True)
        >>> get_operation_spec("increment")
        Traceback (most recent call last):
        ...
        abacus_client.exceptions.InvalidInputError: Invalid operation: "increment" (expected one of hit, create, get, info, set, update, reset, delete)

        ```
    """
    try:
        return OPERATION_SPECS[Operation(operation.strip())]
    except ValueError:
        names = ", ".join(op.value for op in Operation)
        msg = f'Invalid operation: "{operation}" (expected one of {names})'
        raise InvalidInputError(msg) from None


def is_admin_operation(operation: Operation | str) -> bool:
    return get_operation_spec(operation).is_admin


def method_for(operation: Operation | str) -> str:
    return get_operation_spec(operation).method
