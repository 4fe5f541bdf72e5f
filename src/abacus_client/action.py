r"""GitHub Actions entry point.

Reads the action inputs from the ``INPUT_*`` environment variables, runs
one counter operation and writes the outputs to the ``$GITHUB_OUTPUT``
file. Credentials are masked with the ``::add-mask::`` workflow command
and registered as secrets before anything is logged.

Run it with ``python -m abacus_client``.
"""

from __future__ import annotations

__all__ = [
    "format_output_value",
    "get_input",
    "main",
    "run",
    "set_failed",
    "set_output",
    "set_secret",
]

import json
import logging
import os
import sys
import uuid
from typing import TYPE_CHECKING, Any

import httpx

from abacus_client.client import AbacusClient
from abacus_client.config import ClientConfig
from abacus_client.exceptions import AbacusError
from abacus_client.redaction import configure_logging, mark_secret, sanitize_for_logs
from abacus_client.request import CounterRequest

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

logger: logging.Logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input, trimmed. Missing inputs read as ``""``.

    Example:
        ```pycon
        >>> from abacus_client.action import get_input
        >>> get_input("admin key", {"INPUT_ADMIN_KEY": " s3cr3t "})
        's3cr3t'

        ```
    """
    environ = os.environ if environ is None else environ
    return environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()


def format_output_value(value: Any) -> str:
    """Convert an output value to its string form.

    Example:
        ```pycon
        >>> from abacus_client.action import format_output_value
        >>> format_output_value(True), format_output_value(42), format_output_value("ok")
        ('true', '42', 'ok')

        ```
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def set_secret(value: str | None, stream: TextIO | None = None) -> None:
    """Mask a value in the workflow log and in the package logs."""
    if not value:
        return
    mark_secret(value)
    print(f"::add-mask::{_escape_data(value)}", file=stream or sys.stdout)


def set_output(
    name: str,
    value: Any,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Write an action output.

    Outputs are appended to the ``$GITHUB_OUTPUT`` file with a random
    heredoc delimiter. Without that variable, the legacy ``::set-output``
    command is printed instead.
    """
    environ = os.environ if environ is None else environ
    text = format_output_value(value)
    output_path = environ.get("GITHUB_OUTPUT")
    if output_path:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        return
    print(f"::set-output name={name}::{_escape_data(text)}", file=stream or sys.stdout)


def set_failed(message: str, stream: TextIO | None = None) -> int:
    """Report a failure with the ``::error::`` command.

    Returns:
        The process exit code, always 1.
    """
    print(f"::error::{_escape_data(message)}", file=stream or sys.stdout)
    return 1


def _config_from_inputs(environ: Mapping[str, str]) -> ClientConfig:
    base_url = get_input("base_url", environ)
    return ClientConfig().merge(base_url=base_url or None)


def run(
    environ: Mapping[str, str] | None = None,
    client: httpx.Client | None = None,
    stream: TextIO | None = None,
) -> int:
    """Run the action.

    Args:
        environ: The environment to read inputs from. Defaults to
            ``os.environ``.
        client: Optional ``httpx.Client`` used to send the request.
        stream: The stream receiving workflow commands. Defaults to
            ``sys.stdout``.

    Returns:
        The process exit code: 0 on success, 1 on failure. Failures are
        an ``AbacusError`` or any ``httpx.HTTPError`` such as an
        undecodable response body.
    """
    environ = os.environ if environ is None else environ
    try:
        admin_key = get_input("admin_key", environ)
        # Mask before validation so even an error message cannot leak it
        set_secret(admin_key, stream)
        request = CounterRequest.from_inputs(
            get_input("operation", environ) or "hit",
            get_input("namespace", environ),
            get_input("key", environ),
            initializer=get_input("initializer", environ) or None,
            value=get_input("value", environ) or None,
            admin_key=admin_key or None,
        )
        with AbacusClient(config=_config_from_inputs(environ), client=client) as abacus:
            result = abacus.execute(request)
    except (AbacusError, httpx.HTTPError) as exc:
        return set_failed(str(exc), stream)

    outputs = result.outputs()
    for name in result.secret_outputs():
        set_secret(outputs[name], stream)
    for name, value in outputs.items():
        set_output(name, value, environ, stream)
    logger.info(f"outputs: {sanitize_for_logs(outputs)}")
    return 0


def main() -> None:
    debug = os.environ.get("RUNNER_DEBUG") == "1"
    configure_logging(logging.DEBUG if debug else logging.INFO)
    sys.exit(run())
