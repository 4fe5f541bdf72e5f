r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import abacus_client


def test_package_version_is_string() -> None:
    assert isinstance(abacus_client.__version__, str)


def test_package_version_format() -> None:
    assert "." in abacus_client.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in abacus_client.__all__:
        assert hasattr(abacus_client, name), f"{name} is in __all__ but not defined in module"


def test_exceptions_hierarchy() -> None:
    assert issubclass(abacus_client.InvalidInputError, abacus_client.AbacusError)
    assert issubclass(abacus_client.InvalidInputError, ValueError)
    assert issubclass(abacus_client.RequestFailedError, abacus_client.AbacusError)
