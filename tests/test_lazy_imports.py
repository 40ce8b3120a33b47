"""Tests for switchyard.__init__ — lazy imports cover all public names."""

import pytest

import switchyard


@pytest.mark.parametrize("name", switchyard.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(switchyard, name)
    assert obj is not None, f"switchyard.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        switchyard.__getattr__("ThisDoesNotExist")
