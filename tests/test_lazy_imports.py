"""Tests for connectz.__init__ — lazy import registry covers all public names."""

import pytest

import connectz


@pytest.mark.parametrize("name", connectz.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(connectz, name)
    assert obj is not None, f"connectz.{name} resolved to None"


def test_all_names_in_lazy_registry() -> None:
    missing = set(connectz.__all__) - set(connectz._LAZY_IMPORTS)
    assert not missing, f"Names in __all__ but not in _LAZY_IMPORTS: {sorted(missing)}"


def test_lazy_registry_no_extras() -> None:
    extras = set(connectz._LAZY_IMPORTS) - set(connectz.__all__)
    assert not extras, f"Names in _LAZY_IMPORTS but not in __all__: {sorted(extras)}"


def test_resolves_to_defining_module() -> None:
    from connectz.validation.chain import RuleChain

    assert connectz.RuleChain is RuleChain


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        connectz.__getattr__("ThisDoesNotExist")
