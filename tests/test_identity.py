# tests/test_identity.py
import types

import pytest

from bindery.constants import WRAPPER_LINK
from bindery.exceptions import InvalidTypeError, UnresolvableIdentityError
from bindery.identity import (
    WrapperLink,
    canonical_type,
    intercept_construction,
    is_synthetic,
    qualifier_of,
)


class Plain:
    def __init__(self, value=0):
        self.value = value


def _allow(_identity):
    return None


def test_plain_class_is_its_own_identity():
    assert canonical_type(Plain) is Plain
    assert qualifier_of(Plain) is None
    assert is_synthetic(Plain) is False


def test_wrapper_resolves_to_wrapped_class():
    wrapper = intercept_construction(Plain, {"name": "x"}, _allow)
    assert wrapper is not Plain
    assert issubclass(wrapper, Plain)
    assert wrapper.__name__ == "Plain"
    assert wrapper.__qualname__ == Plain.__qualname__
    assert is_synthetic(wrapper)
    assert canonical_type(wrapper) is Plain
    assert qualifier_of(wrapper) == {"name": "x"}


def test_chain_of_wrappers_is_walked():
    inner = intercept_construction(Plain, {}, _allow)
    outer = intercept_construction(inner, {"layer": 2}, _allow)
    assert canonical_type(outer) is Plain
    assert qualifier_of(outer) == {"layer": 2}


def test_subclass_of_wrapper_is_a_new_identity():
    wrapper = intercept_construction(Plain, {}, _allow)

    class Child(wrapper):
        pass

    assert canonical_type(Child) is Child
    assert is_synthetic(Child) is False


def test_wrapper_reports_construction_and_forwards_arguments():
    seen = []
    wrapper = intercept_construction(Plain, {}, seen.append)
    instance = wrapper(7)
    assert instance.value == 7
    assert isinstance(instance, Plain)
    assert seen == [Plain]


def test_wrapper_can_refuse_construction():
    def refuse(identity):
        raise RuntimeError(f"no {identity.__name__}")

    wrapper = intercept_construction(Plain, {}, refuse)
    with pytest.raises(RuntimeError, match="no Plain"):
        wrapper()


def test_broken_chain_is_unresolvable():
    broken = types.new_class("Broken", (), exec_body=lambda ns: ns.update({WRAPPER_LINK: WrapperLink(None)}))
    with pytest.raises(UnresolvableIdentityError):
        canonical_type(broken)


@pytest.mark.parametrize("handle", [None, 42, "Plain", Plain()])
def test_non_types_are_rejected(handle):
    with pytest.raises(InvalidTypeError):
        canonical_type(handle)
