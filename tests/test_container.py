# tests/test_container.py
import pytest

from bindery import Container, ContainerSettings, FunctionProvider
from bindery.binding import Binding
from bindery.exceptions import ConfigurationError, InvalidTypeError, UnboundTypeError

# --- Test Helpers ---


class Stamp:
    def __init__(self, value: int = 1):
        self.value = value


class FirstClass:
    def get_value(self) -> str:
        raise NotImplementedError


class SecondClass(FirstClass):
    def get_value(self) -> str:
        return "second"


class ThirdClass(FirstClass):
    def get_value(self) -> str:
        return "third"


# --- Binding configuration ---


def test_bind_is_idempotent(container):
    first = container.bind(Stamp)
    second = container.bind(Stamp)
    assert isinstance(first, Binding)
    assert first is second


def test_bind_with_reordered_qualifier_returns_same_binding(container):
    assert container.bind(Stamp, {"a": 1, "b": "x"}) is container.bind(Stamp, {"b": "x", "a": 1})
    assert container.bind(Stamp, {"a": 1}) is not container.bind(Stamp)


def test_bind_self_binds_unseen_type(container):
    binding = container.bind(Stamp)
    assert container.is_bound(Stamp)
    assert binding.target is Stamp
    assert isinstance(container.get(Stamp), Stamp)


def test_get_on_unregistered_type_auto_binds(container):
    assert container.is_bound(Stamp) is False
    assert isinstance(container.get(Stamp), Stamp)
    assert container.is_bound(Stamp) is True


def test_is_bound_respects_qualifier(container):
    container.bind(Stamp, {"name": "x"})
    assert container.is_bound(Stamp, {"name": "x"}) is True
    assert container.is_bound(Stamp) is False


def test_bind_none_is_invalid(container):
    with pytest.raises(InvalidTypeError):
        container.bind(None)
    with pytest.raises(InvalidTypeError):
        container.bind(Stamp).to(None)


def test_override_binding_uses_latest_target(container):
    container.bind(FirstClass).to(SecondClass)
    assert container.get(FirstClass).get_value() == "second"

    container.bind(FirstClass).to(ThirdClass)
    assert container.get(FirstClass).get_value() == "third"


def test_to_instance_pins_value(container):
    pinned = Stamp(0)
    container.bind(Stamp, {"name": "x"}).to_instance(pinned)
    assert container.get(Stamp, {"name": "x"}) is pinned
    assert container.get(Stamp) is not pinned


def test_provider_fun_and_provider_object(container):
    container.bind(Stamp).provider_fun(lambda: Stamp(5))
    assert container.get(Stamp).value == 5

    container.bind(Stamp).provider(FunctionProvider(lambda: Stamp(9)))
    assert container.get(Stamp).value == 9


def test_provider_without_get_is_rejected(container):
    with pytest.raises(ConfigurationError):
        container.bind(Stamp).provider(lambda: Stamp())
    with pytest.raises(ConfigurationError):
        container.bind(Stamp).provider_fun("not callable")


def test_unknown_scope_name_is_rejected(container):
    with pytest.raises(ConfigurationError):
        container.bind(Stamp).scope("request")


def test_delegation_keeps_qualifier(container):
    container.bind(SecondClass, {"env": "test"}).provider_fun(lambda: "qualified-second")
    container.bind(FirstClass, {"env": "test"}).to(SecondClass)
    assert container.get(FirstClass, {"env": "test"}) == "qualified-second"


# --- get_all ---


def test_get_all_returns_every_qualifier_in_registration_order(container):
    container.bind(Stamp).provider_fun(lambda: Stamp(1))
    container.bind(Stamp, {"name": "x"}).provider_fun(lambda: Stamp(0))
    container.bind(Stamp, {"name": "y"}).to_instance(Stamp(2))

    results = container.get_all(Stamp)
    assert [q for q, _ in results] == [{}, {"name": "x"}, {"name": "y"}]
    assert [i.value for _, i in results] == [1, 0, 2]


def test_get_all_on_unknown_type_is_empty(container):
    assert container.get_all(Stamp) == []


# --- Strict mode ---


def test_strict_container_raises_unbound_type():
    strict = Container(ContainerSettings(auto_bind=False))
    with pytest.raises(UnboundTypeError) as exc:
        strict.get(Stamp)
    assert exc.value.key is Stamp


def test_strict_bind_has_no_provider_until_configured():
    strict = Container(ContainerSettings(auto_bind=False))
    binding = strict.bind(Stamp, {"name": "x"})
    assert binding.active_provider is None

    with pytest.raises(UnboundTypeError):
        strict.get(Stamp, {"name": "x"})

    binding.to(Stamp)
    assert isinstance(strict.get(Stamp, {"name": "x"}), Stamp)


def test_strict_mode_requires_delegate_targets_to_be_bound():
    strict = Container(ContainerSettings(auto_bind=False))
    strict.bind(FirstClass).to(SecondClass)
    with pytest.raises(UnboundTypeError):
        strict.get(FirstClass)

    strict.bind(SecondClass).to(SecondClass)
    assert strict.get(FirstClass).get_value() == "second"


def test_strict_get_all_skips_bindings_without_provider():
    strict = Container(ContainerSettings(auto_bind=False))
    strict.bind(Stamp).to_instance(Stamp(3))
    strict.bind(Stamp, {"n": 1})

    results = strict.get_all(Stamp)
    assert [q for q, _ in results] == [{}]
    assert results[0][1].value == 3
