# tests/test_decorators.py
from typing import Annotated

import pytest

import bindery
from bindery import (
    Container,
    Inject,
    Provider,
    Scope,
    autowired,
    inject_arg,
    provided,
    provides,
    qualifier_of,
    scoped,
    singleton,
)
from bindery.exceptions import BlockedDirectInstantiationError, ConfigurationError


class Stamp:
    def __init__(self, value: int = 1):
        self.value = value


# --- Default container ---


def test_decorators_use_default_container():
    @singleton
    @autowired
    class Registry:
        pass

    default = bindery.default_container()
    assert default.get(Registry) is default.get(Registry)
    with pytest.raises(BlockedDirectInstantiationError):
        Registry()


def test_reset_discards_default_registrations():
    @singleton
    @autowired
    class Registry:
        pass

    bindery.reset()
    assert bindery.default_container().is_bound(Registry) is False


# --- autowired ---


def test_autowired_returns_wrapper_that_keeps_identity():
    c = Container()

    class Service:
        """Docs."""

    wrapped = autowired(Service, container=c)
    assert wrapped is not Service
    assert wrapped.__name__ == "Service"
    assert wrapped.__doc__ == "Docs."
    assert bindery.canonical_type(wrapped) is Service
    assert qualifier_of(wrapped) == {}
    assert isinstance(c.get(Service), wrapped)


def test_autowired_with_qualifier():
    c = Container()

    @autowired(qualifier={"env": "test"}, container=c)
    class Service:
        pass

    assert qualifier_of(Service) == {"env": "test"}
    assert c.is_bound(Service, {"env": "test"})
    assert isinstance(c.get(Service, {"env": "test"}), Service)


def test_direct_construction_of_autowired_class_still_accepts_arguments():
    c = Container()

    @autowired(container=c)
    class Greeting:
        @inject_arg(Stamp)
        def __init__(self, stamp):
            self.stamp = stamp

    mine = Stamp(7)
    assert Greeting(mine).stamp is mine
    assert c.get(Greeting).stamp.value == 1


def test_autowired_keeps_explicit_target():
    c = Container()

    class Base:
        pass

    class Impl(Base):
        pass

    c.bind(Base).to(Impl)
    wrapped = autowired(Base, container=c)
    assert isinstance(c.get(wrapped), Impl)


# --- singleton / scoped ---


def test_singleton_requires_autowired_class():
    c = Container()

    class Plain:
        pass

    with pytest.raises(ConfigurationError):
        singleton(Plain, container=c)


def test_scoped_with_custom_scope():
    c = Container()
    creations = []

    class MyScope(Scope):
        def resolve(self, provider, source, qualifier):
            result = provider.get()
            creations.append(result)
            return result

    @scoped(MyScope(), container=c)
    @autowired(container=c)
    class ScopedService:
        pass

    @autowired(container=c)
    class Consumer:
        service: Annotated[ScopedService, Inject]

    consumer = Consumer()
    assert isinstance(consumer.service, ScopedService)
    assert creations == [consumer.service]


def test_scoped_requires_autowired_class():
    with pytest.raises(ConfigurationError):
        scoped("singleton")(Stamp)


# --- provided / provides ---


def test_provided_singleton_uses_provider_once():
    c = Container()
    created = []

    class ServiceProvider(Provider):
        def get(self):
            instance = ProvidedService()
            created.append(instance)
            return instance

    @singleton(container=c)
    @provided(ServiceProvider(), container=c)
    @autowired(container=c)
    class ProvidedService:
        pass

    @autowired(container=c)
    class Consumer:
        service: Annotated[ProvidedService, Inject]

    first = Consumer()
    second = Consumer()
    assert first.service is second.service
    assert created == [first.service]


def test_provides_registers_default_implementation():
    c = Container()

    class BaseClass:
        pass

    @autowired(container=c)
    @provides(BaseClass, container=c)
    class ImplementationClass(BaseClass):
        stamp: Annotated[Stamp, Inject]

    instance = c.get(BaseClass)
    assert isinstance(instance, ImplementationClass)
    assert isinstance(instance.stamp, Stamp)


def test_provides_with_qualifier():
    c = Container()

    class BaseClass:
        pass

    @provides(BaseClass, {"name": "x"}, container=c)
    class Special(BaseClass):
        pass

    assert isinstance(c.get(BaseClass, {"name": "x"}), Special)
    assert type(c.get(BaseClass)) is BaseClass


# --- inject_arg ---


def test_inject_arg_with_qualifier():
    c = Container()
    c.bind(Stamp, {"name": "x"}).to_instance(Stamp(0))
    received = []

    @autowired(container=c)
    class Consumer:
        @inject_arg(Stamp)
        @inject_arg(Stamp, name="x")
        def __init__(self, default, qualified):
            received.extend([default.value, qualified.value])

    c.get(Consumer)
    assert received == [1, 0]


def test_inject_arg_rejects_non_types():
    with pytest.raises(bindery.InvalidTypeError):
        inject_arg("Stamp")
