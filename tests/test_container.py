from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import pytest

from bindwire.container import Binding, Container
from bindwire.exceptions import (
    BindwireCircularDependencyError,
    BindwireResolutionError,
)


class Connection(ABC):
    @abstractmethod
    def query(self) -> str: ...


class MysqlConnection(Connection):
    def query(self) -> str:
        return "mysql"


class PooledMysqlConnection(MysqlConnection):
    def query(self) -> str:
        return "pooled-mysql"


class SqliteConnection(Connection):
    def query(self) -> str:
        return "sqlite"


class Zoo:
    pass


class Foo:
    def __init__(self, zoo: Zoo) -> None:
        self.zoo = zoo


class Bar:
    def __init__(self, foo: Foo) -> None:
        self.foo = foo


class Repository:
    def __init__(self, connection: Connection, table: str = "users") -> None:
        self.connection = connection
        self.table = table


class Greeter:
    def __init__(self, name: str) -> None:
        self.name = name


class Report:
    def __init__(self, foo: Foo, title: str, *, pages: int = 1) -> None:
        self.foo = foo
        self.title = title
        self.pages = pages


class OptionalConnectionUser:
    def __init__(self, connection: Connection | None = None) -> None:
        self.connection = connection


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


def test_autowires_class_without_constructor(container: Container) -> None:
    first = container.resolve(Zoo)
    second = container.resolve(Zoo)

    assert isinstance(first, Zoo)
    assert isinstance(second, Zoo)
    assert first is not second


def test_autowires_transitive_constructor_dependencies(container: Container) -> None:
    bar = container.resolve(Bar)

    assert isinstance(bar, Bar)
    assert isinstance(bar.foo, Foo)
    assert isinstance(bar.foo.zoo, Zoo)


def test_transient_binding_returns_distinct_instances(container: Container) -> None:
    container.bind(Connection, MysqlConnection)

    assert container.resolve(Connection) is not container.resolve(Connection)


def test_singleton_binding_returns_identical_instance(container: Container) -> None:
    container.bind(Connection, MysqlConnection, singleton=True)

    first = container.resolve(Connection)
    second = container.resolve(Connection)

    assert first is second
    assert isinstance(first, MysqlConnection)
    assert isinstance(first, Connection)


def test_singleton_shorthand_binds_identifier_to_itself(container: Container) -> None:
    container.singleton(Foo)

    assert container.resolve(Foo) is container.resolve(Foo)
    assert container._bindings[Foo] == Binding(concrete=None, singleton=True)


def test_binding_chains_resolve_transitively(container: Container) -> None:
    container.bind(Connection, MysqlConnection)
    container.bind(MysqlConnection, PooledMysqlConnection)

    connection = container.resolve(Connection)

    assert isinstance(connection, PooledMysqlConnection)
    assert connection.query() == "pooled-mysql"


def test_binding_chain_through_string_alias(container: Container) -> None:
    container.bind(Connection, "db.default")
    container.bind("db.default", SqliteConnection)

    assert isinstance(container.resolve(Connection), SqliteConnection)


def test_singleton_on_alias_caches_under_alias_only(container: Container) -> None:
    container.singleton(Connection, MysqlConnection)

    assert container.resolve(Connection) is container.resolve(Connection)
    assert container.resolve(MysqlConnection) is not container.resolve(Connection)


def test_closure_receives_container_and_overrides(container: Container) -> None:
    received: list[tuple[Container, Mapping[str, Any]]] = []

    def build_greeter(inner: Container, overrides: Mapping[str, Any]) -> Greeter:
        received.append((inner, overrides))
        return Greeter(overrides.get("name", "world"))

    container.bind(Greeter, build_greeter)

    greeter = container.resolve(Greeter, {"name": "Ada"})

    assert greeter.name == "Ada"
    assert received[0][0] is container
    assert dict(received[0][1]) == {"name": "Ada"}


def test_transient_closure_runs_on_every_resolution(container: Container) -> None:
    calls: list[int] = []

    def build_zoo(_: Container, __: Mapping[str, Any]) -> Zoo:
        calls.append(1)
        return Zoo()

    container.bind("zoo", build_zoo)

    assert container.resolve("zoo") is not container.resolve("zoo")
    assert len(calls) == 2


def test_singleton_closure_runs_once(container: Container) -> None:
    calls: list[int] = []

    def build_zoo(_: Container, __: Mapping[str, Any]) -> Zoo:
        calls.append(1)
        return Zoo()

    container.singleton("zoo", build_zoo)

    assert container.resolve("zoo") is container.resolve("zoo")
    assert len(calls) == 1


def test_override_wins_over_autowiring(container: Container) -> None:
    foo = Foo(Zoo())

    bar = container.resolve(Bar, {"foo": foo})

    assert bar.foo is foo


def test_override_does_not_leak_into_nested_dependencies(container: Container) -> None:
    zoo = Zoo()

    bar = container.resolve(Bar, {"zoo": zoo})

    assert bar.foo.zoo is not zoo


def test_override_follows_alias_bindings(container: Container) -> None:
    container.bind("greeter", Greeter)

    greeter = container.resolve("greeter", {"name": "Grace"})

    assert isinstance(greeter, Greeter)
    assert greeter.name == "Grace"


def test_overrides_are_ignored_for_cached_singletons(container: Container) -> None:
    container.singleton(Greeter)
    first = container.resolve(Greeter, {"name": "first"})

    second = container.resolve(Greeter, {"name": "second"})

    assert second is first
    assert second.name == "first"


def test_make_passes_keyword_overrides(container: Container) -> None:
    report = container.make(Report, title="Q3", pages=12)

    assert report.title == "Q3"
    assert report.pages == 12
    assert isinstance(report.foo, Foo)


def test_keyword_only_parameters_use_defaults(container: Container) -> None:
    report = container.resolve(Report, {"title": "Q4"})

    assert report.pages == 1


def test_primitive_parameter_uses_default(container: Container) -> None:
    container.bind(Connection, SqliteConnection)

    repository = container.resolve(Repository)

    assert repository.table == "users"
    assert isinstance(repository.connection, SqliteConnection)


def test_primitive_parameter_without_default_fails(container: Container) -> None:
    with pytest.raises(BindwireResolutionError, match=r"\[name\] in class .*Greeter"):
        container.resolve(Greeter)


def test_failed_nested_dependency_falls_back_to_default(container: Container) -> None:
    user = container.resolve(OptionalConnectionUser)

    assert user.connection is None


def test_failed_nested_dependency_without_default_propagates(container: Container) -> None:
    with pytest.raises(BindwireResolutionError, match="is not instantiable"):
        container.resolve(Repository)


def test_abstract_class_without_binding_is_not_instantiable(container: Container) -> None:
    with pytest.raises(BindwireResolutionError, match=r"Target \[.*Connection\] is not instantiable"):
        container.resolve(Connection)


def test_string_identifier_is_imported_as_dotted_path(container: Container) -> None:
    built = container.resolve("bindwire.container.Container")

    assert isinstance(built, Container)
    assert built is not container


def test_unknown_string_identifier_does_not_exist(container: Container) -> None:
    with pytest.raises(BindwireResolutionError, match=r"Target class \[no_such_module\.Thing\]"):
        container.resolve("no_such_module.Thing")


def test_instance_registration_bypasses_construction(container: Container) -> None:
    connection = SqliteConnection()
    container.instance(Connection, connection)

    assert container.resolve(Connection) is connection
    assert container.get(Connection) is connection


def test_instance_accepts_plain_values(container: Container) -> None:
    container.instance("mail.dsn", "smtp://localhost")
    container.instance("feature.enabled", None)

    assert container.resolve("mail.dsn") == "smtp://localhost"
    assert container.resolve("feature.enabled") is None


def test_instance_with_class_registers_singleton(container: Container) -> None:
    container.instance(Connection, MysqlConnection)

    first = container.resolve(Connection)

    assert isinstance(first, MysqlConnection)
    assert container.resolve(Connection) is first


def test_has_reports_bindings_and_instances(container: Container) -> None:
    container.bind(Connection, MysqlConnection)
    container.instance("answer", 42)

    assert container.has(Connection)
    assert "answer" in container
    assert not container.has(Zoo)


def test_rebinding_discards_cached_singleton(container: Container) -> None:
    container.singleton(Connection, MysqlConnection)
    first = container.resolve(Connection)

    container.singleton(Connection, SqliteConnection)
    second = container.resolve(Connection)

    assert isinstance(second, SqliteConnection)
    assert second is not first


def test_binding_other_identifier_keeps_instances(container: Container) -> None:
    connection = SqliteConnection()
    container.instance(Connection, connection)

    container.bind(MysqlConnection, PooledMysqlConnection)

    assert container.resolve(Connection) is connection


def test_initial_bindings_are_registered(container: Container) -> None:
    seeded = Container({Connection: SqliteConnection, "conn": Connection})

    assert isinstance(seeded.resolve("conn"), SqliteConnection)
    assert seeded.has(Connection)


def test_strict_container_refuses_unbound_identifiers(strict_container: Container) -> None:
    with pytest.raises(BindwireResolutionError, match="autowiring is disabled"):
        strict_container.resolve(Zoo)


def test_strict_container_builds_bound_identifiers(strict_container: Container) -> None:
    strict_container.bind(Zoo)
    strict_container.bind(Foo)

    assert isinstance(strict_container.resolve(Foo).zoo, Zoo)


def test_alias_cycle_is_detected(container: Container) -> None:
    container.bind("a", "b")
    container.bind("b", "a")

    with pytest.raises(BindwireCircularDependencyError) as exc_info:
        container.resolve("a")

    assert exc_info.value.path == ("a", "b", "a")


def test_constructor_cycle_is_detected(container: Container) -> None:
    with pytest.raises(BindwireCircularDependencyError, match="Chicken -> .*Egg -> .*Chicken"):
        container.resolve(Chicken)


def test_dependency_plan_is_inspected_once(
    container: Container,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    inspected: list[type[Any]] = []
    original = container._inspector.inspect_class

    def counting_inspect_class(concrete_type: type[Any]) -> Any:
        inspected.append(concrete_type)
        return original(concrete_type)

    monkeypatch.setattr(container._inspector, "inspect_class", counting_inspect_class)

    container.resolve(Foo)
    container.resolve(Foo)
    assert inspected == [Foo, Zoo]

    container.bind("foo", Foo)
    container.resolve(Foo)
    assert inspected == [Foo, Zoo, Foo]


def test_resolved_arguments_are_not_reused_between_builds(container: Container) -> None:
    first = container.resolve(Bar)
    second = container.resolve(Bar)

    assert first.foo is not second.foo


def test_bind_logs_registration(container: Container, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="bindwire.container")

    container.bind(Connection, MysqlConnection, singleton=True)

    assert any(
        "Bound" in record.getMessage() and "singleton=True" in record.getMessage()
        for record in caplog.records
    )


def test_default_fallback_is_logged(container: Container, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="bindwire.container")

    container.resolve(OptionalConnectionUser)

    assert any("Using default for [connection]" in record.getMessage() for record in caplog.records)
