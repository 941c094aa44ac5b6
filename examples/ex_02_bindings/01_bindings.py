"""Bindings: interfaces, alias chains, closures and instances.

This module demonstrates:

1. Binding an abstract interface to an implementation.
2. Following a chain of bindings through a string alias.
3. Building through a closure that receives the container and overrides.
4. Registering an already-built value with ``instance``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from bindwire import Container


class Connection(ABC):
    @abstractmethod
    def dialect(self) -> str: ...


class MysqlConnection(Connection):
    def dialect(self) -> str:
        return "mysql"


class SqliteConnection(Connection):
    def dialect(self) -> str:
        return "sqlite"


class Clock:
    def __init__(self, timezone: str) -> None:
        self.timezone = timezone


def build_clock(container: Container, overrides: Mapping[str, Any]) -> Clock:
    return Clock(overrides.get("timezone", container.resolve("app.timezone")))


def main() -> None:
    container = Container()

    container.bind(Connection, MysqlConnection)
    print(f"interface={container.resolve(Connection).dialect()}")  # => interface=mysql

    container.bind("db.default", SqliteConnection)
    container.bind(Connection, "db.default")
    print(f"alias_chain={container.resolve(Connection).dialect()}")  # => alias_chain=sqlite

    container.instance("app.timezone", "UTC")
    container.bind(Clock, build_clock)
    print(f"closure={container.resolve(Clock).timezone}")  # => closure=UTC
    print(f"closure_override={container.make(Clock, timezone='CET').timezone}")  # => closure_override=CET

    print(f"has_clock={container.has(Clock)}")  # => has_clock=True
    print(f"has_unbound={SqliteConnection in container}")  # => has_unbound=False


if __name__ == "__main__":
    main()
