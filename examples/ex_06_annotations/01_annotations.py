"""Annotation handling: Key, Optional, Self and Parent.

This module demonstrates:

1. ``Annotated[T, Key("id")]`` to resolve a parameter through a string key.
2. ``Optional[T]`` resolving to ``T`` and falling back to the default on failure.
3. ``Parent`` resolving to the declaring class's base class.
4. Builtin types left to overrides and defaults.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated

from bindwire import Container, Key, Parent


class Mailer:
    def __init__(self, dsn: Annotated[str, Key("mail.dsn")]) -> None:
        self.dsn = dsn


class Tracer(ABC):
    @abstractmethod
    def trace(self) -> str: ...


class Checkout:
    def __init__(self, mailer: Mailer, tracer: Tracer | None = None) -> None:
        self.mailer = mailer
        self.tracer = tracer


class Repository:
    def find(self) -> str:
        return "row"


class CachedRepository(Repository):
    def __init__(self, inner: Parent, ttl: int = 60) -> None:
        self.inner = inner
        self.ttl = ttl

    def find(self) -> str:
        return f"cached({self.inner.find()})"


def main() -> None:
    container = Container()
    container.instance("mail.dsn", "smtp://localhost")

    checkout = container.resolve(Checkout)
    print(f"dsn={checkout.mailer.dsn}")  # => dsn=smtp://localhost
    print(f"tracer={checkout.tracer}")  # => tracer=None

    repository = container.resolve(CachedRepository)
    print(f"find={repository.find()}")  # => find=cached(row)
    print(f"ttl={repository.ttl}")  # => ttl=60


if __name__ == "__main__":
    main()
