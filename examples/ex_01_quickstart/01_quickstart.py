"""Quickstart: autowire a dependency chain from constructor type hints.

Declare plain classes, resolve only the top-level service, and let bindwire
build everything underneath it.
"""

from __future__ import annotations

from bindwire import Container


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository, page_size: int = 20) -> None:
        self.repository = repository
        self.page_size = page_size


def main() -> None:
    container = Container()
    service = container.resolve(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost
    print(f"page_size={service.page_size}")  # => page_size=20

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database

    transient = container.resolve(UserService) is not service
    print(f"new_object_per_resolve={transient}")  # => new_object_per_resolve=True


if __name__ == "__main__":
    main()
