"""Common error classes for troubleshooting.

This module triggers representative error paths and prints exception type
names so you can recognize each error category quickly.
"""

from __future__ import annotations

from bindwire import (
    BindwireCircularDependencyError,
    BindwireError,
    BindwireInvalidArgumentError,
    BindwireNotFoundError,
    BindwireResolutionError,
    Container,
)


class Greeter:
    def __init__(self, name: str) -> None:
        self.name = name


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


def main() -> None:
    container = Container()

    try:
        container.get("app.services.Missing")
    except BindwireNotFoundError as error:
        not_found = type(error).__name__
    print(f"not_found={not_found}")  # => not_found=BindwireNotFoundError

    try:
        container.resolve(Greeter)
    except BindwireResolutionError as error:
        unresolvable = str(error)
    print(unresolvable)  # => Unresolvable dependency resolving [name] in class __main__.Greeter.

    try:
        container.resolve(Chicken)
    except BindwireCircularDependencyError as error:
        cycle = " -> ".join(identifier.__name__ for identifier in error.path)
    print(f"cycle={cycle}")  # => cycle=Chicken -> Egg -> Chicken

    try:
        container.call(())
    except BindwireInvalidArgumentError as error:
        invalid = type(error).__name__
    print(f"invalid={invalid}")  # => invalid=BindwireInvalidArgumentError

    print(f"common_base={issubclass(BindwireNotFoundError, BindwireError)}")  # => common_base=True


if __name__ == "__main__":
    main()
