"""ContainerContext: unbound errors, deferred registration replay and rebinding.

This module demonstrates:

1. ``BindwireContainerNotSetError`` when the context is used before binding.
2. Registrations recorded before ``set_current`` and replayed on binding.
3. Re-binding to a new container and replaying every recorded registration.
"""

from __future__ import annotations

from bindwire import BindwireContainerNotSetError, Container, ContainerContext


class Message:
    def __init__(self, value: str) -> None:
        self.value = value


class Service:
    def __init__(self, message: Message) -> None:
        self.message = message


def main() -> None:
    context = ContainerContext()

    try:
        context.resolve(Service)
    except BindwireContainerNotSetError as error:
        unbound_error = type(error).__name__
    print(f"unbound_error={unbound_error}")  # => unbound_error=BindwireContainerNotSetError

    context.instance(Message, Message("context-message"))
    context.singleton(Service)

    first_container = Container(autowire=False)
    context.set_current(first_container)
    replay_ok = first_container.resolve(Service).message.value == "context-message"
    print(f"replay_ok={replay_ok}")  # => replay_ok=True

    second_container = Container(autowire=False)
    context.set_current(second_container)
    rebound = context.resolve(Service) is not first_container.resolve(Service)
    print(f"rebound_new_singleton={rebound}")  # => rebound_new_singleton=True
    print(f"has_service={context.has(Service)}")  # => has_service=True


if __name__ == "__main__":
    main()
