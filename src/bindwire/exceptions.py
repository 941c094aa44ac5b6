from __future__ import annotations

from typing import Any

from bindwire._internal.type_checks import identifier_name


class BindwireError(Exception):
    """Represent a base class for all bindwire-specific failures.

    Catch this type when you want to handle any bindwire error path without
    matching each concrete exception class individually.
    """


class BindwireNotFoundError(BindwireError):
    """Signal that an identifier has neither a binding nor a cached instance.

    Raised only by ``Container.get`` (and the ``container_context`` proxy)
    when resolution fails for an identifier the container knows nothing about.
    ``Container.resolve`` never raises it: an unbound identifier is treated as
    an implicit self-binding there.

    Typical fixes include binding the identifier, registering an instance for
    it, or requesting an importable class.
    """


class BindwireResolutionError(BindwireError):
    """Signal that a dependency could not be built.

    Common triggers are a string identifier that does not import to a class, an
    abstract class or protocol without a binding, a required parameter with no
    injectable annotation, no override and no default, or a ``call`` target
    whose method does not exist.
    """


class BindwireCircularDependencyError(BindwireResolutionError):
    """Signal a binding or constructor cycle.

    ``path`` holds the identifiers being resolved when the cycle closed, in
    resolution order, ending with the identifier that was requested again.
    """

    def __init__(self, path: tuple[Any, ...]) -> None:
        self.path = path
        chain = " -> ".join(identifier_name(identifier) for identifier in path)
        super().__init__(f"Circular dependency detected: {chain}.")


class BindwireInvalidArgumentError(BindwireError):
    """Signal a malformed ``Container.call`` target.

    Raised when no class or no method name can be determined from the target,
    for example an empty sequence or a non-callable owner without a method.
    """


class BindwireContainerNotSetError(BindwireError):
    """Signal use of ``container_context`` before a container is bound.

    Typical fix is calling ``container_context.set_current(container)`` during
    application startup before resolution calls.
    """
