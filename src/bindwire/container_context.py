from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, TypeVar, overload

from bindwire.container import Container
from bindwire.exceptions import BindwireContainerNotSetError

T = TypeVar("T")

logger = logging.getLogger(__name__)

_RegistrationMethod: TypeAlias = Literal["bind", "singleton", "instance"]


@dataclass(frozen=True, slots=True)
class _RegistrationOperation:
    """One recorded ``bind``, ``singleton`` or ``instance`` call."""

    method_name: _RegistrationMethod
    args: tuple[Any, ...]
    kwargs: dict[str, Any]

    def apply(self, container: Container) -> None:
        registration_method = getattr(container, self.method_name)
        registration_method(*self.args, **self.kwargs)


class ContainerContext:
    """Route registrations and lookups to one container chosen at startup.

    Registrations made before any container is bound are kept in order and
    applied to every container passed to ``set_current`` later, so modules can
    register their services at import time. Lookups (``resolve``, ``get``,
    ``call``...) need a bound container.

    A ``ContainerContext`` holds a single binding shared by every thread and
    task in the process. Tests running in parallel should use their own
    ``Container`` instead.
    """

    def __init__(self) -> None:
        self._container: Container | None = None
        self._operations: list[_RegistrationOperation] = []

    def set_current(self, container: Container, *, replay: bool = True) -> None:
        """Make ``container`` the target of every later call.

        Args:
            container: Container to route registrations and lookups to.
            replay: Apply every recorded registration to ``container`` first.
                Pass ``False`` when restoring a container that already
                received them.

        """
        self._container = container
        if not replay:
            return
        logger.debug("Bound container context, replaying %d registration(s)", len(self._operations))
        for operation in self._operations:
            operation.apply(container)

    def get_current(self) -> Container:
        """Return the container set by ``set_current``.

        Raises:
            BindwireContainerNotSetError: If ``set_current`` was never called or
                the context was cleared.

        """
        if self._container is None:
            msg = (
                "container_context has no container. "
                "Call container_context.set_current(container) during startup first."
            )
            raise BindwireContainerNotSetError(msg)
        return self._container

    def peek_current(self) -> Container | None:
        """Return the bound container, or ``None`` when nothing is bound."""
        return self._container

    def clear_current(self, *, forget_registrations: bool = False) -> None:
        """Unbind the active container.

        Args:
            forget_registrations: Also drop recorded registrations so the next
                ``set_current`` starts from an empty replay list.

        """
        self._container = None
        if forget_registrations:
            self._operations.clear()

    def _record(self, method_name: _RegistrationMethod, *args: Any, **kwargs: Any) -> None:
        operation = _RegistrationOperation(method_name=method_name, args=args, kwargs=kwargs)
        self._operations.append(operation)
        if self._container is not None:
            operation.apply(self._container)

    # region Registration

    def bind(self, identifier: Any, concrete: Any = None, *, singleton: bool = False) -> None:
        """Record and apply ``Container.bind`` on the current container."""
        self._record("bind", identifier, concrete, singleton=singleton)

    def singleton(self, identifier: Any, concrete: Any = None) -> None:
        """Record and apply ``Container.singleton`` on the current container."""
        self._record("singleton", identifier, concrete)

    def instance(self, identifier: Any, instance: Any) -> None:
        """Record and apply ``Container.instance`` on the current container.

        The very same object is replayed into every container bound later.
        """
        self._record("instance", identifier, instance)

    # endregion Registration

    # region Resolution

    @overload
    def resolve(self, identifier: type[T], overrides: Mapping[str, Any] | None = None) -> T: ...

    @overload
    def resolve(self, identifier: Any, overrides: Mapping[str, Any] | None = None) -> Any: ...

    def resolve(self, identifier: Any, overrides: Mapping[str, Any] | None = None) -> Any:
        """Resolve an identifier via the currently bound container.

        Raises:
            BindwireContainerNotSetError: If no container is currently bound.
            BindwireResolutionError: If the identifier cannot be built.

        """
        return self.get_current().resolve(identifier, overrides)

    def make(self, identifier: Any, /, **overrides: Any) -> Any:
        """Resolve with keyword overrides via the currently bound container."""
        return self.get_current().make(identifier, **overrides)

    def get(self, identifier: Any) -> Any:
        """Resolve via ``Container.get`` on the currently bound container.

        Raises:
            BindwireContainerNotSetError: If no container is currently bound.
            BindwireNotFoundError: If the identifier is unknown and unresolvable.

        """
        return self.get_current().get(identifier)

    def has(self, identifier: Any) -> bool:
        """Return ``Container.has`` for the currently bound container."""
        return self.get_current().has(identifier)

    def call(self, target: Any, overrides: Mapping[str, Any] | None = None) -> Any:
        """Invoke ``Container.call`` on the currently bound container."""
        return self.get_current().call(target, overrides)

    # endregion Resolution


container_context = ContainerContext()
"""Shared context for applications that use a single container.

Examples:
    .. code-block:: python

        container = Container()
        container_context.set_current(container)
"""

__all__ = ["ContainerContext", "container_context"]
