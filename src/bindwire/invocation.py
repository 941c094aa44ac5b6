from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from bindwire._internal.type_checks import identifier_name, is_runtime_class
from bindwire.exceptions import BindwireInvalidArgumentError

METHOD_SEPARATOR = "@"
DEFAULT_METHOD = "__call__"
_PAIR_LENGTH = 2


@dataclass(frozen=True, slots=True)
class CallTarget:
    """Normalized ``Container.call`` target.

    Exactly one shape applies: ``function`` is set for plain callables and
    bound methods, otherwise ``owner`` names the object whose ``method`` runs.
    ``owner`` is resolved through the container when ``resolve_owner`` is set.
    ``implicit_method`` marks targets that named no method and fell back to
    ``__call__``.
    """

    owner: Any = None
    method: str = DEFAULT_METHOD
    resolve_owner: bool = False
    function: Callable[..., Any] | None = None
    implicit_method: bool = False

    @property
    def description(self) -> str:
        if self.function is not None:
            return identifier_name(getattr(self.function, "__qualname__", self.function))
        owner = self.owner if self.resolve_owner else type(self.owner)
        return f"{identifier_name(owner)}{METHOD_SEPARATOR}{self.method}"


def parse_call_target(target: object) -> CallTarget:
    """Turn any supported ``call`` target into a ``CallTarget``.

    Supported shapes are ``"pkg.mod.Class@method"``, ``"pkg.mod.Class"``,
    ``(owner, "method")``, ``(owner,)``, a class, and any other callable.
    A missing method name means ``__call__``.

    Args:
        target: Value passed to ``Container.call``.

    Raises:
        BindwireInvalidArgumentError: If no owner or no method name can be
            determined from ``target``.

    """
    if isinstance(target, str):
        owner, separator, method = target.partition(METHOD_SEPARATOR)
        if not owner:
            msg = f"Class is not provided in call target {target!r}."
            raise BindwireInvalidArgumentError(msg)
        return _owner_target(owner, method if separator else None)

    if isinstance(target, (tuple, list)):
        if not target:
            msg = "Class is not provided: call target sequence is empty."
            raise BindwireInvalidArgumentError(msg)
        if len(target) > _PAIR_LENGTH:
            msg = f"Call target must be a (class, method) pair, got {len(target)} items."
            raise BindwireInvalidArgumentError(msg)
        method = target[1] if len(target) == _PAIR_LENGTH else None
        if method is not None and not isinstance(method, str):
            msg = f"Method name must be a string, got {method!r}."
            raise BindwireInvalidArgumentError(msg)
        return _owner_target(target[0], method)

    if is_runtime_class(target):
        return _owner_target(target, None)

    if callable(target):
        return CallTarget(function=target)

    msg = f"Invalid class name or method name in call target {target!r}."
    raise BindwireInvalidArgumentError(msg)


def _owner_target(owner: Any, method: str | None) -> CallTarget:
    if owner is None:
        msg = "Class is not provided in call target."
        raise BindwireInvalidArgumentError(msg)

    if method == "":
        msg = f"Method name is empty in call target for {owner!r}."
        raise BindwireInvalidArgumentError(msg)

    resolve_owner = isinstance(owner, str) or is_runtime_class(owner)
    if method is not None:
        return CallTarget(owner=owner, method=method, resolve_owner=resolve_owner)

    if is_runtime_class(owner):
        require_call_method(owner)
    elif not resolve_owner:
        require_callable_owner(owner)
    return CallTarget(
        owner=owner,
        method=DEFAULT_METHOD,
        resolve_owner=resolve_owner,
        implicit_method=True,
    )


def require_call_method(owner_type: type[Any]) -> None:
    """Raise unless instances of ``owner_type`` define ``__call__``.

    Raises:
        BindwireInvalidArgumentError: If no class in the MRO other than
            ``object`` defines ``__call__``.

    """
    if not any(DEFAULT_METHOD in vars(klass) for klass in owner_type.__mro__ if klass is not object):
        msg = f"Method is not provided and [{identifier_name(owner_type)}] is not callable."
        raise BindwireInvalidArgumentError(msg)


def require_callable_owner(owner: object) -> None:
    """Raise unless ``owner`` can be called without naming a method."""
    if not callable(owner):
        msg = f"Method is not provided and {owner!r} is not callable."
        raise BindwireInvalidArgumentError(msg)


__all__ = [
    "DEFAULT_METHOD",
    "METHOD_SEPARATOR",
    "CallTarget",
    "parse_call_target",
    "require_call_method",
    "require_callable_owner",
]
