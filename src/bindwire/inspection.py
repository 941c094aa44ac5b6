from __future__ import annotations

import inspect
import sys
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from inspect import Parameter
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

import typing_extensions

from bindwire._internal.autowiring import AutowiringPolicy
from bindwire._internal.type_checks import identifier_name
from bindwire.exceptions import BindwireResolutionError
from bindwire.markers import Key, Parent

_SELF_ANNOTATIONS: tuple[Any, ...] = tuple(
    marker
    for marker in (typing_extensions.Self, getattr(typing, "Self", None))
    if marker is not None
)
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Describe one injectable parameter of a constructor or callable."""

    name: str
    """Parameter name, the key looked up in overrides."""
    kind: Any
    """``inspect.Parameter`` kind, used to pass the value positionally or by keyword."""
    annotation: Any = None
    """Identifier to resolve for this parameter, or ``None`` for primitives and untyped parameters."""
    default: Any = Parameter.empty
    """Declared default value, ``inspect.Parameter.empty`` when there is none."""
    unresolved_annotation: str | None = field(default=None, compare=False)
    """Forward reference text that could not be evaluated, kept for error messages."""

    @property
    def has_default(self) -> bool:
        return self.default is not Parameter.empty

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is Parameter.KEYWORD_ONLY


class DependencyInspector:
    """Enumerate the injectable parameters of classes and callables.

    The inspector only reads metadata; it never resolves anything. Annotations
    are evaluated with ``typing.get_type_hints`` and normalized into the
    identifier the container should resolve:

    - ``Annotated[T, Key("id")]`` becomes ``"id"``; other metadata is dropped.
    - ``Optional[T]`` and ``T | None`` become ``T``; wider unions become ``None``.
    - ``Self`` becomes the declaring class and ``Parent`` its base class.
    - Builtins and value types (``str``, ``Path``, ``UUID``...) become ``None``.

    ``*args`` and ``**kwargs`` are never reported.
    """

    def __init__(self, policy: AutowiringPolicy | None = None) -> None:
        self._policy = policy or AutowiringPolicy()

    def inspect_class(self, concrete_type: type[Any]) -> list[ParameterInfo]:
        """Return the constructor parameters of a class in declaration order.

        Args:
            concrete_type: Class about to be instantiated.

        Raises:
            BindwireResolutionError: If the constructor signature cannot be read.

        """
        signature = self._signature(concrete_type)
        hints = self._class_type_hints(concrete_type)
        return self._describe(signature, hints=hints, owner=concrete_type)

    def inspect_callable(
        self,
        func: Callable[..., Any],
        *,
        owner: type[Any] | None = None,
    ) -> list[ParameterInfo]:
        """Return the parameters of a function or bound method in declaration order.

        Args:
            func: Callable about to be invoked. Bound methods do not report ``self``.
            owner: Class used for ``Self`` and ``Parent`` annotations. Defaults to
                the class of the object a method is bound to.

        Raises:
            BindwireResolutionError: If the signature cannot be read.

        """
        if owner is None:
            bound_to = getattr(func, "__self__", None)
            if bound_to is not None and not isinstance(bound_to, types.ModuleType):
                owner = bound_to if isinstance(bound_to, type) else type(bound_to)

        signature = self._signature(func)
        hints = self._safe_type_hints(func)
        return self._describe(signature, hints=hints, owner=owner)

    def _describe(
        self,
        signature: inspect.Signature,
        *,
        hints: dict[str, Any],
        owner: type[Any] | None,
    ) -> list[ParameterInfo]:
        parameters: list[ParameterInfo] = []
        for parameter in signature.parameters.values():
            if parameter.kind in _VARIADIC_KINDS:
                continue

            annotation = hints.get(parameter.name, parameter.annotation)
            unresolved = annotation if isinstance(annotation, str) else None
            parameters.append(
                ParameterInfo(
                    name=parameter.name,
                    kind=parameter.kind,
                    annotation=self._normalize(annotation, owner=owner),
                    default=parameter.default,
                    unresolved_annotation=unresolved,
                ),
            )
        return parameters

    def _normalize(self, annotation: Any, *, owner: type[Any] | None) -> Any:
        if annotation is Parameter.empty or isinstance(annotation, str):
            return None

        origin = get_origin(annotation)
        if origin is Annotated:
            inner, *metadata = get_args(annotation)
            for item in metadata:
                if isinstance(item, Key):
                    return item.identifier
            return self._normalize(inner, owner=owner)

        if origin is Union or origin is types.UnionType:
            members = [member for member in get_args(annotation) if member is not type(None)]
            if len(members) != 1:
                return None
            return self._normalize(members[0], owner=owner)

        if any(annotation is marker for marker in _SELF_ANNOTATIONS):
            return owner
        if annotation is Parent:
            return self._parent_of(owner)
        if self._policy.is_injectable_annotation(annotation):
            return annotation
        return None

    def _parent_of(self, owner: type[Any] | None) -> type[Any] | None:
        if owner is None or not owner.__bases__:
            return None
        parent = owner.__bases__[0]
        return None if parent is object else parent

    def _signature(self, target: Callable[..., Any]) -> inspect.Signature:
        try:
            return inspect.signature(target)
        except (TypeError, ValueError) as error:
            msg = f"Cannot inspect the signature of [{identifier_name(target)}]: {error}"
            raise BindwireResolutionError(msg) from error

    def _class_type_hints(self, concrete_type: type[Any]) -> dict[str, Any]:
        hints = self._safe_type_hints(concrete_type.__init__)
        class_hints = self._safe_type_hints(concrete_type)
        for name, hint in class_hints.items():
            hints.setdefault(name, hint)
        return hints

    def _safe_type_hints(self, target: Any) -> dict[str, Any]:
        try:
            return dict(get_type_hints(target, include_extras=True))
        except (AttributeError, NameError, TypeError):
            return self._type_hints_one_by_one(target)

    def _type_hints_one_by_one(self, target: Any) -> dict[str, Any]:
        # One broken forward reference must not hide the annotations next to it.
        try:
            raw = dict(getattr(target, "__annotations__", None) or {})
        except (AttributeError, NameError, TypeError):
            return {}
        globalns = _globals_of(target)
        if globalns is None:
            return {}

        hints: dict[str, Any] = {}
        for name, annotation in raw.items():
            holder = types.FunctionType(_annotation_holder.__code__, globalns)
            holder.__annotations__ = {name: annotation}
            try:
                hints.update(get_type_hints(holder, include_extras=True))
            except (AttributeError, NameError, TypeError):
                continue
        return hints


def _annotation_holder() -> None:
    """Code object reused to evaluate one annotation against foreign globals."""


def _globals_of(target: Any) -> dict[str, Any] | None:
    globalns = getattr(target, "__globals__", None)
    if isinstance(globalns, dict):
        return globalns
    module = sys.modules.get(getattr(target, "__module__", None) or "")
    return vars(module) if module is not None else None
