from __future__ import annotations

import logging
import pkgutil
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar, overload

from bindwire._internal.autowiring import AutowiringPolicy
from bindwire._internal.type_checks import identifier_name, is_closure, is_runtime_class
from bindwire.exceptions import (
    BindwireCircularDependencyError,
    BindwireNotFoundError,
    BindwireResolutionError,
)
from bindwire.inspection import DependencyInspector, ParameterInfo
from bindwire.integrations.pydantic_settings import is_pydantic_settings_subclass, load_settings
from bindwire.invocation import parse_call_target, require_call_method, require_callable_owner

T = TypeVar("T")

logger = logging.getLogger(__name__)
_NO_OVERRIDES: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Binding:
    """Describe what an identifier resolves to.

    ``concrete`` is a closure called as ``closure(container, overrides)``,
    another identifier to follow, or ``None`` for a self-binding.
    """

    concrete: Any = None
    singleton: bool = False


class Container:
    """Bind identifiers to concretes and build objects with their dependencies.

    Identifiers are usually classes or protocols, but any hashable key works;
    a string that was never bound is read as a dotted import path when it has
    to be built. Unbound classes are autowired: their constructor parameters
    are resolved recursively from their type annotations.

    Per-call ``overrides`` map parameter names to values and win over
    autowiring for the immediate parameter list of the requested concrete.
    They follow alias bindings but never leak into nested dependencies.

    The container performs no locking. Share one instance across threads only
    behind an external lock, or give each worker its own container.
    """

    def __init__(
        self,
        bindings: Mapping[Any, Any] | None = None,
        *,
        autowire: bool = True,
    ) -> None:
        """Initialize a container with optional initial bindings.

        Args:
            bindings: Initial transient bindings, ``{identifier: concrete}``,
                registered through ``bind``.
            autowire: Build unbound identifiers as implicit self-bindings.
                Disable for strict mode where every identifier must be bound
                or registered as an instance.

        """
        self._bindings: dict[Any, Binding] = {}
        self._instances: dict[Any, Any] = {}
        self._plans: dict[Any, list[ParameterInfo]] = {}
        self._autowire = autowire
        self._policy = AutowiringPolicy()
        self._inspector = DependencyInspector(self._policy)

        for identifier, concrete in (bindings or {}).items():
            self.bind(identifier, concrete)

    # region Registration

    def bind(self, identifier: Any, concrete: Any = None, *, singleton: bool = False) -> None:
        """Bind an identifier to a concrete.

        Re-binding an identifier replaces the previous binding and discards
        its cached singleton instance. Instances cached for other identifiers
        are kept.

        Args:
            identifier: Key requested by consumers.
            concrete: Closure, another identifier, or ``None`` to bind the
                identifier to itself.
            singleton: Cache the first resolved object and return it from then on.

        Examples:
            .. code-block:: python

                container.bind(Connection, MysqlConnection, singleton=True)
                container.bind("clock", lambda container, overrides: SystemClock())

        """
        if identifier in self._instances:
            del self._instances[identifier]
            logger.debug("Discarded cached instance of %s on rebind", identifier_name(identifier))

        self._plans.pop(identifier, None)
        if concrete is not None and not is_closure(concrete):
            self._plans.pop(concrete, None)

        self._bindings[identifier] = Binding(concrete=concrete, singleton=singleton)
        logger.debug(
            "Bound %s to %s (singleton=%s)",
            identifier_name(identifier),
            "itself" if concrete is None else identifier_name(concrete),
            singleton,
        )

    def singleton(self, identifier: Any, concrete: Any = None) -> None:
        """Bind an identifier to a concrete resolved at most once.

        Args:
            identifier: Key requested by consumers.
            concrete: Closure, another identifier, or ``None`` to bind the
                identifier to itself.

        """
        self.bind(identifier, concrete, singleton=True)

    def instance(self, identifier: Any, instance: Any) -> None:
        """Register an already-built object for an identifier.

        A class passed as ``instance`` is not an object to hand out but a
        concrete type, so it is registered through ``singleton`` instead.

        Args:
            identifier: Key requested by consumers.
            instance: Object returned as-is by every later resolution.

        Examples:
            .. code-block:: python

                container.instance(Settings, Settings(debug=True))
                container.instance("mail.dsn", "smtp://localhost")

        """
        if is_runtime_class(instance):
            self.singleton(identifier, instance)
            return

        self._instances[identifier] = instance
        logger.debug("Registered instance for %s", identifier_name(identifier))

    def has(self, identifier: Any) -> bool:
        """Return whether the identifier has a cached instance or a binding.

        Autowirable classes that were never bound report ``False``.
        """
        return identifier in self._instances or identifier in self._bindings

    def __contains__(self, identifier: object) -> bool:
        return self.has(identifier)

    # endregion Registration

    # region Resolution

    @overload
    def resolve(self, identifier: type[T], overrides: Mapping[str, Any] | None = None) -> T: ...

    @overload
    def resolve(self, identifier: Any, overrides: Mapping[str, Any] | None = None) -> Any: ...

    def resolve(self, identifier: Any, overrides: Mapping[str, Any] | None = None) -> Any:
        """Resolve an identifier to an object.

        Args:
            identifier: Key to resolve.
            overrides: Values keyed by parameter name used for the requested
                concrete's own parameters instead of autowired ones. Ignored
                when a cached instance is returned.

        Returns:
            The cached instance, the closure result, or a newly built object.

        Raises:
            BindwireResolutionError: If the identifier, or one of its required
                dependencies, cannot be built.
            BindwireCircularDependencyError: If the binding chain or the
                constructor graph loops back onto an identifier in progress.

        Examples:
            .. code-block:: python

                report = container.resolve(ReportService, {"title": "Q3"})

        """
        return self._resolve(identifier, overrides or _NO_OVERRIDES, ())

    @overload
    def make(self, identifier: type[T], /, **overrides: Any) -> T: ...

    @overload
    def make(self, identifier: Any, /, **overrides: Any) -> Any: ...

    def make(self, identifier: Any, /, **overrides: Any) -> Any:
        """Resolve an identifier with overrides given as keyword arguments."""
        return self._resolve(identifier, overrides, ())

    @overload
    def get(self, identifier: type[T]) -> T: ...

    @overload
    def get(self, identifier: Any) -> Any: ...

    def get(self, identifier: Any) -> Any:
        """Resolve an identifier, telling unknown identifiers apart from broken ones.

        Args:
            identifier: Key to resolve.

        Returns:
            The resolved object.

        Raises:
            BindwireNotFoundError: If resolution fails and the identifier has
                neither a binding nor a cached instance.
            BindwireResolutionError: If the identifier is known to the
                container but cannot be built.

        """
        try:
            return self.resolve(identifier)
        except BindwireResolutionError as error:
            if self.has(identifier):
                raise
            msg = f"No binding or instance found for [{identifier_name(identifier)}]."
            raise BindwireNotFoundError(msg) from error

    def _resolve(
        self,
        identifier: Any,
        overrides: Mapping[str, Any],
        path: tuple[Any, ...],
    ) -> Any:
        if identifier in self._instances:
            return self._instances[identifier]

        if identifier in path:
            raise BindwireCircularDependencyError((*path, identifier))
        path = (*path, identifier)

        binding = self._bindings.get(identifier)
        if binding is None and not self._autowire:
            msg = (
                f"Target [{identifier_name(identifier)}] is not bound and autowiring is disabled."
            )
            raise BindwireResolutionError(msg)

        concrete = identifier if binding is None or binding.concrete is None else binding.concrete
        if is_closure(concrete) or concrete == identifier:
            instance = self._build(concrete, overrides, path)
        else:
            instance = self._resolve(concrete, overrides, path)

        if (
            (binding is not None and binding.singleton)
            or identifier in self._instances
            or (binding is None and is_pydantic_settings_subclass(identifier))
        ):
            self._instances[identifier] = instance

        return instance

    def _build(self, concrete: Any, overrides: Mapping[str, Any], path: tuple[Any, ...]) -> Any:
        if is_closure(concrete):
            return concrete(self, overrides)

        concrete_type = self._load_class(concrete)
        if is_pydantic_settings_subclass(concrete_type):
            return load_settings(concrete_type, overrides)

        if not self._policy.is_instantiable(concrete_type):
            msg = f"Target [{identifier_name(concrete_type)}] is not instantiable."
            raise BindwireResolutionError(msg)

        parameters = self._plan_for(concrete, concrete_type)
        args, kwargs = self._resolve_parameters(
            parameters,
            overrides,
            path,
            declaring=identifier_name(concrete_type),
        )
        logger.debug(
            "Autowired %s with %d argument(s)",
            identifier_name(concrete_type),
            len(args) + len(kwargs),
        )
        return concrete_type(*args, **kwargs)

    def _load_class(self, concrete: Any) -> type[Any]:
        if is_runtime_class(concrete):
            return concrete
        if not isinstance(concrete, str):
            msg = f"Target [{concrete!r}] is not instantiable."
            raise BindwireResolutionError(msg)

        try:
            loaded = pkgutil.resolve_name(concrete)
        except (ImportError, AttributeError, ValueError) as error:
            msg = f"Target class [{concrete}] does not exist."
            raise BindwireResolutionError(msg) from error
        if not is_runtime_class(loaded):
            msg = f"Target class [{concrete}] does not exist: it names {type(loaded).__name__!r}."
            raise BindwireResolutionError(msg)
        return loaded

    def _plan_for(self, concrete: Any, concrete_type: type[Any]) -> list[ParameterInfo]:
        plan = self._plans.get(concrete)
        if plan is None:
            plan = self._inspector.inspect_class(concrete_type)
            self._plans[concrete] = plan
        return plan

    def _resolve_parameters(
        self,
        parameters: list[ParameterInfo],
        overrides: Mapping[str, Any],
        path: tuple[Any, ...],
        *,
        declaring: str,
    ) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in parameters:
            value = self._resolve_parameter(parameter, overrides, path, declaring=declaring)
            if parameter.is_keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _resolve_parameter(
        self,
        parameter: ParameterInfo,
        overrides: Mapping[str, Any],
        path: tuple[Any, ...],
        *,
        declaring: str,
    ) -> Any:
        if parameter.name in overrides:
            return overrides[parameter.name]

        if parameter.annotation is None:
            if parameter.has_default:
                return parameter.default
            msg = f"Unresolvable dependency resolving [{parameter.name}] in class {declaring}."
            if parameter.unresolved_annotation is not None:
                msg += f" Annotation {parameter.unresolved_annotation!r} could not be evaluated."
            raise BindwireResolutionError(msg)

        try:
            return self._resolve(parameter.annotation, _NO_OVERRIDES, path)
        except BindwireResolutionError as error:
            if not parameter.has_default:
                raise
            logger.debug(
                "Using default for [%s] in %s after resolution failed: %s",
                parameter.name,
                declaring,
                error,
            )
            return parameter.default

    # endregion Resolution

    # region Invocation

    def call(self, target: Any, overrides: Mapping[str, Any] | None = None) -> Any:
        """Invoke a method or callable with its parameters injected.

        Args:
            target: ``"pkg.mod.Class@method"``, ``"pkg.mod.Class"``,
                ``(owner, "method")``, ``(owner,)``, a class, or any callable.
                Class and string owners are resolved first; object owners are
                used as-is. A missing method name means ``__call__``.
            overrides: Values keyed by parameter name for the invoked method.

        Returns:
            Whatever the invoked method returns.

        Raises:
            BindwireInvalidArgumentError: If no owner or no method name can be
                determined from ``target``, or the target names no method and
                its owner does not define ``__call__``.
            BindwireResolutionError: If the owner cannot be resolved, the method
                does not exist, or a method parameter cannot be resolved.

        Examples:
            .. code-block:: python

                container.call((OrderService, "handle"), {"config": config})
                container.call("app.jobs.Cleanup@run")

        """
        call_target = parse_call_target(target)

        function: Callable[..., Any]
        if call_target.function is not None:
            function = call_target.function
        else:
            owner = call_target.owner
            if call_target.resolve_owner:
                if (
                    call_target.implicit_method
                    and isinstance(owner, str)
                    and not self.has(owner)
                ):
                    require_call_method(self._load_class(owner))
                owner = self.resolve(owner)
                if call_target.implicit_method:
                    require_callable_owner(owner)
            method = getattr(owner, call_target.method, None)
            if method is None or not callable(method):
                msg = (
                    f"Cannot call method [{call_target.method}] on class "
                    f"[{identifier_name(type(owner))}]."
                )
                raise BindwireResolutionError(msg)
            function = method

        parameters = self._inspector.inspect_callable(function)
        args, kwargs = self._resolve_parameters(
            parameters,
            overrides or _NO_OVERRIDES,
            (),
            declaring=call_target.description,
        )
        logger.debug("Calling %s with %d argument(s)", call_target.description, len(args) + len(kwargs))
        return function(*args, **kwargs)

    # endregion Invocation


__all__ = ["Binding", "Container"]
