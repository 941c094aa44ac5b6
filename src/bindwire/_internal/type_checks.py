from __future__ import annotations

import inspect
import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_closure(candidate: object) -> bool:
    """Return true when a binding concrete should be invoked rather than resolved.

    Any callable that is not a class counts: functions, lambdas, bound methods,
    ``functools.partial`` objects and instances defining ``__call__``.

    Args:
        candidate: Concrete value stored in a binding.

    """
    return callable(candidate) and not inspect.isclass(candidate)


def identifier_name(identifier: Any) -> str:
    """Return a readable name for an identifier in messages and log records."""
    if is_runtime_class(identifier):
        return f"{identifier.__module__}.{identifier.__qualname__}"
    return str(identifier)


__all__ = ["identifier_name", "is_closure", "is_runtime_class"]
