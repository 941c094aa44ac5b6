from __future__ import annotations

import datetime
import decimal
import inspect
import pathlib
import uuid
from dataclasses import dataclass
from typing import Any, TypeGuard

from bindwire._internal.type_checks import is_runtime_class


@dataclass(frozen=True, slots=True)
class AutowiringPolicy:
    """Internal policy deciding which annotations and classes take part in autowiring."""

    value_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_injectable_annotation(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a parameter annotation names a class worth resolving.

        Builtins (``int``, ``str``, ``list``...) and plain value types are
        treated like primitives: they are satisfied by overrides or defaults,
        never by the container.

        Args:
            candidate: Normalized parameter annotation.

        """
        if not is_runtime_class(candidate):
            return False
        if candidate.__module__ == "builtins":
            return False
        return not issubclass(candidate, self.value_base_types)

    def is_instantiable(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a class can be built by calling it.

        Args:
            candidate: Concrete value about to be built.

        """
        if not is_runtime_class(candidate):
            return False
        if inspect.isabstract(candidate):
            return False
        if getattr(candidate, "_is_protocol", False):
            return False
        return not issubclass(candidate, type)
