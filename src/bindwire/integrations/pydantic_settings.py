from __future__ import annotations

import functools
import importlib
import logging
import warnings
from collections.abc import Mapping
from typing import Any

from bindwire._internal.type_checks import identifier_name, is_runtime_class

logger = logging.getLogger(__name__)

_SETTINGS_MODULES = ("pydantic_settings", "pydantic.v1")
_PYDANTIC_V1_ON_NEW_PYTHON = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


@functools.cache
def settings_bases() -> tuple[type[Any], ...]:
    """Return the importable ``BaseSettings`` classes, newest API first.

    Looks up ``pydantic_settings.BaseSettings`` and the legacy
    ``pydantic.v1.BaseSettings``. The lookup runs once per process; an empty
    tuple means settings support is off.
    """
    bases: list[type[Any]] = []
    for module_name in _SETTINGS_MODULES:
        base = _import_base_settings(module_name)
        if base is not None and base not in bases:
            bases.append(base)
    return tuple(bases)


def _import_base_settings(module_name: str) -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=_PYDANTIC_V1_ON_NEW_PYTHON, category=UserWarning)
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            return None
    base = getattr(module, "BaseSettings", None)
    return base if is_runtime_class(base) else None


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether ``candidate`` is a user-defined pydantic settings model.

    The ``BaseSettings`` classes themselves do not count. Always ``False``
    when neither ``pydantic-settings`` nor ``pydantic.v1`` is installed.

    Args:
        candidate: Identifier or concrete about to be built.

    """
    if not is_runtime_class(candidate):
        return False
    bases = settings_bases()
    if candidate in bases:
        return False
    return any(issubclass(candidate, base) for base in bases)


def load_settings(settings_type: type[Any], overrides: Mapping[str, Any]) -> Any:
    """Build a settings model from the environment.

    Overrides are passed as field values and win over environment variables;
    nothing is autowired into a settings model.

    Args:
        settings_type: Class accepted by ``is_pydantic_settings_subclass``.
        overrides: Field values keyed by field name.

    """
    logger.debug("Loading settings %s", identifier_name(settings_type))
    return settings_type(**overrides)


__all__ = ["is_pydantic_settings_subclass", "load_settings", "settings_bases"]
