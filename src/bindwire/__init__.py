from bindwire.container import Binding, Container
from bindwire.container_context import ContainerContext, container_context
from bindwire.exceptions import (
    BindwireCircularDependencyError,
    BindwireContainerNotSetError,
    BindwireError,
    BindwireInvalidArgumentError,
    BindwireNotFoundError,
    BindwireResolutionError,
)
from bindwire.inspection import DependencyInspector, ParameterInfo
from bindwire.markers import Key, Parent

__all__ = [
    "Binding",
    "BindwireCircularDependencyError",
    "BindwireContainerNotSetError",
    "BindwireError",
    "BindwireInvalidArgumentError",
    "BindwireNotFoundError",
    "BindwireResolutionError",
    "Container",
    "ContainerContext",
    "DependencyInspector",
    "Key",
    "ParameterInfo",
    "Parent",
    "container_context",
]
