"""Shared pytest fixtures for bindwire tests."""

import pytest

from bindwire.container import Container
from bindwire.inspection import DependencyInspector


@pytest.fixture()
def container() -> Container:
    """Default container with autowiring enabled."""
    return Container()


@pytest.fixture()
def strict_container() -> Container:
    """Container that refuses to build unbound identifiers."""
    return Container(autowire=False)


@pytest.fixture()
def inspector() -> DependencyInspector:
    """DependencyInspector instance."""
    return DependencyInspector()
