from __future__ import annotations

from collections.abc import Iterator

import pytest

from bindwire.container import Container
from bindwire.container_context import ContainerContext, container_context


@pytest.fixture()
def bindwire_container() -> Container:
    """Create a per-test container.

    The fixture is function-scoped, so bindings and cached singletons are
    isolated between tests unless users override the fixture scope. Override
    the fixture in a ``conftest.py`` to pre-register test doubles.

    Returns:
        A new ``Container`` instance.

    """
    return Container()


@pytest.fixture()
def bindwire_context(bindwire_container: Container) -> Iterator[ContainerContext]:
    """Bind ``container_context`` to ``bindwire_container`` for one test.

    Deferred registrations recorded on ``container_context`` are replayed into
    the test container. The previously bound container, if any, is restored
    without replay once the test finishes.

    Yields:
        The process-global ``container_context``.

    """
    previous = container_context.peek_current()
    container_context.set_current(bindwire_container)
    try:
        yield container_context
    finally:
        if previous is None:
            container_context.clear_current()
        else:
            container_context.set_current(previous, replay=False)
