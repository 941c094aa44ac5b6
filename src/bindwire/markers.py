from __future__ import annotations

from typing import NamedTuple


class Key(NamedTuple):
    """Resolve a parameter through an explicit identifier instead of its type.

    Attach ``Key`` metadata to ``typing.Annotated`` when the dependency is
    bound under a string key, or when a primitive-typed parameter should come
    from the container.

    Examples:
        .. code-block:: python

            from typing import Annotated


            class Mailer:
                def __init__(self, dsn: Annotated[str, Key("mail.dsn")]) -> None:
                    self.dsn = dsn


            container.instance("mail.dsn", "smtp://localhost")
            container.resolve(Mailer).dsn  # "smtp://localhost"

    """

    identifier: object


class Parent:
    """Annotation resolving to the declaring class's base class.

    ``def __init__(self, fallback: Parent)`` asks the container for the first
    base of the declaring class other than ``object``. A class without such a
    base leaves the parameter unannotated, so it needs an override or a default.
    """

    def __new__(cls, *_args: object, **_kwargs: object) -> Parent:
        msg = "Parent is an annotation marker and cannot be instantiated."
        raise TypeError(msg)


__all__ = ["Key", "Parent"]
