"""Continuation object returned by assertions so they can be chained."""

from typing import Generic, TypeVar

T = TypeVar("T")


class AndConstraint(Generic[T]):
    """Gives access to the assertions object through ``and_``."""

    def __init__(self, parent: T) -> None:
        self.and_ = parent
