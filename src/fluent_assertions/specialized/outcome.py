"""Tagged results of racing an operation against its time budget."""

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Completed:
    """The operation reached a terminal state without a fault."""

    value: Any = None


@dataclass(frozen=True)
class Faulted:
    """The operation raised; ``exception`` is the original object."""

    exception: BaseException


@dataclass(frozen=True)
class TimedOut:
    """The time budget ran out before the operation finished."""


RaceOutcome: TypeAlias = Completed | Faulted | TimedOut
