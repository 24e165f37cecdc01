"""Selection of the exceptions relevant to a type check.

An ``ExceptionGroup`` is looked through: unless the expected type is itself an
exception-group type, the group's leaf exceptions are matched instead of the
group.
"""

from typing import TypeVar

E = TypeVar("E", bound=BaseException)


def _leaves(group: BaseExceptionGroup) -> list[BaseException]:
    leaves: list[BaseException] = []
    for exception in group.exceptions:
        if isinstance(exception, BaseExceptionGroup):
            leaves.extend(_leaves(exception))
        else:
            leaves.append(exception)
    return leaves


class ExceptionExtractor:
    """Extract exceptions of a given type from a raised exception."""

    def of_type(self, exception: BaseException | None, expected: type[E]) -> list[E]:
        """Return the exceptions in ``exception`` that are instances of ``expected``.

        Parameters
        ----------
        exception : BaseException, optional
            The raised exception
        expected : type
            Expected exception type; subclasses match

        Returns
        -------
        list
            Matching exceptions, in raise order; empty when nothing matches
        """
        if exception is None:
            return []
        if issubclass(expected, BaseExceptionGroup):
            return [exception] if isinstance(exception, expected) else []
        if isinstance(exception, BaseExceptionGroup):
            return [leaf for leaf in _leaves(exception) if isinstance(leaf, expected)]
        return [exception] if isinstance(exception, expected) else []
