"""Exception types raised by fluent-assertions."""


class FluentAssertionsError(Exception):
    """Base class for errors caused by misusing the library."""


class ArgumentOutOfRangeError(FluentAssertionsError, ValueError):
    """Raised when an argument falls outside its allowed range."""


class NonAwaitableSubjectError(FluentAssertionsError, TypeError):
    """Raised when a deferred operation returns something that cannot be awaited."""


class AssertionFailedError(AssertionError):
    """Raised when one or more assertions did not hold."""
