"""Identification of the subject expression at the assertion call site.

Failure messages read better when they name what was asserted on::

    await expect(fetch_user).to_complete_within(0.5)
    # Expected fetch_user to complete within 500ms.

The identity is found by walking the stack from the innermost frame outwards,
skipping frames of this package, the standard library and installed
distributions. The first remaining frame is the call site. The source of the
expression it is executing (all of its lines), or failing that the few lines
leading up to it, is parsed for the argument passed to ``expect(...)``.

Identity override
-----------------
While a subject is invoked on behalf of a throw-assertion, a failing assertion
*inside* that subject must describe its own subject, never the outer
``expect(action)`` call site. :func:`override_stack_search_using_current_scope`
installs a guard that limits the stack walk to frames inner to the frame that
acquired it. The guard occupies a single slot: only one override can be active
per execution context, which is enforced at acquisition time. The slot lives in
a :class:`~contextvars.ContextVar`, so concurrent tasks never observe each
other's override.
"""

import contextlib
import inspect
import linecache
import os
import re
import sysconfig
from contextvars import ContextVar, Token
from pathlib import Path
from types import FrameType, TracebackType

from fluent_logging import get_logger

logger = get_logger(__name__)

_PACKAGE_DIR = str(Path(__file__).resolve().parent.parent) + os.sep
_EXPECT_CALL = re.compile(r"\bexpect(?:_async)?\(")
_LAMBDA_PREFIX = re.compile(r"^lambda\s*:\s*")
_MAX_LOOKBACK_LINES = 5

_active_override: ContextVar["IdentityOverride | None"] = ContextVar(
    "fluent_identity_override",
    default=None,
)


def _non_user_prefixes() -> tuple[str, ...]:
    paths = sysconfig.get_paths()
    prefixes = {
        str(Path(paths[key]).resolve())
        for key in ("stdlib", "platstdlib", "purelib", "platlib", "scripts")
        if key in paths
    }
    return tuple(sorted(prefixes))


_NON_USER_PREFIXES = _non_user_prefixes()


class IdentityOverride:
    """Scoped guard restricting caller identification to inner frames.

    Use through a ``with`` statement; the slot is released on every exit path,
    including exits caused by exceptions.
    """

    def __init__(self, frame: FrameType) -> None:
        self.frame = frame
        self._token: Token["IdentityOverride | None"] | None = None

    def __enter__(self) -> "IdentityOverride":
        if _active_override.get() is not None:
            msg = "An identity override is already active in this context"
            raise RuntimeError(msg)
        self._token = _active_override.set(self)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _active_override.reset(self._token)
            self._token = None


def is_override_active() -> bool:
    """Whether an identity override currently occupies the slot."""
    return _active_override.get() is not None


def override_stack_search_using_current_scope(
    frame: FrameType | None = None,
) -> IdentityOverride:
    """Create an override anchored at ``frame`` (the caller's frame by default)."""
    if frame is None:
        current = inspect.currentframe()
        frame = current.f_back if current is not None else None
    if frame is None:
        msg = "Cannot determine the frame to anchor the identity override at"
        raise RuntimeError(msg)
    return IdentityOverride(frame)


def scoped_identity_override(
    frame: FrameType | None,
) -> contextlib.AbstractContextManager[object]:
    """Return an override for ``frame`` unless one is already active.

    Nested invocations share the outermost override instead of stacking a
    second one.
    """
    if frame is None or is_override_active():
        return contextlib.nullcontext()
    return IdentityOverride(frame)


def _is_user_frame(frame: FrameType) -> bool:
    filename = frame.f_code.co_filename
    if filename.startswith("<"):
        return False
    resolved = str(Path(filename).resolve())
    if resolved.startswith(_PACKAGE_DIR):
        return False
    return not resolved.startswith(_NON_USER_PREFIXES)


def _find_user_frame(start: FrameType | None) -> FrameType | None:
    override = _active_override.get()
    boundary = override.frame if override is not None else None

    frame = start
    while frame is not None:
        if frame is boundary:
            return None
        if _is_user_frame(frame):
            return frame
        frame = frame.f_back
    return None


def _extract_argument(source: str) -> str | None:
    """Return the first argument of the last ``expect(...)`` call in ``source``."""
    matches = list(_EXPECT_CALL.finditer(source))
    if not matches:
        return None

    start = matches[-1].end()
    depth = 1
    quote: str | None = None
    for index in range(start, len(source)):
        char = source[index]
        if quote:
            if char == quote and source[index - 1] != "\\":
                quote = None
            continue
        if char in "\"'":
            quote = char
        elif char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        if depth == 0 or (char == "," and depth == 1):
            argument = _LAMBDA_PREFIX.sub("", source[start:index].strip())
            return argument or None
    return None


def _join_lines(filename: str, first: int, last: int) -> str:
    lines = [linecache.getline(filename, number) for number in range(first, last + 1)]
    return " ".join(line.strip() for line in lines if line.strip())


def _expression_source(frame: FrameType) -> str:
    """Source of the expression the frame is executing, across all its lines."""
    positions = inspect.getframeinfo(frame, context=0).positions
    first = positions.lineno if positions and positions.lineno else frame.f_lineno
    last = positions.end_lineno if positions and positions.end_lineno else first
    return _join_lines(frame.f_code.co_filename, first, max(first, last))


def _source_around(frame: FrameType) -> str:
    lineno = frame.f_lineno
    first = max(lineno - _MAX_LOOKBACK_LINES, 1)
    return _join_lines(frame.f_code.co_filename, first, lineno)


def determine_caller_identity() -> str | None:
    """Identify the subject expression at the nearest user call site.

    Returns
    -------
    str or None
        The expression passed to ``expect(...)``, or ``None`` when no user
        frame or no ``expect`` call can be found (for example inside an active
        override whose subject never called ``expect``)
    """
    current = inspect.currentframe()
    try:
        frame = _find_user_frame(current.f_back if current is not None else None)
        if frame is None:
            return None

        identity = _extract_argument(_expression_source(frame)) or _extract_argument(
            _source_around(frame),
        )
        logger.debug(
            "Resolved caller identity",
            extra={
                "identity": identity,
                "caller_file": frame.f_code.co_filename,
                "caller_line": frame.f_lineno,
            },
        )
        return identity
    finally:
        del current
