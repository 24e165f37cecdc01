"""Template substitution for failure messages.

Templates understand three kinds of placeholders:

- ``{reason}``: the normalised ``because`` phrase
- ``{context}`` or ``{context:fallback}``: the name of the thing under test
- ``{0}``, ``{1}``, ...: positional values rendered by :func:`format_value`

Substitution happens in a single pass, so braces inside rendered values are
never interpreted as placeholders.
"""

import re
from collections.abc import Callable, Sequence
from typing import Any

from .value_formatter import format_value

_PLACEHOLDER = re.compile(r"\{(?:(reason)|context(?::([^{}]*))?|(\d+))\}")


def format_message(
    template: str,
    args: Sequence[Any] = (),
    reason: str = "",
    resolve_context: Callable[[str], str] | None = None,
    default_context: str = "object",
) -> str:
    """Substitute placeholders in ``template``.

    Parameters
    ----------
    template : str
        Message template
    args : Sequence[Any]
        Values for positional placeholders
    reason : str
        Text for ``{reason}``, already normalised
    resolve_context : callable, optional
        Called with the fallback name to resolve ``{context}``; evaluated
        lazily and at most once
    default_context : str
        Fallback for ``{context}`` without an explicit one

    Returns
    -------
    str
        The formatted message. Positional placeholders without a matching
        argument are left as-is.
    """
    resolved: dict[str, str] = {}

    def substitute(match: re.Match[str]) -> str:
        if match.group(1):
            return reason
        if match.group(3) is not None:
            index = int(match.group(3))
            if index < len(args):
                return format_value(args[index])
            return match.group(0)

        fallback = match.group(2) or default_context
        if fallback not in resolved:
            resolved[fallback] = (
                resolve_context(fallback) if resolve_context is not None else fallback
            )
        return resolved[fallback]

    return _PLACEHOLDER.sub(substitute, template)
