"""Normalisation of ``because`` phrases."""

from typing import Any

_BECAUSE = "because"


def format_reason(because: str = "", because_args: tuple[Any, ...] = ()) -> str:
    """Turn a ``because`` phrase into the text substituted for ``{reason}``.

    The phrase is formatted with ``because_args`` using positional ``{0}``
    placeholders, stripped, and prefixed with ``because`` when it does not
    already start with that word. The result starts with a space so templates
    can place ``{reason}`` directly after the preceding word.

    Parameters
    ----------
    because : str
        Free-form explanation supplied by the test author
    because_args : tuple
        Values for the placeholders in ``because``

    Returns
    -------
    str
        ``""`` for an empty phrase, otherwise ``" because ..."``
    """
    if not because or not because.strip():
        return ""

    reason = because
    if because_args:
        try:
            reason = because.format(*because_args)
        except (IndexError, KeyError, ValueError):
            reason = (
                f"**WARNING** because message {because!r} could not be formatted "
                f"with {because_args!r}"
            )

    reason = reason.strip()
    if not reason.lower().startswith(_BECAUSE):
        reason = f"{_BECAUSE} {reason}"
    return f" {reason}"
