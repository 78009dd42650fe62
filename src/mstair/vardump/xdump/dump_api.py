# File: src/mstair/vardump/xdump/dump_api.py
"""
Shortcut entry points for dumping values while debugging.

    >>> from mstair.vardump.xdump.dump_api import deep, dump, named
    >>> dump(request)                      # doctest: +SKIP
    >>> deep(3, config, state)             # doctest: +SKIP
    >>> named(["before", "after"], a, b)   # doctest: +SKIP

Every shortcut reports the file and line it was called from. Output is meant
for human eyes: it is not a serialization format and is never parsed back.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from mstair.vardump.base.caller_location import caller_location
from mstair.vardump.xdump.session import PROTOTYPE, DumpSession, SessionPrototype


__all__ = [
    "ALL_LEVELS",
    "create",
    "deep",
    "dump",
    "dump_all",
    "dumps",
    "flat",
    "named",
    "override_prototype",
    "prototype",
]

ALL_LEVELS: Final[int] = 10
"""Depth budget used by dump_all()."""


def create(levels: int = 1, *, prototype: SessionPrototype | None = None) -> DumpSession:
    """Return a new session cloned from the prototype with the given depth budget."""
    return DumpSession.create(levels, prototype=prototype)


def prototype() -> DumpSession:
    """Return the process-wide prototype session (changes affect later sessions)."""
    return PROTOTYPE.get()


def override_prototype(session: DumpSession) -> DumpSession:
    """
    Make `session` the template for every later session; allowed once per process.

    :raises RuntimeError: If the prototype was already overridden.
    """
    return PROTOTYPE.override(session)


def dump(*values: Any) -> DumpSession:
    """Dump each value with the default session."""
    return create().caller(caller_location(stacklevel=2)).render(*values)


def dumps(*values: Any, levels: int = 1) -> str:
    """
    Return the dump text of `values` instead of writing it.

    Args:
        *values: The values to render.
        levels: Depth budget.

    Returns:
        str: Exactly what dump() would have written, footers included.
    """
    return create(levels).caller(caller_location(stacklevel=2)).format(*values)


def flat(*values: Any) -> bool:
    """Dump each value in a session of its own."""
    location = caller_location(stacklevel=2)
    for value in values:
        create().caller(location).render(value)
    return True


def deep(levels: int, *values: Any) -> DumpSession:
    """Dump values with a depth budget of `levels`."""
    return create(levels).caller(caller_location(stacklevel=2)).render(*values)


def dump_all(*values: Any) -> DumpSession:
    """Dump values with a generous depth budget (ALL_LEVELS)."""
    return create(ALL_LEVELS).caller(caller_location(stacklevel=2)).render(*values)


def named(labels: str | Sequence[str] | Mapping[str, Any], *values: Any) -> DumpSession:
    """
    Dump values, each preceded by a label.

    Accepted forms:
        named("user", user)                 one label, one value
        named(["a", "b"], a, b)             labels matched to values by position
        named({"a": a, "b": b})             a mapping labels its own values

    :raises TypeError: For an unsupported labels argument, non-string labels, or
        extra values passed together with a mapping.
    :raises ValueError: If there are more labels than values.
    """
    label_list: list[Any]
    if isinstance(labels, str):
        label_list = [labels]
    elif isinstance(labels, Mapping):
        if values:
            raise TypeError("named() takes no extra values when labels is a mapping")
        label_list = list(labels.keys())
        values = tuple(labels.values())
    elif isinstance(labels, Sequence):
        label_list = list(labels)
    else:
        raise TypeError(f"labels must be a str, sequence or mapping, got {type(labels).__name__}")

    if len(label_list) > len(values):
        raise ValueError(f"{len(label_list)} labels given for {len(values)} value(s)")
    return create().labels(label_list).caller(caller_location(stacklevel=2)).render(*values)


# End of file: src/mstair/vardump/xdump/dump_api.py
