# File: src/mstair/vardump/xdump/cycle_guard.py
"""
Identity registry that keeps object graphs from being printed twice.
"""

from __future__ import annotations

from typing import Any


__all__ = [
    "CycleGuard",
]


class CycleGuard:
    """
    Records every object entered during one top-level dump.

    Unlike a stack-based guard, entries are not popped when rendering of an
    object finishes: a shared object reached twice within the same top-level
    value is printed once and referenced by marker afterwards. The owner calls
    `reset()` between top-level values.

    Example:
        >>> guard = CycleGuard()
        >>> node = object()
        >>> guard.enter(node)
        True
        >>> guard.enter(node)
        False
    """

    _seen: dict[int, Any]
    """id() -> object; holding the object keeps its id from being reused."""

    def __init__(self) -> None:
        self._seen = {}

    def enter(self, obj: Any) -> bool:
        """
        Register `obj` if it has not been seen yet.

        :return: True if newly registered; False means the caller must print
            the seen-elsewhere marker and not recurse.
        """
        key = id(obj)
        if key in self._seen:
            return False
        self._seen[key] = obj
        return True

    def reset(self) -> None:
        """Forget every registered object."""
        self._seen.clear()

    def __contains__(self, obj: object) -> bool:
        return id(obj) in self._seen

    def __len__(self) -> int:
        return len(self._seen)


# End of file: src/mstair/vardump/xdump/cycle_guard.py
