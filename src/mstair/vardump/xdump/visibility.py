# File: src/mstair/vardump/xdump/visibility.py
"""
Visibility tiers for Python attribute names.

Python has no access modifiers, so the tier of a member is read from its
naming convention:

- ``name`` and dunder names such as ``__init__`` are public (``+``)
- ``_name`` is protected (``#``)
- ``__name`` (stored mangled as ``_Owner__name``) is private (``-``)
"""

from __future__ import annotations

from typing import Any

from mstair.vardump.xdump.model import Member, Tier, TierT


__all__ = [
    "compare",
    "demangle",
    "sort_key",
    "sorted_members",
    "tier_of",
]


def demangle(attr: str, owner: type | None = None) -> str:
    """
    Undo private name mangling.

    ``_Point__secret`` becomes ``__secret`` when `owner` is ``Point`` (or any
    class whose name, stripped of leading underscores, matches the prefix);
    other names are returned unchanged.
    """
    if owner is None or attr.endswith("__"):
        return attr
    prefix = "_" + owner.__name__.lstrip("_") + "__"
    if attr.startswith(prefix) and len(attr) > len(prefix):
        return "__" + attr[len(prefix) :]
    return attr


def tier_of(name: str) -> TierT:
    """Return the tier implied by a (demangled) member name."""
    if name.startswith("__") and not name.endswith("__"):
        return Tier.PRIVATE
    if name.startswith("_") and not name.startswith("__"):
        return Tier.PROTECTED
    return Tier.PUBLIC


def sort_key(member: Member) -> tuple[TierT, str]:
    """Tier-major, name-minor ordering key."""
    return member.tier, member.name


def compare(a: Member, b: Member) -> int:
    """
    Three-way comparison: public < protected < private, then by name.

    :return: Negative, zero or positive, like a classic cmp function.
    """
    ka: Any = sort_key(a)
    kb: Any = sort_key(b)
    return (ka > kb) - (ka < kb)


def sorted_members(members: list[Member]) -> list[Member]:
    """Return `members` in display order; stable for equal keys."""
    return sorted(members, key=sort_key)


# End of file: src/mstair/vardump/xdump/visibility.py
