# File: src/mstair/vardump/xdump/model.py
"""
Value shapes, visibility tiers, and members for structured dumping.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from numbers import Number
from typing import Any, ClassVar, Final, Self


__all__ = [
    "METHODS_HEADER",
    "PROPERTIES_HEADER",
    "SEEN_ELSEWHERE",
    "SPACING",
    "Member",
    "Shape",
    "Tier",
    "TierT",
    "classify",
]

SPACING: Final[str] = "    "
"""One indentation step."""

SEEN_ELSEWHERE: Final[str] = " ::: AS SEEN ELSEWHERE. :::\n"
PROPERTIES_HEADER: Final[str] = "---! ::: PROPERTIES ::: !---\n"
METHODS_HEADER: Final[str] = "---! ::: METHODS ::: !---\n"


@total_ordering
class TierT:
    """A visibility tier; instances order as public < protected < private."""

    _order: int
    """Unique identifier used for sorting and comparison."""

    name: str
    """Name of the tier, used for debugging and display."""

    symbol: str
    """Single-character marker printed in front of member names."""

    def __init__(self, name: str, symbol: str, order: int) -> None:
        self.name = name
        self.symbol = symbol
        self._order = order

    def __lt__(self, other: Self) -> bool:
        return self._order < other._order

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TierT) and self._order == other._order

    def __hash__(self) -> int:
        return hash(self._order)

    def __repr__(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.symbol


class Tier:
    """Static namespace for the three TierT constants."""

    PUBLIC: ClassVar[TierT] = TierT("PUBLIC", "+", 1)
    PROTECTED: ClassVar[TierT] = TierT("PROTECTED", "#", 2)
    PRIVATE: ClassVar[TierT] = TierT("PRIVATE", "-", 3)

    @classmethod
    def all(cls) -> list[TierT]:
        """Return all tiers in display order."""
        return [cls.PUBLIC, cls.PROTECTED, cls.PRIVATE]


class Shape(Enum):
    """Closed classification of a value, decided once per visit."""

    NULL = "null"
    BOOLEAN = "boolean"
    TEXT = "text"
    SCALAR = "scalar"
    CONTAINER = "container"
    OBJECT = "object"

    @property
    def is_composite(self) -> bool:
        """True for shapes that recurse (containers and objects)."""
        return self in (Shape.CONTAINER, Shape.OBJECT)


_BINARY_TYPES: Final[tuple[type, ...]] = (bytes, bytearray, memoryview)


def classify(value: Any) -> Shape:
    """
    Decide which render routine handles `value`.

    Numbers from the numbers tower (Decimal, Fraction) count as scalars, as do
    binary strings; any Mapping, Set or non-text Sequence is a container;
    everything else is an object.
    """
    if value is None:
        return Shape.NULL
    if isinstance(value, bool):
        return Shape.BOOLEAN
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, (Number, *_BINARY_TYPES)):
        return Shape.SCALAR
    if isinstance(value, (Mapping, Sequence, Set)):
        return Shape.CONTAINER
    return Shape.OBJECT


@dataclass(frozen=True, slots=True)
class Member:
    """A named data or callable member of an inspected object."""

    name: str
    """Display name; private names are shown demangled (``__secret``)."""

    tier: TierT
    """Visibility tier derived from the name."""

    value: Any = None
    """Current value (data members only)."""

    error: BaseException | None = None
    """The exception raised while reading the value, if any."""

    @property
    def key(self) -> str:
        """The label printed for this member, e.g. ``+ x``."""
        return f"{self.tier.symbol} {self.name}"

    @property
    def readable(self) -> bool:
        return self.error is None


# End of file: src/mstair/vardump/xdump/model.py
