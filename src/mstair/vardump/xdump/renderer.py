# File: src/mstair/vardump/xdump/renderer.py
"""
Recursive text rendering of arbitrary values.

`ValueRenderer` classifies each value once (see `model.classify`) and hands it
to the routine for that shape. Output is produced as a stream of string
chunks, which the session writes as they come.

Layout summary (``ind`` is four spaces per level):

- ``hi(string:2)``, ``1(integer)``, ``true(bool)``, ``NULL``
- ``Array(2)`` then ``[`` ... ``]`` for containers
- ``Object(Point)`` then ``{`` ... ``}`` for instances, with PROPERTIES and
  METHODS sections and the instance's string form
- composite children beyond the depth budget collapse to ``Array(n)`` or
  ``Object(T)``; objects already printed in this dump collapse to the
  seen-elsewhere marker
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Set
from dataclasses import dataclass, field
from typing import Any, Final, TypeAlias

from mstair.vardump.xdump.cycle_guard import CycleGuard
from mstair.vardump.xdump.introspector import ObjectIntrospector
from mstair.vardump.xdump.model import (
    METHODS_HEADER,
    PROPERTIES_HEADER,
    SEEN_ELSEWHERE,
    SPACING,
    Shape,
    classify,
)
from mstair.vardump.xdump.options import DumpOptions
from mstair.vardump.xdump.visibility import sorted_members
from mstair.vardump.xlogging.logger_factory import create_logger


__all__ = [
    "ValueRenderer",
    "scalar_kind",
]

_LOG = create_logger(__name__)

_ShapeRendererFunction: TypeAlias = Callable[[Any, int], Iterator[str]]

_SCALAR_KIND_NAMES: Final[dict[type, str]] = {
    int: "integer",
    float: "double",
}


def scalar_kind(value: Any) -> str:
    """Return the kind tag printed after a scalar literal."""
    return next(
        (_SCALAR_KIND_NAMES[_mro] for _mro in type(value).__mro__ if _mro in _SCALAR_KIND_NAMES),
        type(value).__name__,
    )


@dataclass(kw_only=True)
class ValueRenderer:
    """
    Depth-first renderer bound to one session's options and cycle guard.
    """

    options: DumpOptions = field(default_factory=DumpOptions)
    """Depth budget and section switches."""

    guard: CycleGuard = field(default_factory=CycleGuard)
    """Objects already printed in the current top-level dump."""

    introspector: ObjectIntrospector = field(default_factory=ObjectIntrospector)
    """Member enumeration strategy."""

    _renderers: dict[Shape, _ShapeRendererFunction] = field(init=False, repr=False)
    """Registry of shape to render routine, initialized in __post_init__."""

    def __post_init__(self) -> None:
        self._renderers = {
            Shape.NULL: self._render_null,
            Shape.BOOLEAN: self._render_boolean,
            Shape.TEXT: self._render_text,
            Shape.SCALAR: self._render_scalar,
            Shape.CONTAINER: self._render_container,
            Shape.OBJECT: self._render_object,
        }

    def render(self, value: Any) -> str:
        """Render `value` at the root level and return the text."""
        return "".join(self.iter_chunks(value))

    def iter_chunks(self, value: Any, level: int = 1) -> Iterator[str]:
        """
        Yield the rendering of `value` entered at recursion depth `level`.

        :param value: Any Python value.
        :param level: 1 for top-level values; children are rendered at level + 1.
        """
        yield from self._renderers[classify(value)](value, level)

    # ------------------------------------------------------------------
    # Top-level shapes
    # ------------------------------------------------------------------

    def _render_null(self, _value: None, _level: int) -> Iterator[str]:
        yield "NULL"

    def _render_boolean(self, value: bool, _level: int) -> Iterator[str]:
        yield "true(bool)" if value else "false(bool)"

    def _render_text(self, value: str, _level: int) -> Iterator[str]:
        yield f"{value}(string:{len(value)})\n"

    def _render_scalar(self, value: Any, _level: int) -> Iterator[str]:
        yield f"{value}({scalar_kind(value)})"

    def _render_container(self, value: Any, level: int) -> Iterator[str]:
        try:
            size = len(value)
            items = list(_container_items(value))
        except Exception as exc:
            yield f"{self._unreadable(value, exc)}\n"
            return
        outer = SPACING * (level - 1)
        yield f"Array({size})\n{outer}[\n"
        for key, item in items:
            yield from self._iter_entry(key, item, level)
        yield f"{outer}]\n"

    def _render_object(self, obj: Any, level: int) -> Iterator[str]:
        if not self.guard.enter(obj):
            yield SEEN_ELSEWHERE
            return

        outer = SPACING * (level - 1)
        indent = SPACING * level
        yield f"Object({type(obj).__name__})\n{outer}{{\n"

        members = self.introspector.members_of(obj)
        if self.options.sort:
            members = sorted_members(members)
        if members:
            yield indent + PROPERTIES_HEADER
        for member in members:
            yield from self._iter_entry(member.key, member.value, level, error=member.error)

        if self.options.methods:
            methods = self.introspector.callables_of(obj)
            if self.options.sort:
                methods = sorted_members(methods)
            if methods:
                yield "\n" + indent + METHODS_HEADER
            for method in methods:
                yield f"{indent}{method.key}\n"

        if self.options.show_string and self.introspector.has_custom_str(obj):
            text = self._string_form(obj)
            yield f"{indent}this object to string: '{text}'(string:{len(text)})\n"

        yield f"{outer}}}\n"

    # ------------------------------------------------------------------
    # Entries (members and container items)
    # ------------------------------------------------------------------

    def _iter_entry(
        self,
        key: str,
        value: Any,
        level: int,
        *,
        error: BaseException | None = None,
    ) -> Iterator[str]:
        """Yield one ``<ind><key>: ...`` line, recursing into composites within budget."""
        indent = SPACING * level
        if error is not None:
            yield f"{indent}{key}: <unreadable: {type(error).__name__}>\n"
            return

        shape = classify(value)
        if shape.is_composite:
            if level < self.options.levels:
                yield f"{indent}{key}: "
                yield from self._renderers[shape](value, level + 1)
            else:
                yield f"{indent}{key}: {self._collapsed(value, shape)}\n"
            return
        yield f"{indent}{key}: {self._inline_atom(value, shape)}\n"

    def _collapsed(self, value: Any, shape: Shape) -> str:
        """One-line summary of a composite value that is not expanded."""
        if shape is Shape.CONTAINER:
            try:
                return f"Array({len(value)})"
            except Exception as exc:
                return self._unreadable(value, exc)
        type_name = type(value).__name__
        if self.introspector.has_custom_str(value):
            return f"'{self._string_form(value)}' Object({type_name})"
        return f"Object({type_name})"

    def _inline_atom(self, value: Any, shape: Shape) -> str:
        if shape is Shape.TEXT:
            return f"'{value}'(string:{len(value)})"
        if shape is Shape.NULL:
            return "NULL"
        if shape is Shape.BOOLEAN:
            return "true(bool)" if value else "false(bool)"
        return f"{value}({scalar_kind(value)})"

    def _string_form(self, obj: Any) -> str:
        try:
            return str(obj)
        except Exception as exc:
            _LOG.debug("str() failed for %s: %r", type(obj).__name__, exc)
            return f"<unprintable: {type(exc).__name__}>"

    def _unreadable(self, value: Any, exc: Exception) -> str:
        _LOG.debug("Unreadable container %s: %r", type(value).__name__, exc)
        return f"<unreadable: {type(exc).__name__}>"


def _container_items(value: Any) -> Iterator[tuple[str, Any]]:
    """Yield (label, item) pairs: mapping keys, or positions for sequences and sets."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield str(key), item
        return
    items = _ordered_set(value) if isinstance(value, Set) else value
    for index, item in enumerate(items):
        yield str(index), item


def _ordered_set(value: Set[Any]) -> list[Any]:
    """Sort naturally when the items are totally ordered, otherwise by repr()."""
    # '<' between sets is the subset test, a partial order
    if not any(isinstance(item, Set) for item in value):
        try:
            return sorted(value)
        except TypeError:
            pass
    return sorted(value, key=repr)


# End of file: src/mstair/vardump/xdump/renderer.py
