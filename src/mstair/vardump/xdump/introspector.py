# File: src/mstair/vardump/xdump/introspector.py
"""
Enumerate the data and callable members of arbitrary instances.

Members are gathered across the whole MRO. A name declared at several levels
is reported once, for its most-derived owner. Values are read statically
(instance ``__dict__``, slot descriptors, class defaults) so that neither
``__getattr__`` hooks nor properties run while an object is being inspected,
and private state is visible for diagnostics.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Iterator, Mapping
from typing import Any, Final

from mstair.vardump.xdump.model import Member
from mstair.vardump.xdump.visibility import demangle, tier_of
from mstair.vardump.xlogging.logger_factory import create_logger


__all__ = [
    "ObjectIntrospector",
]

_LOG = create_logger(__name__)

_MISSING: Final = object()

# compiler-generated annotation helpers (PEP 649), not user methods
_GENERATED_NAMES: Final[frozenset[str]] = frozenset({"__annotate__", "__annotate_func__"})


class ObjectIntrospector:
    """Stateless reflection helpers used by the renderer."""

    def members_of(self, obj: Any) -> list[Member]:
        """
        Return the data members of `obj` in discovery order.

        Candidates come from the instance ``__dict__`` (insertion order), then
        from ``__slots__`` and annotations of each class in the MRO. Values
        that cannot be read (e.g. an unset slot) produce a Member carrying the
        error instead of raising.
        """
        mro = _mro_without_object(type(obj))
        rank = {cls: i for i, cls in enumerate(mro)}
        instance_dict = _instance_dict(obj)

        # display name -> (owner rank, raw attribute name), first-seen order preserved
        chosen: dict[str, tuple[int, str]] = {}
        for owner, attr in self._candidates(mro, instance_dict):
            display = demangle(attr, owner)
            owner_rank = rank.get(owner, 0)
            previous = chosen.get(display)
            if previous is None or owner_rank < previous[0]:
                chosen[display] = (owner_rank, attr)

        members: list[Member] = []
        for display, (_rank, attr) in chosen.items():
            try:
                value = _read_static(obj, attr, instance_dict)
            except Exception as exc:
                _LOG.debug("Unreadable member %s.%s: %r", type(obj).__name__, attr, exc)
                members.append(Member(display, tier_of(display), error=exc))
                continue
            members.append(Member(display, tier_of(display), value))
        return members

    def callables_of(self, obj: Any) -> list[Member]:
        """
        Return the methods defined by the classes of `obj`, most-derived first.

        Plain functions, static and class methods, and builtin routines are
        reported; properties are not. Methods of ``object`` itself are omitted.
        """
        seen: dict[str, Member] = {}
        for cls in _mro_without_object(type(obj)):
            for attr, raw in _class_namespace(cls).items():
                if attr in _GENERATED_NAMES or not _is_routine(raw):
                    continue
                display = demangle(attr, cls)
                if display not in seen:
                    seen[display] = Member(display, tier_of(display))
        return list(seen.values())

    def has_custom_str(self, obj: Any) -> bool:
        """True when the type of `obj` overrides ``__str__``."""
        return type(obj).__str__ is not object.__str__

    def _candidates(
        self, mro: list[type], instance_dict: Mapping[str, Any]
    ) -> Iterator[tuple[type, str]]:
        most_derived = mro[0] if mro else object
        for attr in instance_dict:
            if isinstance(attr, str) and not _is_dunder(attr):
                yield _owner_of(attr, mro, most_derived), attr
        for cls in mro:
            for name in _slot_names(cls):
                yield cls, _mangle(name, cls)
            for name in _annotated_names(cls):
                yield cls, _mangle(name, cls)


def _mro_without_object(cls: type) -> list[type]:
    return [c for c in inspect.getmro(cls) if c is not object]


def _instance_dict(obj: Any) -> Mapping[str, Any]:
    try:
        d = object.__getattribute__(obj, "__dict__")
    except (AttributeError, TypeError):
        return {}
    return d if isinstance(d, Mapping) else {}


def _class_namespace(cls: type) -> Mapping[str, Any]:
    ns = cls.__dict__
    return ns if isinstance(ns, Mapping) else {}


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _mangle(name: str, owner: type) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return "_" + owner.__name__.lstrip("_") + name
    return name


def _owner_of(attr: str, mro: list[type], default: type) -> type:
    """Attribute a mangled name to its class; anything else belongs to the instance type."""
    for cls in mro:
        if demangle(attr, cls) != attr:
            return cls
    return default


def _slot_names(cls: type) -> list[str]:
    slots = _class_namespace(cls).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [s for s in slots if isinstance(s, str) and not _is_dunder(s)]


def _annotated_names(cls: type) -> list[str]:
    try:
        annotations = inspect.get_annotations(cls)
    except Exception:
        # unresolvable forward references and the like; annotations are optional hints here
        return []
    return [
        name
        for name, annotation in annotations.items()
        if not _is_dunder(name) and not _is_classvar(annotation)
    ]


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _read_static(obj: Any, attr: str, instance_dict: Mapping[str, Any]) -> Any:
    """
    Read `attr` without triggering ``__getattr__``, ``__getattribute__`` or properties.

    :raises AttributeError: If the attribute is declared but holds no value.
    """
    value = instance_dict.get(attr, _MISSING)
    if value is not _MISSING:
        return value
    value = inspect.getattr_static(obj, attr)
    if isinstance(value, types.MemberDescriptorType):
        return value.__get__(obj, type(obj))
    if isinstance(value, property):
        raise AttributeError(f"{attr!r} is a property, not a stored value")
    return value


def _is_routine(raw: Any) -> bool:
    return isinstance(raw, (staticmethod, classmethod)) or inspect.isroutine(raw)


# End of file: src/mstair/vardump/xdump/introspector.py
