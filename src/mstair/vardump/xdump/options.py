# File: src/mstair/vardump/xdump/options.py
"""
Validated configuration bundle shared by dump sessions and the renderer.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Final, Self


__all__ = [
    "DEFAULT_COLOR",
    "DumpOptions",
]

DEFAULT_COLOR: Final[str] = "gray"

_FLAG_FIELDS: Final[tuple[str, ...]] = ("methods", "sort", "show_string", "wrap", "flush")


@dataclass(frozen=True, kw_only=True)
class DumpOptions:
    """
    Per-session rendering switches.

    Every instance is validated on construction, so a bad value is reported
    where it is configured rather than halfway through a dump.
    """

    levels: int = 1
    """Depth budget: composite values nested deeper than this are collapsed."""

    methods: bool = True
    """List callable members of objects."""

    sort: bool = True
    """Order members by visibility tier, then name."""

    show_string: bool = True
    """Print the custom ``__str__`` of objects that define one."""

    wrap: bool = False
    """Enclose each dump in an HTML ``<pre>`` block."""

    flush: bool = True
    """Drain active output capture layers while dumping."""

    color: str = DEFAULT_COLOR
    """Background color of the wrapping block."""

    def __post_init__(self) -> None:
        if isinstance(self.levels, bool) or not isinstance(self.levels, int):
            raise TypeError(f"levels must be an int, got {type(self.levels).__name__}")
        if self.levels < 1:
            raise ValueError(f"levels must be at least 1, got {self.levels}")
        for name in _FLAG_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool, got {type(value).__name__}")
        if not isinstance(self.color, str):
            raise TypeError(f"color must be a str, got {type(self.color).__name__}")
        if not self.color.strip():
            raise ValueError("color must not be empty")

    def replace(self, **changes: Any) -> Self:
        """Return a validated copy with `changes` applied."""
        return dataclasses.replace(self, **changes)


# End of file: src/mstair/vardump/xdump/options.py
