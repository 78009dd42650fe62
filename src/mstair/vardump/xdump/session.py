# File: src/mstair/vardump/xdump/session.py
"""
Dump sessions: per-call configuration plus output orchestration.

A `DumpSession` is cloned from the process-wide `SessionPrototype`, adjusted
with chained builder calls, and then asked to `render()` one or more values:

    >>> DumpSession.create(2).methods(False).render(obj)  # doctest: +SKIP

Each value is written as its rendering followed by the location of the call
that requested the dump. While rendering, any active output capture layers
are drained so the dump reaches the real stream instead of a half-built page,
and they are put back afterwards.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterable, Iterator
from typing import Any, Final, Self, TextIO

from mstair.vardump.base.caller_location import CallerLocation, caller_location
from mstair.vardump.base.config import env_options, in_html_mode
from mstair.vardump.io.output_buffers import OUTPUT_BUFFERS, OutputBufferStack
from mstair.vardump.xdump.cycle_guard import CycleGuard
from mstair.vardump.xdump.options import DumpOptions
from mstair.vardump.xdump.renderer import ValueRenderer


__all__ = [
    "PROTOTYPE",
    "DumpSession",
    "SessionPrototype",
]

WRAP_OPEN_FMT: Final[str] = (
    '<pre style="clear:both; text-align:left;background:{color};border:1px solid black;'
    "margin-top:5px;color:white;font-family:monospace;padding:5px;font-size:14px;"
    'z-index:1000000000;position:relative">\n'
)
WRAP_FOOTER_FMT: Final[str] = '\n<span style="font-size:12px;">{location}</span></pre>'
PLAIN_FOOTER_FMT: Final[str] = "\n{location}\n"

_UNKNOWN_LOCATION: Final[CallerLocation] = CallerLocation("<unknown>", 0)


class DumpSession:
    """
    Configuration and orchestration for one dump invocation.

    Builder methods validate their argument immediately and return the
    session, so configuration errors surface at the call that caused them.
    """

    options: DumpOptions
    """Rendering switches; replaced (never mutated) by the builder methods."""

    _labels: list[str]
    """Pending item labels, consumed one per rendered value."""

    _caller: CallerLocation | None
    """Where the dump was requested; resolved lazily by render()."""

    _guard: CycleGuard
    """Cycle registry, reset after each top-level value."""

    _buffers: OutputBufferStack
    """Capture stack drained around render() when options.flush is set."""

    _stream: TextIO | None
    """Destination stream, or None to write to sys.stdout as found after draining."""

    def __init__(
        self,
        options: DumpOptions | None = None,
        *,
        buffers: OutputBufferStack | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.options = options or DumpOptions()
        self._labels = []
        self._caller = None
        self._guard = CycleGuard()
        self._buffers = buffers or OUTPUT_BUFFERS
        self._stream = stream

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r}, labels={self._labels!r}, caller={self._caller!r})"

    @classmethod
    def create(cls, levels: int = 1, *, prototype: SessionPrototype | None = None) -> DumpSession:
        """
        Clone the prototype session and set its depth budget.

        :param levels: Depth budget for the new session.
        :param prototype: Prototype to clone; the process-wide one by default.
        """
        return (prototype or PROTOTYPE).spawn().levels(levels)

    def clone(self) -> DumpSession:
        """Return an independent copy with a fresh cycle guard."""
        twin = DumpSession(self.options, buffers=self._buffers, stream=self._stream)
        twin._labels = list(self._labels)
        twin._caller = self._caller
        return twin

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def levels(self, levels: int) -> Self:
        """Set the depth budget (an int of at least 1)."""
        self.options = self.options.replace(levels=levels)
        return self

    def methods(self, enabled: bool) -> Self:
        """Show or hide the METHODS section of objects."""
        self.options = self.options.replace(methods=enabled)
        return self

    def sort(self, enabled: bool) -> Self:
        """Sort members by visibility tier and name."""
        self.options = self.options.replace(sort=enabled)
        return self

    def show_string(self, enabled: bool) -> Self:
        """Show the custom string form of objects that define ``__str__``."""
        self.options = self.options.replace(show_string=enabled)
        return self

    def wrap(self, enabled: bool) -> Self:
        """Wrap each dump in an HTML block (off for terminals)."""
        self.options = self.options.replace(wrap=enabled)
        return self

    def flush(self, enabled: bool) -> Self:
        """Drain active output capture layers while rendering."""
        self.options = self.options.replace(flush=enabled)
        return self

    def color(self, color: str) -> Self:
        """Set the background color of the wrapping block."""
        self.options = self.options.replace(color=color)
        return self

    def labels(self, labels: Iterable[str]) -> Self:
        """
        Set the labels printed in front of the next rendered values, in order.

        :raises TypeError: If `labels` is a bare string or holds non-strings.
        """
        if isinstance(labels, (str, bytes)):
            raise TypeError("labels must be an iterable of strings, not a single string")
        items = list(labels)
        for item in items:
            if not isinstance(item, str):
                raise TypeError(f"labels must be strings, got {type(item).__name__}: {item!r}")
        self._labels = items
        return self

    def caller(self, location: CallerLocation | tuple[str, int]) -> Self:
        """Set the location reported in the footer of each dump."""
        try:
            filename, lineno = location
        except (TypeError, ValueError) as e:
            raise TypeError(f"caller must be a (filename, lineno) pair, got {location!r}") from e
        if not isinstance(filename, str) or isinstance(lineno, bool) or not isinstance(lineno, int):
            raise TypeError(f"caller must be a (str, int) pair, got {location!r}")
        self._caller = CallerLocation(filename, lineno)
        return self

    @property
    def pending_labels(self) -> tuple[str, ...]:
        return tuple(self._labels)

    @property
    def location(self) -> CallerLocation | None:
        return self._caller

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, *values: Any) -> Self:
        """
        Write every value, in argument order, to the output stream.

        Active capture layers are drained first when `flush` is enabled and
        restored afterwards, also when rendering raises.

        :raises CaptureRestoreError: If the capture layers cannot be restored.
        """
        if self._caller is None:
            self._caller = caller_location(stacklevel=2)

        drain = self._buffers.drained() if self.options.flush else contextlib.nullcontext()
        with drain:
            stream = self._stream if self._stream is not None else sys.stdout
            for value in values:
                with contextlib.closing(self._iter_dump(value)) as chunks:
                    for chunk in chunks:
                        stream.write(chunk)
            stream.flush()
        return self

    def format(self, *values: Any) -> str:
        """Return what render() would write, without touching any stream."""
        if self._caller is None:
            self._caller = caller_location(stacklevel=2)
        return "".join(chunk for value in values for chunk in self._iter_dump(value))

    def _iter_dump(self, value: Any) -> Iterator[str]:
        location = self._caller or _UNKNOWN_LOCATION
        if self.options.wrap:
            yield WRAP_OPEN_FMT.format(color=self.options.color)
        if self._labels:
            yield f"{self._labels.pop(0)}:\n"
        renderer = ValueRenderer(options=self.options, guard=self._guard)
        try:
            yield from renderer.iter_chunks(value)
        finally:
            self._guard.reset()
        footer_fmt = WRAP_FOOTER_FMT if self.options.wrap else PLAIN_FOOTER_FMT
        yield footer_fmt.format(location=location)


class SessionPrototype:
    """
    Process-wide template that new sessions are cloned from.

    The default session is built lazily on first use, with HTML wrapping
    decided by the execution context and other defaults taken from VARDUMP_*
    environment variables. It may be replaced once with `override()`.
    """

    _session: DumpSession | None
    _overridden: bool
    _buffers: OutputBufferStack | None

    def __init__(self, *, buffers: OutputBufferStack | None = None) -> None:
        self._session = None
        self._overridden = False
        self._buffers = buffers

    def get(self) -> DumpSession:
        """Return the prototype session, creating the default one if needed."""
        if self._session is None:
            options = DumpOptions(**{"wrap": in_html_mode(), **env_options()})
            self._session = DumpSession(options, buffers=self._buffers)
        return self._session

    def spawn(self) -> DumpSession:
        """Return a fresh clone of the prototype."""
        return self.get().clone()

    def override(self, session: DumpSession) -> DumpSession:
        """
        Replace the prototype with a copy of `session`; allowed once.

        :raises RuntimeError: If the prototype was already overridden.
        """
        if self._overridden:
            raise RuntimeError("The dump prototype can only be overridden once")
        self._session = session.clone()
        self._overridden = True
        return self._session

    @property
    def overridden(self) -> bool:
        return self._overridden


PROTOTYPE = SessionPrototype()
"""The prototype used by DumpSession.create() and the shortcut functions."""


# End of file: src/mstair/vardump/xdump/session.py
