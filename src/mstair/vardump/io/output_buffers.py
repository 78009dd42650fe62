# File: src/mstair/vardump/io/output_buffers.py
"""
Nested output capture layers over sys.stdout.

An `OutputBufferStack` models a stack of capture layers: each `start()` swaps
`sys.stdout` for a fresh in-memory buffer, and each `get_clean()` hands the
captured text back and reinstates whatever stream was active before. Dumping
code uses `drained()` to lift every active layer out of the way while it
writes, then pushes the same layers back exactly as it found them.

Example:
    >>> stack = OutputBufferStack()
    >>> with stack.captured() as buf:
    ...     print("hidden")
    >>> buf.getvalue()
    'hidden\\n'
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NamedTuple, TextIO

from mstair.vardump.xlogging.logger_factory import create_logger


__all__ = [
    "OUTPUT_BUFFERS",
    "CaptureRestoreError",
    "OutputBufferStack",
]

_LOG = create_logger(__name__)


class CaptureRestoreError(RuntimeError):
    """The capture stack could not be put back the way it was found."""


class _Layer(NamedTuple):
    buffer: io.StringIO
    previous: TextIO


class OutputBufferStack:
    """Stack of capture layers; the top layer is the current sys.stdout."""

    _layers: list[_Layer]
    """Active layers, outermost first."""

    def __init__(self) -> None:
        self._layers = []

    def level(self) -> int:
        """Return the number of active capture layers."""
        return len(self._layers)

    def start(self) -> io.StringIO:
        """Push a new capture layer and redirect sys.stdout into it."""
        return self._push(io.StringIO())

    def _push(self, buffer: io.StringIO) -> io.StringIO:
        self._layers.append(_Layer(buffer, sys.stdout))
        sys.stdout = buffer
        return buffer

    def get_contents(self) -> str | None:
        """Return the text captured by the innermost layer, or None without layers."""
        if not self._layers:
            return None
        return self._layers[-1].buffer.getvalue()

    def get_clean(self) -> str:
        """
        Pop the innermost layer, restore the stream it replaced, and return its text.

        :raises CaptureRestoreError: If there is no layer, or sys.stdout is no
            longer the layer's buffer (someone swapped it behind our back).
        """
        if not self._layers:
            raise CaptureRestoreError("No active capture layer to close")
        layer = self._layers[-1]
        if sys.stdout is not layer.buffer:
            raise CaptureRestoreError(
                f"sys.stdout was replaced while capture layer {len(self._layers)} was active: "
                f"{sys.stdout!r}"
            )
        self._layers.pop()
        sys.stdout = layer.previous
        return layer.buffer.getvalue()

    @contextmanager
    def captured(self) -> Iterator[io.StringIO]:
        """
        Capture sys.stdout for the duration of the block.

        The layer is closed on exit even when the block raises; the buffer
        stays readable afterwards.
        """
        buffer = self.start()
        try:
            yield buffer
        finally:
            if self._layers and self._layers[-1].buffer is buffer:
                self.get_clean()

    @contextmanager
    def drained(self) -> Iterator[list[str]]:
        """
        Lift every active layer for the duration of the block.

        Layers are lifted innermost first, so inside the block sys.stdout is
        the stream that was active before the first layer. On exit, including
        exits by exception, the same buffers are pushed back outermost first,
        their text intact.

        If a layer cannot be lifted, the layers already lifted are pushed back
        before the error propagates. Layers the block opens and leaves behind
        are closed, and the lifted layers restored, before reporting them.

        :yield: The drained contents, innermost first.
        :raises CaptureRestoreError: If a layer cannot be lifted, or the block
            left layers of its own behind.
        """
        contents: list[str] = []
        lifted: list[io.StringIO] = []
        try:
            while self._layers:
                buffer = self._layers[-1].buffer
                contents.append(self.get_clean())
                lifted.append(buffer)
        except BaseException:
            self._push_back(lifted)
            raise
        _LOG.trace("drained %d capture layer(s)", len(contents))
        try:
            yield contents
        finally:
            leaked = self._close_leaked()
            self._push_back(lifted)
            if leaked:
                raise CaptureRestoreError(f"{leaked} capture layer(s) opened while drained were never closed")
            _LOG.trace("restored %d capture layer(s)", len(contents))

    def _push_back(self, lifted: list[io.StringIO]) -> None:
        for buffer in reversed(lifted):
            self._push(buffer)

    def _close_leaked(self) -> int:
        leaked = len(self._layers)
        while self._layers:
            layer = self._layers[-1]
            if sys.stdout is layer.buffer:
                self.get_clean()
                continue
            _LOG.debug("closing capture layer %d over a replaced sys.stdout", len(self._layers))
            self._layers.pop()
            sys.stdout = layer.previous
        return leaked


OUTPUT_BUFFERS = OutputBufferStack()
"""Process-wide capture stack used by dump sessions unless another is injected."""


# End of file: src/mstair/vardump/io/output_buffers.py
