# File: src/mstair/vardump/base/caller_location.py
"""
Resolve the source location of the code that triggered a dump.
"""

from __future__ import annotations

import inspect
from types import FrameType
from typing import NamedTuple


__all__ = [
    "CallerLocation",
    "caller_location",
]


class CallerLocation(NamedTuple):
    """File path and line number of a call site."""

    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno}"


def caller_location(*, stacklevel: int = 1) -> CallerLocation:
    """
    Return the file and line of a frame above the caller.

    With stacklevel=1 this is the location of the line that called
    caller_location(); each extra level walks one more frame outward, which
    lets public entry points report their own caller instead of themselves.

    :param stacklevel: Number of frames to walk out from this function.
    :return CallerLocation: The resolved location, or ("<unknown>", 0) if the stack is shorter.
    """
    if stacklevel < 1:
        raise ValueError("stacklevel must be greater than 0")

    frame: FrameType | None = inspect.currentframe()
    try:
        for _ in range(stacklevel):
            if not frame:
                break
            frame = frame.f_back
        if not frame:
            return CallerLocation("<unknown>", 0)
        return CallerLocation(frame.f_code.co_filename, frame.f_lineno)
    finally:
        # frame -> f_locals -> frame
        del frame


# End of file: src/mstair/vardump/base/caller_location.py
