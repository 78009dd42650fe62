# File: src/mstair/vardump/xdump/test_cycle_guard.py
"""
Unit tests for CycleGuard identity tracking.
"""

from __future__ import annotations

import pytest

from mstair.vardump.xdump.cycle_guard import CycleGuard


@pytest.mark.unit
def test_cycle_guard_uses_identity_not_equality() -> None:
    guard = CycleGuard()
    first: list[int] = [1]
    twin: list[int] = [1]
    assert guard.enter(first) is True
    assert guard.enter(twin) is True
    assert guard.enter(first) is False
    assert first in guard and len(guard) == 2


@pytest.mark.unit
def test_cycle_guard_reset_forgets_everything() -> None:
    guard = CycleGuard()
    node = object()
    guard.enter(node)
    guard.reset()
    assert node not in guard
    assert guard.enter(node) is True


# End of file: src/mstair/vardump/xdump/test_cycle_guard.py
