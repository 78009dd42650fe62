# File: src/mstair/vardump/io/test_output_buffers.py
"""
Unit tests for mstair.vardump.io.output_buffers.

These tests verify stack integrity: layers capture what is printed, drained
layers come back as the same buffers, and restoration happens on error paths too.
"""

from __future__ import annotations

import io
import sys

import pytest

from mstair.vardump.io.output_buffers import CaptureRestoreError, OutputBufferStack


# ----------------------------------------------------------------------
# start / get_clean / captured
# ----------------------------------------------------------------------


@pytest.mark.unit
def test_start_and_get_clean_round_trip_stdout() -> None:
    stack = OutputBufferStack()
    original = sys.stdout
    stack.start()
    print("inside")
    assert stack.level() == 1
    assert stack.get_contents() == "inside\n"
    assert stack.get_clean() == "inside\n"
    assert sys.stdout is original
    assert stack.level() == 0
    assert stack.get_contents() is None


@pytest.mark.unit
def test_captured_closes_layer_on_error() -> None:
    stack = OutputBufferStack()
    original = sys.stdout
    with pytest.raises(KeyError), stack.captured() as buf:
        print("partial")
        raise KeyError("boom")
    assert buf.getvalue() == "partial\n"
    assert sys.stdout is original
    assert stack.level() == 0


@pytest.mark.unit
def test_get_clean_without_layers_raises() -> None:
    with pytest.raises(CaptureRestoreError):
        OutputBufferStack().get_clean()


@pytest.mark.unit
def test_get_clean_detects_foreign_stdout_swap() -> None:
    stack = OutputBufferStack()
    original = sys.stdout
    stack.start()
    try:
        sys.stdout = io.StringIO()
        with pytest.raises(CaptureRestoreError, match="replaced"):
            stack.get_clean()
    finally:
        sys.stdout = original


# ----------------------------------------------------------------------
# drained
# ----------------------------------------------------------------------


@pytest.mark.unit
def test_drained_writes_below_all_layers_and_restores(capsys: pytest.CaptureFixture[str]) -> None:
    stack = OutputBufferStack()
    outer = stack.start()
    print("outer text")
    inner = stack.start()
    print("inner text")

    with stack.drained() as contents:
        assert contents == ["inner text\n", "outer text\n"]
        assert stack.level() == 0
        print("dump output")

    assert stack.level() == 2
    assert stack.get_contents() == "inner text\n"
    assert stack.get_clean() == "inner text\n"
    assert stack.get_clean() == "outer text\n"
    assert capsys.readouterr().out == "dump output\n"
    assert outer.getvalue() == "outer text\n"
    assert inner.getvalue() == "inner text\n"


@pytest.mark.unit
def test_drained_pushes_back_the_same_buffers() -> None:
    stack = OutputBufferStack()
    with stack.captured() as buf:
        print("page")
        with stack.drained():
            pass
        assert sys.stdout is buf
        print("more")
    assert stack.level() == 0
    assert buf.getvalue() == "page\nmore\n"


@pytest.mark.unit
def test_drain_restore_is_a_noop_on_observable_state(capsys: pytest.CaptureFixture[str]) -> None:
    stack = OutputBufferStack()
    stack.start()
    print("before")
    with stack.drained():
        print("dump")
    print("after")
    buffered = stack.get_clean()
    assert buffered == "before\nafter\n"
    assert capsys.readouterr().out + buffered == "dump\nbefore\nafter\n"


@pytest.mark.unit
def test_drained_restores_when_block_raises() -> None:
    stack = OutputBufferStack()
    stack.start()
    print("kept")
    with pytest.raises(ZeroDivisionError), stack.drained():
        _ = 1 / 0
    assert stack.level() == 1
    assert stack.get_clean() == "kept\n"


@pytest.mark.unit
def test_drained_with_no_layers_is_harmless(capsys: pytest.CaptureFixture[str]) -> None:
    stack = OutputBufferStack()
    with stack.drained() as contents:
        print("plain")
    assert contents == []
    assert stack.level() == 0
    assert capsys.readouterr().out == "plain\n"


@pytest.mark.unit
def test_drained_refuses_to_restore_over_leaked_layer() -> None:
    stack = OutputBufferStack()
    original = sys.stdout
    page = stack.start()
    print("page")
    try:
        with pytest.raises(CaptureRestoreError, match="never closed"), stack.drained():
            stack.start()
            print("stray")
        assert stack.level() == 1
        assert sys.stdout is page
        assert stack.get_contents() == "page\n"
    finally:
        while stack.level():
            stack.get_clean()
    assert sys.stdout is original


@pytest.mark.unit
def test_drained_closes_leaked_layer_over_replaced_stdout() -> None:
    stack = OutputBufferStack()
    original = sys.stdout
    page = stack.start()
    print("page")
    try:
        with pytest.raises(CaptureRestoreError, match="never closed"), stack.drained():
            stack.start()
            sys.stdout = io.StringIO()
        assert stack.level() == 1
        assert sys.stdout is page
        assert stack.get_clean() == "page\n"
    finally:
        sys.stdout = original


@pytest.mark.unit
def test_drained_pushes_back_lifted_layers_when_a_lift_fails() -> None:
    stack = OutputBufferStack()
    original = sys.stdout
    outer = stack.start()
    print("outer")
    foreign = io.StringIO()
    sys.stdout = foreign
    inner = stack.start()
    print("inner")
    try:
        with pytest.raises(CaptureRestoreError, match="replaced"), stack.drained():
            pytest.fail("block must not run when draining fails")
        assert stack.level() == 2
        assert sys.stdout is inner
        assert stack.get_contents() == "inner\n"
        assert stack.get_clean() == "inner\n"
        assert sys.stdout is foreign
        assert outer.getvalue() == "outer\n"
        assert foreign.getvalue() == ""
    finally:
        sys.stdout = original


# End of file: src/mstair/vardump/io/test_output_buffers.py
