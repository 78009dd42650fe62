# File: src/mstair/vardump/xdump/test_dump_api.py
"""
Unit tests for the dump shortcut functions.

Each test runs against a fresh prototype so that overriding it, or changing
it through prototype(), cannot leak between tests.
"""

from __future__ import annotations

import inspect
from typing import Any

import pytest

from mstair.vardump.xdump import dump_api
from mstair.vardump.xdump import session as session_module
from mstair.vardump.xdump.dump_api import (
    create,
    deep,
    dump,
    dump_all,
    dumps,
    flat,
    named,
    override_prototype,
    prototype,
)
from mstair.vardump.xdump.options import DumpOptions
from mstair.vardump.xdump.session import DumpSession, SessionPrototype


# == Fixtures ==


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


@pytest.fixture(autouse=True)
def fresh_prototype(monkeypatch: pytest.MonkeyPatch) -> SessionPrototype:
    for key in ("HTML", "LEVELS", "METHODS", "SORT", "SHOW_STRING", "FLUSH", "COLOR"):
        monkeypatch.delenv(f"VARDUMP_{key}", raising=False)
    fresh = SessionPrototype()
    monkeypatch.setattr(session_module, "PROTOTYPE", fresh)
    monkeypatch.setattr(dump_api, "PROTOTYPE", fresh)
    return fresh


def _next_line() -> int:
    """Line number of the statement following the caller's current line."""
    frame = inspect.currentframe()
    assert frame is not None and frame.f_back is not None
    return frame.f_back.f_lineno + 1


def _footer(line: int) -> str:
    return f"\n{__file__}:{line}\n"


# == create / prototype / override_prototype ==


@pytest.mark.unit
def test_create_clones_prototype(fresh_prototype: SessionPrototype) -> None:
    session = create(3)
    assert session.options.levels == 3
    assert session is not fresh_prototype.get()
    assert prototype() is fresh_prototype.get()


@pytest.mark.unit
def test_override_prototype_only_once() -> None:
    override_prototype(DumpSession(DumpOptions(methods=False)))
    assert create().options.methods is False
    with pytest.raises(RuntimeError):
        override_prototype(DumpSession())


@pytest.mark.unit
def test_prototype_changes_reach_shortcuts(capsys: pytest.CaptureFixture[str]) -> None:
    prototype().methods(False)
    dump(Point(1, 2))
    assert "METHODS" not in capsys.readouterr().out


# == dump / dumps ==


@pytest.mark.unit
def test_dump_writes_value_and_call_site(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    session = dump("hi")
    assert capsys.readouterr().out == "hi(string:2)\n" + _footer(line)
    assert isinstance(session, DumpSession)


@pytest.mark.unit
def test_dump_each_argument_in_order(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    dump(1, None, True)
    assert capsys.readouterr().out == (
        "1(integer)" + _footer(line) + "NULL" + _footer(line) + "true(bool)" + _footer(line)
    )


@pytest.mark.unit
def test_dumps_returns_text_without_writing(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    text = dumps(Point(1, 2), levels=2)
    assert text == (
        "Object(Point)\n"
        "{\n"
        "    ---! ::: PROPERTIES ::: !---\n"
        "    + x: 1(integer)\n"
        "    + y: 2(integer)\n"
        "\n"
        "    ---! ::: METHODS ::: !---\n"
        "    + __init__\n"
        "}\n" + _footer(line)
    )
    assert capsys.readouterr().out == ""


# == flat / deep / dump_all ==


@pytest.mark.unit
def test_flat_dumps_each_value_separately(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    assert flat(1, 2) is True
    assert capsys.readouterr().out == "1(integer)" + _footer(line) + "2(integer)" + _footer(line)


@pytest.mark.unit
def test_deep_expands_to_requested_depth(capsys: pytest.CaptureFixture[str]) -> None:
    value = {"a": {"b": {"c": 1}}}
    line = _next_line()
    deep(2, value)
    assert capsys.readouterr().out == (
        "Array(1)\n"
        "[\n"
        "    a: Array(1)\n"
        "    [\n"
        "        b: Array(1)\n"
        "    ]\n"
        "]\n" + _footer(line)
    )


@pytest.mark.unit
def test_dump_all_uses_generous_depth(capsys: pytest.CaptureFixture[str]) -> None:
    nested: dict[str, Any] = {"leaf": 1}
    for depth in range(dump_api.ALL_LEVELS - 1):
        nested = {f"k{depth}": nested}
    dump_all(nested)
    out = capsys.readouterr().out
    assert "leaf: 1(integer)\n" in out


@pytest.mark.unit
def test_deep_rejects_invalid_depth() -> None:
    with pytest.raises(ValueError):
        deep(0, 1)


# == named ==


@pytest.mark.unit
def test_named_single_label(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    named("total", 3)
    assert capsys.readouterr().out == "total:\n3(integer)" + _footer(line)


@pytest.mark.unit
def test_named_sequence_labels_match_by_position(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    named(["a"], 1, 2)
    assert capsys.readouterr().out == "a:\n1(integer)" + _footer(line) + "2(integer)" + _footer(line)


@pytest.mark.unit
def test_named_mapping_labels_its_values(capsys: pytest.CaptureFixture[str]) -> None:
    line = _next_line()
    named({"x": 1, "y": "z"})
    assert capsys.readouterr().out == (
        "x:\n1(integer)" + _footer(line) + "y:\nz(string:1)\n" + _footer(line)
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    ("labels", "values", "error"),
    [
        (["a", "b"], (1,), ValueError),
        ({"a": 1}, (2,), TypeError),
        (42, (1,), TypeError),
        (["a", 1], (1, 2), TypeError),
    ],
)
def test_named_rejects_bad_labels(labels: Any, values: tuple[Any, ...], error: type[Exception]) -> None:
    with pytest.raises(error):
        named(labels, *values)


# End of file: src/mstair/vardump/xdump/test_dump_api.py
