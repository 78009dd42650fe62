# File: src/mstair/vardump/base/config.py
"""
Execution context detection and environment defaults for dumping.

This module decides how dump output should be presented in the current
execution context and reads prototype defaults from the environment. Overrides
are stored in thread-local storage so that tests and embedding code can force
a mode without leaking it into other threads.

Exports:
- in_test_mode(): check or override whether code is in test mode.
- in_html_mode(): check or override whether dumps should be wrapped in HTML.
- env_options(): prototype option overrides read from VARDUMP_* variables.

Typical uses:
- Choosing the default wrap mode of the session prototype.
- Letting an operator raise the default depth budget without code changes.
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final


__all__ = [
    "ENV_PREFIX",
    "env_options",
    "in_html_mode",
    "in_test_mode",
]

ENV_PREFIX: Final[str] = "VARDUMP_"

_TRUE_STRINGS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off", ""})

_BOOL_OPTIONS: Final[tuple[str, ...]] = ("methods", "sort", "show_string", "flush")

_tls = threading.local()


@dataclass
class TLSAttrs:
    """Thread-local flags for execution context."""

    in_test_mode_override: bool | None = None
    in_html_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if running in test mode, with optional override.

    Detection order:
      1. Explicit override (thread-local).
      2. Presence of pytest/unittest in sys.modules.
      3. Known environment variables (e.g. PYTEST_CURRENT_TEST, CI).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if test mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_test_mode_override = None
    if override is not None:
        tls.in_test_mode_override = override
        return override
    if tls.in_test_mode_override is not None:
        return tls.in_test_mode_override
    if "pytest" in sys.modules or "unittest" in sys.modules:
        return True

    env = os.environ
    return bool(
        any(env.get(k) for k in ("PYTEST_CURRENT_TEST", "PYTEST_RUNNING", "UNITTEST_RUNNING"))
        or env.get("CI") == "true"
    )


def in_html_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Determine if dumps should be wrapped in an HTML block by default.

    Rules:
      - Explicit override wins.
      - VARDUMP_HTML, when set, decides.
      - Returns False in test mode so that captured output stays plain.
      - Returns True inside an IPython kernel (notebook front ends render HTML).
      - Otherwise False (plain terminal text).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if HTML wrapping should be the default.
    :raises ValueError: If VARDUMP_HTML holds an unrecognized value.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_html_mode_override = None
    if override is not None:
        tls.in_html_mode_override = override
        return override
    if tls.in_html_mode_override is not None:
        return tls.in_html_mode_override

    raw = os.environ.get(ENV_PREFIX + "HTML")
    if raw is not None:
        return _parse_bool(ENV_PREFIX + "HTML", raw)
    if in_test_mode():
        return False
    return "ipykernel" in sys.modules


def env_options(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """
    Collect dump option overrides from VARDUMP_* environment variables.

    Only variables that are present contribute a key, so the result can be
    splatted over hard-coded defaults.

    Example:
        >>> env_options({"VARDUMP_LEVELS": "3", "VARDUMP_SORT": "off"})
        {'levels': 3, 'sort': False}

    :param environ: Mapping to read instead of os.environ.
    :return: Keyword arguments suitable for DumpOptions.
    :raises ValueError: If a variable holds a malformed value.
    """
    env = os.environ if environ is None else environ
    options: dict[str, Any] = {}

    raw_levels = env.get(ENV_PREFIX + "LEVELS")
    if raw_levels is not None:
        try:
            options["levels"] = int(raw_levels)
        except ValueError as e:
            raise ValueError(f"{ENV_PREFIX}LEVELS must be an integer, got {raw_levels!r}") from e

    for name in _BOOL_OPTIONS:
        key = ENV_PREFIX + name.upper()
        if key in env:
            options[name] = _parse_bool(key, env[key])

    raw_color = env.get(ENV_PREFIX + "COLOR")
    if raw_color is not None:
        options["color"] = raw_color.strip()
    return options


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ValueError(f"{key} must be a boolean flag, got {raw!r}")


# End of file: src/mstair/vardump/base/config.py
