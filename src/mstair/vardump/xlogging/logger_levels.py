# File: src/mstair/vardump/xlogging/logger_levels.py
"""
Environment variable-driven log levels for vardump loggers.

Two sources are supported:
- A pattern list in VARDUMP_LOG_LEVEL, e.g. ``"info, mstair.vardump.io=debug, *.renderer:trace"``
- Per-logger overrides such as VARDUMP_LOG_LEVEL_MSTAIR_VARDUMP_XDUMP=debug

Inside a variable suffix a single underscore stands for a dot and a double
underscore for a literal underscore (``OUTPUT__BUFFERS`` -> ``output_buffers``).

Precedence: exact > ancestor > glob > default; when nothing matches the
logger keeps NOTSET and inherits from its parent.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Final, NamedTuple

from mstair.vardump.xlogging.logger_constants import TRACE


__all__ = [
    "LOG_LEVEL_VAR",
    "LevelPattern",
    "LogLevelConfig",
]

LOG_LEVEL_VAR: Final[str] = "VARDUMP_LOG_LEVEL"

_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_ASSIGNMENT_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")
_VAR_NAME_RX: Final[re.Pattern[str]] = re.compile(rf"^{LOG_LEVEL_VAR}(?P<SUFFIX>(?:_[A-Z][A-Z0-9_]*)?)$")

_config_instance: LogLevelConfig | None = None


class LevelPattern(NamedTuple):
    """A logger name pattern ("" for the default) and the level it selects."""

    pattern: str
    level: int


def _level_from_text(text: str) -> int | None:
    """Return a numeric level from a level name or decimal string, else None."""
    s = text.strip().strip("\"'")
    if not s:
        return None
    if s.isdigit():
        return int(s)
    if s.upper() == "TRACE":
        return TRACE
    level = logging.getLevelNamesMapping().get(s.upper())
    return level if level else None


def _module_from_suffix(suffix: str) -> str:
    suffix = suffix.lstrip("_")
    if not suffix or suffix == "ROOT":
        return ""
    return suffix.replace("__", "\0").replace("_", ".").replace("\0", "_").lower()


@dataclass(slots=True)
class LogLevelConfig:
    """
    Resolve the level of a logger name from VARDUMP_LOG_LEVEL* variables.

    Example:
        >>> cfg = LogLevelConfig.from_environ({"VARDUMP_LOG_LEVEL": "warning, mstair.vardump.io=debug"})
        >>> cfg.get_effective_level("mstair.vardump.io.output_buffers") == logging.DEBUG
        True
    """

    pattern_to_level: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> LogLevelConfig:
        """Build a config from `environ` (os.environ by default)."""
        env = os.environ if environ is None else environ
        config = cls()
        # the bare variable sorts first so that per-logger variables win on conflict
        for name in sorted(env):
            match = _VAR_NAME_RX.match(name)
            if match is None:
                continue
            for item in parse_patterns(env[name], module=_module_from_suffix(match["SUFFIX"])):
                config.pattern_to_level[item.pattern] = item.level
        return config

    @classmethod
    def get_instance(cls) -> LogLevelConfig:
        """Return the process-wide config, reading the environment on first use."""
        global _config_instance
        if _config_instance is None:
            _config_instance = cls.from_environ()
        return _config_instance

    @classmethod
    def reload(cls) -> LogLevelConfig:
        """Discard the process-wide config and read the environment again."""
        global _config_instance
        _config_instance = None
        return cls.get_instance()

    def get_effective_level(self, logger_name: str) -> int | None:
        """Return the configured level for `logger_name`, or None if nothing applies."""
        name_lc = logger_name.lower()
        named = {k.lower(): v for k, v in self.pattern_to_level.items() if k and not _is_glob(k)}

        if name_lc in named:
            return named[name_lc]

        for ancestor in _ancestors(name_lc):
            if ancestor in named:
                return named[ancestor]

        best_level: int | None = None
        best_score = -1
        for pattern, level in self.pattern_to_level.items():
            if not pattern or not _is_glob(pattern):
                continue
            if fnmatch.fnmatch(name_lc, pattern.lower()):
                score = _glob_specificity(pattern)
                if score > best_score:
                    best_score, best_level = score, level
        if best_level is not None:
            return best_level

        return self.pattern_to_level.get("")


def parse_patterns(value: str, *, module: str = "") -> Iterator[LevelPattern]:
    """
    Parse one variable value into LevelPattern items.

    Fragments are separated by commas, semicolons or spaces; each is either a
    bare level (the default for `module`) or ``pattern=level``. Fragments with
    an unknown level are skipped.
    """
    for fragment in _FRAGMENT_SEPARATOR_RX.split(value):
        fragment = fragment.strip()
        if not fragment:
            continue
        parts = _ASSIGNMENT_RX.split(fragment, maxsplit=1)
        if len(parts) == 2:
            pattern, level_text = parts[0].strip().strip("'\""), parts[1]
        else:
            pattern, level_text = "", parts[0]

        if module:
            pattern = f"{module}.{pattern}" if pattern not in {"", "root"} else module
        if pattern.lower() == "root":
            pattern = ""

        level = _level_from_text(level_text)
        if level is None:
            continue
        yield LevelPattern(pattern, level)


def _is_glob(pattern: str) -> bool:
    return any(ch in pattern for ch in "*?[")


def _ancestors(logger_name: str) -> list[str]:
    """Ancestor names of a dotted logger path, most specific first."""
    parts = logger_name.split(".")
    return [".".join(parts[:i]) for i in range(len(parts) - 1, 0, -1)]


def _glob_specificity(pattern: str) -> int:
    """Length of the fixed prefix before the first wildcard."""
    return min((i for i, ch in enumerate(pattern) if ch in "*?["), default=len(pattern))


# End of file: src/mstair/vardump/xlogging/logger_levels.py
